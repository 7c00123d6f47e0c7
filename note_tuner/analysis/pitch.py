"""Pitch estimation for single audio frames."""

from abc import ABC, abstractmethod
from typing import Optional

import numpy as np
import librosa

from ..core.constants import DEFAULT_FMAX, DEFAULT_FMIN, DEFAULT_SR


class PitchEstimator(ABC):
    """Abstract base class for frame pitch estimators."""

    @abstractmethod
    def estimate(self, buffer: np.ndarray) -> Optional[float]:
        """
        Estimate the fundamental frequency of one frame.

        Args:
            buffer: Audio samples of the frame

        Returns:
            Frequency in Hz, or None if no pitch was found
        """
        pass


class _LibrosaEstimator(PitchEstimator):
    """Shared frame handling for the librosa estimators."""

    def __init__(
        self,
        sr: int = DEFAULT_SR,
        frame_length: int = 4096,
        fmin: float = DEFAULT_FMIN,
        fmax: float = DEFAULT_FMAX,
    ):
        self.sr = sr
        self.frame_length = frame_length
        self.fmin = fmin
        self.fmax = fmax

    def estimate(self, buffer: np.ndarray) -> Optional[float]:
        frame = self._fit(buffer)
        f0 = self._detect(frame)
        if f0.size == 0:
            return None
        freq = float(f0[0])
        if not np.isfinite(freq) or freq <= 0:
            return None
        return freq

    @abstractmethod
    def _detect(self, frame: np.ndarray) -> np.ndarray:
        pass

    def _fit(self, buffer: np.ndarray) -> np.ndarray:
        """Trim or zero pad a buffer to exactly one frame."""
        frame = np.asarray(buffer, dtype=np.float32)
        if len(frame) >= self.frame_length:
            return frame[: self.frame_length]
        return np.pad(frame, (0, self.frame_length - len(frame)))


class YinEstimator(_LibrosaEstimator):
    """YIN pitch estimation. Always returns a frequency for non-silent frames."""

    def _detect(self, frame: np.ndarray) -> np.ndarray:
        return librosa.yin(
            frame,
            fmin=self.fmin,
            fmax=self.fmax,
            sr=self.sr,
            frame_length=self.frame_length,
            hop_length=self.frame_length,
            center=False,
        )


class PyinEstimator(_LibrosaEstimator):
    """Probabilistic YIN; unvoiced frames give None."""

    def _detect(self, frame: np.ndarray) -> np.ndarray:
        f0, voiced_flag, _ = librosa.pyin(
            frame,
            fmin=self.fmin,
            fmax=self.fmax,
            sr=self.sr,
            frame_length=self.frame_length,
            hop_length=self.frame_length,
            center=False,
        )
        # pYIN fills unvoiced frames with NaN
        return np.where(voiced_flag, f0, np.nan)


ESTIMATORS = {
    "yin": YinEstimator,
    "pyin": PyinEstimator,
}


def get_estimator(method: str = "yin", **kwargs) -> PitchEstimator:
    """
    Build an estimator by name.

    Raises:
        ValueError: If the method is unknown
    """
    try:
        cls = ESTIMATORS[method.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown pitch method: {method}. Supported: {sorted(ESTIMATORS)}"
        ) from None
    return cls(**kwargs)
