"""Audio loading and framing utilities."""

import warnings
from pathlib import Path
from typing import Iterator, Optional, Tuple

import numpy as np
import librosa

from ..core.constants import DEFAULT_BLOCK_SIZE, DEFAULT_SR


class AudioLoader:
    """Handles audio file loading and cutting audio into analysis blocks."""

    SUPPORTED_FORMATS = {".wav", ".mp3", ".flac", ".ogg", ".m4a"}

    def __init__(
        self,
        target_sr: int = DEFAULT_SR,
        normalize: bool = False,
    ):
        """
        Initialize AudioLoader.

        Args:
            target_sr: Target sample rate for resampling
            normalize: Peak-normalize audio amplitude if True. Off by default
                since it shifts levels relative to the noise gate.
        """
        self.target_sr = target_sr
        self.normalize = normalize

    def load(self, path: str) -> Tuple[np.ndarray, int]:
        """
        Load an audio file as mono.

        Args:
            path: Path to audio file

        Returns:
            Tuple of (audio array, sample rate)

        Raises:
            ValueError: If file format not supported
            FileNotFoundError: If file doesn't exist
        """
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Audio file not found: {path}")

        if path.suffix.lower() not in self.SUPPORTED_FORMATS:
            raise ValueError(
                f"Unsupported format: {path.suffix}. "
                f"Supported: {self.SUPPORTED_FORMATS}"
            )

        audio, sr = librosa.load(str(path), sr=self.target_sr, mono=True)

        if self.normalize:
            audio = self._normalize(audio)

        return audio, sr

    def frames(
        self,
        audio: np.ndarray,
        sr: Optional[int] = None,
        block_size: int = DEFAULT_BLOCK_SIZE,
    ) -> Iterator[Tuple[np.ndarray, int]]:
        """
        Cut audio into consecutive blocks.

        The last partial block is zero padded to block_size.

        Args:
            audio: Audio array
            sr: Sample rate (default: target_sr)
            block_size: Samples per block

        Yields:
            Tuples of (block, start timestamp in milliseconds)
        """
        sr = sr or self.target_sr
        if len(audio) < block_size:
            warnings.warn(
                f"Audio has {len(audio)} samples, shorter than one block of {block_size}"
            )

        for start in range(0, len(audio), block_size):
            block = audio[start : start + block_size]
            if len(block) < block_size:
                block = np.pad(block, (0, block_size - len(block)))
            yield block, int(round(start * 1000 / sr))

    def _normalize(self, audio: np.ndarray) -> np.ndarray:
        """Normalize audio to [-1, 1] range using peak normalization."""
        peak = np.abs(audio).max()
        if peak > 0:
            audio = audio / peak
        return audio

    def get_duration(self, audio: np.ndarray, sr: Optional[int] = None) -> float:
        """Get duration in seconds."""
        sr = sr or self.target_sr
        return len(audio) / sr
