"""Tuner session - from audio frames to stable note events."""

import logging
from typing import Iterable, Iterator, List, Optional, Tuple

import numpy as np

from ..analysis import PitchEstimator, YinEstimator, frame_rms
from ..core import NoteEvent, NoteMapper, TunerConfig
from ..processing import NoteStabilizer, StabilizerStats
from ..processing.stabilizer import NoteCallback

logger = logging.getLogger(__name__)


class Tuner:
    """One audio session: amplitude check, pitch estimate and stabilization.

    Frames must be fed in timestamp order. Pitch estimation is skipped for
    frames rejected by the noise gate or the detection cooldown.
    """

    def __init__(
        self,
        estimator: Optional[PitchEstimator] = None,
        config: Optional[TunerConfig] = None,
        on_note_detected: Optional[NoteCallback] = None,
    ):
        """
        Initialize Tuner.

        Args:
            estimator: Frame pitch estimator (default: YIN over one block)
            config: TunerConfig (default: pass-through thresholds, A4 = 440 Hz)
            on_note_detected: Callback invoked with every emitted NoteEvent
        """
        self.config = (config or TunerConfig()).validate()
        self.estimator = estimator or YinEstimator(frame_length=self.config.block_size)
        self.mapper = NoteMapper(config=self.config)
        self.stabilizer = NoteStabilizer(
            config=self.config,
            mapper=self.mapper,
            on_note_detected=on_note_detected,
        )
        self.estimates = 0

    @property
    def stats(self) -> StabilizerStats:
        return self.stabilizer.stats

    def process_frame(self, buffer: np.ndarray, timestamp_ms: int) -> Optional[NoteEvent]:
        """
        Analyse one frame.

        Args:
            buffer: Audio samples
            timestamp_ms: Frame time in milliseconds

        Returns:
            The emitted NoteEvent, or None
        """
        rms = frame_rms(buffer)

        frequency = None
        if self.stabilizer.accepts(rms, timestamp_ms):
            frequency = self.estimator.estimate(buffer)
            self.estimates += 1
            logger.debug("Frame %d ms: rms=%.4f f0=%s", timestamp_ms, rms, frequency)

        return self.stabilizer.process(rms, frequency, timestamp_ms)

    def run(self, frames: Iterable[Tuple[np.ndarray, int]]) -> Iterator[NoteEvent]:
        """Lazily yield the events emitted for (buffer, timestamp_ms) frames."""
        for buffer, timestamp_ms in frames:
            event = self.process_frame(buffer, timestamp_ms)
            if event is not None:
                yield event

    def detect(self, frames: Iterable[Tuple[np.ndarray, int]]) -> List[NoteEvent]:
        """Run every frame and collect the emitted events."""
        events = list(self.run(frames))
        logger.info(
            "Processed %d frames, %d estimates, %d notes",
            self.stats.processed,
            self.estimates,
            len(events),
        )
        return events

    def reset(self) -> None:
        """Start a new session with the same settings."""
        self.stabilizer.reset()
        self.estimates = 0
