"""Tuner configuration."""

import math
from dataclasses import dataclass

from .constants import (
    DEFAULT_BLOCK_SIZE,
    DEFAULT_COOLDOWN_MS,
    DEFAULT_NOISE_GATE,
    DEFAULT_NOTE_SWITCH_MS,
    DEFAULT_REFERENCE_PITCH,
)
from .errors import InvalidConfiguration


@dataclass
class TunerConfig:
    """Configuration for note mapping and stabilization.

    Attributes:
        reference_pitch: Frequency in Hz of note 69, concert A (default: 440.0)
        noise_gate_threshold: RMS below which a frame is silence, 0..1 (default: 0.05)
        detection_cooldown_ms: Minimum time between two emitted notes (default: 0 = off)
        note_switch_threshold_ms: Time a new note must persist before it is
            reported (default: 0 = off)
        block_size: Samples per analysis frame (default: 4096)
    """

    reference_pitch: float = DEFAULT_REFERENCE_PITCH
    noise_gate_threshold: float = DEFAULT_NOISE_GATE
    detection_cooldown_ms: int = DEFAULT_COOLDOWN_MS
    note_switch_threshold_ms: int = DEFAULT_NOTE_SWITCH_MS
    block_size: int = DEFAULT_BLOCK_SIZE

    def validate(self) -> "TunerConfig":
        """Check every field, returning self so calls can be chained.

        Raises:
            InvalidConfiguration: If any field is out of range
        """
        if not math.isfinite(self.reference_pitch) or self.reference_pitch <= 0:
            raise InvalidConfiguration(
                f"reference_pitch must be a positive frequency, got {self.reference_pitch}"
            )
        if not 0.0 <= self.noise_gate_threshold <= 1.0:
            raise InvalidConfiguration(
                f"noise_gate_threshold must lie in [0, 1], got {self.noise_gate_threshold}"
            )
        if self.detection_cooldown_ms < 0:
            raise InvalidConfiguration(
                f"detection_cooldown_ms must be >= 0, got {self.detection_cooldown_ms}"
            )
        if self.note_switch_threshold_ms < 0:
            raise InvalidConfiguration(
                f"note_switch_threshold_ms must be >= 0, got {self.note_switch_threshold_ms}"
            )
        if self.block_size <= 0:
            raise InvalidConfiguration(f"block_size must be > 0, got {self.block_size}")
        return self
