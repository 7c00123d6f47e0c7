"""Reference tone synthesis."""

from pathlib import Path
from typing import Optional

import numpy as np
import soundfile as sf

from ..core import NoteMapper
from ..core.constants import DEFAULT_SR


class ToneGenerator:
    """Render sine tones, e.g. the standard pitch of a note to tune against."""

    def __init__(
        self,
        sr: int = DEFAULT_SR,
        amplitude: float = 0.5,
        fade: float = 0.01,
        mapper: Optional[NoteMapper] = None,
    ):
        """
        Initialize ToneGenerator.

        Args:
            sr: Sample rate
            amplitude: Peak amplitude (0-1)
            fade: Linear fade in/out length in seconds, avoids clicks
            mapper: NoteMapper used to resolve note indices (default: A4 = 440 Hz)
        """
        self.sr = sr
        self.amplitude = amplitude
        self.fade = fade
        self.mapper = mapper or NoteMapper()

    def generate(self, frequency: float, duration: float = 1.0) -> np.ndarray:
        """
        Generate a sine tone.

        Args:
            frequency: Frequency in Hz
            duration: Length in seconds

        Returns:
            float32 audio array
        """
        if frequency <= 0:
            raise ValueError(f"Tone frequency must be positive, got {frequency}")
        if duration <= 0:
            raise ValueError(f"Tone duration must be positive, got {duration}")

        t = np.arange(int(duration * self.sr)) / self.sr
        tone = self.amplitude * np.sin(2 * np.pi * frequency * t)

        n_fade = min(int(self.fade * self.sr), len(tone) // 2)
        if n_fade > 0:
            ramp = np.linspace(0.0, 1.0, n_fade)
            tone[:n_fade] *= ramp
            tone[-n_fade:] *= ramp[::-1]

        return tone.astype(np.float32)

    def generate_note(self, note: int, duration: float = 1.0) -> np.ndarray:
        """Generate the standard-frequency tone of a note index."""
        return self.generate(self.mapper.standard_frequency(note), duration)

    def write(self, path: str, frequency: float, duration: float = 1.0) -> Path:
        """Write a sine tone to an audio file."""
        path = Path(path)
        sf.write(str(path), self.generate(frequency, duration), self.sr)
        return path
