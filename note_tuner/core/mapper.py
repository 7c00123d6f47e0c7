"""Frequency to note arithmetic.

All conversions are relative to a reference pitch assigned to note index 69
(concert A). Note indices are unbounded integers: 60 is middle C, negative
values are valid sub-audio notes.
"""

import math
from typing import Optional

from .config import TunerConfig
from .constants import DEFAULT_REFERENCE_PITCH, NOTE_NAMES, REFERENCE_NOTE
from .errors import InvalidSample
from .note import NoteEvent


class NoteMapper:
    """Pure frequency <-> note conversions for one reference pitch."""

    def __init__(
        self,
        reference_pitch: float = DEFAULT_REFERENCE_PITCH,
        config: Optional[TunerConfig] = None,
    ):
        """
        Initialize NoteMapper.

        Args:
            reference_pitch: Frequency in Hz of note 69
            config: Optional TunerConfig; its reference_pitch wins if given

        Raises:
            InvalidConfiguration: If the reference pitch is not positive
        """
        if config is None:
            config = TunerConfig(reference_pitch=reference_pitch)
        config.validate()
        self._reference_pitch = float(config.reference_pitch)

    @property
    def reference_pitch(self) -> float:
        """Frequency in Hz of the reference note."""
        return self._reference_pitch

    def map_frequency(self, frequency: float) -> int:
        """
        Get the nearest note index for a frequency.

        Ties between two semitones are broken with round-half-to-even.

        Raises:
            InvalidSample: If frequency is not a positive finite number
        """
        self._check_frequency(frequency)
        semitones = 12 * math.log2(frequency / self._reference_pitch)
        return self._nearest(semitones) + REFERENCE_NOTE

    def standard_frequency(self, note: int) -> float:
        """Get the equal-tempered frequency (Hz) of a note.

        Indices too high to represent as a float give math.inf.
        """
        try:
            return self._reference_pitch * 2 ** ((note - REFERENCE_NOTE) / 12)
        except OverflowError:
            return math.inf

    def cents_deviation(self, frequency: float, note: int) -> int:
        """
        Get the deviation in cents of a frequency from a note's standard frequency.

        The result is floored, so a reading just below a note reports -1
        rather than 0. A frequency equal to standard_frequency(note) reports 0.
        """
        self._check_frequency(frequency)
        return math.floor(1200 * math.log2(frequency / self.standard_frequency(note)))

    @staticmethod
    def note_name(note: int) -> str:
        """Get the semitone label of a note (negative indices included)."""
        return NOTE_NAMES[note % 12]

    @staticmethod
    def octave(note: int) -> int:
        """Get the octave number of a note, 69 -> 4."""
        return note // 12 - 1

    def describe(self, frequency: float) -> NoteEvent:
        """Build the full NoteEvent for a frequency."""
        note = self.map_frequency(frequency)
        return NoteEvent(
            name=self.note_name(note),
            value=note,
            cents=self.cents_deviation(frequency, note),
            octave=self.octave(note),
            frequency=frequency,
        )

    @staticmethod
    def _nearest(semitones: float) -> int:
        return int(round(semitones))

    @staticmethod
    def _check_frequency(frequency: float) -> None:
        if frequency is None or not math.isfinite(frequency) or frequency <= 0:
            raise InvalidSample(f"Frequency must be positive and finite, got {frequency}")
