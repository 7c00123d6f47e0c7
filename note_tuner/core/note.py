"""NoteEvent data class - the unit emitted by the tuner."""

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class NoteEvent:
    """A stable note detection."""

    name: str  # Semitone label, e.g. 'A♯'
    value: int  # Note index, 69 = A4
    cents: int  # Deviation from the standard frequency
    octave: int
    frequency: float  # Detected frequency in Hz

    @property
    def label(self) -> str:
        """Get note name with octave (e.g., 'A4', 'C♯3')."""
        return f"{self.name}{self.octave}"

    @property
    def pitch_class(self) -> int:
        """Get pitch class (0-11, where 0=C)."""
        return self.value % 12

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return asdict(self)
