"""Core types and constants for Note Tuner."""

from .note import NoteEvent
from .mapper import NoteMapper
from .config import TunerConfig
from .errors import TunerError, InvalidConfiguration, InvalidSample
from .constants import (
    NOTE_NAMES,
    REFERENCE_NOTE,
    DEFAULT_REFERENCE_PITCH,
    DEFAULT_SR,
    DEFAULT_BLOCK_SIZE,
)

__all__ = [
    "NoteEvent",
    "NoteMapper",
    "TunerConfig",
    "TunerError",
    "InvalidConfiguration",
    "InvalidSample",
    "NOTE_NAMES",
    "REFERENCE_NOTE",
    "DEFAULT_REFERENCE_PITCH",
    "DEFAULT_SR",
    "DEFAULT_BLOCK_SIZE",
]
