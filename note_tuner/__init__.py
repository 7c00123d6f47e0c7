"""Note Tuner - Stable note identification from pitch estimates.

Architecture Layers:
    1. core/       - Note arithmetic, events, configuration, errors
    2. analysis/   - Frame analysis (RMS amplitude, pitch estimation)
    3. processing/ - Note stabilization (noise gate, cooldown, hold time)
    4. detection/  - Tuner sessions tying frames to note events
    5. input/      - Audio loading and framing
    6. output/     - Reference tone synthesis
"""

__version__ = "0.1.0"

# Core types
from .core import (
    NoteEvent,
    NoteMapper,
    TunerConfig,
    TunerError,
    InvalidConfiguration,
    InvalidSample,
)

# Analysis layer
from .analysis import PitchEstimator, YinEstimator, PyinEstimator, frame_rms

# Processing layer
from .processing import NoteStabilizer, Sample, StabilizerState, StabilizerStats

# Detection layer
from .detection import Tuner

# Input layer
from .input import AudioLoader

# Output layer
from .output import ToneGenerator

__all__ = [
    # Core
    "NoteEvent",
    "NoteMapper",
    "TunerConfig",
    "TunerError",
    "InvalidConfiguration",
    "InvalidSample",
    # Analysis
    "PitchEstimator",
    "YinEstimator",
    "PyinEstimator",
    "frame_rms",
    # Processing
    "NoteStabilizer",
    "Sample",
    "StabilizerState",
    "StabilizerStats",
    # Detection
    "Tuner",
    # Input
    "AudioLoader",
    # Output
    "ToneGenerator",
]
