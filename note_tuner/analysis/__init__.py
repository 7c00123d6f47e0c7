"""Analysis layer - Frame-level signal analysis.

This layer summarizes raw audio frames:
- Amplitude (RMS) for noise gating
- Fundamental frequency estimation
"""

from .features import frame_rms
from .pitch import PitchEstimator, YinEstimator, PyinEstimator, get_estimator

__all__ = [
    "frame_rms",
    "PitchEstimator",
    "YinEstimator",
    "PyinEstimator",
    "get_estimator",
]
