"""Processing layer - Stabilization of per-frame note estimates.

This layer turns noisy frame-level pitch into reportable notes:
- Noise gating
- Detection cooldown
- Hold-time flicker suppression
"""

from .stabilizer import (
    NoteStabilizer,
    Sample,
    StabilizerState,
    StabilizerStats,
)

__all__ = [
    "NoteStabilizer",
    "Sample",
    "StabilizerState",
    "StabilizerStats",
]
