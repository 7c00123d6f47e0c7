"""Frame-level signal features."""

import numpy as np


def frame_rms(buffer: np.ndarray) -> float:
    """Root-mean-square amplitude of a frame (0.0 for an empty frame)."""
    buffer = np.asarray(buffer, dtype=np.float64)
    if buffer.size == 0:
        return 0.0
    return float(np.sqrt(np.mean(buffer**2)))
