"""Detection layer - Frame-by-frame note detection sessions."""

from .tuner import Tuner

__all__ = ["Tuner"]
