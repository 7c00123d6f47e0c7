"""Output layer - Audio rendering.

This layer handles producing audio for the user:
- Reference tones at a note's standard frequency
"""

from .tone import ToneGenerator

__all__ = ["ToneGenerator"]
