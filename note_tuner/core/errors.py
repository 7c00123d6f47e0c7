"""Exception types raised by Note Tuner."""


class TunerError(Exception):
    """Base class for all Note Tuner errors."""


class InvalidConfiguration(TunerError, ValueError):
    """Raised when a component is constructed with unusable settings."""


class InvalidSample(TunerError, ValueError):
    """Raised when a non-positive or non-finite frequency reaches the mapper."""
