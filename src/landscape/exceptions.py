"""Custom exceptions for terrain synthesis and GLB packing."""


class LandscapeError(Exception):
    """Base exception for landscape errors."""

    pass


class InvalidParameterError(LandscapeError):
    """Raised when generation or encoding input is out of range."""

    pass


class ContainerFormatError(LandscapeError):
    """Raised when bytes cannot be parsed as a GLB container."""

    pass
