"""Exceptions raised by the tile merge engine."""


class InvalidConfiguration(ValueError):
    """Raised when a grid or a game configuration cannot be built."""
