"""Exceptions raised by the recorder."""


class RecorderError(Exception):
    """Base exception for recorder errors."""
    pass


class InvalidStateError(RecorderError):
    """Raised when an operation is not allowed in the current run state."""
    pass


class InvalidConfigurationError(RecorderError, ValueError):
    """Raised when an option has an unusable value or an unknown name."""
    pass


class ArchiveError(RecorderError):
    """Raised when captured frames cannot be encoded or packed."""
    pass
