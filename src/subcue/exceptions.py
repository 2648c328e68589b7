"""Custom exceptions for subcue."""

class SubcueError(Exception):
    """Base exception for subcue."""
    pass

class NotInitializedError(SubcueError):
    """Controller queried before initialize() completed."""

    def __init__(self, message: str = "Subtitle controller is not initialized; await initialize() first"):
        super().__init__(message)

class UnsupportedFormatError(SubcueError):
    """Format tag has no built-in pattern and no custom pattern was supplied."""
    pass

class ConfigError(SubcueError):
    """Invalid configuration value."""
    pass

class ValidationError(SubcueError):
    """Invalid input parameters."""
    pass
