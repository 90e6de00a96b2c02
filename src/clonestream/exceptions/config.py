"""Configuration exceptions: settings and window-size consistency."""

from typing import Any, Optional

from .base import CloneStreamError


class ConfigurationError(CloneStreamError):
    """Base class for configuration-related errors."""

    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason


class ChunkSizeMismatchError(ConfigurationError):
    """Raised when stored chunks were built with a different window size."""

    def __init__(self, expected: int, actual: int, name: Optional[str] = None):
        details = {"expected": str(expected), "actual": str(actual)}
        if name:
            details["file"] = name

        super().__init__("Chunk size mismatch", details=details)
        self.expected = expected
        self.actual = actual
        self.name = name
