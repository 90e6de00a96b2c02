"""Exception hierarchy for clonestream."""

from .base import CloneStreamError
from .config import (
    ChunkSizeMismatchError,
    ConfigurationError,
    InvalidConfigError,
)
from .detection import (
    DetectionError,
    IncomparableTargetError,
    PipelineStateError,
    RejectedInputError,
    RejectionReason,
)

__all__ = [
    "CloneStreamError",
    "ConfigurationError",
    "InvalidConfigError",
    "ChunkSizeMismatchError",
    "DetectionError",
    "RejectedInputError",
    "RejectionReason",
    "IncomparableTargetError",
    "PipelineStateError",
]
