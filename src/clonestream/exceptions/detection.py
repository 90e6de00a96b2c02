"""Detection pipeline exceptions: admission, comparison targets, stage order."""

from enum import Enum
from typing import Iterable

from .base import CloneStreamError


class RejectionReason(Enum):
    """Why the admission check turned a file away."""

    WRONG_EXTENSION = "wrong_extension"
    ALREADY_PROCESSED = "already_processed"


class DetectionError(CloneStreamError):
    """Base class for detection pipeline errors."""
    pass


class RejectedInputError(DetectionError):
    """Raised when a file fails the admission check.

    Not fatal: the caller decides whether to log, drop or retry the file.
    """

    def __init__(self, name: str, reason: RejectionReason, suffix: str = ".java"):
        if reason is RejectionReason.WRONG_EXTENSION:
            message = f"{name} is not a {suffix.lstrip('.')} file. Discarding."
        else:
            message = f"{name} has already been processed."
        super().__init__(message, details={"file": name, "reason": reason.value})
        self.name = name
        self.reason = reason


class IncomparableTargetError(DetectionError):
    """Raised when a stored file has neither chunks nor contents."""

    def __init__(self, name: str):
        super().__init__(
            f"Cannot compare against {name}",
            details={"file": name, "reason": "no chunks and no contents"},
        )
        self.name = name


class PipelineStateError(DetectionError):
    """Raised when a pipeline stage runs on a file in the wrong state."""

    def __init__(self, name: str, state: Enum, expected: Iterable[Enum]):
        expected = list(expected)
        super().__init__(
            f"{name} is {state.value}, cannot run this stage",
            details={
                "file": name,
                "state": state.value,
                "expected": ", ".join(s.value for s in expected),
            },
        )
        self.name = name
        self.state = state
        self.expected = expected
