"""Base formatter interface for clone report rendering."""

from abc import ABC, abstractmethod
from typing import List

from ..detection import DetectionResult


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, results: List[DetectionResult]) -> None:
        """Render results to stdout."""

    @abstractmethod
    def format(self, results: List[DetectionResult]) -> str:
        """Return formatted string representation of results."""
