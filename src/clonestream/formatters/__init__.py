"""Output formatters for clone reports."""

from .base import BaseFormatter
from .json_formatter import JsonFormatter
from .rich_formatter import RichFormatter

__all__ = ["BaseFormatter", "JsonFormatter", "RichFormatter"]
