"""Corpus backends for processed files."""

from .base import Corpus
from .disk import DiskCorpus
from .memory import InMemoryCorpus

__all__ = ["Corpus", "InMemoryCorpus", "DiskCorpus"]
