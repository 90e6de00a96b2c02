"""
clonestream - streaming line-window clone detection

Receives source files one at a time and reports which spans of each file
duplicate spans of files seen earlier.
"""

__version__ = "0.1.0"

from .config import DetectorConfig, load_config
from .detection import CloneDetector, DetectionResult, SourceFile
from .storage import DiskCorpus, InMemoryCorpus

__all__ = [
    "CloneDetector",
    "DetectionResult",
    "SourceFile",
    "DetectorConfig",
    "load_config",
    "InMemoryCorpus",
    "DiskCorpus",
]
