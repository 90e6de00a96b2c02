"""Line-window clone detection: normalize, chunk, match, expand, consolidate."""

from .models import (
    Chunk,
    Clone,
    CloneTarget,
    PipelineState,
    SourceFile,
    SourceLine,
    StoredFile,
)
from .chunker import chunkify
from .consolidator import consolidate_clones
from .expander import expand_candidates
from .matcher import find_candidates, rebuild_chunks
from .normalizer import CommentState, normalize_lines
from .detector import CloneDetector, DetectionResult

__all__ = [
    "SourceLine",
    "SourceFile",
    "StoredFile",
    "Chunk",
    "Clone",
    "CloneTarget",
    "PipelineState",
    "CommentState",
    "normalize_lines",
    "chunkify",
    "find_candidates",
    "rebuild_chunks",
    "expand_candidates",
    "consolidate_clones",
    "CloneDetector",
    "DetectionResult",
]
