"""Chunker: slides a fixed-size window over a file's content lines."""

from __future__ import annotations

from typing import List, Sequence

from ..config import DEFAULT_CHUNK_SIZE
from .models import Chunk, SourceLine


def chunkify(lines: Sequence[SourceLine], chunk_size: int = DEFAULT_CHUNK_SIZE) -> List[Chunk]:
    """Return every window of ``chunk_size`` consecutive content lines.

    Blank and comment-only lines are skipped before windowing, so a file
    with ``c`` content lines yields ``max(0, c - chunk_size + 1)`` chunks in
    increasing start-index order.
    """
    if chunk_size < 1:
        raise ValueError("chunk_size must be at least 1")

    content = [line for line in lines if line.has_content()]
    return [
        Chunk(index=i, lines=tuple(content[i : i + chunk_size]))
        for i in range(len(content) - chunk_size + 1)
    ]
