"""Chunk matcher: exact line-window matches between two files.

Matching is exact on normalized text. Target chunks are indexed by their
text so each source chunk is looked up instead of scanned against every
target chunk; the candidates produced are the same pairs a full pairwise
scan finds, in increasing (source index, target index) order.

Stored files may have had their chunks pruned. Those are rebuilt from the
stored contents for the duration of one comparison and never written back.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, List, Sequence, Tuple

from ..exceptions import ChunkSizeMismatchError, IncomparableTargetError
from ..logging_config import get_logger
from .chunker import chunkify
from .models import Chunk, Clone, StoredFile
from .normalizer import normalize_lines

logger = get_logger(__name__)


def check_chunk_size(stored: StoredFile, chunk_size: int) -> None:
    """Raise if the stored chunks were cut with a different window size."""
    for chunk in stored.chunks or ():
        if len(chunk) != chunk_size:
            raise ChunkSizeMismatchError(chunk_size, len(chunk), stored.name)


def rebuild_chunks(stored: StoredFile, chunk_size: int) -> List[Chunk]:
    """Rebuild a stored file's chunks from its raw contents.

    Raises:
        IncomparableTargetError: If the record has no contents to rebuild from
    """
    if not stored.contents:
        raise IncomparableTargetError(stored.name)
    return chunkify(normalize_lines(stored.contents), chunk_size)


def comparable_chunks(stored: StoredFile, chunk_size: int) -> Sequence[Chunk]:
    """Chunks to compare against for ``stored``, rebuilding them when needed.

    Raises:
        IncomparableTargetError: If chunks are unusable and contents missing
    """
    if stored.chunks:
        try:
            check_chunk_size(stored, chunk_size)
            return stored.chunks
        except ChunkSizeMismatchError as e:
            logger.warning("Rebuilding chunks: %s", e)
    return rebuild_chunks(stored, chunk_size)


def index_chunks(chunks: Sequence[Chunk]) -> Dict[Tuple[str, ...], List[Chunk]]:
    """Group chunks by their normalized text, preserving index order."""
    index: Dict[Tuple[str, ...], List[Chunk]] = defaultdict(list)
    for chunk in chunks:
        index[chunk.key].append(chunk)
    return index


def find_candidates(
    source_name: str,
    source_chunks: Sequence[Chunk],
    target_name: str,
    target_chunks: Sequence[Chunk],
) -> List[Clone]:
    """Return one Clone per matching (source chunk, target chunk) pair.

    Candidates come out sorted by source chunk index, then target chunk
    index; the expander depends on this order.
    """
    index = index_chunks(target_chunks)
    candidates: List[Clone] = []
    for source_chunk in source_chunks:
        for target_chunk in index.get(source_chunk.key, ()):
            if source_chunk.matches(target_chunk):
                candidates.append(
                    Clone.from_chunks(source_name, target_name, source_chunk, target_chunk)
                )
    return candidates
