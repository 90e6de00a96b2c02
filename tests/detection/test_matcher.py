"""Tests for chunk matching and chunk rebuilding."""

import pytest

from clonestream.detection.chunker import chunkify
from clonestream.detection.matcher import (
    check_chunk_size,
    comparable_chunks,
    find_candidates,
    rebuild_chunks,
)
from clonestream.detection.models import StoredFile
from clonestream.detection.normalizer import normalize_lines
from clonestream.exceptions import ChunkSizeMismatchError, IncomparableTargetError


def chunks_of(*lines, size=5):
    return chunkify(normalize_lines("\n".join(lines)), size)


class TestFindCandidates:
    """Test exact chunk pair matching."""

    def test_identical_files_match_diagonal(self, eight_lines):
        source = chunks_of(*eight_lines)
        target = chunks_of(*eight_lines)
        candidates = find_candidates("S.java", source, "T.java", target)
        assert [(c.source_chunk_index, c.target_chunk_index) for c in candidates] == [
            (0, 0),
            (1, 1),
            (2, 2),
            (3, 3),
        ]

    def test_candidate_spans_use_original_line_numbers(self, block):
        source = chunks_of(*block)
        target = chunks_of("// header", "", *block)
        [candidate] = find_candidates("S.java", source, "T.java", target)
        assert (candidate.source_start, candidate.source_end) == (1, 5)
        assert (candidate.target.start_line, candidate.target.end_line) == (3, 7)
        assert candidate.target.name == "T.java"

    def test_no_match_on_different_text(self, block):
        other = [line.replace("sum", "total") for line in block]
        assert find_candidates("S.java", chunks_of(*block), "T.java", chunks_of(*other)) == []

    def test_one_source_chunk_matches_repeated_target(self, block):
        candidates = find_candidates(
            "S.java", chunks_of(*block), "T.java", chunks_of(*block, *block)
        )
        assert [(c.source_chunk_index, c.target_chunk_index) for c in candidates] == [(0, 0), (0, 5)]

    def test_order_is_source_then_target(self):
        lines = ["a;", "a;", "a;", "a;"]
        candidates = find_candidates("S.java", chunks_of(*lines, size=2), "T.java", chunks_of(*lines, size=2))
        pairs = [(c.source_chunk_index, c.target_chunk_index) for c in candidates]
        assert pairs == sorted(pairs)
        assert len(pairs) == 9


class TestComparableChunks:
    """Test use and rebuilding of stored chunks."""

    def test_stored_chunks_used_as_is(self, block):
        chunks = tuple(chunks_of(*block))
        stored = StoredFile("T.java", None, chunks)
        assert comparable_chunks(stored, 5) is chunks

    def test_pruned_chunks_rebuilt_from_contents(self, block):
        stored = StoredFile("T.java", "\n".join(block))
        rebuilt = comparable_chunks(stored, 5)
        assert [c.key for c in rebuilt] == [c.key for c in chunks_of(*block)]
        assert stored.chunks is None

    def test_missing_contents_and_chunks_is_incomparable(self):
        with pytest.raises(IncomparableTargetError):
            comparable_chunks(StoredFile("T.java", None), 5)

    def test_mismatched_window_rebuilt(self, eight_lines):
        stored = StoredFile("T.java", "\n".join(eight_lines), tuple(chunks_of(*eight_lines, size=3)))
        rebuilt = comparable_chunks(stored, 5)
        assert len(rebuilt) == 4
        assert all(len(c) == 5 for c in rebuilt)

    def test_check_chunk_size_raises_on_mismatch(self, eight_lines):
        stored = StoredFile("T.java", None, tuple(chunks_of(*eight_lines, size=3)))
        with pytest.raises(ChunkSizeMismatchError) as exc_info:
            check_chunk_size(stored, 5)
        assert exc_info.value.expected == 5
        assert exc_info.value.actual == 3

    def test_rebuild_requires_contents(self):
        with pytest.raises(IncomparableTargetError):
            rebuild_chunks(StoredFile("T.java", ""), 5)
