"""Data models for line-window clone detection.

A file moves through the pipeline as a mutable ``SourceFile``. Normalization
produces ``SourceLine`` values, chunking groups content lines into ``Chunk``
windows, and matching produces ``Clone`` objects that expansion grows into
maximal spans. Only ``StoredFile`` (name, contents, optional chunks) is handed
to the corpus.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class PipelineState(Enum):
    """Where a file is in the detection pipeline."""

    RECEIVED = "received"
    ADMITTED = "admitted"
    TRANSFORMED = "transformed"
    MATCHED = "matched"
    COMMITTED = "committed"
    REJECTED = "rejected"


@dataclass(frozen=True, eq=False)
class SourceLine:
    """One physical line after comment stripping.

    Equality and hashing use ``text`` only; line numbers never take part in
    matching.
    """

    number: int
    text: str

    def has_content(self) -> bool:
        return bool(self.text)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SourceLine):
            return NotImplemented
        return self.text == other.text

    def __hash__(self) -> int:
        return hash(self.text)


@dataclass(frozen=True)
class Chunk:
    """A window of consecutive content lines.

    ``index`` is the window's start position among the file's content lines,
    so original line numbers inside a chunk may have gaps.
    """

    index: int
    lines: Tuple[SourceLine, ...]

    def __len__(self) -> int:
        return len(self.lines)

    @property
    def key(self) -> Tuple[str, ...]:
        """Normalized text of every line, used for exact matching."""
        return tuple(line.text for line in self.lines)

    @property
    def first_line(self) -> int:
        return self.lines[0].number

    @property
    def last_line(self) -> int:
        return self.lines[-1].number

    def matches(self, other: "Chunk") -> bool:
        """True if both chunks have the same length and line-by-line text."""
        if len(self.lines) != len(other.lines):
            return False
        return all(a == b for a, b in zip(self.lines, other.lines))


@dataclass(frozen=True)
class CloneTarget:
    """A span of another file that duplicates a clone's source span."""

    name: str
    start_line: int
    end_line: int


@dataclass(eq=False)
class Clone:
    """A duplicated span of the file under analysis.

    Built from a single matching chunk pair, then grown by the expander while
    both sides slide forward together. The chunk indices track the most
    recently absorbed pair and are only meaningful until consolidation.
    Identity is the source file plus source span.
    """

    source_name: str
    source_start: int
    source_end: int
    targets: List[CloneTarget] = field(default_factory=list)
    source_chunk_index: int = 0
    target_chunk_index: int = 0
    chunk_count: int = 1
    window_size: int = 1

    @classmethod
    def from_chunks(
        cls, source_name: str, target_name: str, source_chunk: Chunk, target_chunk: Chunk
    ) -> "Clone":
        return cls(
            source_name=source_name,
            source_start=source_chunk.first_line,
            source_end=source_chunk.last_line,
            targets=[
                CloneTarget(target_name, target_chunk.first_line, target_chunk.last_line)
            ],
            source_chunk_index=source_chunk.index,
            target_chunk_index=target_chunk.index,
            window_size=len(source_chunk),
        )

    @property
    def identity(self) -> Tuple[str, int, int]:
        return (self.source_name, self.source_start, self.source_end)

    @property
    def target(self) -> CloneTarget:
        """The single target of an unconsolidated clone."""
        return self.targets[0]

    @property
    def line_count(self) -> int:
        """Number of content lines covered on each side."""
        return self.chunk_count + self.window_size - 1

    def follows(self, other: "Clone") -> bool:
        """True if ``other`` is this clone slid one content line forward."""
        return (
            other.source_name == self.source_name
            and other.target.name == self.target.name
            and other.source_chunk_index == self.source_chunk_index + 1
            and other.target_chunk_index == self.target_chunk_index + 1
        )

    def expand_with(self, other: "Clone") -> None:
        """Absorb the next sliding match, extending both spans to its last line."""
        self.source_end = other.source_end
        self.targets = [
            CloneTarget(self.target.name, self.target.start_line, other.target.end_line)
        ]
        self.source_chunk_index = other.source_chunk_index
        self.target_chunk_index = other.target_chunk_index
        self.chunk_count += 1

    def maybe_expand_with(self, other: "Clone") -> bool:
        if not self.follows(other):
            return False
        self.expand_with(other)
        return True

    def add_target(self, other: "Clone") -> None:
        """Merge the targets of an identity-equal clone into this one."""
        for target in other.targets:
            if target not in self.targets:
                self.targets.append(target)


@dataclass(frozen=True)
class StoredFile:
    """The pruned record a corpus keeps for a processed file."""

    name: str
    contents: Optional[str]
    chunks: Optional[Tuple[Chunk, ...]] = None


@dataclass
class SourceFile:
    """A file's working state while it moves through the pipeline.

    ``lines`` and ``instances`` are transient and dropped on commit.
    """

    name: str
    contents: str
    lines: Optional[List[SourceLine]] = None
    chunks: Optional[List[Chunk]] = None
    instances: Optional[List[Clone]] = None
    state: PipelineState = PipelineState.RECEIVED

    def content_lines(self) -> List[SourceLine]:
        return [line for line in (self.lines or []) if line.has_content()]

    def prune(self) -> StoredFile:
        """Drop transient state and return the record handed to the corpus."""
        self.lines = None
        self.instances = None
        chunks = tuple(self.chunks) if self.chunks is not None else None
        return StoredFile(name=self.name, contents=self.contents, chunks=chunks)
