"""Clone detection pipeline for one incoming file at a time.

Stages, in order::

    preprocess   RECEIVED    -> ADMITTED      (or REJECTED)
    transform    ADMITTED    -> TRANSFORMED   normalize + chunk
    match_detect TRANSFORMED -> MATCHED       match, expand, consolidate per stored file
    store_file   MATCHED     -> COMMITTED     prune and hand to the corpus

Usage::

    detector = CloneDetector(InMemoryCorpus())
    result = detector.process(SourceFile("A.java", text))
    for clone in result.clones:
        ...

The detector does no locking of its own; the corpus arbitrates concurrent
submissions of the same name.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from ..config import DEFAULT_CONFIG, DetectorConfig
from ..exceptions import (
    IncomparableTargetError,
    PipelineStateError,
    RejectedInputError,
    RejectionReason,
)
from ..logging_config import get_logger
from ..storage.base import Corpus
from .chunker import chunkify
from .consolidator import consolidate_clones
from .expander import expand_candidates
from .matcher import comparable_chunks, find_candidates
from .models import Clone, PipelineState, SourceFile, StoredFile
from .normalizer import normalize_lines

logger = get_logger(__name__)


@dataclass
class DetectionResult:
    """Clones found for one file plus processing statistics."""

    name: str
    clones: List[Clone] = field(default_factory=list)
    content_line_count: int = 0
    chunk_count: int = 0
    targets_compared: int = 0
    elapsed_seconds: float = 0.0


class CloneDetector:
    """Runs incoming files through admission, transform, match and commit."""

    def __init__(self, corpus: Corpus, config: Optional[DetectorConfig] = None) -> None:
        self.corpus = corpus
        self.config = config or DEFAULT_CONFIG

    @property
    def chunk_size(self) -> int:
        return self.config.chunk_size

    @property
    def number_of_processed_files(self) -> int:
        return self.corpus.number_of_files

    # ── stages ────────────────────────────────────────────────────

    def check_admission(self, file: SourceFile) -> SourceFile:
        """Accept the file or raise RejectedInputError.

        The extension is checked before the corpus is consulted.
        """
        _require_state(file, PipelineState.RECEIVED)

        suffix = self.config.accepted_suffix
        if not file.name.endswith(suffix):
            file.state = PipelineState.REJECTED
            raise RejectedInputError(file.name, RejectionReason.WRONG_EXTENSION, suffix)
        if self.corpus.is_file_processed(file.name):
            file.state = PipelineState.REJECTED
            raise RejectedInputError(file.name, RejectionReason.ALREADY_PROCESSED, suffix)

        file.state = PipelineState.ADMITTED
        return file

    async def preprocess(self, file: SourceFile) -> SourceFile:
        """Awaitable admission check; resolves with the file or raises once."""
        return self.check_admission(file)

    def transform(self, file: SourceFile) -> SourceFile:
        """Normalize lines and cut the file into chunks."""
        _require_state(file, PipelineState.ADMITTED)

        file.lines = normalize_lines(file.contents)
        file.chunks = chunkify(file.lines, self.chunk_size)
        file.state = PipelineState.TRANSFORMED
        return file

    def compare_with(self, file: SourceFile, target: StoredFile) -> List[Clone]:
        """Expanded clones of ``file`` against one stored file.

        Raises:
            IncomparableTargetError: If the target cannot be chunked
        """
        target_chunks = comparable_chunks(target, self.chunk_size)
        candidates = find_candidates(file.name, file.chunks or [], target.name, target_chunks)
        return expand_candidates(candidates)

    def match_detect(self, file: SourceFile, targets: Optional[Iterable[StoredFile]] = None) -> SourceFile:
        """Compare the file with every stored file except itself.

        Each pass is expanded and consolidated into ``file.instances``.
        Stored files that cannot be compared are skipped.
        """
        _require_state(file, PipelineState.TRANSFORMED)

        if targets is None:
            targets = self.corpus.get_all_files()
        if file.instances is None:
            file.instances = []

        for target in targets:
            if target.name == file.name:
                continue
            try:
                expanded = self.compare_with(file, target)
            except IncomparableTargetError as e:
                logger.debug("Skipping target: %s", e)
                continue
            file.instances = consolidate_clones(file.instances + expanded)

        file.state = PipelineState.MATCHED
        return file

    def prune_file(self, file: SourceFile) -> StoredFile:
        return file.prune()

    def store_file(self, file: SourceFile) -> SourceFile:
        """Prune transient state and commit the file to the corpus."""
        _require_state(file, PipelineState.MATCHED)

        self.corpus.store_file(self.prune_file(file))
        file.state = PipelineState.COMMITTED
        return file

    # ── whole pipeline ────────────────────────────────────────────

    def process(self, file: SourceFile) -> DetectionResult:
        """Run every stage on one file and return its clones.

        Raises:
            RejectedInputError: If the file fails admission
        """
        started = time.perf_counter()
        self.check_admission(file)
        return self._run_admitted(file, started)

    async def process_async(self, file: SourceFile) -> DetectionResult:
        started = time.perf_counter()
        await self.preprocess(file)
        return self._run_admitted(file, started)

    def _run_admitted(self, file: SourceFile, started: float) -> DetectionResult:
        self.transform(file)
        content_lines = len(file.content_lines())

        targets = [t for t in self.corpus.get_all_files() if t.name != file.name]
        self.match_detect(file, targets)
        clones = list(file.instances or [])

        self.store_file(file)
        result = DetectionResult(
            name=file.name,
            clones=clones,
            content_line_count=content_lines,
            chunk_count=len(file.chunks or []),
            targets_compared=len(targets),
            elapsed_seconds=time.perf_counter() - started,
        )
        logger.debug(
            "%s: %d chunks, %d clones against %d files in %.3fs",
            file.name,
            result.chunk_count,
            len(clones),
            result.targets_compared,
            result.elapsed_seconds,
        )
        return result


def _require_state(file: SourceFile, *expected: PipelineState) -> None:
    if file.state not in expected:
        raise PipelineStateError(file.name, file.state, expected)
