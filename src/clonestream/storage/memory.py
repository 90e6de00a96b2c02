"""In-process corpus guarded by a lock."""

from __future__ import annotations

import threading
from dataclasses import replace
from typing import Dict, List

from ..detection.models import StoredFile
from ..exceptions import RejectedInputError, RejectionReason
from ..logging_config import get_logger
from .base import Corpus

logger = get_logger(__name__)


class InMemoryCorpus(Corpus):
    """Keeps processed files in insertion order for the life of the process.

    Thread-safe: membership checks and stores take the same lock, so two
    submissions of one name cannot both be committed.

    Args:
        retain_chunks: Keep stored chunks. When False only name and contents
            are kept and the matcher rebuilds chunks on every comparison.
    """

    def __init__(self, retain_chunks: bool = True) -> None:
        self._lock = threading.RLock()
        self._files: Dict[str, StoredFile] = {}
        self.retain_chunks = retain_chunks

    def is_file_processed(self, name: str) -> bool:
        with self._lock:
            return name in self._files

    def get_all_files(self) -> List[StoredFile]:
        with self._lock:
            return list(self._files.values())

    def store_file(self, record: StoredFile) -> None:
        if not self.retain_chunks:
            record = replace(record, chunks=None)
        with self._lock:
            if record.name in self._files:
                raise RejectedInputError(record.name, RejectionReason.ALREADY_PROCESSED)
            self._files[record.name] = record
            count = len(self._files)
        logger.debug("Stored %s (%d files in corpus)", record.name, count)

    @property
    def number_of_files(self) -> int:
        with self._lock:
            return len(self._files)

    def clear(self) -> None:
        with self._lock:
            self._files.clear()
