"""
Persistent corpus backed by diskcache.

Records survive across runs, so a later ``scan`` compares new files against
everything scanned before. Only name and contents are written; chunks are
rebuilt from contents when a record is compared.
"""

from pathlib import Path
from typing import List, Union

from diskcache import Index

from ..detection.models import StoredFile
from ..exceptions import RejectedInputError, RejectionReason
from ..logging_config import get_logger
from .base import Corpus

logger = get_logger(__name__)


class DiskCorpus(Corpus):
    """
    SQLite-backed corpus using a diskcache ``Index``.

    The index keeps insertion order, so ``get_all_files`` returns records in
    the order they were committed. Store operations run inside a diskcache
    transaction, which serializes check-and-store across processes sharing
    the directory.
    """

    def __init__(self, directory: Union[str, Path]):
        """
        Open (or create) the corpus.

        Args:
            directory: Directory holding the diskcache database
        """
        self.directory = str(directory)
        self._index = Index(self.directory)
        logger.debug("Disk corpus opened at %s", self.directory)

    def is_file_processed(self, name: str) -> bool:
        return name in self._index

    def get_all_files(self) -> List[StoredFile]:
        return [
            StoredFile(name=name, contents=contents)
            for name, contents in self._index.items()
        ]

    def store_file(self, record: StoredFile) -> None:
        with self._index.transact():
            if record.name in self._index:
                raise RejectedInputError(record.name, RejectionReason.ALREADY_PROCESSED)
            self._index[record.name] = record.contents
        logger.debug("Stored %s in %s", record.name, self.directory)

    @property
    def number_of_files(self) -> int:
        return len(self._index)

    def clear(self) -> None:
        """Remove every stored record."""
        self._index.clear()
        logger.info("Corpus cleared")

    def stats(self) -> dict:
        """
        Get corpus statistics.

        Returns:
            Dictionary with directory, file count and on-disk volume
        """
        return {
            "directory": self.directory,
            "files": len(self._index),
            "volume": self._index.cache.volume(),
        }

    def close(self) -> None:
        self._index.cache.close()

    def __enter__(self) -> "DiskCorpus":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
