"""Corpus interface: the store of files already processed."""

from abc import ABC, abstractmethod
from typing import List

from ..detection.models import StoredFile


class Corpus(ABC):
    """Remembers processed files and hands them back as comparison targets.

    Implementations arbitrate concurrent submissions: ``store_file`` must
    refuse a name that is already stored.
    """

    @abstractmethod
    def is_file_processed(self, name: str) -> bool:
        """Return True if a file with this name has been stored."""

    @abstractmethod
    def get_all_files(self) -> List[StoredFile]:
        """Return every stored record in the order it was stored."""

    @abstractmethod
    def store_file(self, record: StoredFile) -> None:
        """Persist a pruned record.

        Raises:
            RejectedInputError: If the name is already stored
        """

    @property
    @abstractmethod
    def number_of_files(self) -> int:
        """Count of stored records."""
