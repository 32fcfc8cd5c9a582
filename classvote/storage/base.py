"""Abstract base class for vote storage backends."""

import threading
from abc import ABC, abstractmethod
from collections.abc import Sequence

from classvote.models import Nominee, VoteRecord


class StoreError(Exception):
    """A storage backend could not be opened, read or written."""
    pass


class VoteStore(ABC):
    """Abstract base class for storing the roster and the vote records.

    A store holds two tables: the roster of nominees and the append-only list
    of vote records. Backends are registered via the @register_store
    decorator in classvote/storage/__init__.py.

    Appends are serialized with a per-store lock so that two ballots written
    at the same time never interleave their rows.
    """

    def __init__(self):
        self._lock = threading.Lock()

    @classmethod
    @abstractmethod
    def can_open(cls, location: str) -> bool:
        """Check if this backend handles the given location string."""
        pass

    @classmethod
    def normalize_location(cls, location: str) -> str:
        """Key under which open_store shares one instance per location."""
        return location.strip().lower()

    @classmethod
    def open(cls, location: str) -> "VoteStore":
        """Create a store for the given location."""
        return cls()

    @abstractmethod
    def read_roster(self) -> list[Nominee]:
        """Return the roster in stored order. An empty roster is valid."""
        pass

    @abstractmethod
    def write_roster(self, nominees: Sequence[Nominee]) -> None:
        """Replace the roster."""
        pass

    @abstractmethod
    def read_votes(self) -> list[VoteRecord]:
        """Return every stored vote record."""
        pass

    def append_votes(self, records: Sequence[VoteRecord]) -> None:
        """Append one ballot's records as a single write.

        Raises:
            ValueError: If records is empty
            StoreError: If the backend fails to write
        """
        if not records:
            raise ValueError("cannot append an empty batch of votes")
        with self._lock:
            self._append(list(records))

    @abstractmethod
    def _append(self, records: list[VoteRecord]) -> None:
        """Write a non-empty batch. Called with the store lock held."""
        pass
