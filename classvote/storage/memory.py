"""In-memory store, for tests and throwaway sessions."""

from collections.abc import Sequence

from classvote.models import Nominee, VoteRecord
from classvote.storage import register_store
from classvote.storage.base import VoteStore


@register_store
class MemoryStore(VoteStore):
    """Keeps the roster and votes in lists. Nothing survives the process."""

    def __init__(self, roster: Sequence[Nominee] = ()):
        super().__init__()
        self._roster = list(roster)
        self._votes: list[VoteRecord] = []

    @classmethod
    def can_open(cls, location: str) -> bool:
        return location.strip().lower() in ("memory", "memory:")

    def read_roster(self) -> list[Nominee]:
        return list(self._roster)

    def write_roster(self, nominees: Sequence[Nominee]) -> None:
        self._roster = list(nominees)

    def read_votes(self) -> list[VoteRecord]:
        return list(self._votes)

    def _append(self, records: list[VoteRecord]) -> None:
        self._votes.extend(records)
