"""Shared test helpers."""

from datetime import datetime, timezone

import pytest

from classvote.models import RANKS, Ballot, Nominee, VoteRecord
from classvote.storage import close_stores
from classvote.storage.memory import MemoryStore

FIXED_TIME = datetime(2025, 3, 14, 9, 30, tzinfo=timezone.utc)


def make_ballot(voter: str, favor=("", "", ""), contra=("", "", "")) -> Ballot:
    """Build a Ballot from positional (first, second, third) picks."""
    return Ballot(
        voter_name=voter,
        picks={
            "favor": dict(zip(RANKS, favor)),
            "contra": dict(zip(RANKS, contra)),
        },
    )


def make_payload(voter: str, favor=("", "", ""), contra=("", "", "")) -> dict:
    """Build a ballot in the submission wire shape."""
    return make_ballot(voter, favor, contra).to_payload()


def make_record(category: str, rank: str, nominee: str, points: float, voter: str = "V") -> VoteRecord:
    return VoteRecord(
        timestamp=FIXED_TIME,
        voter=voter,
        category=category,
        rank=rank,
        nominee=nominee,
        points=points,
    )


def summary_rows(category_summary) -> list[tuple]:
    """(name, points, first, second, third) tuples in table order."""
    return [(e.name, e.points, e.first, e.second, e.third) for e in category_summary.table]


@pytest.fixture(autouse=True)
def fresh_stores():
    """Each test starts with no shared open stores."""
    close_stores()
    yield
    close_stores()


@pytest.fixture
def roster():
    """Six nominees: two per stance.

    Luis, Marta   a favor
    Pablo, Sara   en contra
    Irene, Jon    ambos
    """
    return [
        Nominee("Luis", "Uniforms", "A favor", ""),
        Nominee("Marta", "Homework", "a favor", "Great sources"),
        Nominee("Pablo", "Phones", "En contra", ""),
        Nominee("Sara", "Exams", "en contra", ""),
        Nominee("Irene", "Recess", "Ambos", ""),
        Nominee("Jon", "Lunch", "ambos", ""),
    ]


@pytest.fixture
def memory_store(roster):
    return MemoryStore(roster)
