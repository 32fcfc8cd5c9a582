"""Ballot parsing and validation.

Turns a voter's raw ranked picks into vote records, rejecting ballots with a
missing voter name or a nominee repeated within a category. Nothing here
writes anywhere: callers persist the returned records in one batch, so a
rejected ballot never leaves partial rows behind.
"""

from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any

from classvote.models import (
    CATEGORIES,
    POINTS_BY_RANK,
    RANKS,
    Ballot,
    Nominee,
    VoteRecord,
)


class BallotError(ValueError):
    """A ballot was rejected. The message is shown to the voter as is."""
    pass


class IncompleteBallotError(BallotError):
    """Raised when a complete ballot is required and some picks are empty."""

    def __init__(self, missing: list[tuple[str, str]]):
        self.missing = missing
        slots = ", ".join(f"{category} {rank}" for category, rank in missing)
        super().__init__(f"all picks are required (missing: {slots})")


class DuplicateNomineeError(BallotError):
    """Raised when the same nominee is picked twice within one category."""

    def __init__(self, category: str, nominee: str):
        self.category = category
        self.nominee = nominee
        super().__init__(f"the {category} vote contains duplicate names")


class UnknownNomineeError(BallotError):
    """Raised when a pick is not an eligible roster member for its category."""

    def __init__(self, category: str, nominee: str):
        self.category = category
        self.nominee = nominee
        super().__init__(f"{nominee!r} cannot be chosen in the {category} category")


class EmptyBallotError(BallotError):
    """Raised when a ballot has no picks at all."""

    def __init__(self):
        super().__init__("no valid votes were received")


def parse_ballot(payload: Any) -> Ballot:
    """Build a Ballot from the submission wire shape.

    The expected shape is ``{voterName, favor: {first, second, third},
    contra: {...}}``. Missing categories or ranks become empty picks and all
    values are stripped.

    Raises:
        BallotError: If the payload or one of its categories is not an object
    """
    if not isinstance(payload, dict):
        raise BallotError("ballot must be an object")

    picks: dict[str, dict[str, str]] = {}
    for category in CATEGORIES:
        votes = payload.get(category) or {}
        if not isinstance(votes, dict):
            raise BallotError(f"picks for {category} must be an object")
        picks[category] = {rank: str(votes.get(rank) or "").strip() for rank in RANKS}

    return Ballot(
        voter_name=str(payload.get("voterName") or "").strip(),
        picks=picks,
    )


def prepare_vote_records(
    ballot: Ballot, timestamp: datetime | None = None
) -> list[VoteRecord]:
    """Convert a ballot's non-empty picks into vote records.

    Categories and ranks are walked in fixed order. Empty picks are skipped.
    All records share one timestamp.

    Raises:
        DuplicateNomineeError: If a nominee repeats within a category. No
            records are returned in that case.
    """
    if timestamp is None:
        timestamp = datetime.now(timezone.utc)

    records = []
    for category in CATEGORIES:
        seen: set[str] = set()
        for rank in RANKS:
            nominee = ballot.get_pick(category, rank).strip()
            if not nominee:
                continue
            if nominee in seen:
                raise DuplicateNomineeError(category, nominee)
            seen.add(nominee)

            records.append(VoteRecord(
                timestamp=timestamp,
                voter=ballot.voter_name.strip(),
                category=category,
                rank=rank,
                nominee=nominee,
                points=POINTS_BY_RANK.get(rank, 0),
            ))

    return records


def validate_ballot(
    ballot: Ballot,
    *,
    require_complete: bool = False,
    roster: Iterable[Nominee] | None = None,
    timestamp: datetime | None = None,
) -> list[VoteRecord]:
    """Validate a ballot and return the records to persist.

    Args:
        ballot: The submitted ballot
        require_complete: Reject ballots with any of the six picks empty
        roster: If given, every pick must be a roster member whose stance
            allows the category it was picked in
        timestamp: Timestamp for the records (defaults to now)

    Returns:
        One VoteRecord per non-empty pick, never an empty list

    Raises:
        BallotError: With a message suitable for the voter
    """
    if not ballot.voter_name.strip():
        raise BallotError("voter name is required")

    if require_complete:
        missing = ballot.missing_slots()
        if missing:
            raise IncompleteBallotError(missing)

    records = prepare_vote_records(ballot, timestamp)

    if roster is not None:
        by_name = {nominee.name: nominee for nominee in roster}
        for record in records:
            nominee = by_name.get(record.nominee)
            if nominee is None or not nominee.eligible_for(record.category):
                raise UnknownNomineeError(record.category, record.nominee)

    if not records:
        raise EmptyBallotError()

    return records
