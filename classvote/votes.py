"""Orchestrator: validate and store ballots, read summaries back."""

from typing import Any

from loguru import logger

from classvote.ballot import BallotError, parse_ballot, validate_ballot
from classvote.models import VoteSummary
from classvote.storage.base import VoteStore
from classvote.tally import summarize


def submit_ballot(
    store: VoteStore,
    payload: Any,
    *,
    require_complete: bool = False,
    enforce_roster: bool = False,
) -> int:
    """Validate a submitted ballot and append its records to the store.

    Every record is prepared before anything is written, and the batch is
    appended in one call, so a rejected ballot leaves the store untouched.

    Args:
        store: Where votes are kept
        payload: The ballot in wire shape (see parse_ballot)
        require_complete: Reject ballots with empty picks
        enforce_roster: Reject picks that are not eligible roster members

    Returns:
        Number of vote records written

    Raises:
        BallotError: If the ballot is rejected
        StoreError: If the store fails
    """
    ballot = parse_ballot(payload)

    with logger.contextualize(voter=ballot.voter_name or "-"):
        roster = store.read_roster() if enforce_roster else None

        try:
            records = validate_ballot(
                ballot, require_complete=require_complete, roster=roster
            )
        except BallotError as e:
            logger.warning("Rejected ballot: {}", e)
            raise

        store.append_votes(records)
        logger.info("Recorded {} votes", len(records))
    return len(records)


def get_summary(store: VoteStore) -> VoteSummary:
    """Aggregate every stored vote."""
    return summarize(store.read_votes())


def get_overview(store: VoteStore) -> dict[str, Any]:
    """Roster plus vote summary, as served to the voting page."""
    return {
        "ok": True,
        "roster": [nominee.to_dict() for nominee in store.read_roster()],
        "votes": get_summary(store).to_dict(),
    }
