"""State of a voting page session.

Holds the roster shown to voters and the latest vote summary waiting to be
drawn. The roster starts from a fallback list and is replaced whenever the
backend sends a non-empty one.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Self

from classvote.models import CATEGORIES, RANKS, Ballot, Nominee, VoteSummary


@dataclass
class VotingContext:
    """Roster and pending summary for one voting page.

    Attributes:
        roster: Nominees currently offered to voters
        summary: Latest summary not yet handed to the renderer, if any
        charts_ready: Whether the renderer has finished loading
    """
    roster: list[Nominee] = field(default_factory=list)
    summary: VoteSummary | None = None
    charts_ready: bool = False

    @classmethod
    def load(cls, fallback_roster: Iterable[Nominee] = ()) -> Self:
        """Start a session showing the fallback roster."""
        return cls(roster=list(fallback_roster))

    def apply_overview(self, data: dict[str, Any]) -> VoteSummary | None:
        """Take in a backend overview ({ok, roster, votes}).

        Returns the summary to draw now, or None if the renderer isn't ready.

        Raises:
            ValueError: If the backend reported a failure
        """
        if data.get("ok") is False:
            raise ValueError(data.get("error") or "the backend returned an error")

        roster = data.get("roster")
        if isinstance(roster, list) and roster:
            self.roster = [Nominee.from_dict(row) for row in roster if isinstance(row, dict)]

        votes = data.get("votes")
        self.summary = VoteSummary.from_dict(votes) if isinstance(votes, dict) else None
        return self.summary if self.charts_ready else None

    def reset_summary(self) -> VoteSummary | None:
        """Replace the pending summary with an empty one.

        Returns the summary to draw now, or None if the renderer isn't ready.
        """
        self.summary = VoteSummary.empty()
        return self.summary if self.charts_ready else None

    def mark_charts_ready(self) -> VoteSummary | None:
        """Record that the renderer loaded; return any summary it should draw."""
        self.charts_ready = True
        return self.summary

    def options_for(self, category: str) -> list[Nominee]:
        """Roster nominees that can be picked in a category."""
        return [n for n in self.roster if n.eligible_for(category)]

    def build_ballot(
        self, voter_name: str, favor: dict[str, str], contra: dict[str, str]
    ) -> Ballot:
        """Build a ballot from form values keyed by rank."""
        picks = {"favor": favor, "contra": contra}
        return Ballot(
            voter_name=voter_name.strip(),
            picks={
                category: {rank: (picks[category].get(rank) or "").strip() for rank in RANKS}
                for category in CATEGORIES
            },
        )
