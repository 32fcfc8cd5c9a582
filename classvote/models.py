"""Core data models for nominees, ballots, vote records and summaries."""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Self

CATEGORIES = ("favor", "contra")
RANKS = ("first", "second", "third")

# Points awarded per rank position. Adjust here for another weighting.
POINTS_BY_RANK: dict[str, float] = {
    "first": 2,
    "second": 1.5,
    "third": 1,
}

STANCE_FAVOR = "a favor"
STANCE_CONTRA = "en contra"
STANCE_BOTH = "ambos"

_STANCES_BY_CATEGORY = {
    "favor": (STANCE_FAVOR, STANCE_BOTH),
    "contra": (STANCE_CONTRA, STANCE_BOTH),
}


@dataclass(frozen=True)
class Nominee:
    """A participant who can be voted for.

    Attributes:
        name: Unique name within the roster
        topic: Debate topic the participant presented
        stance: Free text, usually "a favor", "en contra" or "ambos"
        notes: Free-text notes
    """
    name: str
    topic: str = ""
    stance: str = ""
    notes: str = ""

    def eligible_for(self, category: str) -> bool:
        """Whether this nominee can be picked in the given category."""
        return self.stance.strip().lower() in _STANCES_BY_CATEGORY.get(category, ())

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "topic": self.topic,
            "stance": self.stance,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            name=str(data.get("name") or "").strip(),
            topic=str(data.get("topic") or ""),
            stance=str(data.get("stance") or ""),
            notes=str(data.get("notes") or ""),
        )


@dataclass(frozen=True)
class Ballot:
    """One voter's ranked picks in both categories.

    Attributes:
        voter_name: Name of the person voting
        picks: category -> {rank -> nominee name or ""}

    Example:
        >>> ballot = Ballot(
        ...     voter_name="Ana",
        ...     picks={
        ...         "favor": {"first": "Luis", "second": "Marta", "third": ""},
        ...         "contra": {"first": "", "second": "", "third": ""},
        ...     },
        ... )
    """
    voter_name: str
    picks: dict[str, dict[str, str]]

    def get_pick(self, category: str, rank: str) -> str:
        return self.picks.get(category, {}).get(rank, "")

    def filled_slots(self) -> list[tuple[str, str]]:
        """(category, rank) pairs holding a nominee, in ballot order."""
        return [
            (category, rank)
            for category in CATEGORIES
            for rank in RANKS
            if self.get_pick(category, rank)
        ]

    def missing_slots(self) -> list[tuple[str, str]]:
        """(category, rank) pairs left empty, in ballot order."""
        return [
            (category, rank)
            for category in CATEGORIES
            for rank in RANKS
            if not self.get_pick(category, rank)
        ]

    @property
    def is_complete(self) -> bool:
        return not self.missing_slots()

    def to_payload(self) -> dict[str, Any]:
        """Convert to the wire shape accepted by the submission endpoint."""
        payload: dict[str, Any] = {"voterName": self.voter_name}
        for category in CATEGORIES:
            payload[category] = {rank: self.get_pick(category, rank) for rank in RANKS}
        return payload


@dataclass(frozen=True)
class VoteRecord:
    """One persisted pick from an accepted ballot."""
    timestamp: datetime
    voter: str
    category: str
    rank: str
    nominee: str
    points: float

    COLUMNS = ("timestamp", "voter", "category", "rank", "nominee", "points")

    def to_row(self) -> list[Any]:
        return [
            self.timestamp.isoformat(),
            self.voter,
            self.category,
            self.rank,
            self.nominee,
            self.points,
        ]

    @classmethod
    def from_row(cls, row: list[Any]) -> Self:
        """Parse a stored row leniently.

        Category and rank are lowercased but not checked, so that the
        aggregator can decide what to do with unexpected values. Points that
        are not numeric count as 0.

        Raises:
            ValueError: If the row has fewer than six columns
        """
        if len(row) < len(cls.COLUMNS):
            raise ValueError(f"expected {len(cls.COLUMNS)} columns, got {len(row)}")

        timestamp_raw, voter, category, rank, nominee, points_raw = row[:6]
        return cls(
            timestamp=_parse_timestamp(timestamp_raw),
            voter=str(voter or ""),
            category=str(category or "").strip().lower(),
            rank=str(rank or "").strip().lower(),
            nominee=str(nominee or ""),
            points=_parse_points(points_raw),
        )


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        return datetime.fromtimestamp(0, tz=timezone.utc)


def _parse_points(value: Any) -> float:
    try:
        points = float(value)
    except (TypeError, ValueError):
        return 0
    # NaN and infinities would poison every total they are added to
    if not math.isfinite(points):
        return 0
    return points


@dataclass
class TallyEntry:
    """Aggregated points and rank counts for one nominee in one category."""
    name: str
    points: float = 0
    first: int = 0
    second: int = 0
    third: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "points": self.points,
            "first": self.first,
            "second": self.second,
            "third": self.third,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            name=str(data.get("name") or ""),
            points=_parse_points(data.get("points")),
            first=int(data.get("first") or 0),
            second=int(data.get("second") or 0),
            third=int(data.get("third") or 0),
        )


@dataclass
class CategorySummary:
    """Tally entries for one category, highest points first.

    Attributes:
        table: Full entries, sorted by descending points
    """
    table: list[TallyEntry] = field(default_factory=list)

    @property
    def totals(self) -> list[dict[str, Any]]:
        """(name, points) projection in table order, for charting."""
        return [{"name": e.name, "points": e.points} for e in self.table]

    def get_entry(self, name: str) -> TallyEntry | None:
        for entry in self.table:
            if entry.name == name:
                return entry
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "totals": self.totals,
            "table": [e.to_dict() for e in self.table],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Self:
        rows = (data or {}).get("table") or []
        return cls(table=[TallyEntry.from_dict(row) for row in rows])


@dataclass
class VoteSummary:
    """Summaries for both categories."""
    favor: CategorySummary = field(default_factory=CategorySummary)
    contra: CategorySummary = field(default_factory=CategorySummary)

    def get_category(self, category: str) -> CategorySummary:
        if category not in CATEGORIES:
            raise KeyError(category)
        return getattr(self, category)

    def to_dict(self) -> dict[str, Any]:
        return {category: self.get_category(category).to_dict() for category in CATEGORIES}

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Self:
        data = data or {}
        return cls(
            favor=CategorySummary.from_dict(data.get("favor")),
            contra=CategorySummary.from_dict(data.get("contra")),
        )

    @classmethod
    def empty(cls) -> Self:
        return cls()
