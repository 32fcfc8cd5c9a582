"""Tally of weighted points and rank counts per nominee."""

from collections.abc import Iterable
from typing import Any

from loguru import logger

from classvote.models import (
    CATEGORIES,
    RANKS,
    CategorySummary,
    TallyEntry,
    VoteRecord,
    VoteSummary,
)


def summarize(records: Iterable[VoteRecord]) -> VoteSummary:
    """Aggregate vote records into per-category summaries.

    For each category, points are summed per nominee and the counter for the
    record's rank is incremented. Records with an unknown category are
    dropped. Records with an unknown rank still add their points but count
    toward no rank.

    Entries are sorted by descending points. The result depends only on the
    multiset of records, except for the relative order of entries with equal
    points.
    """
    aggregations: dict[str, dict[str, TallyEntry]] = {c: {} for c in CATEGORIES}

    for record in records:
        entries = aggregations.get(record.category)
        if entries is None:
            logger.debug("Dropping vote with unknown category {!r}", record.category)
            continue

        entry = entries.get(record.nominee)
        if entry is None:
            entry = entries[record.nominee] = TallyEntry(name=record.nominee)

        entry.points += record.points
        if record.rank in RANKS:
            setattr(entry, record.rank, getattr(entry, record.rank) + 1)

    return VoteSummary(**{
        category: _format_category(entries)
        for category, entries in aggregations.items()
    })


def summarize_rows(rows: Iterable[list[Any]]) -> VoteSummary:
    """Parse raw stored rows and aggregate them.

    Rows too short to hold a vote are skipped.
    """
    records = []
    for row in rows:
        try:
            records.append(VoteRecord.from_row(row))
        except ValueError as e:
            logger.debug("Skipping malformed vote row: {}", e)
    return summarize(records)


def _format_category(entries: dict[str, TallyEntry]) -> CategorySummary:
    table = sorted(entries.values(), key=lambda e: e.points, reverse=True)
    return CategorySummary(table=table)
