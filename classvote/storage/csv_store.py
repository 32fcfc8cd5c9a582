"""CSV-backed store: one file per table in a data directory.

The directory holds two sheets:

- ``roster.csv`` with columns name, topic, stance, notes
- ``votes.csv`` with columns timestamp, voter, category, rank, nominee, points

Each sheet is created with its header row the first time it is touched, so
an empty directory is a valid, empty store.
"""

import csv
from collections.abc import Sequence
from pathlib import Path

from loguru import logger

from classvote.models import Nominee, VoteRecord
from classvote.storage import register_store
from classvote.storage.base import StoreError, VoteStore

ROSTER_FILE = "roster.csv"
VOTES_FILE = "votes.csv"
ROSTER_HEADERS = ["name", "topic", "stance", "notes"]
VOTES_HEADERS = list(VoteRecord.COLUMNS)

PREFIX = "csv:"


@register_store
class CsvStore(VoteStore):
    """Store backed by two CSV files in a directory."""

    def __init__(self, directory: str | Path):
        super().__init__()
        self.directory = Path(directory)

    @classmethod
    def can_open(cls, location: str) -> bool:
        location = location.strip()
        if location.lower().startswith(PREFIX):
            return True
        # Plain paths only, URLs belong to other backends
        return bool(location) and "://" not in location

    @classmethod
    def open(cls, location: str) -> "CsvStore":
        location = location.strip()
        if location.lower().startswith(PREFIX):
            location = location[len(PREFIX):]
        return cls(location)

    @classmethod
    def normalize_location(cls, location: str) -> str:
        return str(cls.open(location).directory.resolve())

    @property
    def roster_path(self) -> Path:
        return self.directory / ROSTER_FILE

    @property
    def votes_path(self) -> Path:
        return self.directory / VOTES_FILE

    def read_roster(self) -> list[Nominee]:
        rows = self._read_sheet(self.roster_path, ROSTER_HEADERS)
        roster = []
        for row in rows:
            row = row + [""] * (len(ROSTER_HEADERS) - len(row))
            name = row[0].strip()
            if not name:
                continue
            roster.append(Nominee(name=name, topic=row[1], stance=row[2], notes=row[3]))
        return roster

    def write_roster(self, nominees: Sequence[Nominee]) -> None:
        with self._lock:
            try:
                self.directory.mkdir(parents=True, exist_ok=True)
                with open(self.roster_path, "w", newline="", encoding="utf-8") as f:
                    writer = csv.writer(f)
                    writer.writerow(ROSTER_HEADERS)
                    for n in nominees:
                        writer.writerow([n.name, n.topic, n.stance, n.notes])
            except OSError as e:
                raise StoreError(f"Could not write roster: {e}") from e

    def read_votes(self) -> list[VoteRecord]:
        records = []
        for line_no, row in enumerate(self._read_sheet(self.votes_path, VOTES_HEADERS), start=2):
            try:
                records.append(VoteRecord.from_row(row))
            except ValueError as e:
                logger.debug("Skipping {} line {}: {}", VOTES_FILE, line_no, e)
        return records

    def _append(self, records: list[VoteRecord]) -> None:
        self._ensure_sheet(self.votes_path, VOTES_HEADERS)
        try:
            with open(self.votes_path, "a", newline="", encoding="utf-8") as f:
                csv.writer(f).writerows(record.to_row() for record in records)
        except OSError as e:
            raise StoreError(f"Could not write votes: {e}") from e

    def _read_sheet(self, path: Path, headers: list[str]) -> list[list[str]]:
        """Return the data rows of a sheet, creating it if needed."""
        with self._lock:
            self._ensure_sheet(path, headers)
            try:
                with open(path, newline="", encoding="utf-8") as f:
                    rows = list(csv.reader(f))
            except OSError as e:
                raise StoreError(f"Could not read {path.name}: {e}") from e
        # First row is the header
        return [row for row in rows[1:] if any(cell.strip() for cell in row)]

    def _ensure_sheet(self, path: Path, headers: list[str]) -> None:
        """Create the sheet with its header row if it is missing or empty.

        Called with the store lock held. A missing sheet is created
        exclusively, so a file another writer just made is never truncated.
        """
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            try:
                with open(path, "x", newline="", encoding="utf-8") as f:
                    csv.writer(f).writerow(headers)
                return
            except FileExistsError:
                pass
            if path.stat().st_size == 0:
                with open(path, "w", newline="", encoding="utf-8") as f:
                    csv.writer(f).writerow(headers)
        except OSError as e:
            raise StoreError(f"Could not create {path.name}: {e}") from e
