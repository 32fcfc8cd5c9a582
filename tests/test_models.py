"""Tests for core data models."""

from datetime import datetime

import pytest
from tests.conftest import FIXED_TIME, make_ballot, make_record

from classvote.models import (
    CategorySummary,
    Nominee,
    TallyEntry,
    VoteRecord,
    VoteSummary,
)


class TestNominee:
    def test_favor_stance(self):
        nominee = Nominee("Luis", stance="A favor")
        assert nominee.eligible_for("favor")
        assert not nominee.eligible_for("contra")

    def test_contra_stance(self):
        nominee = Nominee("Pablo", stance="  en contra ")
        assert nominee.eligible_for("contra")
        assert not nominee.eligible_for("favor")

    def test_both_stance(self):
        nominee = Nominee("Irene", stance="AMBOS")
        assert nominee.eligible_for("favor")
        assert nominee.eligible_for("contra")

    def test_unknown_stance_not_eligible(self):
        nominee = Nominee("X", stance="undecided")
        assert not nominee.eligible_for("favor")
        assert not nominee.eligible_for("contra")

    def test_from_dict_fills_missing(self):
        nominee = Nominee.from_dict({"name": " Luis "})
        assert nominee == Nominee("Luis", "", "", "")

    def test_to_dict(self):
        nominee = Nominee("Luis", "Uniforms", "a favor", "n")
        assert nominee.to_dict() == {
            "name": "Luis", "topic": "Uniforms", "stance": "a favor", "notes": "n",
        }


class TestBallot:
    def test_missing_slots_in_ballot_order(self):
        ballot = make_ballot("Ana", favor=("Luis", "", "Marta"), contra=("", "Sara", ""))
        assert ballot.missing_slots() == [
            ("favor", "second"),
            ("contra", "first"),
            ("contra", "third"),
        ]
        assert ballot.filled_slots() == [
            ("favor", "first"),
            ("favor", "third"),
            ("contra", "second"),
        ]
        assert not ballot.is_complete

    def test_complete(self):
        ballot = make_ballot("Ana", favor=("A", "B", "C"), contra=("D", "E", "F"))
        assert ballot.is_complete

    def test_to_payload(self):
        ballot = make_ballot("Ana", favor=("Luis", "Marta", ""))
        assert ballot.to_payload() == {
            "voterName": "Ana",
            "favor": {"first": "Luis", "second": "Marta", "third": ""},
            "contra": {"first": "", "second": "", "third": ""},
        }


class TestVoteRecord:
    def test_row_round_trip(self):
        record = make_record("favor", "first", "Luis", 2, voter="Ana")
        assert VoteRecord.from_row(record.to_row()) == record

    def test_from_row_lowercases_category_and_rank(self):
        row = [FIXED_TIME.isoformat(), "Ana", " Favor ", "FIRST", "Luis", "2"]
        record = VoteRecord.from_row(row)
        assert record.category == "favor"
        assert record.rank == "first"
        assert record.points == 2.0

    def test_from_row_non_numeric_points(self):
        row = [FIXED_TIME.isoformat(), "Ana", "favor", "first", "Luis", "lots"]
        assert VoteRecord.from_row(row).points == 0

    @pytest.mark.parametrize("raw", ["inf", "-inf", "nan", "1e999"])
    def test_from_row_non_finite_points(self, raw):
        row = [FIXED_TIME.isoformat(), "Ana", "favor", "first", "Luis", raw]
        assert VoteRecord.from_row(row).points == 0

    def test_from_row_bad_timestamp(self):
        row = ["yesterday", "Ana", "favor", "first", "Luis", 2]
        assert isinstance(VoteRecord.from_row(row).timestamp, datetime)

    def test_from_row_too_short(self):
        with pytest.raises(ValueError):
            VoteRecord.from_row(["x", "Ana", "favor"])


class TestSummaries:
    def test_totals_follow_table_order(self):
        summary = CategorySummary(table=[
            TallyEntry("Luis", 3.5, 1, 1, 0),
            TallyEntry("Marta", 1, 0, 0, 1),
        ])
        assert summary.totals == [
            {"name": "Luis", "points": 3.5},
            {"name": "Marta", "points": 1},
        ]

    def test_empty_to_dict(self):
        assert VoteSummary.empty().to_dict() == {
            "favor": {"totals": [], "table": []},
            "contra": {"totals": [], "table": []},
        }

    def test_from_dict_round_trip(self):
        summary = VoteSummary(favor=CategorySummary(table=[TallyEntry("Luis", 2, 1, 0, 0)]))
        assert VoteSummary.from_dict(summary.to_dict()) == summary

    def test_get_category_rejects_unknown(self):
        with pytest.raises(KeyError):
            VoteSummary.empty().get_category("against")
