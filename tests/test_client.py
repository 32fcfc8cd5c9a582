"""Tests for the voting backend HTTP client."""

import json
from urllib.parse import parse_qs

import httpx
import pytest
from tests.conftest import make_ballot

from classvote.ballot import BallotError, DuplicateNomineeError
from classvote.client import SubmissionError, VotingClient
from classvote.context import VotingContext
from classvote.models import VoteSummary

BACKEND = "https://votes.example.com/api/votes"

COMPLETE = make_ballot("Ana", favor=("Luis", "Marta", "Irene"), contra=("Pablo", "Sara", "Jon"))


def make_client(handler) -> VotingClient:
    return VotingClient(BACKEND, transport=httpx.MockTransport(handler))


class TestSubmit:
    def test_posts_form_encoded_payload(self):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["form"] = parse_qs(request.content.decode())
            return httpx.Response(200, json={"ok": True, "message": "Vote recorded."})

        message = make_client(handler).submit(COMPLETE)
        assert message == "Vote recorded."
        assert seen["method"] == "POST"
        assert json.loads(seen["form"]["payload"][0]) == COMPLETE.to_payload()

    def test_server_rejection_message(self):
        def handler(request):
            return httpx.Response(400, json={"ok": False, "error": "the favor vote contains duplicate names"})

        with pytest.raises(SubmissionError, match="duplicate names"):
            make_client(handler).submit(COMPLETE)

    def test_invalid_json_response(self):
        def handler(request):
            return httpx.Response(200, text="<html>oops</html>")

        with pytest.raises(SubmissionError, match="invalid response"):
            make_client(handler).submit(COMPLETE)

    def test_http_error_without_body_flag(self):
        def handler(request):
            return httpx.Response(502, json={"detail": "bad gateway"})

        with pytest.raises(SubmissionError, match="502"):
            make_client(handler).submit(COMPLETE)

    def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(SubmissionError, match="could not reach"):
            make_client(handler).submit(COMPLETE)

    def test_incomplete_ballot_not_sent(self):
        def handler(request):
            raise AssertionError("should not be called")

        with pytest.raises(BallotError, match="all picks are required"):
            make_client(handler).submit(make_ballot("Ana", favor=("Luis", "", "")))

    def test_duplicate_not_sent(self):
        def handler(request):
            raise AssertionError("should not be called")

        ballot = make_ballot("Ana", favor=("Luis", "Luis", "Irene"), contra=("Pablo", "Sara", "Jon"))
        with pytest.raises(DuplicateNomineeError):
            make_client(handler).submit(ballot)

    def test_not_configured(self):
        client = VotingClient("")
        assert not client.is_configured
        with pytest.raises(SubmissionError, match="not configured"):
            client.submit(COMPLETE)


class TestRefresh:
    def test_fetches_summary_action(self):
        seen = {}

        def handler(request):
            seen["action"] = request.url.params.get("action")
            return httpx.Response(200, json={
                "ok": True,
                "roster": [{"name": "Luis", "topic": "", "stance": "a favor", "notes": ""}],
                "votes": VoteSummary.empty().to_dict(),
            })

        context = VotingContext.load()
        context.mark_charts_ready()
        summary = make_client(handler).refresh(context)
        assert seen["action"] == "summary"
        assert summary == VoteSummary.empty()
        assert [n.name for n in context.roster] == ["Luis"]

    def test_failure_resets_to_empty_summary(self):
        def handler(request):
            return httpx.Response(200, json={"ok": False, "error": "script error"})

        context = VotingContext.load()
        assert make_client(handler).refresh(context) is None
        assert context.summary == VoteSummary.empty()

    def test_unconfigured_backend_shows_placeholder(self):
        context = VotingContext.load()
        context.mark_charts_ready()
        assert VotingClient("").refresh(context) == VoteSummary.empty()
