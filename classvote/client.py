"""HTTP client for a remote voting backend."""

import json
from typing import Any
from urllib.parse import urlparse

import httpx
from loguru import logger

from classvote.ballot import validate_ballot
from classvote.context import VotingContext
from classvote.models import Ballot
from classvote.settings import BACKEND_URL, HTTP_TIMEOUT


class SubmissionError(Exception):
    """A request to the voting backend failed. The message is user facing."""
    pass


class VotingClient:
    """Talks to a backend serving the api/votes.py protocol.

    Ballots are POSTed form-encoded as ``payload=<json>``; the overview is
    fetched with ``GET ?action=summary``.
    """

    def __init__(
        self,
        base_url: str = BACKEND_URL,
        timeout: float = HTTP_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport

    @property
    def is_configured(self) -> bool:
        return urlparse(self.base_url).scheme in ("http", "https")

    def submit(self, ballot: Ballot) -> str:
        """Check a ballot locally, then send it.

        The local check requires a voter name, all six picks and no repeated
        names within a category.

        Returns:
            The confirmation message from the backend

        Raises:
            BallotError: If the local check fails (nothing is sent)
            SubmissionError: If the backend rejects the ballot or can't be reached
        """
        validate_ballot(ballot, require_complete=True)
        self._require_configured()

        body = {"payload": json.dumps(ballot.to_payload())}
        result = self._request("POST", data=body)
        if result.get("ok") is False:
            raise SubmissionError(result.get("error") or "the vote could not be recorded")
        return result.get("message") or "vote recorded"

    def fetch_overview(self) -> dict[str, Any]:
        """Fetch the roster and vote summary.

        Raises:
            SubmissionError: If the backend can't be reached or reports an error
        """
        self._require_configured()
        result = self._request("GET", params={"action": "summary"})
        if result.get("ok") is False:
            raise SubmissionError(result.get("error") or "the backend returned an error")
        return result

    def refresh(self, context: VotingContext):
        """Fetch the overview into a context.

        On any failure the context gets an empty summary instead, so the page
        still shows (empty) charts.

        Returns the summary to draw now, or None if the renderer isn't ready.
        """
        try:
            data = self.fetch_overview()
            return context.apply_overview(data)
        except (SubmissionError, ValueError) as e:
            logger.warning("Could not refresh vote summary: {}", e)
            return context.reset_summary()

    def _require_configured(self) -> None:
        if not self.is_configured:
            raise SubmissionError("backend URL is not configured")

    def _request(self, method: str, **kwargs) -> dict[str, Any]:
        try:
            with httpx.Client(
                follow_redirects=True, timeout=self.timeout, transport=self.transport
            ) as client:
                response = client.request(method, self.base_url, **kwargs)
        except httpx.RequestError as e:
            logger.warning("Request to voting backend failed: {}", e)
            raise SubmissionError(
                "could not reach the voting backend, check the connection and try again"
            ) from e

        try:
            result = response.json()
        except ValueError as e:
            raise SubmissionError("invalid response from server") from e

        if not isinstance(result, dict):
            raise SubmissionError("invalid response from server")
        if response.is_error and result.get("ok") is not False:
            raise SubmissionError(f"HTTP error from voting backend: {response.status_code}")
        return result
