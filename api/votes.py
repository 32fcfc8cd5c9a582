"""Vercel serverless function for submitting ballots and reading tallies."""

import json
import sys
from pathlib import Path

from loguru import logger

# Add the project root to the path so we can import the package
sys.path.insert(0, str(Path(__file__).parent.parent))

from classvote import settings
from classvote.ballot import BallotError
from classvote.log import setup_logging
from classvote.storage import StoreError, open_store
from classvote.votes import get_overview, submit_ballot

setup_logging()


def handler(request):
    """Handle requests from the voting page.

    Accepts:
    - GET ?action=summary: roster and vote summary (the default action)
    - GET ?action=roster: roster only
    - POST form-encoded with a 'payload' field holding the ballot as JSON
    - POST with a JSON body holding the ballot

    Every response carries an "ok" flag and, on failure, an "error" message.
    """
    # Handle CORS preflight
    if request.method == "OPTIONS":
        return create_response(
            "",
            status=204,
            headers={
                "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
                "Access-Control-Allow-Headers": "Content-Type",
            },
        )

    try:
        if request.method == "GET":
            return handle_get(request)
        if request.method == "POST":
            return handle_post(request)
        return create_response(
            {"ok": False, "error": "Method not allowed. Use GET or POST."},
            status=405,
        )
    except StoreError as e:
        logger.error("Storage failure: {}", e)
        return create_response(
            {"ok": False, "error": "The votes could not be accessed. Try again later."},
            status=500,
        )
    except Exception:
        logger.exception("Unexpected error handling {} request", request.method)
        return create_response(
            {"ok": False, "error": "The request could not be processed. Try again later."},
            status=500,
        )


def handle_get(request):
    action = (request.args.get("action") or "summary").lower()
    store = open_store(settings.STORE_LOCATION)

    if action == "summary":
        return create_response(get_overview(store))

    if action == "roster":
        roster = [nominee.to_dict() for nominee in store.read_roster()]
        return create_response({"ok": True, "roster": roster})

    return create_response(
        {"ok": False, "error": f"Unsupported action: {action}"},
        status=400,
    )


def handle_post(request):
    content_type = request.headers.get("content-type", "")

    if "application/json" in content_type:
        raw_payload = request.body or b""
    else:
        # The voting page sends the ballot form-encoded as payload=<json>
        raw_payload = request.form.get("payload") or ""

    if not raw_payload.strip():
        return create_response(
            {"ok": False, "error": "Missing request body."},
            status=400,
        )

    try:
        if isinstance(raw_payload, bytes):
            raw_payload = raw_payload.decode("utf-8")
        payload = json.loads(raw_payload)
    except (UnicodeDecodeError, json.JSONDecodeError):
        return create_response(
            {"ok": False, "error": "Invalid payload format."},
            status=400,
        )

    try:
        submit_ballot(
            open_store(settings.STORE_LOCATION),
            payload,
            require_complete=settings.REQUIRE_COMPLETE,
            enforce_roster=settings.ENFORCE_ROSTER,
        )
    except BallotError as e:
        return create_response(
            {"ok": False, "error": str(e)},
            status=400,
        )

    return create_response({"ok": True, "message": "Vote recorded."})


def create_response(body, status: int = 200, headers: dict = None):
    """Create a response object for Vercel."""
    response_headers = {
        "Content-Type": "application/json",
        "Access-Control-Allow-Origin": "*",
    }
    if headers:
        response_headers.update(headers)

    if isinstance(body, dict):
        body = json.dumps(body)

    # Return in format expected by Vercel Python runtime
    return {
        "statusCode": status,
        "headers": response_headers,
        "body": body,
    }
