"""Vercel serverless function for the speaker's live vote board."""

import json
import sys
from pathlib import Path

# Add the project root to the path so we can import vaquejada modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from vaquejada.client import BackendClient  # noqa: E402
from vaquejada.errors import BackendError  # noqa: E402
from vaquejada.logs import get_logger, setup_logging  # noqa: E402
from vaquejada.voting import summarise_event, summarise_runners  # noqa: E402

setup_logging()
logger = get_logger(__name__)

BOARD_VIEWS = ("slots", "runners")


def handler(request):
    """Handle requests for an event's aggregated vote board.

    Accepts:
    - POST with JSON body:
      {"eventId": "...", "cattlePerSlot": 1, "view": "slots" | "runners", "search": ""}
      "slots" (the default) lists every password's votes; "runners" groups
      them by runner, and "search" narrows the runners shown.
      The caller's bearer token, if any, is forwarded to the backend.

    Returns JSON with per-slot vote counts and majority outcomes.
    """
    # Handle CORS preflight
    if request.method == "OPTIONS":
        return create_response(
            "",
            status=204,
            headers={
                "Access-Control-Allow-Origin": "*",
                "Access-Control-Allow-Methods": "POST, OPTIONS",
                "Access-Control-Allow-Headers": "Content-Type, Authorization",
            },
        )

    if request.method != "POST":
        return error_response("Method not allowed. Use POST.", 405)

    content_type = request.headers.get("content-type", "")
    if "application/json" not in content_type:
        return error_response(f"Unsupported content type: {content_type}")

    try:
        params = parse_board_request(request.body)
    except json.JSONDecodeError as e:
        return error_response(f"Invalid JSON: {e}")
    except (TypeError, ValueError) as e:
        return error_response(f"Invalid request: {e}")

    try:
        token = bearer_token(request.headers.get("authorization", ""))
        with BackendClient(token=token) as client:
            body = build_board(client, **params)
        return create_response(body)

    except BackendError as e:
        logger.warning("Vote board unavailable", error=e.message, status_code=e.status_code)
        return error_response("Could not load the votes right now. Please try again.", 502)
    except Exception as e:
        logger.exception("Vote board failed")
        return error_response(f"Internal error: {e}", 500)


def parse_board_request(raw: bytes) -> dict:
    """Validate the request body.

    Raises:
        json.JSONDecodeError: If the body is not JSON
        ValueError: If a field is missing or invalid
    """
    data = json.loads(raw.decode("utf-8"))
    event_id = data.get("eventId") if isinstance(data, dict) else None
    if not event_id:
        raise ValueError("Missing 'eventId' in request body")

    cattle_per_slot = int(data.get("cattlePerSlot", 1))
    if cattle_per_slot < 1:
        raise ValueError("'cattlePerSlot' must be at least 1")

    view = data.get("view", "slots")
    if view not in BOARD_VIEWS:
        raise ValueError(f"'view' must be one of {', '.join(BOARD_VIEWS)}")

    return {
        "event_id": str(event_id),
        "cattle_per_slot": cattle_per_slot,
        "view": view,
        "search": str(data.get("search") or ""),
    }


def build_board(client, event_id: str, cattle_per_slot: int, view: str, search: str) -> dict:
    """Fetch the event's votes and aggregate them for the chosen view.

    Raises:
        BackendError: If the backend fails or sends data that cannot be read
    """
    if view == "runners":
        payload = client.fetch_runner_vote_summary(event_id)
    else:
        payload = client.fetch_event_vote_summary(event_id)

    try:
        if view == "runners":
            return summarise_runners(payload, cattle_per_slot).to_dict(search)
        return summarise_event(payload, cattle_per_slot).to_dict()
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        logger.warning("Unreadable vote summary", event_id=event_id, view=view, error=str(e))
        raise BackendError("The backend sent an unreadable vote summary") from e


def error_response(message: str, status: int = 400):
    return create_response({"error": message}, status=status)


def bearer_token(header: str) -> str | None:
    scheme, _, token = header.partition(" ")
    if scheme.lower() == "bearer" and token:
        return token.strip()
    return None


def create_response(body, status: int = 200, headers: dict | None = None):
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
