"""HTTP client for the external backend (slots, purchases, judge votes)."""

from typing import Any, Self

import httpx

from vaquejada.config import get_settings
from vaquejada.errors import BackendError, StaleSlotReference
from vaquejada.logs import get_logger
from vaquejada.models import CattleRunVote, SlotRecord, VoteValue

logger = get_logger(__name__)

# Statuses with which the purchase backend rejects slots that changed hands
REJECTED_SELECTION_STATUSES = (409, 422)


def _error_message(response: httpx.Response, default: str) -> str:
    """Pull the backend's own message out of an error response, if any."""
    try:
        data = response.json()
    except ValueError:
        return default
    if isinstance(data, dict):
        message = data.get("message")
        if isinstance(message, list):
            return "; ".join(str(m) for m in message)
        if message:
            return str(message)
    return default


class BackendClient:
    """Thin wrapper over the backend REST API.

    Network failures and error statuses are raised as BackendError; nothing
    is retried. Use as a context manager to close the underlying connection
    pool.
    """

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        headers = {"Content-Type": "application/json"}
        token = token if token is not None else settings.API_TOKEN
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.Client(
            base_url=base_url or settings.api_base_url(),
            headers=headers,
            timeout=timeout if timeout is not None else settings.API_TIMEOUT,
            transport=transport,
        )

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, path: str, *, error: str, **kwargs) -> Any:
        try:
            response = self._client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning("Backend request failed", method=method, path=path,
                           status_code=e.response.status_code)
            raise BackendError(
                _error_message(e.response, error), e.response.status_code
            ) from e
        except httpx.RequestError as e:
            logger.warning("Backend unreachable", method=method, path=path, error=str(e))
            raise BackendError(error) from e

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.warning("Backend sent invalid JSON", method=method, path=path)
            raise BackendError(error, response.status_code) from e

    # --- slots ---

    def fetch_category_slots(self, event_id: str, category_id: str) -> list[SlotRecord]:
        """Return the purchase records of a category's slots."""
        data = self._request(
            "GET", "/passwords",
            params={"eventId": event_id, "categoryId": category_id},
            error="Could not load the category's slots",
        )
        return [SlotRecord.from_dict(item) for item in data or []]

    def submit_purchase(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Post a purchase request to the payment service.

        Raises:
            StaleSlotReference: If the backend rejects the selected slots
            BackendError: For any other failure
        """
        try:
            return self._request("POST", path, json=payload,
                                 error="Could not start the payment") or {}
        except BackendError as e:
            if e.status_code in REJECTED_SELECTION_STATUSES:
                raise StaleSlotReference(e.message, e.status_code) from e
            raise

    # --- judge votes ---

    def fetch_event_votes(self, event_id: str, judge_id: str) -> list[CattleRunVote]:
        """Return the votes one judge has cast in an event."""
        data = self._request(
            "GET", f"/judge-votes/event/{event_id}/judge/{judge_id}",
            error="Could not load votes",
        )
        return [CattleRunVote.from_dict(item, event_id=event_id) for item in data or []]

    def fetch_event_vote_summary(self, event_id: str) -> dict[str, Any]:
        """Return the raw vote summary the speaker board is built from."""
        return self._request(
            "GET", f"/judge-votes/event/{event_id}/summary",
            error="Could not load the vote summary",
        ) or {}

    def fetch_runner_vote_summary(self, event_id: str) -> dict[str, Any]:
        """Return the speaker's per-runner vote summary for an event."""
        return self._request(
            "GET", f"/judge-votes/event/{event_id}/runners",
            error="Could not load the vote summary",
        ) or {}

    def submit_vote(
        self,
        judge_id: str,
        event_id: str,
        slot_id: str,
        vote: VoteValue,
        cattle_number: int = 1,
    ) -> None:
        self._request(
            "POST", "/judge-votes",
            json={
                "judgeId": judge_id,
                "eventId": event_id,
                "passwordId": slot_id,
                "vote": vote.value,
                "cattleNumber": cattle_number,
            },
            error="Could not submit the vote",
        )

    def update_vote(self, vote_id: str, vote: VoteValue) -> None:
        self._request(
            "PATCH", f"/judge-votes/{vote_id}",
            json={"vote": vote.value},
            error="Could not update the vote",
        )
