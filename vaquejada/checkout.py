"""Checkout: validate a selection and hand it to the payment service."""

from typing import Any

from vaquejada.client import BackendClient
from vaquejada.config import get_settings
from vaquejada.errors import (
    AuthenticationRequired,
    ErrorCode,
    InvalidSelection,
    StaleSlotReference,
)
from vaquejada.logs import get_logger
from vaquejada.models import PurchaseIntent
from vaquejada.payments import Buyer, get_payment_method
from vaquejada.selection import SelectionSession
from vaquejada.storage import KeyValueStore

logger = get_logger(__name__)


def prepare_checkout(
    session: SelectionSession,
    *,
    authenticated: bool,
    event_id: str,
    store: KeyValueStore | None = None,
) -> PurchaseIntent:
    """Check a selection can be purchased and build its purchase intent.

    Preconditions are checked in a fixed order and the first failure wins:
    login, then a non-empty selection, then accepted terms. An
    unauthenticated buyer's selection is saved to store (when given) so it
    can be restored after login.

    Args:
        session: The buyer's selection
        authenticated: Whether the buyer is logged in
        event_id: Event the category belongs to
        store: Where to save the selection before a login redirect

    Returns:
        PurchaseIntent with the selected record ids, numbers and total

    Raises:
        AuthenticationRequired: If the buyer is not logged in
        InvalidSelection: If no slot is selected, terms are not accepted
            or no category is chosen
    """
    if not authenticated:
        if store is not None and session.category is not None:
            session.save_for_login(store, is_checkout=True)
        logger.info("Checkout blocked", code=ErrorCode.LOGIN_REQUIRED.value)
        raise AuthenticationRequired()

    if session.count == 0:
        logger.info("Checkout blocked", code=ErrorCode.EMPTY_SELECTION.value)
        raise InvalidSelection(ErrorCode.EMPTY_SELECTION, "Select at least one slot")

    if not session.terms_accepted:
        logger.info("Checkout blocked", code=ErrorCode.TERMS_NOT_ACCEPTED.value)
        raise InvalidSelection(
            ErrorCode.TERMS_NOT_ACCEPTED, "You must accept the event rules"
        )

    category = session.category
    if category is None:
        raise InvalidSelection(ErrorCode.NO_CATEGORY, "Choose a category first")

    return PurchaseIntent(
        event_id=event_id,
        category_id=category.catalog_id,
        password_ids=tuple(session.purchasable_record_ids),
        numbers=tuple(sorted(session.selected_numbers)),
        unit_price=category.price,
    )


def submit_checkout(
    session: SelectionSession,
    client: BackendClient,
    *,
    authenticated: bool,
    event_id: str,
    method: str | None = None,
    buyer: Buyer | None = None,
    store: KeyValueStore | None = None,
) -> dict[str, Any]:
    """Validate the selection and post it to the payment service.

    method defaults to the configured DEFAULT_PAYMENT_METHOD. On success the
    session is marked submitted. If the backend rejects the purchase, the
    error propagates unchanged and the session is left as it was, so the
    buyer can adjust the selection and retry.

    Returns:
        The payment service's response (e.g. {"initPoint": ...} or Pix data)
    """
    method = method or get_settings().DEFAULT_PAYMENT_METHOD
    intent = prepare_checkout(
        session, authenticated=authenticated, event_id=event_id, store=store
    )
    payment_method = get_payment_method(method)
    request = payment_method.build_request(intent, buyer)

    try:
        result = client.submit_purchase(payment_method.path, request)
    except StaleSlotReference as e:
        logger.warning("Purchase rejected", event_id=event_id,
                       numbers=list(intent.numbers), reason=e.message)
        raise

    logger.info("Purchase submitted", event_id=event_id, method=method,
                quantity=intent.quantity, total=str(intent.total))
    session.mark_submitted()
    return result
