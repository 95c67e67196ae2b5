"""Hosted checkout: the payment service returns a page to redirect to."""

from typing import Any

from vaquejada.models import PurchaseIntent
from vaquejada.payments import register_payment_method
from vaquejada.payments.base import Buyer, PaymentMethod


@register_payment_method
class CheckoutProMethod(PaymentMethod):
    """Redirect-based checkout.

    The backend answers with {"initPoint": <url>}; the caller sends the
    buyer there to pay.
    """

    NAME = "checkout-pro"

    @property
    def path(self) -> str:
        return "/payments/checkout-pro"

    def build_request(self, intent: PurchaseIntent, buyer: Buyer | None) -> dict[str, Any]:
        return intent.to_dict()
