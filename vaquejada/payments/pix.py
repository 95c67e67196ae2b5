"""Pix instant payment: the payment service returns a QR code to pay."""

from typing import Any

from vaquejada.errors import ErrorCode, InvalidSelection
from vaquejada.models import PurchaseIntent
from vaquejada.payments import register_payment_method
from vaquejada.payments.base import Buyer, PaymentMethod


def split_name(full_name: str) -> tuple[str, str]:
    """Split a full name into (first name, rest)."""
    first, _, rest = full_name.strip().partition(" ")
    return first, rest.strip()


@register_payment_method
class PixMethod(PaymentMethod):
    """Pix payment, which needs the payer's identity.

    The request carries the buyer's e-mail, first and last name, and CPF.
    The backend answers with the QR code payload and its image.
    """

    NAME = "pix"

    @property
    def path(self) -> str:
        return "/payments/pix"

    def build_request(self, intent: PurchaseIntent, buyer: Buyer | None) -> dict[str, Any]:
        if buyer is None or not buyer.email:
            raise InvalidSelection(
                ErrorCode.INCOMPLETE_BUYER,
                "Log in again to pay with Pix",
            )

        first_name, last_name = split_name(buyer.name)
        payload = intent.to_dict()
        payload.update({
            "email": buyer.email,
            "first_name": first_name,
            "last_name": last_name,
            "doc_type": "CPF",
            "doc_number": buyer.cpf,
        })
        return payload
