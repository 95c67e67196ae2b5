"""Abstract base class for payment methods."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from vaquejada.models import PurchaseIntent


@dataclass(frozen=True)
class Buyer:
    """The authenticated user paying for the slots."""
    id: str
    name: str = ""
    email: str = ""
    cpf: str = ""


class PaymentMethod(ABC):
    """Abstract base class for a way of paying for a purchase intent.

    Each payment method knows which endpoint of the external payment service
    to call and what request body it expects. The core never processes a
    payment itself. Methods are registered via the @register_payment_method
    decorator in vaquejada/payments/__init__.py.
    """

    NAME: str = ""

    @property
    @abstractmethod
    def path(self) -> str:
        """Backend path the purchase request is posted to."""
        pass

    @abstractmethod
    def build_request(self, intent: PurchaseIntent, buyer: Buyer | None) -> dict[str, Any]:
        """Build the request body for this method.

        Args:
            intent: The validated purchase intent
            buyer: The paying user, when known

        Returns:
            JSON-serializable request body

        Raises:
            InvalidSelection: If the method needs buyer data that is missing
        """
        pass
