"""Payment methods a purchase intent can be checked out with."""

from .base import Buyer, PaymentMethod

# Payment method registry - import methods here to register them
_payment_methods: dict[str, type[PaymentMethod]] = {}


class UnknownPaymentMethod(KeyError):
    """Raised when no payment method is registered under a name."""
    pass


def register_payment_method(method_class: type[PaymentMethod]) -> type[PaymentMethod]:
    """Decorator to register a payment method class under its NAME."""
    _payment_methods[method_class.NAME] = method_class
    return method_class


def get_payment_method(name: str) -> PaymentMethod:
    """Return an instance of the payment method registered as name."""
    try:
        return _payment_methods[name]()
    except KeyError:
        raise UnknownPaymentMethod(name) from None


def get_all_payment_methods() -> list[PaymentMethod]:
    """Return instances of all registered payment methods."""
    return [method_class() for method_class in _payment_methods.values()]


# Registration happens on import; keep these after the registry is defined
from . import checkout_pro  # noqa: E402, F401
from . import pix  # noqa: E402, F401

__all__ = [
    "Buyer",
    "PaymentMethod",
    "UnknownPaymentMethod",
    "get_all_payment_methods",
    "get_payment_method",
    "register_payment_method",
]
