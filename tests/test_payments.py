"""Tests for payment methods."""

from decimal import Decimal

import pytest

from vaquejada.errors import ErrorCode, InvalidSelection
from vaquejada.models import PurchaseIntent
from vaquejada.payments import (
    Buyer,
    UnknownPaymentMethod,
    get_all_payment_methods,
    get_payment_method,
)
from vaquejada.payments.checkout_pro import CheckoutProMethod
from vaquejada.payments.pix import PixMethod, split_name

INTENT = PurchaseIntent(
    event_id="e1",
    category_id="c1",
    password_ids=("p1", "p2"),
    numbers=(1, 2),
    unit_price=Decimal("150.00"),
)


class TestRegistry:
    def test_methods_registered(self):
        names = {method.NAME for method in get_all_payment_methods()}
        assert names == {"checkout-pro", "pix"}

    def test_lookup(self):
        assert isinstance(get_payment_method("pix"), PixMethod)
        assert isinstance(get_payment_method("checkout-pro"), CheckoutProMethod)

    def test_unknown(self):
        with pytest.raises(UnknownPaymentMethod):
            get_payment_method("boleto")


class TestCheckoutPro:
    def test_request(self):
        request = CheckoutProMethod().build_request(INTENT, None)
        assert request == {
            "eventId": "e1",
            "categoryId": "c1",
            "passwordIds": ["p1", "p2"],
            "numbers": [1, 2],
            "total": 300.0,
        }


class TestPix:
    def setup_method(self):
        self.method = PixMethod()

    def test_request_carries_buyer(self):
        buyer = Buyer(id="u1", name="João Pedro Lima", email="jp@x.test", cpf="123")
        request = self.method.build_request(INTENT, buyer)
        assert request["email"] == "jp@x.test"
        assert request["first_name"] == "João"
        assert request["last_name"] == "Pedro Lima"
        assert request["doc_type"] == "CPF"
        assert request["doc_number"] == "123"
        assert request["total"] == 300.0

    def test_requires_email(self):
        with pytest.raises(InvalidSelection) as exc_info:
            self.method.build_request(INTENT, Buyer(id="u1", name="Ana"))
        assert exc_info.value.code == ErrorCode.INCOMPLETE_BUYER

    def test_requires_buyer(self):
        with pytest.raises(InvalidSelection):
            self.method.build_request(INTENT, None)


class TestSplitName:
    def test_single_name(self):
        assert split_name("Ana") == ("Ana", "")

    def test_surrounding_spaces(self):
        assert split_name("  Ana  Maria ") == ("Ana", "Maria")
