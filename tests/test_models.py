"""Tests for core data models."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from tests.conftest import make_category

from vaquejada.models import (
    CattleRunVote,
    Category,
    Occupied,
    Outcome,
    PurchaseIntent,
    SlotInfo,
    SlotRecord,
    SlotStatus,
    Unclaimed,
    VoteStats,
    VoteValue,
)


class TestCategory:
    def test_rejects_current_above_max(self):
        with pytest.raises(ValueError, match="exceeds"):
            make_category(max_runners=5, current_runners=6)

    def test_rejects_negative_capacity(self):
        with pytest.raises(ValueError):
            make_category(max_runners=-1)

    def test_accepts_full_category(self):
        category = make_category(max_runners=5, current_runners=5)
        assert category.current_runners == category.max_runners

    def test_from_dict_backend_shape(self):
        category = Category.from_dict({
            "id": "ec-1",
            "price": 150,
            "startAt": "2026-05-01T12:00:00.000Z",
            "endAt": "2026-05-10T12:00:00.000Z",
            "maxRunners": 50,
            "currentRunners": 8,
            "category": {"id": "cat-amateur", "name": "amateur"},
        })
        assert category.id == "ec-1"
        assert category.name == "amateur"
        assert category.price == Decimal("150")
        assert category.max_runners == 50
        assert category.current_runners == 8
        assert category.start_at == datetime(2026, 5, 1, 12, tzinfo=timezone.utc)
        assert category.catalog_id == "cat-amateur"

    def test_catalog_id_defaults_to_id(self):
        assert make_category(id="ec-9").catalog_id == "ec-9"


class TestSlotRecord:
    def test_from_dict_converts_string_number(self):
        record = SlotRecord.from_dict({"id": "p1", "number": "07", "status": "reserved"})
        assert record == SlotRecord(id="p1", number=7, status=SlotStatus.RESERVED)

    def test_from_dict_unknown_status(self):
        with pytest.raises(ValueError):
            SlotRecord.from_dict({"id": "p1", "number": "1", "status": "sold"})


class TestSlotInfo:
    def test_unclaimed_without_record(self):
        slot = SlotInfo(number=1, state=Unclaimed())
        assert not slot.occupied
        assert slot.status == SlotStatus.AVAILABLE
        assert slot.record is None

    def test_occupied(self):
        record = SlotRecord(id="p3", number=3, status=SlotStatus.USED)
        slot = SlotInfo(number=3, state=Occupied(status=SlotStatus.USED, record=record))
        assert slot.occupied
        assert slot.to_dict() == {
            "number": 3, "occupied": True, "status": "used", "recordId": "p3",
        }


class TestCattleRunVote:
    def test_from_dict_defaults_cattle_number(self):
        vote = CattleRunVote.from_dict(
            {"judgeId": "j1", "vote": "TV", "votedAt": "2026-05-16T14:02:11Z"},
            event_id="e1", slot_id="s1",
        )
        assert vote.cattle_number == 1
        assert vote.key == ("j1", "s1", 1)
        assert vote.vote == VoteValue.TV
        assert vote.created_at.tzinfo is not None

    def test_from_dict_vote_record(self):
        vote = CattleRunVote.from_dict({
            "id": "v1", "judgeId": "j1", "eventId": "e1", "passwordId": "s1",
            "vote": "VALID", "cattleNumber": 2, "createdAt": "2026-05-16T14:02:11Z",
        })
        assert vote.id == "v1"
        assert vote.slot_id == "s1"
        assert vote.cattle_number == 2


class TestVoteStats:
    def test_total_and_dict(self):
        stats = VoteStats(valid=2, null=1, outcome=Outcome.VALID)
        assert stats.total == 3
        assert stats.count(VoteValue.NULL) == 1
        assert stats.to_dict() == {
            "valid": 2, "null": 1, "tv": 0, "didNotRun": 0,
            "total": 3, "outcome": "VALID",
        }


class TestPurchaseIntent:
    def test_total_is_price_times_quantity(self):
        intent = PurchaseIntent(
            event_id="e1", category_id="c1", password_ids=("a", "b"),
            numbers=(1, 2), unit_price=Decimal("150.00"),
        )
        assert intent.quantity == 2
        assert intent.total == Decimal("300.00")

    def test_no_rounding_beyond_currency_precision(self):
        intent = PurchaseIntent(
            event_id="e1", category_id="c1", password_ids=("a", "b", "c"),
            numbers=(4, 5, 6), unit_price=Decimal("33.33"),
        )
        assert intent.total == Decimal("99.99")

    def test_to_dict(self):
        intent = PurchaseIntent(
            event_id="e1", category_id="c1", password_ids=("a",),
            numbers=(9,), unit_price=Decimal("120.50"),
        )
        assert intent.to_dict() == {
            "eventId": "e1",
            "categoryId": "c1",
            "passwordIds": ["a"],
            "numbers": [9],
            "total": 120.5,
        }
