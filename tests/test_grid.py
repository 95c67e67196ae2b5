"""Tests for the slot grid."""

import pytest
from tests.conftest import make_records

from vaquejada.grid import build_grid, count_available, count_occupied
from vaquejada.models import Occupied, SlotRecord, SlotStatus, Unclaimed


class TestBuildGrid:
    def test_dense_and_ordered(self):
        grid = build_grid(5, make_records({4: "used", 2: "reserved"}))
        assert [slot.number for slot in grid] == [1, 2, 3, 4, 5]

    def test_zero_slots(self):
        assert build_grid(0, make_records({1: "used"})) == []

    def test_negative_slots(self):
        with pytest.raises(ValueError):
            build_grid(-1, [])

    def test_ignores_out_of_range_records(self):
        grid = build_grid(3, make_records({0: "used", 4: "used", 99: "reserved"}))
        assert len(grid) == 3
        assert not any(slot.occupied for slot in grid)

    def test_missing_record_is_unclaimed(self):
        slot = build_grid(1, [])[0]
        assert slot.state == Unclaimed()
        assert not slot.occupied
        assert slot.status == SlotStatus.AVAILABLE

    def test_available_record_is_not_occupied(self):
        slot = build_grid(1, make_records({1: "available"}))[0]
        assert isinstance(slot.state, Unclaimed)
        assert not slot.occupied
        assert slot.record.id == "rec-1"

    @pytest.mark.parametrize("status", ["reserved", "used", "expired", "cancelled", "pending"])
    def test_non_available_is_occupied(self, status):
        slot = build_grid(1, make_records({1: status}))[0]
        assert isinstance(slot.state, Occupied)
        assert slot.occupied
        assert slot.status == SlotStatus(status)

    def test_duplicate_number_prefers_claimed_record(self):
        records = [
            SlotRecord(id="old", number=2, status=SlotStatus.AVAILABLE),
            SlotRecord(id="new", number=2, status=SlotStatus.RESERVED),
        ]
        slot = build_grid(2, records)[1]
        assert slot.occupied
        assert slot.record.id == "new"

    def test_counts(self):
        grid = build_grid(10, make_records({3: "used", 7: "reserved", 8: "available"}))
        assert count_occupied(grid) == 2
        assert count_available(grid) == 8
