"""Slot grid: map a category's capacity and purchase records to slot states."""

from collections.abc import Iterable

from vaquejada.models import Occupied, SlotInfo, SlotRecord, SlotStatus, Unclaimed


def build_grid(total_slots: int, records: Iterable[SlotRecord]) -> list[SlotInfo]:
    """Build the dense, displayable grid of slots 1..total_slots.

    Every number in range gets exactly one entry, in ascending order. A number
    without a backing record is unclaimed; a record whose status is
    "available" is unclaimed too, but carries its record id. Records numbered
    outside the range are ignored (stale backend data).

    Args:
        total_slots: Category capacity (maxRunners)
        records: Purchase records for the category, in any order

    Returns:
        List of exactly total_slots SlotInfo entries

    Raises:
        ValueError: If total_slots is negative
    """
    if total_slots < 0:
        raise ValueError("total_slots cannot be negative")

    by_number: dict[int, SlotRecord] = {}
    for record in records:
        if not 1 <= record.number <= total_slots:
            continue
        current = by_number.get(record.number)
        # Only one non-available record may exist per number; prefer it
        if current is None or (
            current.status == SlotStatus.AVAILABLE
            and record.status != SlotStatus.AVAILABLE
        ):
            by_number[record.number] = record

    grid = []
    for number in range(1, total_slots + 1):
        record = by_number.get(number)
        if record is not None and record.status != SlotStatus.AVAILABLE:
            state = Occupied(status=record.status, record=record)
        else:
            state = Unclaimed(record=record)
        grid.append(SlotInfo(number=number, state=state))
    return grid


def count_occupied(grid: Iterable[SlotInfo]) -> int:
    return sum(1 for slot in grid if slot.occupied)


def count_available(grid: Iterable[SlotInfo]) -> int:
    return sum(1 for slot in grid if not slot.occupied)
