"""Selection session: the slots a buyer has picked before checkout."""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Self

from vaquejada.config import get_settings
from vaquejada.logs import get_logger
from vaquejada.models import Category, SlotInfo
from vaquejada.storage import KeyValueStore

logger = get_logger(__name__)

SNAPSHOT_VERSION = 1


class SessionState(Enum):
    NO_CATEGORY = "no_category"
    CATEGORY_CHOSEN = "category_chosen"
    SELECTING = "selecting"
    SUBMITTED = "submitted"


@dataclass(frozen=True)
class SelectionSnapshot:
    """Serializable copy of a selection, kept across a login redirect.

    Attributes:
        category_id: Id of the chosen category
        numbers: Selected slot numbers, in selection order
        record_ids: Backing record id per selected number (None if unclaimed)
        is_checkout: Whether the redirect interrupted a checkout
        version: Snapshot format version
    """
    category_id: str
    numbers: list[int] = field(default_factory=list)
    record_ids: list[str | None] = field(default_factory=list)
    is_checkout: bool = False
    version: int = SNAPSHOT_VERSION

    def to_json(self) -> str:
        return json.dumps({
            "version": self.version,
            "categoryId": self.category_id,
            "numbers": self.numbers,
            "recordIds": self.record_ids,
            "isCheckout": self.is_checkout,
        })

    @classmethod
    def from_json(cls, raw: str) -> Self:
        """Parse a snapshot.

        Raises:
            ValueError: If the payload is malformed or of another version
        """
        data: dict[str, Any] = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError("Snapshot is not a JSON object")
        if data.get("version") != SNAPSHOT_VERSION:
            raise ValueError(f"Unsupported snapshot version: {data.get('version')!r}")
        numbers = [int(n) for n in data.get("numbers", [])]
        record_ids = list(data.get("recordIds", []))
        if len(numbers) != len(record_ids):
            raise ValueError("Snapshot numbers and record ids differ in length")
        return cls(
            category_id=str(data["categoryId"]),
            numbers=numbers,
            record_ids=record_ids,
            is_checkout=bool(data.get("isCheckout", False)),
        )


class SelectionSession:
    """Client-side state machine for picking slots in one category.

    The selection is kept as a single ordered mapping of slot number to
    backing record id, so selected numbers and selected record ids always
    have the same length. Slots never claimed before have no record and map
    to None.
    """

    def __init__(self) -> None:
        self.state = SessionState.NO_CATEGORY
        self.category: Category | None = None
        self.grid: list[SlotInfo] = []
        self.terms_accepted = False
        self._selected: dict[int, str | None] = {}

    @property
    def selected_numbers(self) -> list[int]:
        return list(self._selected)

    @property
    def selected_record_ids(self) -> list[str | None]:
        return list(self._selected.values())

    @property
    def purchasable_record_ids(self) -> list[str]:
        """Record ids of selected slots that have a backing record."""
        return [rid for rid in self._selected.values() if rid is not None]

    @property
    def count(self) -> int:
        return len(self._selected)

    def choose_category(self, category: Category,
                        grid: list[SlotInfo] | None = None) -> None:
        """Start selecting in a category, dropping any previous selection."""
        self.category = category
        self.terms_accepted = False
        self.state = SessionState.CATEGORY_CHOSEN
        self._selected = {}
        self.load_grid(grid or [])

    def load_grid(self, grid: list[SlotInfo]) -> None:
        """Replace the slot grid, keeping what is still selectable.

        Selected numbers that are now occupied or outside the grid are
        dropped. The others keep their place and take the record id of the
        fresh slot.
        """
        self.grid = list(grid)
        kept: dict[int, str | None] = {}
        for number in self._selected:
            if not 1 <= number <= len(self.grid):
                continue
            slot = self.grid[number - 1]
            if not slot.occupied:
                kept[number] = slot.record.id if slot.record else None
        dropped = [n for n in self._selected if n not in kept]
        if dropped:
            logger.info("Selected slots no longer available", numbers=dropped)
        self._selected = kept
        self._sync_state()

    def _sync_state(self) -> None:
        if self.category is None:
            return
        self.state = SessionState.SELECTING if self._selected else SessionState.CATEGORY_CHOSEN

    def toggle_slot(self, number: int) -> bool:
        """Select or deselect a slot number.

        Selecting an occupied slot, a number outside the grid, or anything
        before a category is chosen is ignored. A selected number can always
        be deselected, even before its grid has been loaded.

        Returns:
            True if the selection changed, False otherwise
        """
        if self.category is None:
            return False
        if number in self._selected:
            del self._selected[number]
            self._sync_state()
            return True

        if not 1 <= number <= len(self.grid):
            return False
        slot = self.grid[number - 1]
        if slot.occupied:
            return False

        self._selected[number] = slot.record.id if slot.record else None
        self._sync_state()
        return True

    def is_selected(self, number: int) -> bool:
        return number in self._selected

    def accept_terms(self, accepted: bool = True) -> None:
        self.terms_accepted = accepted

    def reset(self) -> None:
        self.category = None
        self.grid = []
        self.terms_accepted = False
        self._selected.clear()
        self.state = SessionState.NO_CATEGORY

    def change_category(self) -> None:
        """Go back to choosing a category; same as a full reset."""
        self.reset()

    def mark_submitted(self) -> None:
        """Discard the selection after a successful checkout."""
        self.reset()
        self.state = SessionState.SUBMITTED

    # --- persistence across login ---

    def snapshot(self, is_checkout: bool = False) -> SelectionSnapshot:
        if self.category is None:
            raise ValueError("No category chosen")
        return SelectionSnapshot(
            category_id=self.category.id,
            numbers=self.selected_numbers,
            record_ids=self.selected_record_ids,
            is_checkout=is_checkout,
        )

    def save_for_login(self, store: KeyValueStore, is_checkout: bool = True) -> None:
        """Persist the selection before redirecting to login."""
        key = get_settings().SELECTION_STORAGE_KEY
        store.set(key, self.snapshot(is_checkout=is_checkout).to_json())
        logger.info(
            "Selection saved for login",
            category_id=self.category.id,
            selected=self.count,
            is_checkout=is_checkout,
        )

    def restore_after_login(
        self,
        store: KeyValueStore,
        categories: list[Category],
        grid: list[SlotInfo] | None = None,
    ) -> SelectionSnapshot | None:
        """Restore a selection saved by save_for_login.

        The stored snapshot is always consumed. The selection is restored
        only if its category is still in the freshly loaded category list;
        otherwise the session stays empty. Numbers are kept as saved until a
        grid is loaded; then those now occupied or out of range are dropped
        (see load_grid).

        Args:
            store: Where the snapshot was saved
            categories: The current category list for the event
            grid: Slot grid of the restored category, if already loaded

        Returns:
            The restored snapshot, or None if nothing was restored
        """
        key = get_settings().SELECTION_STORAGE_KEY
        raw = store.get(key)
        if raw is None:
            return None
        store.remove(key)

        try:
            snapshot = SelectionSnapshot.from_json(raw)
        except (ValueError, KeyError, TypeError) as e:
            logger.warning("Discarding unreadable selection snapshot", error=str(e))
            return None

        category = next((c for c in categories if c.id == snapshot.category_id), None)
        if category is None:
            logger.info("Selection category no longer offered",
                        category_id=snapshot.category_id)
            return None

        self.choose_category(category)
        self._selected = dict(zip(snapshot.numbers, snapshot.record_ids))
        if grid is not None:
            self.load_grid(grid)
        self._sync_state()
        logger.info("Selection restored after login",
                    category_id=category.id, selected=self.count)
        return snapshot
