"""Core data models for slots, purchases and judge votes."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Self


class SlotStatus(Enum):
    """Status of a numbered slot ("password") within a category."""
    AVAILABLE = "available"
    PENDING = "pending"  # payment pending
    RESERVED = "reserved"
    USED = "used"
    EXPIRED = "expired"
    CANCELLED = "cancelled"


class VoteValue(Enum):
    """A judge's call on one cattle run."""
    VALID = "VALID"
    NULL = "NULL"
    TV = "TV"
    DID_NOT_RUN = "DID_NOT_RUN"


class Outcome(Enum):
    """Aggregated result of the votes cast on one run or slot."""
    VALID = "VALID"
    NULL = "NULL"
    TV = "TV"
    DID_NOT_RUN = "DID_NOT_RUN"
    TIE = "TIE"
    PENDING = "PENDING"

    @classmethod
    def from_vote(cls, vote: VoteValue) -> Self:
        return cls(vote.value)


def parse_datetime(value: str | None) -> datetime | None:
    if not value:
        return None
    # Backend timestamps are ISO 8601, usually with a trailing Z
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@dataclass(frozen=True)
class Category:
    """A priced competition tier within an event.

    Attributes:
        id: Backend identifier of the event category
        name: Category name (e.g. "amateur", "professional")
        price: Unit price of one slot
        max_runners: Total slot capacity; slots are numbered 1..max_runners
        current_runners: Slots already occupied
        start_at: Start of the purchase window
        end_at: End of the purchase window
        event_id: Owning event, when known
        category_id: Catalog category id; the backend nests it under
            "category" and keys slots and payments by it
    """
    id: str
    name: str
    price: Decimal
    max_runners: int
    current_runners: int = 0
    start_at: datetime | None = None
    end_at: datetime | None = None
    event_id: str | None = None
    category_id: str | None = None

    def __post_init__(self) -> None:
        if self.max_runners < 0:
            raise ValueError("max_runners cannot be negative")
        if self.current_runners < 0:
            raise ValueError("current_runners cannot be negative")
        if self.current_runners > self.max_runners:
            raise ValueError(
                f"current_runners ({self.current_runners}) exceeds "
                f"max_runners ({self.max_runners})"
            )

    @property
    def catalog_id(self) -> str:
        return self.category_id or self.id

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Build a Category from the backend's event-category JSON."""
        nested = data.get("category") or {}
        return cls(
            id=str(data["id"]),
            name=nested.get("name") or data.get("name", ""),
            price=Decimal(str(data.get("price", 0))),
            max_runners=int(data.get("maxRunners", 0)),
            current_runners=int(data.get("currentRunners", 0)),
            start_at=parse_datetime(data.get("startAt")),
            end_at=parse_datetime(data.get("endAt")),
            event_id=data.get("eventId"),
            category_id=nested.get("id") or data.get("categoryId"),
        )


@dataclass(frozen=True)
class SlotRecord:
    """A backend purchase record backing one slot number."""
    id: str
    number: int
    status: SlotStatus

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        # The backend sends the number as a string
        return cls(
            id=str(data["id"]),
            number=int(data["number"]),
            status=SlotStatus(data["status"]),
        )


@dataclass(frozen=True)
class Occupied:
    """A slot whose record holds a non-available status."""
    status: SlotStatus
    record: SlotRecord


@dataclass(frozen=True)
class Unclaimed:
    """A selectable slot, with or without an "available" backing record."""
    record: SlotRecord | None = None

    @property
    def status(self) -> SlotStatus:
        return SlotStatus.AVAILABLE


@dataclass(frozen=True)
class SlotInfo:
    """One entry of the displayable slot grid."""
    number: int
    state: Occupied | Unclaimed

    @property
    def occupied(self) -> bool:
        return isinstance(self.state, Occupied)

    @property
    def status(self) -> SlotStatus:
        return self.state.status

    @property
    def record(self) -> SlotRecord | None:
        return self.state.record

    def to_dict(self) -> dict[str, Any]:
        return {
            "number": self.number,
            "occupied": self.occupied,
            "status": self.status.value,
            "recordId": self.record.id if self.record else None,
        }


@dataclass(frozen=True)
class CattleRunVote:
    """One judge's vote for one (slot, cattle run) pair.

    Attributes:
        judge_id: Judge who cast the vote
        event_id: Event the slot belongs to
        slot_id: Backend id of the slot ("passwordId")
        vote: The judge's call
        cattle_number: 1-based cattle run index within the slot
        id: Backend id of the vote record, once persisted
        created_at: When the vote was cast
        judge_name: Display name of the judge, when the backend sends it
    """
    judge_id: str
    event_id: str
    slot_id: str
    vote: VoteValue
    cattle_number: int = 1
    id: str | None = None
    created_at: datetime | None = None
    judge_name: str | None = None

    @property
    def key(self) -> tuple[str, str, int]:
        """At most one vote exists per (judge, slot, cattle run)."""
        return (self.judge_id, self.slot_id, self.cattle_number)

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, event_id: str = "",
                  slot_id: str = "") -> Self:
        """Build a vote from either a vote record or a summary vote entry."""
        return cls(
            judge_id=str(data["judgeId"]),
            event_id=str(data.get("eventId", event_id)),
            slot_id=str(data.get("passwordId", slot_id)),
            vote=VoteValue(data["vote"]),
            cattle_number=int(data.get("cattleNumber") or 1),
            id=data.get("id"),
            created_at=parse_datetime(data.get("createdAt") or data.get("votedAt")),
            judge_name=data.get("judgeName"),
        )


@dataclass(frozen=True)
class VoteStats:
    """Vote counts and the majority outcome for one scope."""
    valid: int = 0
    null: int = 0
    tv: int = 0
    did_not_run: int = 0
    outcome: Outcome = Outcome.PENDING

    @property
    def total(self) -> int:
        return self.valid + self.null + self.tv + self.did_not_run

    def count(self, vote: VoteValue) -> int:
        match vote:
            case VoteValue.VALID:
                return self.valid
            case VoteValue.NULL:
                return self.null
            case VoteValue.TV:
                return self.tv
            case VoteValue.DID_NOT_RUN:
                return self.did_not_run

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "null": self.null,
            "tv": self.tv,
            "didNotRun": self.did_not_run,
            "total": self.total,
            "outcome": self.outcome.value,
        }


@dataclass
class SlotVoteResult:
    """Aggregated votes for a whole slot across its cattle runs.

    Attributes:
        slot_id: Backend id of the slot
        cattle_per_slot: Number of runs each judge scores for this slot
        runs: cattle_number -> VoteStats for every run 1..cattle_per_slot
        combined: VoteStats over all the slot's votes
        votes: The deduplicated votes the result was computed from
    """
    slot_id: str
    cattle_per_slot: int
    runs: dict[int, VoteStats]
    combined: VoteStats
    votes: list[CattleRunVote] = field(default_factory=list)

    @property
    def outcome(self) -> Outcome:
        return self.combined.outcome

    def is_complete_for(self, judge_id: str) -> bool:
        """Whether a judge has voted on every cattle run of this slot."""
        runs = {v.cattle_number for v in self.votes if v.judge_id == judge_id}
        return runs >= set(range(1, self.cattle_per_slot + 1))

    def to_dict(self) -> dict[str, Any]:
        return {
            "slotId": self.slot_id,
            "cattlePerSlot": self.cattle_per_slot,
            "runs": {str(n): stats.to_dict() for n, stats in self.runs.items()},
            "combined": self.combined.to_dict(),
            "votes": [
                {
                    "judgeId": v.judge_id,
                    "judgeName": v.judge_name,
                    "vote": v.vote.value,
                    "cattleNumber": v.cattle_number,
                }
                for v in self.votes
            ],
        }


@dataclass(frozen=True)
class PurchaseIntent:
    """A validated selection, ready to hand to the payment service.

    Attributes:
        event_id: Event being purchased for
        category_id: Category the slots belong to
        password_ids: Backing record ids of the selected slots
        numbers: Selected slot numbers, ascending
        unit_price: Category unit price
    """
    event_id: str
    category_id: str
    password_ids: tuple[str, ...]
    numbers: tuple[int, ...]
    unit_price: Decimal

    @property
    def quantity(self) -> int:
        return len(self.numbers)

    @property
    def total(self) -> Decimal:
        return self.unit_price * self.quantity

    def to_dict(self) -> dict[str, Any]:
        return {
            "eventId": self.event_id,
            "categoryId": self.category_id,
            "passwordIds": list(self.password_ids),
            "numbers": list(self.numbers),
            "total": float(self.total),
        }
