"""Speaker board and judge progress built from an event's votes."""

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Self

from vaquejada.models import CattleRunVote, Outcome, SlotVoteResult
from vaquejada.voting.aggregate import aggregate_by_slot


@dataclass
class EventBoard:
    """Per-slot results of an event, as shown to the speaker.

    Attributes:
        event_id: The event
        active_judges: Judges currently scoring, as reported by the backend
        valid_votes: Backend total of VALID votes
        null_votes: Backend total of NULL votes
        tv_votes: Backend total of TV votes
        did_not_run_votes: Backend total of DID_NOT_RUN votes
        slots: Aggregated result for each slot that has a vote entry
    """
    event_id: str
    active_judges: int = 0
    valid_votes: int = 0
    null_votes: int = 0
    tv_votes: int = 0
    did_not_run_votes: int = 0
    slots: list[SlotVoteResult] = field(default_factory=list)

    @classmethod
    def from_summary(cls, payload: dict[str, Any], cattle_per_slot: int = 1) -> Self:
        """Build the board from the backend's event vote summary."""
        event_id = str(payload.get("eventId", ""))
        slots = []
        for entry in payload.get("passwordVotes", []):
            slot_id = str(entry["passwordId"])
            votes = [
                CattleRunVote.from_dict(v, event_id=event_id, slot_id=slot_id)
                for v in entry.get("votes", [])
            ]
            slots.append(aggregate_by_slot(votes, cattle_per_slot, slot_id=slot_id))

        return cls(
            event_id=event_id,
            active_judges=int(payload.get("activeJudges", 0)),
            valid_votes=int(payload.get("validVotes", 0)),
            null_votes=int(payload.get("nullVotes", 0)),
            tv_votes=int(payload.get("tvVotes", 0)),
            did_not_run_votes=int(payload.get("didNotRunVotes", 0)),
            slots=slots,
        )

    def get_slot(self, slot_id: str) -> SlotVoteResult | None:
        for slot in self.slots:
            if slot.slot_id == slot_id:
                return slot
        return None

    def outcome_counts(self) -> dict[Outcome, int]:
        """Number of slots per aggregated outcome."""
        counts = Counter(slot.outcome for slot in self.slots)
        return {outcome: counts[outcome] for outcome in Outcome}

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "eventId": self.event_id,
            "activeJudges": self.active_judges,
            "validVotes": self.valid_votes,
            "nullVotes": self.null_votes,
            "tvVotes": self.tv_votes,
            "didNotRunVotes": self.did_not_run_votes,
            "outcomes": {o.value: n for o, n in self.outcome_counts().items()},
            "slots": [slot.to_dict() for slot in self.slots],
        }


def summarise_event(payload: dict[str, Any], cattle_per_slot: int = 1) -> EventBoard:
    return EventBoard.from_summary(payload, cattle_per_slot)


@dataclass(frozen=True)
class JudgeProgress:
    """How many of an event's slots a judge has fully evaluated."""
    total: int
    evaluated: int

    @property
    def pending(self) -> int:
        return self.total - self.evaluated

    def to_dict(self) -> dict[str, int]:
        return {"total": self.total, "evaluated": self.evaluated, "pending": self.pending}


def judge_progress(
    slot_ids: Iterable[str],
    votes: Iterable[CattleRunVote],
    judge_id: str,
    cattle_per_slot: int = 1,
) -> JudgeProgress:
    """Count the slots a judge has voted on for every cattle run.

    Args:
        slot_ids: Slots the judge has to evaluate
        votes: The judge's votes (votes by other judges are ignored)
        judge_id: The judge
        cattle_per_slot: Runs per slot (event setting)
    """
    slot_ids = list(dict.fromkeys(slot_ids))
    by_slot: dict[str, list[CattleRunVote]] = {slot_id: [] for slot_id in slot_ids}
    for vote in votes:
        if vote.judge_id == judge_id and vote.slot_id in by_slot:
            by_slot[vote.slot_id].append(vote)

    evaluated = sum(
        1 for slot_id, slot_votes in by_slot.items()
        if aggregate_by_slot(slot_votes, cattle_per_slot, slot_id=slot_id)
        .is_complete_for(judge_id)
    )
    return JudgeProgress(total=len(slot_ids), evaluated=evaluated)
