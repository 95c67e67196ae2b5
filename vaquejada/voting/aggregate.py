"""Vote aggregation: counts and the majority outcome of judges' votes."""

from collections import Counter
from collections.abc import Iterable
from datetime import datetime, timezone

from vaquejada.models import CattleRunVote, Outcome, SlotVoteResult, VoteStats, VoteValue

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _value(vote: CattleRunVote | VoteValue) -> VoteValue:
    return vote if isinstance(vote, VoteValue) else vote.vote


def majority(counts: Counter) -> Outcome:
    """Return the value with a strict plurality of counts.

    The winner must have strictly more votes than each of the other three
    values. Any tie at the top is TIE; no votes at all is PENDING.
    """
    if sum(counts.values()) == 0:
        return Outcome.PENDING

    ranked = sorted(VoteValue, key=lambda v: counts[v], reverse=True)
    top, runner_up = ranked[0], ranked[1]
    if counts[top] > counts[runner_up]:
        return Outcome.from_vote(top)
    return Outcome.TIE


def aggregate(votes: Iterable[CattleRunVote | VoteValue]) -> VoteStats:
    """Count votes by value and compute the majority outcome.

    The result depends only on the multiset of vote values, not on their
    order or on which judge cast them.

    Args:
        votes: Votes for one (slot, cattle run) scope, or bare vote values

    Returns:
        VoteStats with per-value counts and the outcome
    """
    counts = Counter(_value(v) for v in votes)
    return VoteStats(
        valid=counts[VoteValue.VALID],
        null=counts[VoteValue.NULL],
        tv=counts[VoteValue.TV],
        did_not_run=counts[VoteValue.DID_NOT_RUN],
        outcome=majority(counts),
    )


def _stamp(vote: CattleRunVote) -> datetime:
    if vote.created_at is None:
        return _EPOCH
    if vote.created_at.tzinfo is None:
        return vote.created_at.replace(tzinfo=timezone.utc)
    return vote.created_at


def latest_votes(votes: Iterable[CattleRunVote]) -> list[CattleRunVote]:
    """Keep one vote per (judge, slot, cattle run), the most recent one.

    A later vote for the same key is an update of the earlier one. Votes
    without a timestamp count as older than any timestamped vote; among
    equals, the one listed last wins.
    """
    latest: dict[tuple[str, str, int], CattleRunVote] = {}
    for vote in votes:
        current = latest.get(vote.key)
        if current is None or _stamp(vote) >= _stamp(current):
            latest[vote.key] = vote
    return list(latest.values())


def aggregate_by_slot(
    votes: Iterable[CattleRunVote],
    cattle_per_slot: int = 1,
    slot_id: str | None = None,
) -> SlotVoteResult:
    """Aggregate all votes of one slot, run by run and combined.

    Args:
        votes: Every judge's votes for the slot
        cattle_per_slot: Runs each judge scores per slot (event setting)
        slot_id: Slot the votes belong to; taken from the votes if omitted

    Returns:
        SlotVoteResult with stats for each run 1..cattle_per_slot and for
        the slot as a whole. Votes on runs outside that range are ignored.

    Raises:
        ValueError: If cattle_per_slot is less than 1
    """
    if cattle_per_slot < 1:
        raise ValueError("cattle_per_slot must be at least 1")

    in_range = [
        v for v in latest_votes(votes)
        if 1 <= v.cattle_number <= cattle_per_slot
    ]
    if slot_id is None:
        slot_id = in_range[0].slot_id if in_range else ""

    runs = {
        n: aggregate(v for v in in_range if v.cattle_number == n)
        for n in range(1, cattle_per_slot + 1)
    }
    return SlotVoteResult(
        slot_id=slot_id,
        cattle_per_slot=cattle_per_slot,
        runs=runs,
        combined=aggregate(in_range),
        votes=sorted(in_range, key=lambda v: (v.cattle_number, v.judge_id)),
    )
