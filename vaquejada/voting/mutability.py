"""Which judge votes may still be changed.

A TV call ("send to video review") defers the decision, so the judge may
revise it. Every other call is final for that (judge, slot, cattle run).
"""

from enum import Enum

from vaquejada.client import BackendClient
from vaquejada.errors import VoteLocked
from vaquejada.logs import get_logger
from vaquejada.models import CattleRunVote, VoteValue

logger = get_logger(__name__)


class VoteAction(Enum):
    """What a judge can do on a (slot, cattle run) they may have voted on."""
    CAST = "cast"  # no vote yet
    UPDATE = "update"
    LOCKED = "locked"


def is_editable(vote: CattleRunVote | None) -> bool | None:
    """Whether an existing vote may still be updated.

    Returns:
        None when there is no vote yet (the run is open for a first vote),
        True for a TV vote, False for any other vote
    """
    if vote is None:
        return None
    match vote.vote:
        case VoteValue.TV:
            return True
        case VoteValue.VALID | VoteValue.NULL | VoteValue.DID_NOT_RUN:
            return False


def vote_action(vote: CattleRunVote | None) -> VoteAction:
    match is_editable(vote):
        case None:
            return VoteAction.CAST
        case True:
            return VoteAction.UPDATE
        case False:
            return VoteAction.LOCKED


def submit_judge_vote(
    client: BackendClient,
    existing: CattleRunVote | None,
    new_vote: VoteValue,
    *,
    judge_id: str,
    event_id: str,
    slot_id: str,
    cattle_number: int = 1,
) -> VoteAction:
    """Cast a first vote or update an editable one.

    Returns:
        The action that was performed (CAST or UPDATE)

    Raises:
        VoteLocked: If the existing vote is final
        BackendError: If the backend call fails
    """
    action = vote_action(existing)
    match action:
        case VoteAction.CAST:
            client.submit_vote(judge_id, event_id, slot_id, new_vote, cattle_number)
        case VoteAction.UPDATE:
            if existing.id is None:
                raise ValueError("Cannot update a vote that has no backend id")
            client.update_vote(existing.id, new_vote)
        case VoteAction.LOCKED:
            raise VoteLocked(existing.id)

    logger.info("Judge vote recorded", action=action.value, judge_id=judge_id,
                slot_id=slot_id, cattle_number=cattle_number, vote=new_vote.value)
    return action
