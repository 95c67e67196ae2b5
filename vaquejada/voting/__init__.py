"""Judge voting: aggregation, mutability and the speaker board."""

from .aggregate import aggregate, aggregate_by_slot, latest_votes, majority
from .mutability import VoteAction, is_editable, submit_judge_vote, vote_action
from .runners import PasswordSummary, RunnerBoard, RunnerSummary, summarise_runners
from .summary import EventBoard, JudgeProgress, judge_progress, summarise_event

__all__ = [
    "EventBoard",
    "JudgeProgress",
    "PasswordSummary",
    "RunnerBoard",
    "RunnerSummary",
    "VoteAction",
    "aggregate",
    "aggregate_by_slot",
    "is_editable",
    "judge_progress",
    "latest_votes",
    "majority",
    "submit_judge_vote",
    "summarise_event",
    "summarise_runners",
    "vote_action",
]
