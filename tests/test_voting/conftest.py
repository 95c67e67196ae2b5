"""Shared fixtures for voting tests."""

from datetime import datetime, timezone

import pytest
from tests.conftest import make_votes

from vaquejada.models import CattleRunVote, VoteValue


@pytest.fixture
def clear_majority():
    """Three judges, two say VALID.

         slot-1 run 1
    J1   VALID
    J2   VALID
    J3   NULL

    Outcome: VALID
    """
    return make_votes({"J1": "VALID", "J2": "VALID", "J3": "NULL"})


@pytest.fixture
def split_decision():
    """Two judges disagree.

         slot-1 run 1
    J1   VALID
    J2   NULL

    Outcome: TIE
    """
    return make_votes({"J1": "VALID", "J2": "NULL"})


@pytest.fixture
def two_runs():
    """Two judges scoring a slot with two cattle runs.

         run 1   run 2
    J1   VALID   TV
    J2   VALID   NULL

    Run 1: VALID. Run 2: TIE. Combined (VALID=2, TV=1, NULL=1): VALID.
    """
    return (
        make_votes({"J1": "VALID", "J2": "VALID"}, cattle_number=1)
        + make_votes({"J1": "TV", "J2": "NULL"}, cattle_number=2)
    )


def at(minute: int) -> datetime:
    return datetime(2026, 5, 16, 14, minute, tzinfo=timezone.utc)


@pytest.fixture
def revised_vote():
    """J1 first sent run 1 to TV, then changed it to VALID."""
    return [
        CattleRunVote("J1", "event-1", "slot-1", VoteValue.TV, created_at=at(1)),
        CattleRunVote("J2", "event-1", "slot-1", VoteValue.NULL, created_at=at(2)),
        CattleRunVote("J1", "event-1", "slot-1", VoteValue.VALID, created_at=at(5)),
    ]
