"""Shared test helpers."""

import json
from decimal import Decimal
from pathlib import Path

import pytest

from vaquejada.config import get_settings
from vaquejada.models import CattleRunVote, Category, SlotRecord, SlotStatus, VoteValue

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def make_category(max_runners: int = 10, price: str = "150.00", **kwargs) -> Category:
    """Build a Category with sensible defaults."""
    return Category(
        id=kwargs.pop("id", "ec-amateur"),
        name=kwargs.pop("name", "amateur"),
        price=Decimal(price),
        max_runners=max_runners,
        **kwargs,
    )


def make_records(table: dict[int, str]) -> list[SlotRecord]:
    """Build slot records from a compact {number: status} table.

    Record ids are "rec-<number>".
    """
    return [
        SlotRecord(id=f"rec-{number}", number=number, status=SlotStatus(status))
        for number, status in table.items()
    ]


def make_votes(
    table: dict[str, str],
    slot_id: str = "slot-1",
    cattle_number: int = 1,
) -> list[CattleRunVote]:
    """Build votes from a compact {judge_id: vote} table."""
    return [
        CattleRunVote(
            judge_id=judge,
            event_id="event-1",
            slot_id=slot_id,
            vote=VoteValue(vote),
            cattle_number=cattle_number,
        )
        for judge, vote in table.items()
    ]


@pytest.fixture
def vote_summary():
    """Anonymized event vote summary (3 judges, 4 slots)."""
    path = FIXTURES_DIR / "vote_summary.json"
    return json.loads(path.read_text(encoding="utf-8"))


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep tests independent of any local .env file."""
    monkeypatch.setenv("API_URL", "http://backend.test")
    monkeypatch.delenv("API_TOKEN", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
