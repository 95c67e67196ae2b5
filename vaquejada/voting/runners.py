"""Speaker board grouped by runner, with per-password results."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from typing import Any, Self

from vaquejada.models import CattleRunVote, SlotVoteResult, parse_datetime
from vaquejada.voting.aggregate import aggregate_by_slot


def _number_key(number: str) -> tuple[int, str]:
    # Password numbers are numeric strings; anything else sorts last
    return (int(number), "") if number.isdigit() else (2**31, number)


@dataclass(frozen=True)
class PasswordSummary:
    """One of a runner's passwords and the judges' votes on it.

    Attributes:
        password_id: Backend id of the password (slot)
        number: Slot number as displayed, e.g. "7"
        category_name: Category the password was bought in
        price: Price paid for the password
        status: Purchase status reported by the backend
        points: Points the backend awarded for this password
        result: Aggregated votes for the password
    """
    password_id: str
    number: str
    category_name: str
    price: Decimal
    status: str
    points: int
    result: SlotVoteResult

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, event_id: str,
                  cattle_per_slot: int = 1) -> Self:
        password_id = str(data["passwordId"])
        votes = [
            CattleRunVote.from_dict(v, event_id=event_id, slot_id=password_id)
            for v in data.get("votes", [])
        ]
        return cls(
            password_id=password_id,
            number=str(data.get("passwordNumber", "")),
            category_name=data.get("categoryName", ""),
            price=Decimal(str(data.get("passwordPrice", 0))),
            status=data.get("passwordStatus", ""),
            points=int(data.get("passwordPoints", 0)),
            result=aggregate_by_slot(votes, cattle_per_slot, slot_id=password_id),
        )

    def matches(self, term: str) -> bool:
        needle = term.lower()
        return term in self.number or needle in self.category_name.lower()

    def to_dict(self) -> dict[str, Any]:
        return {
            "passwordId": self.password_id,
            "passwordNumber": self.number,
            "categoryName": self.category_name,
            "passwordPrice": float(self.price),
            "passwordStatus": self.status,
            "passwordPoints": self.points,
            **self.result.to_dict(),
        }


@dataclass(frozen=True)
class RunnerSummary:
    """A runner's passwords and vote totals in one event.

    The vote counters are the backend's totals over all the runner's
    passwords. Passwords are kept in ascending number order.
    """
    user_id: str
    name: str
    city: str = ""
    state: str = ""
    total_points: int = 0
    valid_votes: int = 0
    null_votes: int = 0
    tv_votes: int = 0
    did_not_run_votes: int = 0
    passwords: tuple[PasswordSummary, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, event_id: str,
                  cattle_per_slot: int = 1) -> Self:
        passwords = [
            PasswordSummary.from_dict(p, event_id=event_id, cattle_per_slot=cattle_per_slot)
            for p in data.get("passwords", [])
        ]
        return cls(
            user_id=str(data["userId"]),
            name=data.get("runnerName", ""),
            city=data.get("runnerCity") or "",
            state=data.get("runnerState") or "",
            total_points=int(data.get("totalPoints", 0)),
            valid_votes=int(data.get("validVotes", 0)),
            null_votes=int(data.get("nullVotes", 0)),
            tv_votes=int(data.get("tvVotes", 0)),
            did_not_run_votes=int(data.get("didNotRunVotes", 0)),
            passwords=tuple(sorted(passwords, key=lambda p: _number_key(p.number))),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "userId": self.user_id,
            "runnerName": self.name,
            "runnerCity": self.city,
            "runnerState": self.state,
            "totalPoints": self.total_points,
            "validVotes": self.valid_votes,
            "nullVotes": self.null_votes,
            "tvVotes": self.tv_votes,
            "didNotRunVotes": self.did_not_run_votes,
            "passwords": [p.to_dict() for p in self.passwords],
        }


@dataclass
class RunnerBoard:
    """Speaker board of an event, one entry per runner sorted by name."""
    event_id: str
    event_name: str = ""
    event_date: datetime | None = None
    runners: list[RunnerSummary] = field(default_factory=list)

    @classmethod
    def from_runner_summary(cls, payload: dict[str, Any], cattle_per_slot: int = 1) -> Self:
        """Build the board from the backend's per-runner vote summary."""
        event_id = str(payload.get("eventId", ""))
        runners = [
            RunnerSummary.from_dict(r, event_id=event_id, cattle_per_slot=cattle_per_slot)
            for r in payload.get("runners", [])
        ]
        return cls(
            event_id=event_id,
            event_name=payload.get("eventName", ""),
            event_date=parse_datetime(payload.get("eventDate")),
            runners=sorted(runners, key=lambda r: r.name.casefold()),
        )

    def filter(self, term: str) -> Self:
        """Keep the passwords matching term, and the runners that still have any.

        A password matches when its number contains term, or when the runner
        name or the category name contains it (case-insensitive). An empty
        term keeps everything.
        """
        if not term:
            return self
        runners = []
        for runner in self.runners:
            if term.lower() in runner.name.lower():
                passwords = runner.passwords
            else:
                passwords = tuple(p for p in runner.passwords if p.matches(term))
            if passwords:
                runners.append(replace(runner, passwords=passwords))
        return replace(self, runners=runners)

    def stats(self) -> dict[str, int]:
        """Event-wide totals over the runners on the board."""
        judges = {
            vote.judge_id
            for runner in self.runners
            for password in runner.passwords
            for vote in password.result.votes
        }
        return {
            "activeJudges": len(judges),
            "totalRunners": len(self.runners),
            "totalPasswords": sum(len(r.passwords) for r in self.runners),
            "validVotes": sum(r.valid_votes for r in self.runners),
            "nullVotes": sum(r.null_votes for r in self.runners),
            "tvVotes": sum(r.tv_votes for r in self.runners),
            "didNotRunVotes": sum(r.did_not_run_votes for r in self.runners),
            "totalPoints": sum(r.total_points for r in self.runners),
        }

    def to_dict(self, search: str = "") -> dict[str, Any]:
        """Convert to JSON; stats cover the whole board, runners only the matches."""
        return {
            "eventId": self.event_id,
            "eventName": self.event_name,
            "eventDate": self.event_date.isoformat() if self.event_date else None,
            "stats": self.stats(),
            "runners": [r.to_dict() for r in self.filter(search).runners],
        }


def summarise_runners(payload: dict[str, Any], cattle_per_slot: int = 1) -> RunnerBoard:
    return RunnerBoard.from_runner_summary(payload, cattle_per_slot)
