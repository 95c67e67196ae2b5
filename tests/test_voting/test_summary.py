"""Tests for the speaker board and judge progress."""

from tests.conftest import make_votes

from vaquejada.models import Outcome
from vaquejada.voting import judge_progress, summarise_event

SLOT_1 = "0b8e7d6c-5a4f-4e3d-8c2b-1a0f9e8d7c6b"
SLOT_2 = "1c9f8e7d-6b5a-4f4e-9d3c-2b1a0f9e8d7c"
SLOT_3 = "2d0a9f8e-7c6b-405f-ae4d-3c2b1a0f9e8d"
SLOT_4 = "3e1b0a9f-8d7c-416a-bf5e-4d3c2b1a0f9e"


class TestEventBoard:
    def test_counters_from_backend(self, vote_summary):
        board = summarise_event(vote_summary)
        assert board.event_id == "6f1c2a9e-3b7d-4c55-9e0a-1d2f3a4b5c6d"
        assert board.active_judges == 3
        assert (board.valid_votes, board.null_votes, board.tv_votes,
                board.did_not_run_votes) == (3, 2, 2, 1)

    def test_slot_outcomes(self, vote_summary):
        board = summarise_event(vote_summary)
        assert [s.slot_id for s in board.slots] == [SLOT_1, SLOT_2, SLOT_3, SLOT_4]
        assert board.get_slot(SLOT_1).outcome == Outcome.VALID
        assert board.get_slot(SLOT_2).outcome == Outcome.TIE
        assert board.get_slot(SLOT_3).outcome == Outcome.PENDING
        assert board.get_slot(SLOT_4).outcome == Outcome.TV
        assert board.get_slot("missing") is None

    def test_outcome_counts(self, vote_summary):
        counts = summarise_event(vote_summary).outcome_counts()
        assert counts[Outcome.VALID] == 1
        assert counts[Outcome.TIE] == 1
        assert counts[Outcome.PENDING] == 1
        assert counts[Outcome.TV] == 1
        assert counts[Outcome.NULL] == 0

    def test_judge_names_kept(self, vote_summary):
        slot = summarise_event(vote_summary).get_slot(SLOT_1)
        assert {v.judge_name for v in slot.votes} == {
            "Heloísa Cardoso", "Otávio Nascimento", "Lívia Moreira",
        }

    def test_to_dict(self, vote_summary):
        data = summarise_event(vote_summary).to_dict()
        assert data["activeJudges"] == 3
        assert data["outcomes"]["TIE"] == 1
        assert data["slots"][0]["combined"]["outcome"] == "VALID"
        assert data["slots"][2]["combined"]["total"] == 0

    def test_empty_summary(self):
        board = summarise_event({})
        assert board.slots == []
        assert board.active_judges == 0

    def test_multiple_cattle_runs(self):
        payload = {
            "eventId": "e1",
            "passwordVotes": [{
                "passwordId": "s1",
                "votes": [
                    {"judgeId": "J1", "vote": "VALID", "cattleNumber": 1},
                    {"judgeId": "J1", "vote": "NULL", "cattleNumber": 2},
                    {"judgeId": "J2", "vote": "VALID", "cattleNumber": 1},
                ],
            }],
        }
        slot = summarise_event(payload, cattle_per_slot=2).slots[0]
        assert slot.runs[1].outcome == Outcome.VALID
        assert slot.runs[2].outcome == Outcome.NULL
        assert slot.is_complete_for("J1")
        assert not slot.is_complete_for("J2")


class TestJudgeProgress:
    def test_counts_evaluated_slots(self):
        votes = (
            make_votes({"J1": "VALID"}, slot_id="s1")
            + make_votes({"J1": "TV"}, slot_id="s2")
            + make_votes({"J2": "NULL"}, slot_id="s3")
        )
        progress = judge_progress(["s1", "s2", "s3"], votes, "J1")
        assert progress.total == 3
        assert progress.evaluated == 2
        assert progress.pending == 1

    def test_partial_runs_are_pending(self):
        votes = make_votes({"J1": "VALID"}, slot_id="s1", cattle_number=1)
        progress = judge_progress(["s1"], votes, "J1", cattle_per_slot=2)
        assert progress.to_dict() == {"total": 1, "evaluated": 0, "pending": 1}

    def test_duplicate_slot_ids(self):
        progress = judge_progress(["s1", "s1"], [], "J1")
        assert progress.total == 1

    def test_votes_for_unknown_slots_ignored(self):
        votes = make_votes({"J1": "VALID"}, slot_id="elsewhere")
        assert judge_progress(["s1"], votes, "J1").evaluated == 0
