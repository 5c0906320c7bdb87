from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from src.cohort_tracker.cohort_tracker.core.exceptions import NotFoundError, ValidationError
from src.cohort_tracker.cohort_tracker.interviews.model import InterviewRound
from src.cohort_tracker.cohort_tracker.interviews.service import InterviewService


class InMemoryInterviews:
    def __init__(self):
        self.rows: dict[int, InterviewRound] = {}
        self._id = 0
        self.create_calls = 0

    def list_all(self, *, limit=None):
        items = sorted(self.rows.values(), key=lambda r: (r.created_at, r.round_id), reverse=True)
        return items[:limit] if limit is not None else items

    def create(self, *, student_name, round_number, score, feedback=None, admin_id=None) -> int:
        self.create_calls += 1
        self._id += 1
        self.rows[self._id] = InterviewRound(
            round_id=self._id,
            student_name=student_name,
            round_number=round_number,
            score=score,
            created_at=datetime(2026, 1, 1) + timedelta(hours=self._id),
            feedback=feedback,
            admin_id=admin_id,
        )
        return self._id

    def delete(self, *, round_id: int) -> bool:
        return self.rows.pop(round_id, None) is not None


def test_add_round_trims_name_and_feedback():
    repo = InMemoryInterviews()
    svc = InterviewService(repo)

    rid = svc.add_round(student_name="  Ana  ", score="7.5", round_number="2", feedback="  solid  ", admin_id=3)

    row = repo.rows[rid]
    assert row.student_name == "Ana"
    assert row.score == 7.5
    assert row.round_number == 2
    assert row.feedback == "solid"
    assert row.admin_id == 3


@pytest.mark.parametrize("score", [0, 10, "0", "10"])
def test_score_boundaries_accepted(score):
    repo = InMemoryInterviews()
    InterviewService(repo).add_round(student_name="Ana", score=score)

    assert repo.create_calls == 1


@pytest.mark.parametrize("score", [10.5, -0.1, "", None, "abc"])
def test_invalid_score_rejected_before_store(score):
    repo = InMemoryInterviews()

    with pytest.raises(ValidationError):
        InterviewService(repo).add_round(student_name="Ana", score=score)

    assert repo.create_calls == 0


def test_blank_name_rejected():
    repo = InMemoryInterviews()

    with pytest.raises(ValidationError):
        InterviewService(repo).add_round(student_name="   ", score=5)

    assert repo.create_calls == 0


def test_round_number_defaults_to_one_and_rejects_zero():
    repo = InMemoryInterviews()
    svc = InterviewService(repo)

    rid = svc.add_round(student_name="Ana", score=5, round_number="")
    assert repo.rows[rid].round_number == 1

    with pytest.raises(ValidationError):
        svc.add_round(student_name="Ana", score=5, round_number=0)


def test_delete_missing_round_raises():
    svc = InterviewService(InMemoryInterviews())

    with pytest.raises(NotFoundError):
        svc.delete_round(round_id=42)


def test_leaderboard_recomputes_from_current_rows():
    repo = InMemoryInterviews()
    svc = InterviewService(repo)
    svc.add_round(student_name="A", score=10)
    svc.add_round(student_name="A", score=10)
    b_id = svc.add_round(student_name="B", score=0)

    board = svc.leaderboard()
    assert [m.name for m in board.students] == ["A", "B"]
    assert board.summary.average_score == pytest.approx(20 / 3)

    svc.delete_round(round_id=b_id)
    board = svc.leaderboard()
    assert [m.name for m in board.students] == ["A"]
    assert board.summary.average_score == 10
