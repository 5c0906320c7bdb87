"""Per-student and batch-wide statistics over interview rounds.

Everything here is a pure function of the rounds passed in: nothing is cached and
callers recompute from the current row set on every load.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Sequence

from ..interviews.model import InterviewRound


@dataclass(frozen=True)
class StudentMetrics:
    name: str
    highest_score: float
    total_score: float
    average_score: float
    interviews_given: int
    last_interview_date: datetime

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "highest_score": self.highest_score,
            "total_score": self.total_score,
            "average_score": self.average_score,
            "interviews_given": self.interviews_given,
            "last_interview_date": self.last_interview_date.isoformat(),
        }


@dataclass(frozen=True)
class BatchSummary:
    total_students: int
    total_interviews: int
    average_score: float
    highest_individual_score: float

    def to_dict(self) -> dict:
        return {
            "total_students": self.total_students,
            "total_interviews": self.total_interviews,
            "average_score": self.average_score,
            "highest_individual_score": self.highest_individual_score,
        }


def aggregate_student_metrics(rounds: Iterable[InterviewRound]) -> list[StudentMetrics]:
    """Group rounds by the exact student_name string and summarize each group.

    Names are not trimmed or case-folded, so "Ana" and "ana " are two students.
    Output follows first-seen order of names; sort with rank_by_highest_score for a
    leaderboard.
    """

    groups: dict[str, dict] = {}
    for r in rounds:
        g = groups.get(r.student_name)
        if g is None:
            g = {"highest": r.score, "total": 0.0, "count": 0, "last": r.created_at}
            groups[r.student_name] = g
        g["total"] += r.score
        g["count"] += 1
        if r.score > g["highest"]:
            g["highest"] = r.score
        if r.created_at > g["last"]:
            g["last"] = r.created_at

    return [
        StudentMetrics(
            name=name,
            highest_score=g["highest"],
            total_score=g["total"],
            average_score=g["total"] / g["count"],
            interviews_given=g["count"],
            last_interview_date=g["last"],
        )
        for name, g in groups.items()
    ]


def summarize_batch(rounds: Iterable[InterviewRound]) -> BatchSummary:
    """Batch totals. The average is over all rows, not over per-student averages."""

    rounds = list(rounds)
    if not rounds:
        return BatchSummary(total_students=0, total_interviews=0, average_score=0.0, highest_individual_score=0.0)

    scores = [r.score for r in rounds]
    return BatchSummary(
        total_students=len({r.student_name for r in rounds}),
        total_interviews=len(rounds),
        average_score=sum(scores) / len(scores),
        highest_individual_score=max(scores),
    )


def rank_by_highest_score(metrics: Sequence[StudentMetrics]) -> list[StudentMetrics]:
    # Stable: equal scores keep their incoming order.
    return sorted(metrics, key=lambda m: m.highest_score, reverse=True)
