from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..common.validators import optional_int, optional_text, require_in_range, require_non_empty
from ..core.constants import INTERVIEW_SCORE_MAX, INTERVIEW_SCORE_MIN
from ..core.exceptions import NotFoundError
from ..metrics.aggregator import (
    BatchSummary,
    StudentMetrics,
    aggregate_student_metrics,
    rank_by_highest_score,
    summarize_batch,
)
from .repository import InterviewRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Leaderboard:
    students: list[StudentMetrics]
    summary: BatchSummary


class InterviewService:
    """Use case: record interview rounds and build the leaderboard."""

    def __init__(self, rounds: InterviewRepository):
        self._rounds = rounds

    def add_round(
        self,
        *,
        student_name: str,
        score,
        round_number=1,
        feedback: Optional[str] = None,
        admin_id: Optional[int] = None,
    ) -> int:
        student_name = require_non_empty(student_name, "Student name")
        score = require_in_range(score, "Score", INTERVIEW_SCORE_MIN, INTERVIEW_SCORE_MAX)
        round_number = optional_int(round_number, "Round number", minimum=1) or 1

        round_id = self._rounds.create(
            student_name=student_name,
            round_number=round_number,
            score=score,
            feedback=optional_text(feedback),
            admin_id=admin_id,
        )
        logger.info("Interview round %s added for %r (round %s, score %s)", round_id, student_name, round_number, score)
        return round_id

    def list_rounds(self, *, limit: Optional[int] = None):
        return self._rounds.list_all(limit=limit)

    def delete_round(self, *, round_id: int) -> None:
        if not self._rounds.delete(round_id=int(round_id)):
            raise NotFoundError("Interview round not found")

    def leaderboard(self) -> Leaderboard:
        rounds = list(self._rounds.list_all())
        return Leaderboard(
            students=rank_by_highest_score(aggregate_student_metrics(rounds)),
            summary=summarize_batch(rounds),
        )
