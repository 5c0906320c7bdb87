from __future__ import annotations

import logging
from typing import Optional

from ..common.validators import optional_int, optional_text, require_in_range, require_non_empty
from ..core.constants import ACTIVENESS_SCORE_MAX, ACTIVENESS_SCORE_MIN
from ..core.exceptions import NotFoundError
from .repository import ActivenessRepository

logger = logging.getLogger(__name__)


class ActivenessService:
    """Use case: Zoom activeness board."""

    def __init__(self, records: ActivenessRepository):
        self._records = records

    def add_score(
        self,
        *,
        student_name: str,
        activeness_score,
        duration_minutes=None,
        zoom_session_id: Optional[str] = None,
        admin_id: Optional[int] = None,
    ) -> int:
        student_name = require_non_empty(student_name, "Student name")
        score = require_in_range(activeness_score, "Activeness score", ACTIVENESS_SCORE_MIN, ACTIVENESS_SCORE_MAX)
        duration = optional_int(duration_minutes, "Duration", minimum=0)

        record_id = self._records.create(
            student_name=student_name,
            activeness_score=score,
            duration_minutes=duration,
            zoom_session_id=optional_text(zoom_session_id),
            admin_id=admin_id,
        )
        logger.info("Activeness score %s recorded for %r", score, student_name)
        return record_id

    def list_scores(self, *, limit: Optional[int] = None):
        return self._records.list_ranked(limit=limit)

    def delete_score(self, *, record_id: int) -> None:
        if not self._records.delete(record_id=int(record_id)):
            raise NotFoundError("Activeness record not found")
