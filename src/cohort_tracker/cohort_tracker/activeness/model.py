from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class ActivenessRecord:
    """Domain entity: engagement score for one student in one Zoom session."""

    record_id: int
    student_name: str
    activeness_score: float
    created_at: datetime
    duration_minutes: Optional[int] = None
    zoom_session_id: Optional[str] = None
    admin_id: Optional[int] = None
