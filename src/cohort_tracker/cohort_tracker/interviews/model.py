from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class InterviewRound:
    """Domain entity: one scored interview event for one student."""

    round_id: int
    student_name: str
    round_number: int
    score: float
    created_at: datetime
    feedback: Optional[str] = None
    admin_id: Optional[int] = None
