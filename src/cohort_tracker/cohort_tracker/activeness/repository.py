from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import ActivenessRecord


class ActivenessRepository(Protocol):
    def list_ranked(self, *, limit: Optional[int] = None) -> Sequence[ActivenessRecord]:
        """Highest score first, newest first among equal scores."""

        raise NotImplementedError

    def create(
        self,
        *,
        student_name: str,
        activeness_score: float,
        duration_minutes: Optional[int] = None,
        zoom_session_id: Optional[str] = None,
        admin_id: Optional[int] = None,
    ) -> int:
        raise NotImplementedError

    def delete(self, *, record_id: int) -> bool:
        raise NotImplementedError
