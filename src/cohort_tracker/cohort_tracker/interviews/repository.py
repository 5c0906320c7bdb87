from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import InterviewRound


class InterviewRepository(Protocol):
    def list_all(self, *, limit: Optional[int] = None) -> Sequence[InterviewRound]:
        """All rounds, newest first."""

        raise NotImplementedError

    def create(
        self,
        *,
        student_name: str,
        round_number: int,
        score: float,
        feedback: Optional[str] = None,
        admin_id: Optional[int] = None,
    ) -> int:
        raise NotImplementedError

    def delete(self, *, round_id: int) -> bool:
        raise NotImplementedError
