from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, AttendanceSession, DayAttendance


class SessionRepository(Protocol):
    def get_by_code(self, session_code: str) -> Optional[AttendanceSession]:
        raise NotImplementedError

    def get_by_public_id(self, public_id: str) -> Optional[AttendanceSession]:
        raise NotImplementedError

    def get_by_id(self, session_id: int) -> Optional[AttendanceSession]:
        raise NotImplementedError

    def create(
        self,
        *,
        session_name: str,
        session_code: str,
        public_id: str,
        session_date: date,
        expires_at: datetime,
        batch_name: Optional[str] = None,
        admin_id: Optional[int] = None,
    ) -> int:
        raise NotImplementedError

    def list_recent(self, *, limit: int) -> Sequence[AttendanceSession]:
        raise NotImplementedError

    def set_active(self, *, session_id: int, is_active: bool) -> bool:
        raise NotImplementedError

    def delete(self, *, session_id: int) -> bool:
        raise NotImplementedError

    def month_overview(self, *, start: date, end: date) -> Sequence[DayAttendance]:
        """Sessions dated within [start, end] with their record counts."""

        raise NotImplementedError


class RecordRepository(Protocol):
    def create(self, *, session_id: int, student_name: str, status: AttendanceStatus, marked_at: datetime) -> int:
        """Insert a presence row.

        Raises ConflictError when (session_id, student_name) already exists.
        """

        raise NotImplementedError

    def list_for_session(self, session_id: int) -> Sequence[AttendanceRecord]:
        """Rows ordered by marked_at ascending."""

        raise NotImplementedError
