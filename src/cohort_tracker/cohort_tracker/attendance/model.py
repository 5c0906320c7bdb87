from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceSession:
    """Domain entity: one attendance-taking window created by an admin."""

    session_id: int
    session_name: str
    session_code: str
    public_id: str
    session_date: date
    is_active: bool
    expires_at: datetime
    batch_name: Optional[str] = None
    admin_id: Optional[int] = None
    created_at: Optional[datetime] = None

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at

    def to_dict(self) -> dict:
        return {
            "id": self.session_id,
            "session_name": self.session_name,
            "session_code": self.session_code,
            "public_id": self.public_id,
            "batch_name": self.batch_name,
            "session_date": self.session_date.isoformat(),
            "is_active": self.is_active,
            "expires_at": self.expires_at.isoformat(),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: a student's presence in a session."""

    record_id: int
    session_id: int
    student_name: str
    status: AttendanceStatus
    marked_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.record_id,
            "session_id": self.session_id,
            "student_name": self.student_name,
            "status": self.status.value,
            "marked_at": self.marked_at.isoformat(),
        }


@dataclass(frozen=True)
class DayAttendance:
    """Read-model for the monthly calendar."""

    session_date: date
    session_id: int
    session_name: str
    count: int
