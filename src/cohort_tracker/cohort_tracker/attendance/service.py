from __future__ import annotations

import calendar
import logging
from datetime import date, datetime, timedelta
from typing import Callable, Optional

from ..common.datetime_utils import now_utc
from ..common.validators import optional_text, require_in_range, require_non_empty
from ..core.constants import DEFAULT_LIST_LIMIT, DEFAULT_SESSION_HOURS
from ..core.exceptions import NotFoundError, ValidationError
from .codes import generate_public_id, generate_session_code
from .model import AttendanceSession
from .repository import SessionRepository

logger = logging.getLogger(__name__)


class AttendanceSessionService:
    """Use case: admins open, list and close attendance sessions."""

    def __init__(
        self,
        sessions: SessionRepository,
        *,
        default_hours: int = DEFAULT_SESSION_HOURS,
        clock: Callable[[], datetime] = now_utc,
        code_factory: Callable[[], str] = generate_session_code,
        public_id_factory: Callable[[], str] = generate_public_id,
    ):
        self._sessions = sessions
        self._default_hours = int(default_hours)
        self._clock = clock
        self._code_factory = code_factory
        self._public_id_factory = public_id_factory

    def create_session(
        self,
        *,
        session_name: str,
        session_date: Optional[date] = None,
        batch_name: Optional[str] = None,
        duration_hours=None,
        admin_id: Optional[int] = None,
    ) -> AttendanceSession:
        session_name = require_non_empty(session_name, "Session name")
        now = self._clock()
        hours = self._default_hours
        if duration_hours is not None and duration_hours != "":
            hours = require_in_range(duration_hours, "Duration (hours)", 0.25, 24 * 7)

        code = self._code_factory()
        public_id = self._public_id_factory()
        session_id = self._sessions.create(
            session_name=session_name,
            session_code=code,
            public_id=public_id,
            session_date=session_date or now.date(),
            expires_at=now + timedelta(hours=hours),
            batch_name=optional_text(batch_name),
            admin_id=admin_id,
        )
        logger.info("Attendance session %s opened (code=%s)", session_id, code)

        session = self._sessions.get_by_id(session_id)
        if not session:
            raise NotFoundError("Attendance session not found")
        return session

    def get_session(self, *, session_id: int) -> AttendanceSession:
        session = self._sessions.get_by_id(int(session_id))
        if not session:
            raise NotFoundError("Attendance session not found")
        return session

    def list_sessions(self, *, limit: int = DEFAULT_LIST_LIMIT):
        return self._sessions.list_recent(limit=limit)

    def deactivate_session(self, *, session_id: int) -> None:
        if not self._sessions.set_active(session_id=int(session_id), is_active=False):
            raise NotFoundError("Attendance session not found")

    def delete_session(self, *, session_id: int) -> None:
        if not self._sessions.delete(session_id=int(session_id)):
            raise NotFoundError("Attendance session not found")

    def month_overview(self, *, year: int, month: int) -> dict[str, dict]:
        """Calendar view: one entry per session date in the month.

        When several sessions share a date the last one (by id) wins, as the
        calendar only shows one cell per day.
        """

        if not 1 <= int(month) <= 12:
            raise ValidationError("Month must be between 1 and 12")
        start = date(int(year), int(month), 1)
        end = date(int(year), int(month), calendar.monthrange(int(year), int(month))[1])

        out: dict[str, dict] = {}
        for day in self._sessions.month_overview(start=start, end=end):
            key = day.session_date.isoformat()
            out[key] = {
                "date": key,
                "count": day.count,
                "session_id": day.session_id,
                "session_name": day.session_name,
            }
        return out
