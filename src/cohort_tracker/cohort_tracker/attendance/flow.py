"""Public attendance marking flow.

One flow instance models one page load: it resolves the session once, then accepts
at most one successful presence submission. A new page load builds a new flow.

    UNRESOLVED --resolve--> OPEN | UNAVAILABLE
    OPEN --submit--> ALREADY_MARKED   (inserted, or the store reported a duplicate)
    OPEN --submit--> OPEN             (blank name, or store failure: caller may retry)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_utc
from ..core.enums import AttendanceStatus, FlowState, UnavailableReason
from ..core.exceptions import ConflictError, ValidationError
from .model import AttendanceSession
from .repository import RecordRepository, SessionRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmissionResult:
    state: FlowState
    message: str
    student_name: str
    marked_at: Optional[datetime] = None
    already_marked: bool = False

    def to_dict(self) -> dict:
        return {
            "state": self.state.value,
            "message": self.message,
            "student_name": self.student_name,
            "marked_at": self.marked_at.isoformat() if self.marked_at else None,
            "already_marked": self.already_marked,
        }


class AttendanceFlow:
    def __init__(
        self,
        sessions: SessionRepository,
        records: RecordRepository,
        *,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._sessions = sessions
        self._records = records
        self._clock = clock

        self.state = FlowState.UNRESOLVED
        self.reason: Optional[UnavailableReason] = None
        self.session: Optional[AttendanceSession] = None

    def resolve(self, session_code: Optional[str]) -> FlowState:
        """Look the session up by its short code."""
        self._ensure_unresolved()
        if not session_code or not session_code.strip():
            return self._unavailable(UnavailableReason.NOT_FOUND)
        return self._check(self._sessions.get_by_code(session_code.strip()))

    def resolve_public(self, public_id: Optional[str]) -> FlowState:
        """Look the session up by its public id."""
        self._ensure_unresolved()
        if not public_id or not public_id.strip():
            return self._unavailable(UnavailableReason.NOT_FOUND)
        return self._check(self._sessions.get_by_public_id(public_id.strip()))

    def _ensure_unresolved(self) -> None:
        if self.state != FlowState.UNRESOLVED:
            raise ValidationError("Session already resolved")

    def _check(self, session: Optional[AttendanceSession]) -> FlowState:
        if session is None:
            return self._unavailable(UnavailableReason.NOT_FOUND)

        self.session = session
        # Expiry wins over the active flag: a stale session always reports "expired".
        if session.is_expired(self._clock()):
            return self._unavailable(UnavailableReason.EXPIRED)
        if not session.is_active:
            return self._unavailable(UnavailableReason.INACTIVE)

        self.state = FlowState.OPEN
        return self.state

    def _unavailable(self, reason: UnavailableReason) -> FlowState:
        self.state = FlowState.UNAVAILABLE
        self.reason = reason
        return self.state

    def submit(self, student_name: Optional[str]) -> SubmissionResult:
        """Record presence for student_name.

        ValidationError: blank name or flow not OPEN (no store call is made).
        StoreError: store failure other than a duplicate; state stays OPEN.
        """

        if self.state != FlowState.OPEN or self.session is None:
            raise ValidationError(f"Attendance cannot be marked ({self.state.value})")

        if not student_name or not student_name.strip():
            raise ValidationError("name required")
        name = student_name.strip()

        marked_at = self._clock()
        try:
            self._records.create(
                session_id=self.session.session_id,
                student_name=name,
                status=AttendanceStatus.PRESENT,
                marked_at=marked_at,
            )
        except ConflictError:
            self.state = FlowState.ALREADY_MARKED
            logger.info("Duplicate attendance for %r in session %s", name, self.session.session_id)
            return SubmissionResult(
                state=self.state,
                message="already marked",
                student_name=name,
                already_marked=True,
            )

        self.state = FlowState.ALREADY_MARKED
        return SubmissionResult(
            state=self.state,
            message=f"Attendance marked for {name} on {self.session.session_date.isoformat()} at {marked_at.strftime('%H:%M:%S')}",
            student_name=name,
            marked_at=marked_at,
        )
