"""Read-only public attendance dashboard and its polling refresher."""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, Optional

from ..core.constants import DEFAULT_POLL_SECONDS
from ..core.enums import LoadState
from ..core.exceptions import NotFoundError
from .model import AttendanceRecord, AttendanceSession
from .repository import RecordRepository, SessionRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardSnapshot:
    session: AttendanceSession
    records: list[AttendanceRecord] = field(default_factory=list)

    @property
    def present_count(self) -> int:
        return len(self.records)

    @property
    def notice(self) -> Optional[str]:
        if not self.session.is_active:
            return "This attendance session is no longer active"
        return None

    def to_dict(self) -> dict:
        return {
            "session": self.session.to_dict(),
            "records": [r.to_dict() for r in self.records],
            "present_count": self.present_count,
            "notice": self.notice,
        }


class AttendanceDashboardService:
    def __init__(self, sessions: SessionRepository, records: RecordRepository):
        self._sessions = sessions
        self._records = records

    def load(self, public_id: str) -> DashboardSnapshot:
        session = self._sessions.get_by_public_id(public_id) if public_id else None
        if not session:
            raise NotFoundError("Attendance session not found")
        records = list(self._records.list_for_session(session.session_id))
        return DashboardSnapshot(session=session, records=records)


class AttendancePoller:
    """Re-runs a loader on a fixed interval while enabled.

    The pending timer is kept on the instance and cancelled by stop() or
    set_enabled(False); callers must stop() a poller they no longer display.
    """

    def __init__(
        self,
        load_fn: Callable[[], DashboardSnapshot],
        *,
        interval: float = DEFAULT_POLL_SECONDS,
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
    ):
        self._load_fn = load_fn
        self._interval = float(interval)
        self._timer_factory = timer_factory
        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()
        self._listeners: list[Callable[["AttendancePoller"], None]] = []

        self.enabled = False
        self.state = LoadState.LOADING
        self.snapshot: Optional[DashboardSnapshot] = None
        self.error: Optional[Exception] = None

    def subscribe(self, listener: Callable[["AttendancePoller"], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def start(self) -> None:
        """Load once immediately, then keep polling."""
        self.enabled = True
        self.refresh_now()
        self._schedule()

    def set_enabled(self, enabled: bool) -> None:
        if enabled == self.enabled:
            return
        self.enabled = enabled
        if enabled:
            self._schedule()
        else:
            self._cancel()

    def stop(self) -> None:
        self.enabled = False
        self._cancel()

    @property
    def pending(self) -> bool:
        return self._timer is not None

    def refresh_now(self) -> None:
        try:
            snapshot = self._load_fn()
        except Exception as e:
            logger.warning("Dashboard refresh failed: %s", e)
            self.state = LoadState.ERROR
            self.error = e
        else:
            self.state = LoadState.LOADED
            self.snapshot = snapshot
            self.error = None

        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Dashboard listener failed")

    def _tick(self) -> None:
        with self._lock:
            self._timer = None
        if not self.enabled:
            return
        self.refresh_now()
        self._schedule()

    def _schedule(self) -> None:
        with self._lock:
            if not self.enabled or self._timer is not None:
                return
            timer = self._timer_factory(self._interval, self._tick)
            timer.daemon = True
            self._timer = timer
        timer.start()

    def _cancel(self) -> None:
        with self._lock:
            timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()
