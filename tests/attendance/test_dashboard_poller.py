from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from src.cohort_tracker.cohort_tracker.attendance.dashboard import (
    AttendanceDashboardService,
    AttendancePoller,
    DashboardSnapshot,
)
from src.cohort_tracker.cohort_tracker.attendance.model import AttendanceRecord, AttendanceSession
from src.cohort_tracker.cohort_tracker.core.enums import AttendanceStatus, LoadState
from src.cohort_tracker.cohort_tracker.core.exceptions import NotFoundError, StoreError

SESSION = AttendanceSession(
    session_id=1,
    session_name="Week 1",
    session_code="abcd1234",
    public_id="pub1",
    session_date=date(2026, 2, 1),
    is_active=False,
    expires_at=datetime(2026, 2, 2),
)


class FakeTimer:
    created: list["FakeTimer"] = []

    def __init__(self, interval, fn):
        self.interval = interval
        self.fn = fn
        self.daemon = False
        self.started = False
        self.cancelled = False
        FakeTimer.created.append(self)

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        self.fn()


@pytest.fixture(autouse=True)
def _reset_timers():
    FakeTimer.created = []
    yield
    FakeTimer.created = []


class InMemorySessions:
    def get_by_public_id(self, public_id):
        return SESSION if public_id == SESSION.public_id else None


class InMemoryRecords:
    def list_for_session(self, session_id):
        return [
            AttendanceRecord(1, session_id, "Ana", AttendanceStatus.PRESENT, datetime(2026, 2, 1, 9, 0)),
            AttendanceRecord(2, session_id, "Ben", AttendanceStatus.PRESENT, datetime(2026, 2, 1, 9, 5)),
        ]


def test_dashboard_load_includes_records_and_inactive_notice():
    snapshot = AttendanceDashboardService(InMemorySessions(), InMemoryRecords()).load("pub1")

    assert snapshot.present_count == 2
    assert [r.student_name for r in snapshot.records] == ["Ana", "Ben"]
    assert snapshot.notice == "This attendance session is no longer active"
    assert snapshot.to_dict()["session"]["public_id"] == "pub1"


def test_dashboard_unknown_public_id():
    with pytest.raises(NotFoundError):
        AttendanceDashboardService(InMemorySessions(), InMemoryRecords()).load("nope")


def _counting_loader():
    calls = {"n": 0}

    def load():
        calls["n"] += 1
        return DashboardSnapshot(session=SESSION, records=[])

    return load, calls


def test_poller_loads_immediately_then_on_each_tick():
    load, calls = _counting_loader()
    poller = AttendancePoller(load, interval=30, timer_factory=FakeTimer)

    poller.start()
    assert calls["n"] == 1
    assert poller.state == LoadState.LOADED
    assert len(FakeTimer.created) == 1
    assert FakeTimer.created[0].interval == 30
    assert FakeTimer.created[0].daemon is True

    FakeTimer.created[0].fire()
    assert calls["n"] == 2
    assert len(FakeTimer.created) == 2

    poller.stop()


def test_stop_cancels_pending_timer():
    load, calls = _counting_loader()
    poller = AttendancePoller(load, timer_factory=FakeTimer)
    poller.start()

    poller.stop()

    assert FakeTimer.created[-1].cancelled
    assert not poller.pending

    # A tick racing with stop() does nothing.
    FakeTimer.created[-1].fire()
    assert calls["n"] == 1


def test_disable_and_reenable_does_not_stack_timers():
    load, _ = _counting_loader()
    poller = AttendancePoller(load, timer_factory=FakeTimer)
    poller.start()

    poller.set_enabled(False)
    assert FakeTimer.created[0].cancelled
    poller.set_enabled(True)
    poller.set_enabled(True)

    live = [t for t in FakeTimer.created if not t.cancelled]
    assert len(live) == 1
    poller.stop()


def test_manual_refresh_and_error_state_notify_listeners():
    outcomes = iter([StoreError("down"), DashboardSnapshot(session=SESSION)])

    def load():
        item = next(outcomes)
        if isinstance(item, Exception):
            raise item
        return item

    seen = []
    poller = AttendancePoller(load, timer_factory=FakeTimer)
    unsubscribe = poller.subscribe(lambda p: seen.append(p.state))

    poller.refresh_now()
    assert poller.state == LoadState.ERROR
    assert isinstance(poller.error, StoreError)

    poller.refresh_now()
    assert poller.state == LoadState.LOADED
    assert poller.error is None
    assert seen == [LoadState.ERROR, LoadState.LOADED]

    unsubscribe()
    assert FakeTimer.created == []


def test_failing_listener_does_not_stop_polling():
    load, calls = _counting_loader()
    poller = AttendancePoller(load, timer_factory=FakeTimer)

    def listener(p):
        if calls["n"] >= 2:
            raise RuntimeError("display gone")

    poller.subscribe(listener)
    poller.start()

    FakeTimer.created[-1].fire()

    assert calls["n"] == 2
    assert poller.state == LoadState.LOADED
    assert poller.enabled
    assert poller.pending
    assert len(FakeTimer.created) == 2
    poller.stop()
