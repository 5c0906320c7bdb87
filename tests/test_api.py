from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timedelta

import pytest
from werkzeug.security import generate_password_hash

from src.cohort_tracker.cohort_tracker.activeness.model import ActivenessRecord
from src.cohort_tracker.cohort_tracker.admins.model import Admin
from src.cohort_tracker.cohort_tracker.attendance.model import AttendanceRecord, AttendanceSession, DayAttendance
from src.cohort_tracker.cohort_tracker.container import build_services
from src.cohort_tracker.cohort_tracker.core.exceptions import ConflictError, StoreError
from src.cohort_tracker.cohort_tracker.interviews.model import InterviewRound
from src.cohort_tracker.cohort_tracker.main import create_app


class InMemoryAdmins:
    def __init__(self):
        self.rows = {
            1: Admin(admin_id=1, email="lead@example.com", name="Lead", password_hash=generate_password_hash("secret1"))
        }

    def get_by_id(self, admin_id):
        return self.rows.get(admin_id)

    def get_by_email(self, email):
        return next((a for a in self.rows.values() if a.email == email), None)

    def create(self, *, email, name, password_hash):
        aid = max(self.rows) + 1
        self.rows[aid] = Admin(admin_id=aid, email=email, name=name, password_hash=password_hash)
        return aid


class InMemoryInterviews:
    def __init__(self):
        self.rows = {}

    def list_all(self, *, limit=None):
        return sorted(self.rows.values(), key=lambda r: r.round_id, reverse=True)

    def create(self, *, student_name, round_number, score, feedback=None, admin_id=None):
        rid = len(self.rows) + 1
        self.rows[rid] = InterviewRound(
            round_id=rid,
            student_name=student_name,
            round_number=round_number,
            score=score,
            created_at=datetime(2026, 1, 1) + timedelta(days=rid),
            feedback=feedback,
            admin_id=admin_id,
        )
        return rid

    def delete(self, *, round_id):
        return self.rows.pop(round_id, None) is not None


class InMemoryActiveness:
    def __init__(self):
        self.rows = {}

    def list_ranked(self, *, limit=None):
        return sorted(self.rows.values(), key=lambda r: r.activeness_score, reverse=True)

    def create(self, *, student_name, activeness_score, duration_minutes=None, zoom_session_id=None, admin_id=None):
        rid = len(self.rows) + 1
        self.rows[rid] = ActivenessRecord(
            record_id=rid,
            student_name=student_name,
            activeness_score=activeness_score,
            created_at=datetime(2026, 1, 1),
            duration_minutes=duration_minutes,
            zoom_session_id=zoom_session_id,
            admin_id=admin_id,
        )
        return rid

    def delete(self, *, record_id):
        return self.rows.pop(record_id, None) is not None


class InMemorySessions:
    def __init__(self):
        self.rows = {}

    def _find(self, **kw):
        key, value = next(iter(kw.items()))
        return next((s for s in self.rows.values() if getattr(s, key) == value), None)

    def get_by_code(self, session_code):
        return self._find(session_code=session_code)

    def get_by_public_id(self, public_id):
        return self._find(public_id=public_id)

    def get_by_id(self, session_id):
        return self.rows.get(session_id)

    def create(self, *, session_name, session_code, public_id, session_date, expires_at, batch_name=None, admin_id=None):
        sid = len(self.rows) + 1
        self.rows[sid] = AttendanceSession(
            session_id=sid,
            session_name=session_name,
            session_code=session_code,
            public_id=public_id,
            session_date=session_date,
            is_active=True,
            expires_at=expires_at,
            batch_name=batch_name,
            admin_id=admin_id,
        )
        return sid

    def list_recent(self, *, limit):
        return list(self.rows.values())[:limit]

    def set_active(self, *, session_id, is_active):
        if session_id not in self.rows:
            return False
        self.rows[session_id] = replace(self.rows[session_id], is_active=is_active)
        return True

    def delete(self, *, session_id):
        return self.rows.pop(session_id, None) is not None

    def month_overview(self, *, start, end):
        return [
            DayAttendance(session_date=s.session_date, session_id=s.session_id, session_name=s.session_name, count=0)
            for s in self.rows.values()
            if start <= s.session_date <= end
        ]


class InMemoryRecords:
    def __init__(self):
        self.rows = {}
        self.fail_with = None

    def create(self, *, session_id, student_name, status, marked_at):
        if self.fail_with:
            raise self.fail_with
        if (session_id, student_name) in self.rows:
            raise ConflictError("Duplicate entry")
        rid = len(self.rows) + 1
        self.rows[(session_id, student_name)] = AttendanceRecord(rid, session_id, student_name, status, marked_at)
        return rid

    def list_for_session(self, session_id):
        return sorted((r for r in self.rows.values() if r.session_id == session_id), key=lambda r: r.marked_at)


@pytest.fixture()
def repos():
    return {
        "admins_repo": InMemoryAdmins(),
        "interviews_repo": InMemoryInterviews(),
        "activeness_repo": InMemoryActiveness(),
        "sessions_repo": InMemorySessions(),
        "records_repo": InMemoryRecords(),
    }


@pytest.fixture()
def client(repos):
    app = create_app(build_services(**repos), settings_module="config.testing")
    return app.test_client()


def _sign_in(client):
    resp = client.post("/auth/signin", json={"email": "lead@example.com", "password": "secret1"})
    assert resp.status_code == 200


def _open_session(client, **body):
    resp = client.post("/admin/sessions", json={"session_name": "Week 1", **body})
    assert resp.status_code == 201
    return resp.get_json()["session"]


def test_admin_endpoints_require_sign_in(client):
    assert client.get("/admin/interviews").status_code == 401
    assert client.post("/admin/sessions", json={"session_name": "x"}).status_code == 401


def test_session_endpoint_reflects_sign_in_and_out(client):
    assert client.get("/auth/session").get_json()["admin"] is None

    _sign_in(client)
    assert client.get("/auth/session").get_json()["admin"]["email"] == "lead@example.com"

    client.post("/auth/signout")
    assert client.get("/auth/session").get_json()["admin"] is None


def test_bad_credentials_return_401(client):
    resp = client.post("/auth/signin", json={"email": "lead@example.com", "password": "nope"})

    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_interview_rounds_feed_public_leaderboard(client, repos):
    _sign_in(client)
    for name, score in [("A", 10), ("A", 10), ("B", 0)]:
        assert client.post("/admin/interviews", json={"student_name": name, "score": score}).status_code == 201

    assert repos["interviews_repo"].rows[1].admin_id == 1

    board = client.get("/leaderboard").get_json()
    assert [s["name"] for s in board["students"]] == ["A", "B"]
    assert board["summary"]["average_score"] == pytest.approx(20 / 3)
    assert board["summary"]["total_students"] == 2


def test_out_of_range_interview_score_is_400(client, repos):
    _sign_in(client)

    resp = client.post("/admin/interviews", json={"student_name": "A", "score": 10.5})

    assert resp.status_code == 400
    assert repos["interviews_repo"].rows == {}


def test_activeness_board(client):
    _sign_in(client)
    assert client.post("/admin/activeness", json={"student_name": "A", "activeness_score": -1}).status_code == 400
    assert client.post("/admin/activeness", json={"student_name": "A", "activeness_score": 100}).status_code == 201

    records = client.get("/activeness").get_json()["records"]
    assert records[0]["activeness_score"] == 100

    assert client.delete("/admin/activeness/1").status_code == 200
    assert client.delete("/admin/activeness/1").status_code == 404


def test_public_attendance_marking_flow(client, repos):
    _sign_in(client)
    s = _open_session(client, batch_name="Cohort 3")
    assert s["attendance_url"] == f"http://testserver/attend/{s['session_code']}"
    client.post("/auth/signout")

    code = s["session_code"]
    assert client.get(f"/attend/{code}").get_json()["state"] == "open"

    first = client.post(f"/attend/{code}", json={"student_name": "Ana"})
    assert first.status_code == 201
    assert first.get_json()["state"] == "already_marked"

    again = client.post(f"/attend/{code}", json={"student_name": "Ana"})
    assert again.status_code == 200
    assert again.get_json()["already_marked"] is True
    assert len(repos["records_repo"].rows) == 1

    blank = client.post(f"/attend/{code}", json={"student_name": "   "})
    assert blank.status_code == 400

    view = client.get(f"/attendance/view/{s['public_id']}").get_json()
    assert view["present_count"] == 1
    assert view["poll_seconds"] == 30


def test_expired_and_unknown_sessions_are_unavailable(client, repos):
    repos["sessions_repo"].rows[1] = AttendanceSession(
        session_id=1,
        session_name="Old",
        session_code="oldcode1",
        public_id="oldpublic",
        session_date=date(2020, 1, 1),
        is_active=True,
        expires_at=datetime(2020, 1, 2),
    )

    expired = client.post("/attend/oldcode1", json={"student_name": "Ana"})
    assert expired.status_code == 410
    assert expired.get_json()["reason"] == "expired"
    assert repos["records_repo"].rows == {}

    missing = client.get("/attend/nothere1")
    assert missing.status_code == 404
    assert missing.get_json()["reason"] == "not found"


def test_store_failure_on_submit_is_retryable(client, repos):
    _sign_in(client)
    code = _open_session(client)["session_code"]
    repos["records_repo"].fail_with = StoreError("connection lost")

    resp = client.post(f"/attend/{code}", json={"student_name": "Ana"})
    assert resp.status_code == 503

    repos["records_repo"].fail_with = None
    assert client.post(f"/attend/{code}", json={"student_name": "Ana"}).status_code == 201


def test_deactivated_session_rejects_marking(client):
    _sign_in(client)
    s = _open_session(client)

    assert client.post(f"/admin/sessions/{s['id']}/deactivate").status_code == 200

    resp = client.post(f"/attend/{s['session_code']}", json={"student_name": "Ana"})
    assert resp.status_code == 410
    assert resp.get_json()["reason"] == "inactive"


def test_session_qr_and_calendar(client):
    _sign_in(client)
    s = _open_session(client, session_date="2026-02-14")

    qr = client.get(f"/admin/sessions/{s['id']}/qr")
    assert qr.status_code == 200
    assert qr.mimetype == "image/png"

    cal = client.get("/admin/sessions/calendar?year=2026&month=2").get_json()
    assert cal["days"]["2026-02-14"]["session_id"] == s["id"]


def test_bad_session_date_is_400(client):
    _sign_in(client)

    resp = client.post("/admin/sessions", json={"session_name": "Lab", "session_date": "14/02/2026"})

    assert resp.status_code == 400


def test_unknown_token_in_cookie_is_treated_as_signed_out(client):
    with client.session_transaction() as sess:
        sess["auth_token"] = "issued-by-another-process"

    assert client.get("/auth/session").get_json()["admin"] is None
    assert client.get("/admin/interviews").status_code == 401

    with client.session_transaction() as sess:
        assert "auth_token" not in sess
