from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord, AttendanceSession, DayAttendance
from .repository import RecordRepository, SessionRepository

_SESSION_COLUMNS = """
    id, session_name, session_code, public_id, batch_name, session_date,
    is_active, expires_at, admin_id, created_at
"""


def _to_session(r: dict) -> AttendanceSession:
    return AttendanceSession(
        session_id=int(r["id"]),
        session_name=r["session_name"],
        session_code=r["session_code"],
        public_id=r["public_id"],
        session_date=r["session_date"],
        is_active=bool(r["is_active"]),
        expires_at=r["expires_at"],
        batch_name=r.get("batch_name"),
        admin_id=r.get("admin_id"),
        created_at=r.get("created_at"),
    )


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, column: str, value) -> Optional[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_SESSION_COLUMNS} FROM attendance_sessions WHERE {column}=%s LIMIT 1",
                (value,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return _to_session(r)

    def get_by_code(self, session_code: str) -> Optional[AttendanceSession]:
        return self._get_one("session_code", session_code)

    def get_by_public_id(self, public_id: str) -> Optional[AttendanceSession]:
        return self._get_one("public_id", public_id)

    def get_by_id(self, session_id: int) -> Optional[AttendanceSession]:
        return self._get_one("id", int(session_id))

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_sessions(session_name, session_code, public_id, batch_name,
                                                session_date, is_active, expires_at, admin_id)
                VALUES(%s,%s,%s,%s,%s,1,%s,%s)
                """,
                (session_name, session_code, public_id, batch_name, session_date, expires_at, admin_id),
            )
            return int(cur.lastrowid)

    def list_recent(self, *, limit: int) -> Sequence[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_SESSION_COLUMNS}
                FROM attendance_sessions
                ORDER BY session_date DESC, id DESC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [_to_session(r) for r in fetchall(cur)]

    def set_active(self, *, session_id: int, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance_sessions SET is_active=%s WHERE id=%s",
                (1 if is_active else 0, int(session_id)),
            )
            return cur.rowcount > 0

    def delete(self, *, session_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_sessions WHERE id=%s", (int(session_id),))
            return cur.rowcount > 0

    def month_overview(self, *, start: date, end: date) -> Sequence[DayAttendance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT s.id, s.session_date, s.session_name, COUNT(r.id) AS record_count
                FROM attendance_sessions s
                LEFT JOIN attendance_records r ON r.session_id = s.id
                WHERE s.session_date BETWEEN %s AND %s
                GROUP BY s.id, s.session_date, s.session_name
                ORDER BY s.session_date ASC, s.id ASC
                """,
                (start, end),
            )
            return [
                DayAttendance(
                    session_date=r["session_date"],
                    session_id=int(r["id"]),
                    session_name=r["session_name"],
                    count=int(r["record_count"] or 0),
                )
                for r in fetchall(cur)
            ]


class MySQLRecordRepository(RecordRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, session_id: int, student_name: str, status: AttendanceStatus, marked_at: datetime) -> int:
        # uq_attendance_session_student surfaces duplicates as ConflictError via db_cursor.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(session_id, student_name, status, marked_at)
                VALUES(%s,%s,%s,%s)
                """,
                (int(session_id), student_name, status.value, marked_at),
            )
            return int(cur.lastrowid)

    def list_for_session(self, session_id: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, session_id, student_name, status, marked_at
                FROM attendance_records
                WHERE session_id=%s
                ORDER BY marked_at ASC, id ASC
                """,
                (int(session_id),),
            )
            return [
                AttendanceRecord(
                    record_id=int(r["id"]),
                    session_id=int(r["session_id"]),
                    student_name=r["student_name"],
                    status=AttendanceStatus(r["status"]),
                    marked_at=r["marked_at"],
                )
                for r in fetchall(cur)
            ]
