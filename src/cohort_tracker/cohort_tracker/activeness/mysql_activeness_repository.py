from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import ActivenessRecord
from .repository import ActivenessRepository


class MySQLActivenessRepository(ActivenessRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_ranked(self, *, limit: Optional[int] = None) -> Sequence[ActivenessRecord]:
        sql = """
            SELECT id, student_name, activeness_score, duration_minutes, zoom_session_id, admin_id, created_at
            FROM activeness_records
            ORDER BY activeness_score DESC, created_at DESC
        """
        params: tuple = ()
        if limit is not None:
            sql += " LIMIT %s"
            params = (int(limit),)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            rows = fetchall(cur)
            return [
                ActivenessRecord(
                    record_id=int(r["id"]),
                    student_name=r["student_name"],
                    activeness_score=float(r["activeness_score"]),
                    created_at=r["created_at"],
                    duration_minutes=r.get("duration_minutes"),
                    zoom_session_id=r.get("zoom_session_id"),
                    admin_id=r.get("admin_id"),
                )
                for r in rows
            ]

    def create(
        self,
        *,
        student_name: str,
        activeness_score: float,
        duration_minutes: Optional[int] = None,
        zoom_session_id: Optional[str] = None,
        admin_id: Optional[int] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO activeness_records(student_name, activeness_score, duration_minutes, zoom_session_id, admin_id)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (student_name, activeness_score, duration_minutes, zoom_session_id, admin_id),
            )
            return int(cur.lastrowid)

    def delete(self, *, record_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM activeness_records WHERE id=%s", (int(record_id),))
            return cur.rowcount > 0
