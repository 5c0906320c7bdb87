from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import InterviewRound
from .repository import InterviewRepository


class MySQLInterviewRepository(InterviewRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self, *, limit: Optional[int] = None) -> Sequence[InterviewRound]:
        sql = """
            SELECT id, student_name, round_number, score, feedback, admin_id, created_at
            FROM interview_rounds
            ORDER BY created_at DESC, id DESC
        """
        params: tuple = ()
        if limit is not None:
            sql += " LIMIT %s"
            params = (int(limit),)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            rows = fetchall(cur)
            return [
                InterviewRound(
                    round_id=int(r["id"]),
                    student_name=r["student_name"],
                    round_number=int(r["round_number"]),
                    score=float(r["score"]),
                    created_at=r["created_at"],
                    feedback=r.get("feedback"),
                    admin_id=r.get("admin_id"),
                )
                for r in rows
            ]

    def create(
        self,
        *,
        student_name: str,
        round_number: int,
        score: float,
        feedback: Optional[str] = None,
        admin_id: Optional[int] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO interview_rounds(student_name, round_number, score, feedback, admin_id)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (student_name, int(round_number), score, feedback, admin_id),
            )
            return int(cur.lastrowid)

    def delete(self, *, round_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM interview_rounds WHERE id=%s", (int(round_id),))
            return cur.rowcount > 0
