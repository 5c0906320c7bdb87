from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Admin
from .repository import AdminRepository


class MySQLAdminRepository(AdminRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, column: str, value) -> Optional[Admin]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT id, email, name, password_hash, created_at FROM admins WHERE {column}=%s",
                (value,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return Admin(
                admin_id=int(row["id"]),
                email=row["email"],
                name=row["name"],
                password_hash=row["password_hash"],
                created_at=row.get("created_at"),
            )

    def get_by_id(self, admin_id: int) -> Optional[Admin]:
        return self._get_one("id", int(admin_id))

    def get_by_email(self, email: str) -> Optional[Admin]:
        return self._get_one("email", email)

    def create(self, *, email: str, name: str, password_hash: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO admins(email, name, password_hash) VALUES(%s,%s,%s)",
                (email, name, password_hash),
            )
            return int(cur.lastrowid)
