from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Admin:
    """Domain entity: Admin.

    Note: plain data object (no DB access code).
    """

    admin_id: int
    email: str
    name: str
    password_hash: str
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {"id": self.admin_id, "email": self.email, "name": self.name}
