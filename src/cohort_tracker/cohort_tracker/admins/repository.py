from __future__ import annotations

from typing import Optional, Protocol

from .model import Admin


class AdminRepository(Protocol):
    """Repository interface for Admin.

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    """

    def get_by_id(self, admin_id: int) -> Optional[Admin]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Admin]:
        raise NotImplementedError

    def create(self, *, email: str, name: str, password_hash: str) -> int:
        """Raises ConflictError when the email is already registered."""

        raise NotImplementedError
