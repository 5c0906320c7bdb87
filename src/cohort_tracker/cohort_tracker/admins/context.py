"""Explicit auth context passed to consumers instead of a process-wide singleton."""
from __future__ import annotations

import logging
from typing import Callable, Optional

from ..core.enums import AuthEvent
from ..core.exceptions import AuthorizationError, StoreError
from .model import Admin
from .service import AuthService, AuthSession

logger = logging.getLogger(__name__)


class AuthContext:
    """Holds the signed-in admin and a loading flag for one consumer.

    Lifecycle: init(token) reads the current session and subscribes to auth
    events; teardown() unsubscribes. Both must be called by the owner.
    """

    def __init__(self, auth: AuthService):
        self._auth = auth
        self._unsubscribe: Optional[Callable[[], None]] = None

        self.session: Optional[AuthSession] = None
        self.admin: Optional[Admin] = None
        self.loading = True

    def init(self, token: Optional[str]) -> "AuthContext":
        self._set_session(self._auth.current_session(token))
        self._unsubscribe = self._auth.on_auth_state_change(self._on_change)
        return self

    def teardown(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def __enter__(self) -> "AuthContext":
        return self

    def __exit__(self, *exc) -> None:
        self.teardown()

    @property
    def subscribed(self) -> bool:
        return self._unsubscribe is not None

    @property
    def admin_id(self) -> Optional[int]:
        return self.admin.admin_id if self.admin else None

    def require_admin(self) -> Admin:
        if self.admin is None:
            raise AuthorizationError("Admin sign-in required")
        return self.admin

    def sign_out(self) -> None:
        if self.session:
            self._auth.sign_out(self.session.token)

    def _on_change(self, event: AuthEvent, session: Optional[AuthSession]) -> None:
        # Only our own token matters; another admin signing in never leaks into this context.
        if self.session is None:
            return
        current = self._auth.current_session(self.session.token)
        if current is None:
            self._set_session(None)

    def _set_session(self, session: Optional[AuthSession]) -> None:
        self.session = session
        self.loading = True
        try:
            if session is None:
                self.admin = None
            else:
                self.admin = self._auth.load_admin(session.admin_id)
        except StoreError as e:
            logger.error("Error loading admin: %s", e)
            self.admin = None
        finally:
            self.loading = False
