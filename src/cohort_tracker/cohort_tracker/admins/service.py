from __future__ import annotations

import logging
import secrets
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import now_utc
from ..common.validators import require_min_length, require_non_empty
from ..core.constants import DEFAULT_AUTH_SESSION_HOURS
from ..core.enums import AuthEvent
from ..core.exceptions import AuthenticationError, ConflictError, ValidationError
from .model import Admin
from .repository import AdminRepository

logger = logging.getLogger(__name__)

AuthListener = Callable[[AuthEvent, Optional["AuthSession"]], None]


@dataclass(frozen=True)
class AuthSession:
    """What we hand back to the caller after login (token kept in the Flask session)."""

    token: str
    admin_id: int
    email: str
    name: str
    created_at: datetime


class AuthService:
    """Use case: admin sign up / sign in / sign out.

    Session tokens live in an in-process registry and lapse after session_hours;
    lapsed tokens are pruned on every sign-in and lookup. Subscribers are told
    about SIGNED_IN / SIGNED_OUT events.
    """

    def __init__(
        self,
        admins: AdminRepository,
        *,
        clock: Callable[[], datetime] = now_utc,
        session_hours: float = DEFAULT_AUTH_SESSION_HOURS,
    ):
        self._admins = admins
        self._clock = clock
        self._ttl = timedelta(hours=session_hours)
        self._sessions: dict[str, AuthSession] = {}
        self._listeners: list[AuthListener] = []
        self._lock = threading.Lock()

    def on_auth_state_change(self, listener: AuthListener) -> Callable[[], None]:
        """Subscribe to auth events. Returns the unsubscribe callable."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: AuthEvent, session: Optional[AuthSession]) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener(event, session)

    def _open_session(self, admin: Admin) -> AuthSession:
        session = AuthSession(
            token=secrets.token_urlsafe(32),
            admin_id=admin.admin_id,
            email=admin.email,
            name=admin.name,
            created_at=self._clock(),
        )
        with self._lock:
            self._prune_locked(session.created_at)
            self._sessions[session.token] = session
        self._emit(AuthEvent.SIGNED_IN, session)
        return session

    def sign_up(self, *, email: str, password: str, name: str) -> AuthSession:
        email = require_non_empty(email, "Email").lower()
        name = require_non_empty(name, "Name")
        require_min_length(password, "Password", 6)

        if self._admins.get_by_email(email):
            raise ValidationError("Email already registered")

        try:
            admin_id = self._admins.create(email=email, name=name, password_hash=generate_password_hash(password))
        except ConflictError:
            raise ValidationError("Email already registered")

        logger.info("Admin %s registered", email)
        return self._open_session(Admin(admin_id=admin_id, email=email, name=name, password_hash=""))

    def sign_in(self, *, email: str, password: str) -> AuthSession:
        admin = self._admins.get_by_email((email or "").strip().lower())
        if not admin:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(admin.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")
        return self._open_session(admin)

    def sign_out(self, token: Optional[str]) -> None:
        with self._lock:
            session = self._sessions.pop(token, None) if token else None
        if session:
            self._emit(AuthEvent.SIGNED_OUT, None)

    def current_session(self, token: Optional[str]) -> Optional[AuthSession]:
        if not token:
            return None
        with self._lock:
            self._prune_locked(self._clock())
            return self._sessions.get(token)

    def _prune_locked(self, now: datetime) -> None:
        lapsed = [t for t, s in self._sessions.items() if now - s.created_at >= self._ttl]
        for t in lapsed:
            del self._sessions[t]
        if lapsed:
            logger.debug("Pruned %d lapsed admin sessions", len(lapsed))

    def load_admin(self, admin_id: int) -> Optional[Admin]:
        return self._admins.get_by_id(admin_id)
