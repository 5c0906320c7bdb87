from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Status stored on an attendance record."""

    PRESENT = "present"


class FlowState(str, Enum):
    """States of the public attendance marking flow."""

    UNRESOLVED = "unresolved"
    OPEN = "open"
    UNAVAILABLE = "unavailable"
    ALREADY_MARKED = "already_marked"


class UnavailableReason(str, Enum):
    NOT_FOUND = "not found"
    INACTIVE = "inactive"
    EXPIRED = "expired"


class LoadState(str, Enum):
    """Dashboard polling state."""

    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


class AuthEvent(str, Enum):
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
