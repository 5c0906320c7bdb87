from __future__ import annotations

import secrets
import string

from ..core.constants import PUBLIC_ID_LENGTH, SESSION_CODE_LENGTH

BASE36_ALPHABET = string.digits + string.ascii_lowercase


def random_token(length: int) -> str:
    """Random lowercase base-36 token.

    Uniqueness is by luck only: nothing checks the token against existing sessions.
    """
    return "".join(secrets.choice(BASE36_ALPHABET) for _ in range(length))


def generate_session_code() -> str:
    return random_token(SESSION_CODE_LENGTH)


def generate_public_id() -> str:
    return random_token(PUBLIC_ID_LENGTH)
