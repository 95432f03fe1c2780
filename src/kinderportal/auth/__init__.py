"""Password hashing and cookie-session helpers."""

from .passwords import hash_password, verify_password
from .session import SESSION_USER_KEY, end_session, session_user_id, start_session

__all__ = [
    "hash_password",
    "verify_password",
    "SESSION_USER_KEY",
    "start_session",
    "end_session",
    "session_user_id",
]
