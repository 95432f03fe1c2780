"""
Session Helpers

The session itself is a signed cookie managed by Starlette's
SessionMiddleware; these helpers only read and write the user id in it.
"""

from uuid import UUID

from fastapi import Request

SESSION_USER_KEY = "user_id"


def start_session(request: Request, user_id: UUID) -> None:
    request.session.clear()
    request.session[SESSION_USER_KEY] = str(user_id)


def end_session(request: Request) -> None:
    request.session.clear()


def session_user_id(request: Request) -> UUID | None:
    """User id stored in the session cookie, or None if absent or tampered."""
    raw = request.session.get(SESSION_USER_KEY)
    if not raw:
        return None
    try:
        return UUID(str(raw))
    except ValueError:
        return None
