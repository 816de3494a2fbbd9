"""Session helpers (issue tokens, cookies, validation)."""
from __future__ import annotations

import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Request, Response

from zavy.core.config import get_settings
from zavy.db.models import User, UserSession
from zavy.db.session import get_session

SESSION_COOKIE_NAME = "session"


def _as_utc(value: datetime) -> datetime:
    # SQLite devolve datetimes ingenuos mesmo com timezone=True.
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def issue_session(user_id: str) -> str:
    """Create a new session token for the user and persist it."""
    token = secrets.token_urlsafe(32)
    ttl = max(60, get_settings().session_ttl_seconds)
    expires_at = datetime.now(timezone.utc) + timedelta(seconds=ttl)

    with get_session() as session:
        session.add(UserSession(token=token, user_id=user_id, expires_at=expires_at))
        session.commit()
    return token


def user_for_token(token: str | None) -> Optional[User]:
    """Return the user bound to a live session token; expired tokens are removed."""
    if not token:
        return None
    now = datetime.now(timezone.utc)
    with get_session() as session:
        db_session = session.get(UserSession, token)
        if not db_session:
            return None
        if db_session.expires_at and _as_utc(db_session.expires_at) < now:
            session.delete(db_session)
            session.commit()
            return None
        return session.get(User, db_session.user_id)


def current_user(request: Request) -> Optional[User]:
    return user_for_token(request.cookies.get(SESSION_COOKIE_NAME))


def set_session_cookie(response: Response, token: str) -> None:
    settings = get_settings()
    response.set_cookie(
        SESSION_COOKIE_NAME,
        token,
        httponly=True,
        secure=settings.app_env == "prod",
        samesite="lax",
        max_age=settings.session_ttl_seconds,
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(SESSION_COOKIE_NAME, path="/")


def delete_session(token: str) -> None:
    """Remove a session token from the store."""
    if not token:
        return
    with get_session() as session:
        entity = session.get(UserSession, token)
        if entity:
            session.delete(entity)
            session.commit()
