from datetime import datetime, timedelta, timezone
from typing import Any

from fastapi import Response
from jose import JWTError, jwt

from goal_tracker.config import get_settings

settings = get_settings()

# Profile fields copied from the identity provider into the session.
SESSION_PROFILE_FIELDS = ("email", "name", "picture")


def create_session_token(profile: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    """Sign a session token carrying the user's profile."""
    to_encode = {"sub": str(profile["id"])}
    for field in SESSION_PROFILE_FIELDS:
        to_encode[field] = profile.get(field)
    if expires_delta is None:
        expires_delta = timedelta(days=settings.session_max_age_days)
    to_encode["exp"] = datetime.now(timezone.utc) + expires_delta
    return jwt.encode(to_encode, settings.session_secret, algorithm=settings.session_algorithm)


def decode_session_token(token: str) -> dict | None:
    """Decode a session token, returning None when it is invalid or expired."""
    try:
        payload = jwt.decode(
            token, settings.session_secret, algorithms=[settings.session_algorithm]
        )
    except JWTError:
        return None
    if not payload.get("sub"):
        return None
    return payload


def set_session_cookie(response: Response, profile: dict[str, Any]) -> None:
    """Start a session by attaching the signed cookie to a response."""
    response.set_cookie(
        key=settings.session_cookie_name,
        value=create_session_token(profile),
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite=settings.session_cookie_samesite,
        max_age=settings.session_max_age_days * 24 * 60 * 60,
    )


def clear_session_cookie(response: Response) -> None:
    """End a session. Safe to call when no session exists."""
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite=settings.session_cookie_samesite,
    )
