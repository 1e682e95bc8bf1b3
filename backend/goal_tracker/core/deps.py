from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from goal_tracker.config import get_settings
from goal_tracker.core.security import decode_session_token
from goal_tracker.database import get_db
from goal_tracker.models.user import User

settings = get_settings()


def get_session_profile(request: Request) -> Optional[dict]:
    """Profile stored in the session cookie, or None without a valid session."""
    token = request.cookies.get(settings.session_cookie_name)
    if not token:
        return None
    return decode_session_token(token)


def get_current_user_optional(
    profile: Optional[dict] = Depends(get_session_profile),
    db: Session = Depends(get_db)
) -> Optional[User]:
    """Get the session user. Returns None if not authenticated."""
    if profile is None:
        return None
    return db.query(User).filter(User.id == profile["sub"]).first()


def get_current_user(
    current_user: Optional[User] = Depends(get_current_user_optional)
) -> User:
    """Get the current authenticated user."""
    if current_user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    return current_user
