import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from goal_tracker.core.deps import get_current_user_optional
from goal_tracker.core.security import clear_session_cookie, set_session_cookie
from goal_tracker.database import get_db
from goal_tracker.models.user import User
from goal_tracker.schemas.user import AuthUrlResponse, UserResponse
from goal_tracker.services.auth_service import AuthService
from goal_tracker.services.oauth_service import GoogleOAuthService, OAuthError, get_oauth_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/auth", tags=["auth"])

AUTH_ERROR_PATH = "/auth-error"

# Sent to the login popup: notify the opener and close, or fall back to the app root.
_AUTH_SUCCESS_PAGE = """<html>
  <body>
    <script>
      if (window.opener) {
        window.opener.postMessage({ type: 'OAUTH_AUTH_SUCCESS' }, '*');
        window.close();
      } else {
        window.location.href = '/';
      }
    </script>
    <p>Authentication successful. This window should close automatically.</p>
  </body>
</html>
"""


@router.get("/google/url", response_model=AuthUrlResponse)
async def google_auth_url(oauth: GoogleOAuthService = Depends(get_oauth_service)):
    """Get the Google consent screen URL."""
    return AuthUrlResponse(url=oauth.get_authorization_url())


@router.get("/google/callback")
async def google_callback(
    code: Optional[str] = Query(None),
    oauth: GoogleOAuthService = Depends(get_oauth_service),
    db: Session = Depends(get_db),
):
    """Finish the OAuth dance: fetch the profile, upsert the user, start a session."""
    try:
        profile = await oauth.fetch_profile(code)
    except OAuthError as e:
        logger.error(f"Failed to fetch Google user: {e}")
        return RedirectResponse(AUTH_ERROR_PATH, status_code=status.HTTP_302_FOUND)

    try:
        user = AuthService.upsert_user(db, profile)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to store Google user {profile.id}: {e}")
        return RedirectResponse(AUTH_ERROR_PATH, status_code=status.HTTP_302_FOUND)

    logger.info(f"User {user.id} logged in")

    response = HTMLResponse(content=_AUTH_SUCCESS_PAGE)
    set_session_cookie(response, profile.model_dump())
    return response


@router.get("/me", response_model=Optional[UserResponse])
async def get_current_user_info(current_user: Optional[User] = Depends(get_current_user_optional)):
    """Get current user information, or null when not logged in."""
    return current_user


@router.post("/logout")
async def logout():
    """Logout a user by clearing the session cookie."""
    response = JSONResponse(content={"success": True})
    clear_session_cookie(response)
    return response
