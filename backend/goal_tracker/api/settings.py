from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from goal_tracker.core.deps import get_current_user, get_current_user_optional
from goal_tracker.database import get_db
from goal_tracker.models.setting import ADS_REMOVED_KEY, get_flag
from goal_tracker.models.user import User
from goal_tracker.schemas.settings import SettingsResponse, SuccessResponse
from goal_tracker.services.auth_service import AuthService

router = APIRouter(prefix="/api/settings", tags=["settings"])


@router.get("", response_model=SettingsResponse)
async def get_app_settings(
    current_user: Optional[User] = Depends(get_current_user_optional),
    db: Session = Depends(get_db)
):
    """Ads gate for the visitor: the user's own flag, or the global one when anonymous."""
    if current_user is not None:
        return SettingsResponse(ads_removed=current_user.ads_removed)
    return SettingsResponse(ads_removed=get_flag(db, ADS_REMOVED_KEY))


@router.post("/remove-ads", response_model=SuccessResponse)
async def remove_ads(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Remove ads for the current user."""
    AuthService.remove_ads(db, current_user)
    return SuccessResponse()
