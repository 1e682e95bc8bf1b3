from goal_tracker.schemas.settings import SettingsResponse, SuccessResponse
from goal_tracker.schemas.task import (
    PhotoResponse,
    SubtaskCreate,
    SubtaskResponse,
    TaskCreate,
    TaskResponse,
)
from goal_tracker.schemas.user import AuthUrlResponse, GoogleProfile, UserResponse

__all__ = [
    "UserResponse", "GoogleProfile", "AuthUrlResponse",
    "TaskCreate", "TaskResponse", "SubtaskCreate", "SubtaskResponse", "PhotoResponse",
    "SettingsResponse", "SuccessResponse",
]
