from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from goal_tracker.core.deps import get_current_user
from goal_tracker.database import get_db
from goal_tracker.models.user import User
from goal_tracker.schemas.task import PhotoResponse, SubtaskResponse
from goal_tracker.services.task_service import TaskService

router = APIRouter(prefix="/api/photos", tags=["photos"])


@router.get("", response_model=list[PhotoResponse])
async def list_photos(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List completion photos for the current user, latest first."""
    return [
        PhotoResponse(**SubtaskResponse.model_validate(subtask).model_dump(), task_title=task_title)
        for subtask, task_title in TaskService.list_photos(db, current_user.id)
    ]
