import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from goal_tracker.core.deps import get_current_user
from goal_tracker.database import get_db
from goal_tracker.models.user import User
from goal_tracker.schemas.task import SubtaskResponse
from goal_tracker.services.task_service import TaskService
from goal_tracker.services.upload_service import (
    EmptyUpload,
    UnsupportedUploadType,
    UploadService,
    UploadTooLarge,
    get_upload_service,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/subtasks", tags=["subtasks"])

_UPLOAD_ERROR_STATUS = {
    EmptyUpload: status.HTTP_400_BAD_REQUEST,
    UnsupportedUploadType: status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
    UploadTooLarge: status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
}


def parse_completed(value: Optional[str]) -> bool:
    """Form values 'true' and '1' mean completed; anything else does not."""
    return (value or "").strip().lower() in ("true", "1")


@router.patch("/{subtask_id}", response_model=SubtaskResponse)
async def update_subtask(
    subtask_id: int,
    completed: Optional[str] = Form(None),
    photo: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    uploads: UploadService = Depends(get_upload_service),
):
    """Toggle a subtask, optionally attaching a photo as proof of completion."""
    subtask = TaskService.get_owned_subtask(db, subtask_id, current_user.id)
    if not subtask:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

    # The file is written before the row is updated; a failure in between leaves an orphaned file.
    photo_url = None
    if photo is not None:
        try:
            photo_url = await uploads.save(photo)
        except (EmptyUpload, UnsupportedUploadType, UploadTooLarge) as e:
            logger.warning(f"Rejected upload for subtask {subtask_id}: {e}")
            raise HTTPException(status_code=_UPLOAD_ERROR_STATUS[type(e)], detail=str(e)) from e

    released_url = TaskService.set_completion(db, subtask, parse_completed(completed), photo_url)
    if released_url and released_url != subtask.photo_url:
        await uploads.delete(released_url)

    return subtask
