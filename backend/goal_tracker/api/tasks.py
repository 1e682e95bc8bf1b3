from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from goal_tracker.core.deps import get_current_user
from goal_tracker.database import get_db
from goal_tracker.models.task import Task
from goal_tracker.models.user import User
from goal_tracker.schemas.settings import SuccessResponse
from goal_tracker.schemas.task import SubtaskCreate, SubtaskResponse, TaskCreate, TaskResponse
from goal_tracker.services.task_service import TaskService
from goal_tracker.services.upload_service import UploadService, get_upload_service

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


def _verify_task_access(task_id: int, user_id: str, db: Session) -> Task:
    """Verify the task belongs to the user."""
    task = TaskService.get_owned_task(db, task_id, user_id)
    if not task:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return task


@router.get("", response_model=list[TaskResponse])
async def list_tasks(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List all tasks for the current user."""
    return TaskService.list_tasks(db, current_user.id)


@router.post("", response_model=TaskResponse)
async def create_task(
    task_create: TaskCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a new task."""
    return TaskService.create_task(db, current_user.id, task_create.title)


@router.delete("/{task_id}", response_model=SuccessResponse)
async def delete_task(
    task_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    uploads: UploadService = Depends(get_upload_service),
):
    """Delete a task and its subtasks."""
    task = _verify_task_access(task_id, current_user.id, db)
    for photo_url in TaskService.delete_task(db, task):
        await uploads.delete(photo_url)
    return SuccessResponse()


@router.post("/{task_id}/subtasks", response_model=SubtaskResponse)
async def create_subtask(
    task_id: int,
    subtask_create: SubtaskCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Add a subtask to a task."""
    task = _verify_task_access(task_id, current_user.id, db)
    return TaskService.create_subtask(db, task, subtask_create.title)
