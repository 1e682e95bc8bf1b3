import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session, selectinload

from goal_tracker.models.task import Subtask, Task

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, matching the stored columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class TaskService:
    """Task and subtask operations scoped to the owning user.

    Every lookup re-derives ownership from the session user id, so a missing
    row and a row owned by someone else are indistinguishable (both None).
    """

    @staticmethod
    def get_owned_task(db: Session, task_id: int, user_id: str) -> Task | None:
        """Get a task by id only if it belongs to the user."""
        return db.query(Task).filter(Task.id == task_id, Task.user_id == user_id).first()

    @staticmethod
    def get_owned_subtask(db: Session, subtask_id: int, user_id: str) -> Subtask | None:
        """Get a subtask by id only if its parent task belongs to the user."""
        return (
            db.query(Subtask)
            .join(Task, Subtask.task_id == Task.id)
            .filter(Subtask.id == subtask_id, Task.user_id == user_id)
            .first()
        )

    @staticmethod
    def list_tasks(db: Session, user_id: str) -> list[Task]:
        """List the user's tasks, newest first, with subtasks loaded."""
        return (
            db.query(Task)
            .options(selectinload(Task.subtasks))
            .filter(Task.user_id == user_id)
            .order_by(Task.created_at.desc(), Task.id.desc())
            .all()
        )

    @staticmethod
    def create_task(db: Session, user_id: str, title: str) -> Task:
        """Create a task for the user."""
        task = Task(user_id=user_id, title=title)
        db.add(task)
        db.commit()
        db.refresh(task)
        logger.info(f"Created task {task.id} for user {user_id}")
        return task

    @staticmethod
    def delete_task(db: Session, task: Task) -> list[str]:
        """Delete a task together with all of its subtasks.

        Returns the photo URLs its subtasks referenced.
        """
        task_id = task.id
        released_urls = [s.photo_url for s in task.subtasks if s.photo_url]
        db.delete(task)
        db.commit()
        logger.info(f"Deleted task {task_id}")
        return released_urls

    @staticmethod
    def create_subtask(db: Session, task: Task, title: str) -> Subtask:
        """Create an incomplete subtask under a task."""
        subtask = Subtask(task_id=task.id, title=title, completed=False)
        db.add(subtask)
        db.commit()
        db.refresh(subtask)
        logger.info(f"Created subtask {subtask.id} under task {task.id}")
        return subtask

    @staticmethod
    def set_completion(
        db: Session, subtask: Subtask, completed: bool, photo_url: str | None = None
    ) -> str | None:
        """Apply a completion toggle to a subtask.

        Attaching a photo always completes the subtask. Marking it incomplete
        clears both the completion time and the photo reference. Returns the
        photo URL that is no longer referenced, if any.
        """
        released_url = None
        if photo_url is not None:
            released_url = subtask.photo_url
            subtask.completed = True
            subtask.photo_url = photo_url
            subtask.completed_at = utcnow()
        elif completed:
            subtask.completed = True
            subtask.completed_at = utcnow()
        else:
            released_url = subtask.photo_url
            subtask.completed = False
            subtask.completed_at = None
            subtask.photo_url = None

        db.commit()
        db.refresh(subtask)
        return released_url

    @staticmethod
    def list_photos(db: Session, user_id: str) -> list[tuple[Subtask, str]]:
        """List the user's photographed subtasks with their task titles, latest first."""
        return (
            db.query(Subtask, Task.title)
            .join(Task, Subtask.task_id == Task.id)
            .filter(Task.user_id == user_id, Subtask.photo_url.isnot(None))
            .order_by(Subtask.completed_at.desc(), Subtask.id.desc())
            .all()
        )
