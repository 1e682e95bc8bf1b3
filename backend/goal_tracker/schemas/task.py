from datetime import datetime

from pydantic import BaseModel, field_validator


class TitleMixin(BaseModel):
    """Shared validation for user supplied titles."""
    title: str

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("title must not be empty")
        return value


class TaskCreate(TitleMixin):
    """Task creation schema."""
    pass


class SubtaskCreate(TitleMixin):
    """Subtask creation schema."""
    pass


class SubtaskResponse(BaseModel):
    """Subtask response schema."""
    id: int
    task_id: int
    title: str
    completed: bool
    photo_url: str | None = None
    completed_at: datetime | None = None

    class Config:
        from_attributes = True


class TaskResponse(BaseModel):
    """Task response schema with its subtasks."""
    id: int
    user_id: str
    title: str
    created_at: datetime
    subtasks: list[SubtaskResponse] = []

    class Config:
        from_attributes = True


class PhotoResponse(SubtaskResponse):
    """A photographed subtask annotated with its task title."""
    task_title: str
