from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from goal_tracker.database import Base


class Task(Base):
    """A goal owned by a single user."""

    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(Text, nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    # Relationships
    user = relationship("User", back_populates="tasks")
    subtasks = relationship(
        "Subtask",
        back_populates="task",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Subtask.id",
    )

    def __repr__(self):
        return f"<Task(id={self.id}, user_id='{self.user_id}', title='{self.title}')>"


class Subtask(Base):
    """An actionable step of a task, optionally evidenced by a photo."""

    __tablename__ = "subtasks"

    id = Column(Integer, primary_key=True, index=True)
    task_id = Column(
        Integer, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(Text, nullable=False)
    completed = Column(Boolean, default=False, nullable=False)
    photo_url = Column(String, nullable=True)
    completed_at = Column(DateTime, nullable=True)

    # Relationships
    task = relationship("Task", back_populates="subtasks")

    def __repr__(self):
        return f"<Subtask(id={self.id}, task_id={self.task_id}, completed={self.completed})>"
