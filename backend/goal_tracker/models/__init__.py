from goal_tracker.models.setting import AppSetting
from goal_tracker.models.task import Subtask, Task
from goal_tracker.models.user import User

__all__ = [
    "User",
    "Task",
    "Subtask",
    "AppSetting",
]
