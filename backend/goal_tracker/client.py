"""Python client for the Goal Tracker API.

Keeps the task list, photo list and ads flag in memory and patches them
locally after each successful mutation instead of refetching. Failed requests
are logged and leave local state untouched; nothing is retried.
"""
import logging
from collections import OrderedDict
from typing import Any, BinaryIO, Optional, Union

import httpx

from goal_tracker.schemas.task import PhotoResponse, SubtaskResponse, TaskResponse
from goal_tracker.services.gallery import group_photos_by_date

logger = logging.getLogger(__name__)

# (filename, content, content_type) as accepted by httpx multipart uploads
PhotoUpload = tuple[str, Union[bytes, BinaryIO], str]


class GoalTrackerClient:
    """Client application state backed by the HTTP API."""

    def __init__(self, http: httpx.Client):
        self.http = http
        self.tasks: list[TaskResponse] = []
        self.photos: list[PhotoResponse] = []
        # Hide ads until the server says otherwise
        self.ads_removed = True

    def _request(self, method: str, url: str, **kwargs) -> Optional[Any]:
        try:
            response = self.http.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"{method} {url} failed: {e}")
            return None
        return response.json()

    def refresh(self) -> None:
        """Load tasks, photos and settings."""
        self.fetch_tasks()
        self.fetch_photos()
        self.fetch_settings()

    def fetch_settings(self) -> bool:
        data = self._request("GET", "/api/settings")
        if data is not None:
            self.ads_removed = bool(data["adsRemoved"])
        return self.ads_removed

    def fetch_tasks(self) -> list[TaskResponse]:
        data = self._request("GET", "/api/tasks")
        if data is not None:
            self.tasks = [TaskResponse.model_validate(task) for task in data]
        return self.tasks

    def fetch_photos(self) -> list[PhotoResponse]:
        data = self._request("GET", "/api/photos")
        if data is not None:
            self.photos = [PhotoResponse.model_validate(photo) for photo in data]
        return self.photos

    def login_url(self) -> Optional[str]:
        """URL of the Google consent screen to open in a browser."""
        data = self._request("GET", "/api/auth/google/url")
        return data["url"] if data is not None else None

    def me(self) -> Optional[dict]:
        return self._request("GET", "/api/auth/me")

    def logout(self) -> bool:
        if self._request("POST", "/api/auth/logout") is None:
            return False
        self.tasks = []
        self.photos = []
        self.fetch_settings()
        return True

    def remove_ads(self) -> bool:
        """Flip the per-user ads flag."""
        if self._request("POST", "/api/settings/remove-ads") is None:
            return False
        self.ads_removed = True
        return True

    def add_task(self, title: str) -> Optional[TaskResponse]:
        title = title.strip()
        if not title:
            return None
        data = self._request("POST", "/api/tasks", json={"title": title})
        if data is None:
            return None
        task = TaskResponse.model_validate(data)
        self.tasks.insert(0, task)
        return task

    def delete_task(self, task_id: int) -> bool:
        if self._request("DELETE", f"/api/tasks/{task_id}") is None:
            return False
        self.tasks = [task for task in self.tasks if task.id != task_id]
        self.photos = [photo for photo in self.photos if photo.task_id != task_id]
        return True

    def add_subtask(self, task_id: int, title: str) -> Optional[SubtaskResponse]:
        title = title.strip()
        if not title:
            return None
        data = self._request("POST", f"/api/tasks/{task_id}/subtasks", json={"title": title})
        if data is None:
            return None
        subtask = SubtaskResponse.model_validate(data)
        for task in self.tasks:
            if task.id == task_id:
                task.subtasks.append(subtask)
        return subtask

    def toggle_subtask(
        self,
        task_id: int,
        subtask_id: int,
        completed: bool,
        photo: Optional[PhotoUpload] = None,
    ) -> Optional[SubtaskResponse]:
        """Mark a subtask complete or incomplete, optionally with a photo."""
        form = {"completed": "true" if completed else "false"}
        files = {"photo": photo} if photo is not None else None
        data = self._request("PATCH", f"/api/subtasks/{subtask_id}", data=form, files=files)
        if data is None:
            return None

        updated = SubtaskResponse.model_validate(data)
        for task in self.tasks:
            if task.id == task_id:
                task.subtasks = [updated if s.id == subtask_id else s for s in task.subtasks]

        if photo is not None:
            self.fetch_photos()
        elif updated.photo_url is None:
            self.photos = [p for p in self.photos if p.id != subtask_id]
        return updated

    def gallery(self) -> "OrderedDict[str, list[PhotoResponse]]":
        """Photos grouped under date headers, newest date first."""
        return group_photos_by_date(self.photos)
