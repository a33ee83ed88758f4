"""Client-side state for task lists and tasks.

The stores mirror what the API returns, keep a copy on disk between runs and
apply mutations optimistically, restoring the previous state if the server
rejects them. Actions do not coordinate with each other: state follows the
order in which calls complete.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from ..models import reorder, utc_now
from .api import ApiClient, ApiError
from .commands import OptimisticCommand

logger = logging.getLogger(__name__)


class _PersistedState:
    """Keeps selected attributes in a JSON file, like browser local storage."""

    persisted_fields: Sequence[str] = ()

    def __init__(self, storage_path: Optional[Union[str, Path]] = None) -> None:
        self.storage_path = Path(storage_path) if storage_path else None

    def _restore(self) -> None:
        if self.storage_path is None or not self.storage_path.exists():
            return
        try:
            data = json.loads(self.storage_path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("Ignoring unreadable client state in %s", self.storage_path)
            return
        if not isinstance(data, dict):
            logger.warning("Ignoring client state in %s: not a JSON object", self.storage_path)
            return
        for name in self.persisted_fields:
            if name in data:
                setattr(self, name, data[name])

    def _persist(self) -> None:
        if self.storage_path is None:
            return
        data = {name: getattr(self, name) for name in self.persisted_fields}
        self.storage_path.parent.mkdir(parents=True, exist_ok=True)
        self.storage_path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def set(self, **changes: Any) -> None:
        for name, value in changes.items():
            setattr(self, name, value)
        self._persist()


class TaskStore(_PersistedState):
    persisted_fields = ("task_lists", "tasks")

    def __init__(self, api: ApiClient, storage_path: Optional[Union[str, Path]] = None) -> None:
        super().__init__(storage_path)
        self.api = api
        self.task_lists: List[Dict[str, Any]] = []
        self.tasks: List[Dict[str, Any]] = []
        self.loading = False
        self.error: Optional[str] = None
        self._restore()

    def _optimistic(self, forward) -> OptimisticCommand:
        command = OptimisticCommand(
            snapshot=self.tasks,
            forward=forward,
            restore=lambda tasks: self.set(tasks=tasks),
        )
        command.apply()
        return command

    def fetch_task_lists(self, user_id: str) -> None:
        if not self.task_lists:
            self.set(loading=True)
        self.set(error=None)
        try:
            task_lists = self.api.get_task_lists(user_id)
        except ApiError as exc:
            logger.warning("Fetching task lists for %s failed: %s", user_id, exc)
            self.set(error="Failed to fetch task lists", loading=False)
            return
        self.set(task_lists=task_lists, loading=False)

    def fetch_tasks(self, task_list_id: str) -> None:
        if not any(task.get("taskListId") == task_list_id for task in self.tasks):
            self.set(loading=True)
        self.set(error=None)
        try:
            fetched = self.api.get_tasks(task_list_id)
        except ApiError as exc:
            logger.warning("Fetching tasks of %s failed: %s", task_list_id, exc)
            self.set(error="Failed to fetch tasks", loading=False)
            return
        others = [task for task in self.tasks if task.get("taskListId") != task_list_id]
        self.set(tasks=others + list(fetched), loading=False)

    def add_task(self, task_list_id: str, title: str, description: str = "") -> Dict[str, Any]:
        try:
            created = self.api.create_task(task_list_id, title, description)
        except Exception:
            self.set(error="Failed to add task")
            raise
        self.set(tasks=self.tasks + [created])
        return created

    def update_task(self, task_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        def forward() -> None:
            now = utc_now()
            self.set(tasks=[
                {**task, **updates, "updatedAt": now} if task.get("id") == task_id else task
                for task in self.tasks
            ])

        command = self._optimistic(forward)
        try:
            updated = self.api.update_task(task_id, updates)
        except Exception:
            command.rollback()
            self.set(error="Failed to update task")
            raise
        # The server copy replaces the optimistic one wholesale.
        self.set(tasks=[updated if task.get("id") == task_id else task for task in self.tasks])
        return updated

    def delete_task(self, task_id: str) -> None:
        def forward() -> None:
            self.set(tasks=[task for task in self.tasks if task.get("id") != task_id])

        command = self._optimistic(forward)
        try:
            self.api.delete_task(task_id)
        except Exception:
            command.rollback()
            self.set(error="Failed to delete task")
            raise

    def reorder_tasks(self, task_list_id: str, ordered_task_ids: Sequence[str]) -> None:
        def forward() -> None:
            tasks = [dict(task) for task in self.tasks]
            reorder(tasks, task_list_id, ordered_task_ids)
            tasks.sort(key=lambda task: task.get("order", 0))
            self.set(tasks=tasks)

        command = self._optimistic(forward)
        try:
            self.api.reorder_tasks(task_list_id, list(ordered_task_ids))
        except Exception:
            command.rollback()
            self.set(error="Failed to reorder tasks")
            raise

    def clear_store(self) -> None:
        self.set(task_lists=[], tasks=[], error=None, loading=False)


class AuthStore(_PersistedState):
    """The logged-in user, if any."""

    persisted_fields = ("user",)

    def __init__(self, storage_path: Optional[Union[str, Path]] = None) -> None:
        super().__init__(storage_path)
        self.user: Optional[Dict[str, Any]] = None
        self._restore()

    def login(self, user: Dict[str, Any]) -> None:
        self.set(user=user)

    def logout(self) -> None:
        self.set(user=None)
