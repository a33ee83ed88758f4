from .record import Record
from .status import UNCHANGED, TaskStatus, next_status, transition
from .task import apply_update, find_task, new_task, reorder, tasks_in_list
from .user import (
    DEFAULT_TASK_LIST_NAME,
    find_by_email,
    lists_owned_by,
    new_id,
    new_task_list,
    new_user,
    public_user,
    utc_now,
)

# Export all models for easy importing
__all__ = [
    "Record",
    "TaskStatus",
    "UNCHANGED",
    "transition",
    "next_status",
    "new_task",
    "apply_update",
    "reorder",
    "find_task",
    "tasks_in_list",
    "DEFAULT_TASK_LIST_NAME",
    "new_id",
    "new_user",
    "new_task_list",
    "public_user",
    "find_by_email",
    "lists_owned_by",
    "utc_now",
]
