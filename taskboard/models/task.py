from typing import Any, Dict, List, Optional, Sequence

from .status import UNCHANGED, TaskStatus, transition
from .user import new_id, utc_now


def tasks_in_list(tasks: List[Dict[str, Any]], task_list_id: str) -> List[Dict[str, Any]]:
    """Tasks belonging to one list, in storage order."""
    return [task for task in tasks if task.get("taskListId") == task_list_id]


def find_task(tasks: List[Dict[str, Any]], task_id: str) -> Optional[int]:
    """Index of the task with ``task_id`` in ``tasks``, or None."""
    for index, task in enumerate(tasks):
        if task.get("id") == task_id:
            return index
    return None


def new_task(
    task_list_id: str,
    title: str,
    description: Optional[str],
    tasks: List[Dict[str, Any]],
) -> Dict[str, Any]:
    """Task record appended at the end of its list.

    ``order`` is the number of tasks already in the list, so it is only
    contiguous until the first deletion.
    """
    now = utc_now()
    return {
        "id": new_id(),
        "taskListId": task_list_id,
        "title": title,
        "description": description or "",
        "status": TaskStatus.INCOMPLETE.value,
        "order": len(tasks_in_list(tasks, task_list_id)),
        "dueDate": None,
        "completedAt": None,
        "tags": [],
        "createdAt": now,
        "updatedAt": now,
    }


def apply_update(task: Dict[str, Any], updates: Dict[str, Any], now: Optional[str] = None) -> Dict[str, Any]:
    """Return ``task`` shallow-merged with ``updates``.

    Supplied fields overwrite existing ones verbatim, without type checks.
    A status change goes through :func:`transition` so ``completedAt`` is
    stamped or cleared; ``updatedAt`` is always refreshed.
    """
    now = now or utc_now()
    changes = dict(updates)
    if "status" in changes:
        status, completed_at = transition(task.get("status"), changes["status"], now)
        changes["status"] = status
        if completed_at is not UNCHANGED:
            changes["completedAt"] = completed_at

    merged = dict(task)
    merged.update(changes)
    merged["updatedAt"] = now
    return merged


def reorder(
    tasks: List[Dict[str, Any]],
    task_list_id: str,
    ordered_ids: Sequence[str],
    now: Optional[str] = None,
) -> int:
    """Assign ``order`` from each id's position in ``ordered_ids``, in place.

    Only tasks of ``task_list_id`` are touched. Tasks missing from
    ``ordered_ids`` keep their old ``order``, which may now collide with a
    newly assigned value. Returns the number of tasks updated.
    """
    now = now or utc_now()
    by_id = {task.get("id"): task for task in tasks_in_list(tasks, task_list_id)}
    matched = 0
    for position, task_id in enumerate(ordered_ids):
        task = by_id.get(task_id)
        if task is None:
            continue
        task["order"] = position
        task["updatedAt"] = now
        matched += 1
    return matched
