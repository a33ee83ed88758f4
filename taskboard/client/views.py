"""Helpers behind the dashboard: which tasks to show and how a drag reorders them."""

from typing import Any, Dict, Iterable, List, Optional, Sequence

from ..models import TaskStatus

STATUS_FILTERS = ("all",) + tuple(status.value for status in TaskStatus)


def tasks_for_view(tasks: Iterable[Dict[str, Any]], task_list_id: Optional[str]) -> List[Dict[str, Any]]:
    return sorted(
        (task for task in tasks if task.get("taskListId") == task_list_id),
        key=lambda task: task.get("order", 0),
    )


def filter_tasks(
    tasks: Iterable[Dict[str, Any]],
    search: str = "",
    tags: Sequence[str] = (),
    status: str = "all",
) -> List[Dict[str, Any]]:
    """Tasks matching the search text, carrying every tag, in the given status."""
    needle = search.lower()
    result = []
    for task in tasks:
        if needle:
            title = (task.get("title") or "").lower()
            description = (task.get("description") or "").lower()
            if needle not in title and needle not in description:
                continue
        task_tags = task.get("tags") or []
        if not all(tag in task_tags for tag in tags):
            continue
        if status != "all" and task.get("status") != status:
            continue
        result.append(task)
    return result


def all_tags(tasks: Iterable[Dict[str, Any]]) -> List[str]:
    return sorted({tag for task in tasks for tag in (task.get("tags") or [])})


def parse_tags(text: str) -> List[str]:
    """Split a comma separated tag field, dropping blanks."""
    return [tag.strip() for tag in text.split(",") if tag.strip()]


def move_task(tasks: Sequence[Dict[str, Any]], dragged_id: str, target_id: str) -> Optional[List[str]]:
    """Ids in their new order after dropping ``dragged_id`` onto ``target_id``.

    Returns None when nothing moves.
    """
    if dragged_id == target_id:
        return None
    ids = [task.get("id") for task in tasks]
    if dragged_id not in ids or target_id not in ids:
        return None
    target_index = ids.index(target_id)
    ids.remove(dragged_id)
    ids.insert(target_index, dragged_id)
    return ids


def default_task_list(
    task_lists: Sequence[Dict[str, Any]],
    user: Optional[Dict[str, Any]],
) -> Optional[Dict[str, Any]]:
    if not task_lists:
        return None
    default_id = (user or {}).get("defaultTaskListId")
    for task_list in task_lists:
        if task_list.get("id") == default_id:
            return task_list
    return task_lists[0]
