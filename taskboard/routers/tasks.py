import json
import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from ..database import Storage, get_storage
from ..models import apply_update, find_task, lists_owned_by, new_task, reorder, tasks_in_list, utc_now
from ..schemas.task import Message, TaskCreate, TaskList as TaskListSchema, TaskReorder

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_task_index(tasks: List[Dict[str, Any]], task_id: str) -> int:
    index = find_task(tasks, task_id)
    if index is None:
        raise HTTPException(status_code=404, detail="Task not found.")
    return index


def _reject_constant(token: str) -> Any:
    raise ValueError(f"{token} is not valid JSON")


async def json_object_body(request: Request) -> Dict[str, Any]:
    """Request body as a JSON object, parsed strictly.

    ``NaN`` and ``Infinity`` are refused since they cannot be stored as JSON.
    """
    raw = await request.body()
    try:
        body = json.loads(raw, parse_constant=_reject_constant)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid request body.")
    if not isinstance(body, dict):
        raise HTTPException(status_code=400, detail="Invalid request body.")
    return body


@router.get("/users/{user_id}/tasklists", response_model=List[TaskListSchema])
def get_task_lists(
    user_id: str,
    storage: Storage = Depends(get_storage),
):
    """Task lists owned by a user."""
    task_lists = lists_owned_by(storage.get("taskLists"), user_id)
    logger.debug("User %s owns %d task lists", user_id, len(task_lists))
    return task_lists


@router.get("/tasklists/{task_list_id}/tasks")
def get_tasks(
    task_list_id: str,
    storage: Storage = Depends(get_storage),
) -> List[Dict[str, Any]]:
    """Tasks of one list in storage order; clients sort by ``order``."""
    return tasks_in_list(storage.get("tasks"), task_list_id)


@router.post("/tasks", status_code=status.HTTP_201_CREATED)
def create_task(
    task: TaskCreate,
    storage: Storage = Depends(get_storage),
) -> Dict[str, Any]:
    """Append a task to the end of a list."""
    if not task.task_list_id or not task.title:
        raise HTTPException(status_code=400, detail="Task list ID and title are required.")

    with storage.transaction() as db:
        if not any(task_list.get("id") == task.task_list_id for task_list in db["taskLists"]):
            raise HTTPException(status_code=404, detail="Task list not found.")

        db_task = new_task(task.task_list_id, task.title, task.description, db["tasks"])
        db["tasks"].append(db_task)

    logger.info("Created task %s in list %s at order %d", db_task["id"], task.task_list_id, db_task["order"])
    return db_task


@router.post("/tasks/reorder", response_model=Message)
def reorder_tasks(
    payload: TaskReorder,
    storage: Storage = Depends(get_storage),
):
    """Rewrite ``order`` of the listed tasks from their position in the request.

    Tasks of the list that are not mentioned keep their previous ``order``.
    """
    if not payload.task_list_id or payload.ordered_task_ids is None:
        raise HTTPException(status_code=400, detail="Task list ID and ordered task IDs are required.")

    with storage.transaction() as db:
        matched = reorder(db["tasks"], payload.task_list_id, payload.ordered_task_ids)

    logger.debug(
        "Reordered list %s: %d of %d ids matched",
        payload.task_list_id,
        matched,
        len(payload.ordered_task_ids),
    )
    return {"message": "Tasks reordered successfully."}


@router.patch("/tasks/{task_id}")
def update_task(
    task_id: str,
    updates: Dict[str, Any] = Depends(json_object_body),
    storage: Storage = Depends(get_storage),
) -> Dict[str, Any]:
    """Shallow-merge the request body into a task.

    Any field may be written with any JSON value. Status changes stamp or
    clear ``completedAt``.
    """
    with storage.transaction() as db:
        index = _get_task_index(db["tasks"], task_id)
        updated = apply_update(db["tasks"][index], updates, utc_now())
        db["tasks"][index] = updated

    return updated


@router.delete("/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: str,
    storage: Storage = Depends(get_storage),
):
    """Remove a task. Remaining tasks keep their ``order`` values."""
    with storage.transaction() as db:
        index = _get_task_index(db["tasks"], task_id)
        del db["tasks"][index]

    logger.info("Deleted task %s", task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
