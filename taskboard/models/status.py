import enum
from typing import Any, Optional, Tuple


class TaskStatus(str, enum.Enum):
    INCOMPLETE = "incomplete"
    PENDING = "pending"
    COMPLETE = "complete"


class _Unchanged:
    def __repr__(self) -> str:
        return "UNCHANGED"


# Returned by transition() when completedAt must be left as it is.
UNCHANGED = _Unchanged()

_CYCLE = {
    TaskStatus.INCOMPLETE.value: TaskStatus.PENDING,
    TaskStatus.PENDING.value: TaskStatus.COMPLETE,
    TaskStatus.COMPLETE.value: TaskStatus.INCOMPLETE,
}


def transition(current: Any, requested: Any, now: str) -> Tuple[Any, Any]:
    """Resolve a status change into ``(new_status, completed_at)``.

    Moving into ``complete`` from any other state stamps ``now``; moving to
    ``incomplete`` always clears the completion time. Every other request
    keeps ``completedAt`` untouched and is reported as ``UNCHANGED``.
    Unknown status values pass through as given.
    """
    if requested == TaskStatus.COMPLETE and current != TaskStatus.COMPLETE:
        return TaskStatus.COMPLETE.value, now
    if requested == TaskStatus.INCOMPLETE:
        return TaskStatus.INCOMPLETE.value, None
    return requested, UNCHANGED


def next_status(current: Optional[str]) -> str:
    """Status reached by clicking a task's checkbox once."""
    return _CYCLE.get(current, TaskStatus.INCOMPLETE).value
