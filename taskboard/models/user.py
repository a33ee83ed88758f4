from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

DEFAULT_TASK_LIST_NAME = "Tasks"


def utc_now() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def new_id() -> str:
    return str(uuid4())


def new_user(email: str, password_hash: str, created_at: Optional[str] = None) -> Dict[str, Any]:
    """User record as persisted in the ``users`` collection."""
    return {
        "id": new_id(),
        "email": email,
        "passwordHash": password_hash,
        "createdAt": created_at or utc_now(),
    }


def new_task_list(owner_id: str, name: str = DEFAULT_TASK_LIST_NAME) -> Dict[str, Any]:
    now = utc_now()
    return {
        "id": new_id(),
        "name": name,
        "ownerId": owner_id,
        "createdAt": now,
        "updatedAt": now,
    }


def public_user(user: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of a user record without its password hash."""
    return {key: value for key, value in user.items() if key != "passwordHash"}


def find_by_email(users: List[Dict[str, Any]], email: str) -> Optional[Dict[str, Any]]:
    for user in users:
        if user.get("email") == email:
            return user
    return None


def lists_owned_by(task_lists: List[Dict[str, Any]], user_id: str) -> List[Dict[str, Any]]:
    return [task_list for task_list in task_lists if task_list.get("ownerId") == user_id]
