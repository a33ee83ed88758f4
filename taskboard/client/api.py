import logging
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3000/api"


class ApiError(Exception):
    """A request to the task API failed.

    ``status_code`` is None when no response was received.
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ApiClient:
    """Thin JSON client for the task API."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        http: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ) -> None:
        self._owns_http = http is None
        self.http = http or httpx.Client(base_url=base_url, timeout=timeout)

    def close(self) -> None:
        if self._owns_http:
            self.http.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _request(self, method: str, path: str, json: Any = None) -> Any:
        try:
            response = self.http.request(method, path, json=json)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise ApiError(f"Request failed: {exc}") from exc

        if response.is_error:
            raise ApiError(_error_message(response), status_code=response.status_code)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # ---- auth ----

    def signup(self, email: str, password: str, created_at: Optional[str] = None) -> Dict[str, Any]:
        body = {"email": email, "password": password}
        if created_at:
            body["createdAt"] = created_at
        return self._request("POST", "/signup", json=body)

    def login(self, email: str, password: str) -> Dict[str, Any]:
        return self._request("POST", "/login", json={"email": email, "password": password})

    # ---- task lists and tasks ----

    def get_task_lists(self, user_id: str) -> List[Dict[str, Any]]:
        return self._request("GET", f"/users/{user_id}/tasklists")

    def get_tasks(self, task_list_id: str) -> List[Dict[str, Any]]:
        return self._request("GET", f"/tasklists/{task_list_id}/tasks")

    def create_task(self, task_list_id: str, title: str, description: str = "") -> Dict[str, Any]:
        return self._request(
            "POST",
            "/tasks",
            json={"taskListId": task_list_id, "title": title, "description": description},
        )

    def update_task(self, task_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PATCH", f"/tasks/{task_id}", json=updates)

    def delete_task(self, task_id: str) -> None:
        self._request("DELETE", f"/tasks/{task_id}")

    def reorder_tasks(self, task_list_id: str, ordered_task_ids: List[str]) -> Dict[str, Any]:
        return self._request(
            "POST",
            "/tasks/reorder",
            json={"taskListId": task_list_id, "orderedTaskIds": list(ordered_task_ids)},
        )


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return f"Request failed with status {response.status_code}"
