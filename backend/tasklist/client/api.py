import logging
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

import httpx

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class TaskApi:
    """Thin JSON client for the task list endpoints.

    Works with any ``httpx.Client``; FastAPI's ``TestClient`` is one.
    """

    def __init__(self, http: httpx.Client, prefix: str = "/api"):
        self.http = http
        self.prefix = prefix.rstrip("/")

    def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = self.http.request(method, f"{self.prefix}{path}", **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise ApiError(f"Network error: {exc}") from exc

        if response.is_error:
            try:
                message = response.json().get("message") or response.reason_phrase
            except (ValueError, AttributeError):
                message = response.reason_phrase
            raise ApiError(message, response.status_code)
        return response.json()

    def list_tasks(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/tasks")

    def create_task(
        self,
        title: str,
        category_id: Optional[int] = None,
        due_date: Optional[date] = None,
    ) -> Dict[str, Any]:
        body = {
            "title": title,
            "category_id": category_id,
            "due_date": due_date.isoformat() if due_date else None,
        }
        return self._request("POST", "/tasks", json=body)

    def update_task(self, task_id: int, **changes) -> Dict[str, Any]:
        if isinstance(changes.get("due_date"), date):
            changes["due_date"] = changes["due_date"].isoformat()
        return self._request("PUT", f"/tasks/{task_id}", json=changes)

    def delete_task(self, task_id: int) -> Dict[str, Any]:
        return self._request("DELETE", f"/tasks/{task_id}")

    def reorder(self, ids: Sequence[int]) -> Dict[str, Any]:
        return self._request("POST", "/tasks/reorder", json={"ids": list(ids)})

    def list_categories(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/categories")

    def create_category(self, name: str) -> Dict[str, Any]:
        return self._request("POST", "/categories", json={"name": name})
