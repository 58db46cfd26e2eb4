"""HTTP client for the Todo API."""
from typing import Any, Dict, List, Optional
import logging

import httpx

from todo_api.client.session import AuthSession

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3000"


class ApiError(Exception):
    """Non-2xx response from the API."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


def _error_message(response: httpx.Response) -> str:
    try:
        error = response.json().get("error")
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(error, dict):
        return error.get("message", "Request failed")
    return error or "Request failed"


class TodoClient:
    """
    Thin wrapper over the REST API.

    Adds the bearer token from the session to every request and drops the
    session when the server answers 401 or 403.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[AuthSession] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        self.session = session or AuthSession()
        self.http = http_client or httpx.Client(base_url=base_url, timeout=10.0)
        self._owns_http = http_client is None

    def close(self) -> None:
        if self._owns_http:
            self.http.close()

    def __enter__(self) -> "TodoClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ==================== AUTH ====================

    def signup(self, email: str, password: str, name: str) -> Dict[str, Any]:
        """Create the account, then log straight in."""
        self._request("POST", "/api/auth/signup", json={"email": email, "password": password, "name": name})
        return self.login(email, password)

    def login(self, email: str, password: str) -> Dict[str, Any]:
        data = self._request("POST", "/api/auth/login", json={"email": email, "password": password})
        self.session.set(data["token"], data["user"])
        return data["user"]

    def logout(self) -> None:
        self.session.clear()

    def current_user(self) -> Dict[str, Any]:
        return self._request("GET", "/api/users/me")["user"]

    # ==================== TASKS ====================

    def list_tasks(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/tasks")["tasks"]

    def get_task(self, task_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/api/tasks/{task_id}")["task"]

    def create_task(self, title: str, **fields: Any) -> Dict[str, Any]:
        body = self._task_body(title, fields)
        return self._request("POST", "/api/tasks", json=body)["task"]

    def update_task(self, task_id: int, title: str, **fields: Any) -> Dict[str, Any]:
        """Full replace: anything not passed resets to the server default."""
        body = self._task_body(title, fields)
        return self._request("PUT", f"/api/tasks/{task_id}", json=body)["task"]

    def delete_task(self, task_id: int) -> None:
        self._request("DELETE", f"/api/tasks/{task_id}")

    @staticmethod
    def _task_body(title: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        body = {"title": title}
        for key, api_key in (
            ("description", "description"),
            ("priority", "priority"),
            ("status", "status"),
            ("due_date", "dueDate"),
        ):
            value = fields.get(key)
            if value is not None:
                body[api_key] = value
        return body

    def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        headers = {}
        if self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"

        response = self.http.request(method, path, json=json, headers=headers)

        if response.status_code in (401, 403):
            if self.session.is_authenticated:
                logger.info("Session rejected by server, logging out")
            self.session.clear()

        if response.is_error:
            raise ApiError(response.status_code, _error_message(response))
        return response.json()
