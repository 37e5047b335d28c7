"""HTTP client for the Taskify API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from taskify.models import Task

logger = logging.getLogger(__name__)


class TaskApiClient:
    """Thin wrapper around the ``/tasks`` endpoints.

    Every method raises ``httpx.HTTPStatusError`` on a non-2xx response and
    ``httpx.TransportError`` when the server cannot be reached.
    """

    def __init__(self, http: httpx.Client, prefix: str = "/api") -> None:
        """
        Args:
            http: Client whose ``base_url`` points at the server.
            prefix: Path the API router is mounted under.
        """
        self.http = http
        self.prefix = prefix.rstrip("/")

    @classmethod
    def from_url(cls, base_url: str, prefix: str = "/api", timeout: float = 10.0) -> TaskApiClient:
        return cls(httpx.Client(base_url=base_url, timeout=timeout), prefix=prefix)

    def close(self) -> None:
        self.http.close()

    def _url(self, task_id: str | None = None) -> str:
        if task_id is None:
            return f"{self.prefix}/tasks"
        return f"{self.prefix}/tasks/{task_id}"

    def list_tasks(self, status: str | None = None, priority: str | None = None) -> list[Task]:
        params = {key: value for key, value in (("status", status), ("priority", priority)) if value}
        response = self.http.get(self._url(), params=params)
        response.raise_for_status()
        return [Task.model_validate(item) for item in response.json()]

    def get_task(self, task_id: str) -> Task:
        response = self.http.get(self._url(task_id))
        response.raise_for_status()
        return Task.model_validate(response.json())

    def create_task(self, fields: dict[str, Any]) -> Task:
        response = self.http.post(self._url(), json=fields)
        response.raise_for_status()
        logger.debug("Created task %s", response.json().get("_id"))
        return Task.model_validate(response.json())

    def update_task(self, task_id: str, fields: dict[str, Any]) -> Task:
        response = self.http.put(self._url(task_id), json=fields)
        response.raise_for_status()
        return Task.model_validate(response.json())

    def delete_task(self, task_id: str) -> str:
        """Delete a task and return the server's confirmation message."""
        response = self.http.delete(self._url(task_id))
        response.raise_for_status()
        return response.json()["message"]
