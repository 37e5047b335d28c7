"""Client-side task cache.

The cache is never patched: after every successful create, update or delete
the whole list is fetched again, so it converges on the server's state.
HTTP failures are logged and otherwise ignored; mutation methods report them
by returning ``False``.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any

import httpx

from taskify.client.api import TaskApiClient

logger = logging.getLogger(__name__)

EDITABLE_FIELDS: tuple[str, ...] = ("title", "description", "due_date", "priority", "status")


class DraftValidationError(ValueError):
    """The new-task draft is missing a field the form insists on."""


@dataclass
class TaskDraft:
    """Fields of the task being composed in the create form."""

    title: str = ""
    description: str = ""
    due_date: str = ""
    priority: str = ""
    status: str = ""

    def missing_fields(self) -> list[str]:
        # Only these three are checked before sending; the server validates the rest.
        return [name for name in ("priority", "status", "due_date") if not getattr(self, name)]

    def as_payload(self) -> dict[str, str]:
        return asdict(self)


class ClientTaskStore:
    """Cached task list plus the create-form draft and the single row in edit mode."""

    def __init__(self, api: TaskApiClient) -> None:
        self.api = api
        self.tasks: list[dict[str, Any]] = []
        self.draft = TaskDraft()
        self.editing_id: str | None = None
        self._snapshot: dict[str, Any] | None = None

    # -------------------- fetching --------------------
    def load(self) -> bool:
        """Fetch the task list for the first time."""
        return self.refresh()

    def refresh(self) -> bool:
        """Replace the cached list with the server's current one.

        A row in edit mode keeps its unsaved field values; if it no longer
        exists on the server, edit mode is dropped.
        """
        try:
            tasks = self.api.list_tasks()
        except httpx.HTTPError as exc:
            logger.error("Error fetching tasks: %s", exc)
            return False

        rows = [task.model_dump(mode="json", by_alias=True) for task in tasks]
        if self.editing_id is not None:
            editing = self.editing_row
            for row in rows:
                if row["_id"] == self.editing_id:
                    row.update({name: editing[name] for name in EDITABLE_FIELDS})
                    break
            else:
                self._clear_edit()
        self.tasks = rows
        return True

    def get_row(self, task_id: str) -> dict[str, Any]:
        for row in self.tasks:
            if row["_id"] == task_id:
                return row
        raise KeyError(task_id)

    @property
    def editing_row(self) -> dict[str, Any] | None:
        if self.editing_id is None:
            return None
        return self.get_row(self.editing_id)

    # -------------------- create --------------------
    def set_draft_field(self, name: str, value: str) -> None:
        if name not in EDITABLE_FIELDS:
            raise ValueError(f"Unknown task field: {name}")
        setattr(self.draft, name, value)

    def submit_draft(self) -> bool:
        """Send the draft to the server.

        Raises:
            DraftValidationError: If priority, status or due date is empty.
                Nothing is sent in that case.
        """
        missing = self.draft.missing_fields()
        if missing:
            raise DraftValidationError("Please fill in priority, status and due date.")

        try:
            self.api.create_task(self.draft.as_payload())
        except httpx.HTTPError as exc:
            logger.error("Error creating task: %s", exc)
            return False

        self.draft = TaskDraft()
        self.refresh()
        return True

    # -------------------- edit --------------------
    def start_edit(self, task_id: str) -> None:
        """Put one row into edit mode, restoring any other row that was being edited."""
        row = self.get_row(task_id)
        if self.editing_id is not None and self.editing_id != task_id:
            self.cancel_edit()
        if self.editing_id == task_id:
            return
        self.editing_id = task_id
        self._snapshot = {name: row[name] for name in EDITABLE_FIELDS}

    def edit_field(self, name: str, value: str) -> None:
        row = self.editing_row
        if row is None:
            raise RuntimeError("No task is being edited")
        if name not in EDITABLE_FIELDS:
            raise ValueError(f"Unknown task field: {name}")
        row[name] = value

    def save_edit(self) -> bool:
        """Send the edited row's current fields; stays in edit mode on failure."""
        row = self.editing_row
        if row is None:
            raise RuntimeError("No task is being edited")

        payload = {name: row[name] for name in EDITABLE_FIELDS}
        try:
            self.api.update_task(row["_id"], payload)
        except httpx.HTTPError as exc:
            logger.error("Error updating task: %s", exc)
            return False

        self._clear_edit()
        self.refresh()
        return True

    def cancel_edit(self) -> None:
        """Leave edit mode and roll the row back to its values from before the edit."""
        row = self.editing_row
        if row is not None and self._snapshot is not None:
            row.update(self._snapshot)
        self._clear_edit()

    def _clear_edit(self) -> None:
        self.editing_id = None
        self._snapshot = None

    # -------------------- delete --------------------
    def delete(self, task_id: str) -> bool:
        try:
            self.api.delete_task(task_id)
        except httpx.HTTPError as exc:
            logger.error("Error deleting task: %s", exc)
            return False

        self.refresh()
        return True
