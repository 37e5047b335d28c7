"""Client side of Taskify: API wrapper, cached task list and terminal UI."""

from taskify.client.api import TaskApiClient
from taskify.client.store import ClientTaskStore, DraftValidationError, TaskDraft

__all__ = ["ClientTaskStore", "DraftValidationError", "TaskApiClient", "TaskDraft"]
