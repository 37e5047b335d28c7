"""Task endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from taskify.models import (
    ErrorResponse,
    MessageResponse,
    Priority,
    Status,
    Task,
    TaskCreate,
    TaskUpdate,
)
from taskify.store import TaskStore

logger = logging.getLogger(__name__)

NOT_FOUND_DETAIL = "Task not found"
SERVER_ERROR_DETAIL = "Server error"

_SERVER_ERROR = {status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse}}
_NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}

router = APIRouter(prefix="/tasks", tags=["Tasks"])


def get_store(request: Request) -> TaskStore:
    """Return the task store opened by the application lifespan."""
    return request.app.state.store


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_DETAIL)


def _server_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=SERVER_ERROR_DETAIL,
    )


@router.post(
    "",
    response_model=Task,
    status_code=status.HTTP_201_CREATED,
    summary="Create a task",
    responses=_SERVER_ERROR,
)
async def create_task(data: TaskCreate, store: TaskStore = Depends(get_store)) -> Task:
    """Create a new task. Status defaults to pending and priority to medium."""
    try:
        return await store.create(data)
    except Exception as exc:
        logger.exception("Failed to create task: %s", exc)
        raise _server_error() from exc


@router.get(
    "",
    response_model=list[Task],
    summary="List tasks",
    responses=_SERVER_ERROR,
)
async def list_tasks(
    status_filter: Status | None = Query(default=None, alias="status", description="Only tasks with this status"),
    priority: Priority | None = Query(default=None, description="Only tasks with this priority"),
    store: TaskStore = Depends(get_store),
) -> list[Task]:
    """List tasks, optionally filtered by status and/or priority."""
    filters: dict[str, str] = {}
    if status_filter is not None:
        filters["status"] = status_filter.value
    if priority is not None:
        filters["priority"] = priority.value

    try:
        return await store.find_many(filters)
    except Exception as exc:
        logger.exception("Failed to list tasks: %s", exc)
        raise _server_error() from exc


@router.get(
    "/{task_id}",
    response_model=Task,
    summary="Get a task",
    responses={**_NOT_FOUND, **_SERVER_ERROR},
)
async def get_task(task_id: str, store: TaskStore = Depends(get_store)) -> Task:
    """Get a specific task by ID."""
    try:
        task = await store.find_by_id(task_id)
    except Exception as exc:
        logger.exception("Failed to get task %s: %s", task_id, exc)
        raise _server_error() from exc
    if task is None:
        raise _not_found()
    return task


@router.put(
    "/{task_id}",
    response_model=Task,
    summary="Update a task",
    responses={**_NOT_FOUND, **_SERVER_ERROR},
)
async def update_task(task_id: str, data: TaskUpdate, store: TaskStore = Depends(get_store)) -> Task:
    """Replace every field of an existing task."""
    try:
        task = await store.update_by_id(task_id, data)
    except Exception as exc:
        logger.exception("Failed to update task %s: %s", task_id, exc)
        raise _server_error() from exc
    if task is None:
        raise _not_found()
    return task


@router.delete(
    "/{task_id}",
    response_model=MessageResponse,
    summary="Delete a task",
    responses={**_NOT_FOUND, **_SERVER_ERROR},
)
async def delete_task(task_id: str, store: TaskStore = Depends(get_store)) -> MessageResponse:
    """Delete a task."""
    try:
        task = await store.delete_by_id(task_id)
    except Exception as exc:
        logger.exception("Failed to delete task %s: %s", task_id, exc)
        raise _server_error() from exc
    if task is None:
        raise _not_found()
    return MessageResponse(message="Task deleted successfully")
