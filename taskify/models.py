"""Pydantic models for the Taskify API.

Tasks travel over the wire with their identifier under ``_id``, the same key
the MongoDB documents use.
"""

from datetime import date, datetime
from enum import Enum
from typing import Any

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator


class Priority(str, Enum):
    """How urgent a task is."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Status(str, Enum):
    """Where a task is in its lifecycle."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class TaskCreate(BaseModel):
    """Request body for creating a new task."""

    title: str = Field(..., min_length=1, description="The task title (required)")
    description: str = Field(..., min_length=1, description="What the task is about (required)")
    due_date: date = Field(..., description="Calendar date the task is due, YYYY-MM-DD")
    priority: Priority = Field(default=Priority.MEDIUM, description="Defaults to medium")
    status: Status = Field(default=Status.PENDING, description="Defaults to pending")


class TaskUpdate(BaseModel):
    """Request body for replacing the fields of an existing task.

    Unlike creation, every field is required; nothing is defaulted.
    """

    title: str = Field(..., min_length=1, description="New title for the task")
    description: str = Field(..., min_length=1, description="New description")
    due_date: date = Field(..., description="New due date, YYYY-MM-DD")
    priority: Priority = Field(..., description="New priority")
    status: Status = Field(..., description="New status")


class Task(BaseModel):
    """A task item as stored and returned by the API."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id", description="Unique identifier generated on creation")
    title: str = Field(..., description="The task title")
    description: str = Field(..., description="The task description")
    due_date: date = Field(..., description="When the task is due")
    priority: Priority = Field(..., description="Task priority")
    status: Status = Field(..., description="Task status")
    created_at: datetime | None = Field(default=None, description="When the task was created")
    updated_at: datetime | None = Field(default=None, description="When the task was last updated")

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_object_id(cls, value: Any) -> Any:
        if isinstance(value, ObjectId):
            return str(value)
        return value


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str


class ErrorResponse(BaseModel):
    """Error body returned with 404 and 500 responses."""

    detail: str


class HealthResponse(BaseModel):
    """Response from the health check endpoint."""

    status: str = "healthy"
    version: str = "1.0.0"
