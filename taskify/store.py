"""Task persistence.

``MongoTaskStore`` keeps tasks in a MongoDB collection through the async
motor driver. ``InMemoryTaskStore`` has the same behaviour without a
database and backs the test-suite and ``taskify-server --in-memory``.

Every store is created explicitly and handed to the application, which
opens it on startup and closes it on shutdown.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from datetime import UTC, datetime, time
from typing import Any

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from taskify.models import Task, TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)

COLLECTION_NAME = "tasks"


class StoreConnectionError(RuntimeError):
    """Raised when the store cannot be reached on startup."""


class TaskStore(ABC):
    """Persistence operations on the task collection.

    Lookups by identifier return ``None`` when no task matches. An identifier
    that is not a valid ObjectId raises ``bson.errors.InvalidId``.
    """

    async def connect(self) -> None:
        """Open the underlying connection."""

    async def close(self) -> None:
        """Release the underlying connection."""

    @abstractmethod
    async def create(self, data: TaskCreate) -> Task:
        """Insert a new task and return it with its generated id."""

    @abstractmethod
    async def find_many(self, filters: Mapping[str, str] | None = None) -> list[Task]:
        """Return all tasks whose fields equal every value in ``filters``."""

    @abstractmethod
    async def find_by_id(self, task_id: str) -> Task | None:
        """Get a task by its id, or None if not found."""

    @abstractmethod
    async def update_by_id(self, task_id: str, data: TaskUpdate) -> Task | None:
        """Replace the fields of a task. Returns None if not found."""

    @abstractmethod
    async def delete_by_id(self, task_id: str) -> Task | None:
        """Remove a task and return it. Returns None if not found."""


def _to_document(data: TaskCreate | TaskUpdate) -> dict[str, Any]:
    doc = data.model_dump(mode="json")
    # BSON has no date type
    doc["due_date"] = datetime.combine(data.due_date, time.min)
    return doc


def _from_document(doc: Mapping[str, Any]) -> Task:
    fields = dict(doc)
    due_date = fields.get("due_date")
    if isinstance(due_date, datetime):
        fields["due_date"] = due_date.date()
    fields["created_at"] = fields.pop("createdAt", None)
    fields["updated_at"] = fields.pop("updatedAt", None)
    return Task.model_validate(fields)


class MongoTaskStore(TaskStore):
    """Task store backed by a MongoDB collection."""

    def __init__(
        self,
        url: str,
        database: str,
        *,
        server_selection_timeout_ms: int = 5000,
        collection: str = COLLECTION_NAME,
    ) -> None:
        self._url = url
        self._database = database
        self._collection_name = collection
        self._server_selection_timeout_ms = server_selection_timeout_ms
        self._client: AsyncIOMotorClient | None = None
        self._collection: AsyncIOMotorCollection | None = None

    @property
    def collection(self) -> AsyncIOMotorCollection:
        """The tasks collection; only available once connected."""
        if self._collection is None:
            raise RuntimeError("MongoTaskStore is not connected")
        return self._collection

    async def connect(self) -> None:
        """Create the client and ping the server.

        Raises:
            StoreConnectionError: If no server answers within the selection timeout.
        """
        client = AsyncIOMotorClient(
            self._url,
            serverSelectionTimeoutMS=self._server_selection_timeout_ms,
            tz_aware=True,
        )
        try:
            await client.admin.command("ping")
        except PyMongoError as exc:
            client.close()
            raise StoreConnectionError(f"MongoDB connection failed: {exc}") from exc

        self._client = client
        self._collection = client[self._database][self._collection_name]
        logger.info("MongoDB connected (database=%s)", self._database)

    async def close(self) -> None:
        """Close the client if one is open."""
        if self._client is not None:
            self._client.close()
            self._client = None
            self._collection = None
            logger.info("MongoDB connection closed")

    async def create(self, data: TaskCreate) -> Task:
        """Insert a document with creation and update timestamps."""
        doc = _to_document(data)
        now = datetime.now(UTC)
        doc["createdAt"] = now
        doc["updatedAt"] = now
        result = await self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return _from_document(doc)

    async def find_many(self, filters: Mapping[str, str] | None = None) -> list[Task]:
        """Return matching tasks in natural (insertion) order."""
        cursor = self.collection.find(dict(filters or {}))
        docs = await cursor.to_list(length=None)
        return [_from_document(doc) for doc in docs]

    async def find_by_id(self, task_id: str) -> Task | None:
        """Look a task up by its ObjectId."""
        doc = await self.collection.find_one({"_id": ObjectId(task_id)})
        return _from_document(doc) if doc is not None else None

    async def update_by_id(self, task_id: str, data: TaskUpdate) -> Task | None:
        """$set the new fields and return the document after the update."""
        changes = _to_document(data)
        changes["updatedAt"] = datetime.now(UTC)
        doc = await self.collection.find_one_and_update(
            {"_id": ObjectId(task_id)},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
        return _from_document(doc) if doc is not None else None

    async def delete_by_id(self, task_id: str) -> Task | None:
        """Delete a task and return the removed document."""
        doc = await self.collection.find_one_and_delete({"_id": ObjectId(task_id)})
        return _from_document(doc) if doc is not None else None


class InMemoryTaskStore(TaskStore):
    """Task store kept in a dict, in insertion order."""

    def __init__(self) -> None:
        """Initialize an empty task store."""
        self._tasks: dict[str, Task] = {}

    async def connect(self) -> None:
        """Nothing to open; just note that tasks will not persist."""
        logger.info("Using in-memory task store; tasks are lost on shutdown")

    async def create(self, data: TaskCreate) -> Task:
        """Create a new task with a fresh ObjectId and return it."""
        now = datetime.now(UTC)
        task = Task(
            id=str(ObjectId()),
            **data.model_dump(),
            created_at=now,
            updated_at=now,
        )
        self._tasks[task.id] = task
        return task

    async def find_many(self, filters: Mapping[str, str] | None = None) -> list[Task]:
        """Return tasks matching every filter, in creation order."""
        filters = filters or {}
        return [
            task
            for task in self._tasks.values()
            if all(getattr(task, key) == value for key, value in filters.items())
        ]

    async def find_by_id(self, task_id: str) -> Task | None:
        """Get a task by its ID, or None if not found."""
        return self._tasks.get(str(ObjectId(task_id)))

    async def update_by_id(self, task_id: str, data: TaskUpdate) -> Task | None:
        """Update an existing task. Returns None if not found."""
        key = str(ObjectId(task_id))
        task = self._tasks.get(key)
        if task is None:
            return None

        update_data = data.model_dump()
        update_data["updated_at"] = datetime.now(UTC)
        updated_task = task.model_copy(update=update_data)
        self._tasks[key] = updated_task
        return updated_task

    async def delete_by_id(self, task_id: str) -> Task | None:
        """Delete a task. Returns the removed task, or None if not found."""
        return self._tasks.pop(str(ObjectId(task_id)), None)
