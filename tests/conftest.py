"""Pytest fixtures for the Taskify tests."""

from collections.abc import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from taskify.client import ClientTaskStore, TaskApiClient
from taskify.config import Settings
from taskify.main import create_app
from taskify.store import InMemoryTaskStore


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    """Settings with defaults only, ignoring the environment and any local .env file."""
    for name in Settings.model_fields:
        monkeypatch.delenv(name, raising=False)
    return Settings(_env_file=None)


@pytest.fixture
def store() -> InMemoryTaskStore:
    return InMemoryTaskStore()


@pytest.fixture
def app(settings: Settings, store: InMemoryTaskStore) -> FastAPI:
    return create_app(settings, store=store)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    """Create a test client for the API, running the app lifespan."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def client_store(client: TestClient) -> ClientTaskStore:
    """Client-side task cache talking to the test app."""
    return ClientTaskStore(TaskApiClient(client))


@pytest.fixture
def task_payload() -> dict[str, str]:
    return {
        "title": "A",
        "description": "d",
        "due_date": "2024-01-01",
        "priority": "high",
    }
