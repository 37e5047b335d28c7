"""Tests for the health check endpoint."""

from fastapi.testclient import TestClient

from taskify import __version__


def test_health_check(client: TestClient) -> None:
    """Test that health check returns healthy status."""
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["version"] == __version__


def test_openapi_documents_task_routes(client: TestClient) -> None:
    """Test that the generated API description lists every task operation."""
    paths = client.get("/openapi.json").json()["paths"]
    assert set(paths["/api/tasks"]) == {"get", "post"}
    assert set(paths["/api/tasks/{task_id}"]) == {"get", "put", "delete"}
    assert "404" in paths["/api/tasks/{task_id}"]["get"]["responses"]
