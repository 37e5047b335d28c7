"""Tests for the terminal UI."""

from collections.abc import Callable, Iterable

from fastapi.testclient import TestClient
from rich.console import Console

from taskify.client import ClientTaskStore
from taskify.client.ui import TaskUI


def scripted(answers: Iterable[str]) -> Callable[..., str]:
    """Prompt replacement returning the given answers in order."""
    pending = iter(answers)

    def ask(prompt: str, **kwargs) -> str:
        return next(pending)

    return ask


def _ui(store: ClientTaskStore, answers: Iterable[str]) -> tuple[TaskUI, Console]:
    console = Console(record=True, width=140, color_system=None)
    return TaskUI(store, console=console, ask=scripted(answers)), console


NEW_TASK = ["Water plants", "Balcony only", "2024-07-01", "low", "pending"]


def test_render_empty(client_store: ClientTaskStore) -> None:
    """Test the empty-list hint."""
    ui, console = _ui(client_store, [])
    ui.show()
    assert "No tasks yet" in console.export_text()


def test_add_command(client_store: ClientTaskStore, client: TestClient) -> None:
    """Test creating a task through the add form."""
    ui, console = _ui(client_store, NEW_TASK)

    assert ui.handle("add") is True

    assert "Task added" in console.export_text()
    [task] = client.get("/api/tasks").json()
    assert task["title"] == "Water plants"
    assert task["priority"] == "low"

    ui.show()
    assert "Water plants" in console.export_text()


def test_add_command_alerts_on_missing_fields(client_store: ClientTaskStore, client: TestClient) -> None:
    """Test that the form alerts instead of sending an incomplete draft."""
    ui, console = _ui(client_store, ["Water plants", "Balcony only", "", "low", ""])

    ui.handle("add")

    assert "Please fill in priority, status and due date." in console.export_text()
    assert client.get("/api/tasks").json() == []


def test_edit_and_save(client_store: ClientTaskStore, client: TestClient) -> None:
    """Test editing a row and saving it."""
    ui, _ = _ui(client_store, [*NEW_TASK, "Water all plants", "Balcony only", "2024-07-02", "low", "completed", "save"])
    ui.handle("add")

    ui.handle("edit 1")

    [task] = client.get("/api/tasks").json()
    assert task["title"] == "Water all plants"
    assert task["due_date"] == "2024-07-02"
    assert task["status"] == "completed"
    assert client_store.editing_id is None


def test_edit_and_cancel(client_store: ClientTaskStore, client: TestClient) -> None:
    """Test that cancelling an edit keeps the server and the row unchanged."""
    ui, _ = _ui(client_store, [*NEW_TASK, "Renamed", "Balcony only", "2024-07-01", "low", "pending", "cancel"])
    ui.handle("add")

    ui.handle("edit 1")

    assert client.get("/api/tasks").json()[0]["title"] == "Water plants"
    assert client_store.tasks[0]["title"] == "Water plants"


def test_delete_command(client_store: ClientTaskStore, client: TestClient) -> None:
    """Test deleting a row by its number."""
    ui, console = _ui(client_store, NEW_TASK)
    ui.handle("add")

    ui.handle("delete 1")

    assert "Task deleted" in console.export_text()
    assert client.get("/api/tasks").json() == []


def test_bad_row_number(client_store: ClientTaskStore) -> None:
    """Test that an out-of-range row number is reported."""
    ui, console = _ui(client_store, [])
    assert ui.handle("delete 3") is True
    assert ui.handle("edit x") is True
    text = console.export_text()
    assert "No task number 3" in text
    assert "Give the task number" in text


def test_run_until_quit(client_store: ClientTaskStore) -> None:
    """Test the main loop stops on quit."""
    ui, console = _ui(client_store, ["help", "bogus", "quit"])
    ui.run()
    text = console.export_text()
    assert "Commands" in text
    assert "Unknown command" in text


def test_bracketed_values_render_as_plain_text(client_store: ClientTaskStore, client: TestClient) -> None:
    """Test that field values looking like rich markup are shown verbatim."""
    ui, console = _ui(
        client_store,
        [*NEW_TASK, "[bold]Water[/bold]", "Balcony only", "[/due]", "[/oops]", "pending", "save"],
    )
    ui.handle("add")

    ui.handle("edit 1")
    ui.show()

    text = console.export_text()
    assert "[/oops]" in text
    assert "[/due]" in text
    assert "[bold]Water[/bold]" in text
    # the server rejects the bad priority, so the row stays in edit mode
    assert client_store.editing_id is not None
    assert client.get("/api/tasks").json()[0]["priority"] == "low"


def test_bracketed_unknown_command(client_store: ClientTaskStore) -> None:
    """Test that an unknown command containing brackets is echoed, not parsed."""
    ui, console = _ui(client_store, [])
    assert ui.handle("[/x]") is True
    assert "Unknown command: [/x]" in console.export_text()
