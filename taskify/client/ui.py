"""Terminal form/list UI for Taskify.

The board is redrawn from ``ClientTaskStore.tasks`` after every command.
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from taskify.client.api import TaskApiClient
from taskify.client.store import EDITABLE_FIELDS, ClientTaskStore, DraftValidationError
from taskify.logging_setup import setup_logging

logger = logging.getLogger(__name__)

FIELD_LABELS: dict[str, str] = {
    "title": "Title",
    "description": "Description",
    "due_date": "Due date (YYYY-MM-DD)",
    "priority": "Priority (low/medium/high)",
    "status": "Status (pending/in-progress/completed)",
}

PRIORITY_STYLE = {"low": "green", "medium": "yellow", "high": "bold red"}
STATUS_STYLE = {"pending": "cyan", "in-progress": "magenta", "completed": "dim"}

HELP_TEXT = """\
[bold]Commands[/bold]
  add          create a task
  edit N       edit task number N
  delete N     delete task number N
  refresh      fetch the list again
  help         show this help
  quit         exit"""

AskFn = Callable[..., str]


class TaskUI:
    """Command loop over a ``ClientTaskStore``."""

    def __init__(
        self,
        store: ClientTaskStore,
        console: Console | None = None,
        ask: AskFn | None = None,
    ) -> None:
        self.store = store
        self.console = console or Console()
        self.ask: AskFn = ask or Prompt.ask

    def render(self) -> Table:
        table = Table(title="Tasks", expand=True)
        table.add_column("#", justify="right", style="bold")
        table.add_column("Title")
        table.add_column("Description")
        table.add_column("Due")
        table.add_column("Priority")
        table.add_column("Status")

        for number, row in enumerate(self.store.tasks, start=1):
            marker = f"{number}*" if row["_id"] == self.store.editing_id else str(number)
            table.add_row(
                marker,
                Text(row["title"]),
                Text(row["description"]),
                Text(row["due_date"]),
                _styled(row["priority"], PRIORITY_STYLE),
                _styled(row["status"], STATUS_STYLE),
            )
        if not self.store.tasks:
            table.caption = "No tasks yet. Type 'add' to create one."
        return table

    def show(self) -> None:
        self.console.print(self.render())

    def run(self) -> None:
        """Main loop; returns on 'quit', Ctrl-C or end of input."""
        self.show()
        while True:
            try:
                line = self.ask("[bold cyan]taskify[/bold cyan]", console=self.console)
            except (KeyboardInterrupt, EOFError):
                self.console.print()
                return
            if not self.handle(line):
                return
            self.show()

    def handle(self, line: str) -> bool:
        """Run one command line. Returns False when the loop should stop."""
        parts = line.strip().split()
        if not parts:
            return True
        command, args = parts[0].lower(), parts[1:]

        if command in ("quit", "exit", "q"):
            return False
        if command == "help":
            self.console.print(HELP_TEXT)
        elif command == "add":
            self.add()
        elif command in ("refresh", "r"):
            self.store.refresh()
        elif command in ("edit", "delete"):
            task_id = self._task_id_from_args(args)
            if task_id is None:
                return True
            if command == "edit":
                self.edit(task_id)
            else:
                self.delete(task_id)
        else:
            self.console.print(f"[red]Unknown command:[/red] {escape(command)}. Type 'help'.")
        return True

    def add(self) -> None:
        draft = self.store.draft
        for name in EDITABLE_FIELDS:
            value = self.ask(FIELD_LABELS[name], console=self.console, default=getattr(draft, name))
            self.store.set_draft_field(name, value.strip())

        try:
            created = self.store.submit_draft()
        except DraftValidationError as exc:
            self.console.print(f"[bold yellow]{exc}[/bold yellow]")
            return
        if created:
            self.console.print("[green]Task added[/green]")

    def edit(self, task_id: str) -> None:
        self.store.start_edit(task_id)
        row = self.store.editing_row
        for name in EDITABLE_FIELDS:
            value = self.ask(FIELD_LABELS[name], console=self.console, default=row[name])
            self.store.edit_field(name, value.strip())

        self.console.print(self.render())
        choice = self.ask("Save changes?", console=self.console, choices=["save", "cancel"], default="save")
        if choice == "save":
            if self.store.save_edit():
                self.console.print("[green]Task updated[/green]")
        else:
            self.store.cancel_edit()

    def delete(self, task_id: str) -> None:
        if self.store.delete(task_id):
            self.console.print("[green]Task deleted[/green]")

    def _task_id_from_args(self, args: list[str]) -> str | None:
        if len(args) != 1 or not args[0].isdigit():
            self.console.print("[red]Give the task number, e.g. 'edit 2'.[/red]")
            return None
        index = int(args[0]) - 1
        if not 0 <= index < len(self.store.tasks):
            self.console.print(f"[red]No task number {args[0]}.[/red]")
            return None
        return self.store.tasks[index]["_id"]


def _styled(value: Any, styles: dict[str, str]) -> Text:
    text = str(value)
    return Text(text, style=styles.get(text, ""))


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Terminal client for the Taskify API")
    parser.add_argument("--url", default="http://localhost:5000", help="Server base URL")
    parser.add_argument("--prefix", default="/api", help="Path the API is mounted under")
    parser.add_argument("--log-level", default="warning", help="Logging level")
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    api = TaskApiClient.from_url(args.url, prefix=args.prefix)
    try:
        store = ClientTaskStore(api)
        if not store.load():
            logger.warning("Could not load tasks from %s", args.url)
        TaskUI(store).run()
    finally:
        api.close()


if __name__ == "__main__":
    main()
