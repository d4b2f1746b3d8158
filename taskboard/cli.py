#!/usr/bin/env python3
"""Taskboard CLI.

Command-line interface for administering the task database: creating
users and managing a user's tasks through the same service the HTTP API
uses.
"""

from collections.abc import Generator
from contextlib import contextmanager

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from sqlmodel import Session

from .config import get_settings, validate_configuration
from .database import create_db_and_tables, get_engine, verify_database
from .errors import TaskboardError
from .logging_setup import configure_logging
from .repositories import UserRepository
from .schemas.models import Requester, TaskStatus
from .services import ALL_STATUSES, TaskService


app = typer.Typer(help="Taskboard per-user to-do list CLI")
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Configure logging before any command runs."""
    configure_logging("DEBUG" if verbose else get_settings().effective_log_level)


@contextmanager
def _service() -> Generator[TaskService, None, None]:
    session = Session(get_engine())
    try:
        yield TaskService(session=session, settings=get_settings())
    finally:
        session.close()


def _requester(service: TaskService, user_id: int) -> Requester:
    user = UserRepository(service.session).get_by_id(user_id)
    if user is None:
        console.print(f"[bold red]User {user_id} not found[/bold red]")
        raise typer.Exit(code=1)
    return user.to_requester()


def _fail(error: TaskboardError) -> None:
    console.print(f"[bold red]Error ({error.status_code}): {error.message}[/bold red]")
    raise typer.Exit(code=1)


@app.command()
def init_db():
    """Validate the configuration and create the database tables."""
    try:
        validate_configuration()
    except ValueError as e:
        console.print(f"[bold red]{e}[/bold red]")
        raise typer.Exit(code=1)

    engine = get_engine()
    create_db_and_tables(engine)
    counts = verify_database(engine)
    console.print(f"[green]Database ready at {engine.url}[/green]")
    console.print(f"[dim]{counts['users']} users, {counts['tasks']} tasks[/dim]")


@app.command()
def create_user(
    name: str = typer.Argument(..., help="Display name"),
    email: str = typer.Argument(..., help="Unique email address"),
):
    """Add a user who can own tasks."""
    with _service() as service:
        repo = UserRepository(service.session)
        if repo.get_by_email(email) is not None:
            console.print(f"[bold red]User with email {email} already exists[/bold red]")
            raise typer.Exit(code=1)
        user = repo.create_user(name=name, email=email)
        service.session.commit()
        console.print(f"[green]Created user {user.id}: {user.name}[/green]")


@app.command()
def add(
    user_id: int = typer.Argument(..., help="Owner of the new task"),
    title: str = typer.Argument(..., help="Task title"),
    description: str = typer.Argument(..., help="Task description"),
):
    """Create a task for a user."""
    with _service() as service:
        requester = _requester(service, user_id)
        try:
            task = service.create(
                requester, {"title": title, "description": description}
            )
        except TaskboardError as e:
            _fail(e)
        console.print(f"[green]Created task {task.id}: {task.title}[/green]")


@app.command("list")
def list_tasks(
    user_id: int = typer.Argument(..., help="Whose tasks to list"),
    status: str = typer.Option(
        ALL_STATUSES,
        "--status",
        "-s",
        help=f"Filter by status ({ALL_STATUSES}, {', '.join(TaskStatus.values())})",
    ),
    page: int = typer.Option(1, "--page", "-p", help="Page number"),
):
    """List a user's tasks, newest first."""
    with _service() as service:
        requester = _requester(service, user_id)
        try:
            result = service.filter(requester, status, page)
        except TaskboardError as e:
            _fail(e)

    if not result.items:
        console.print("[yellow]No tasks found[/yellow]")
        return

    task_table = Table(
        title=f"Tasks for user {user_id} ({status})",
        show_header=True,
        header_style="bold magenta",
    )
    task_table.add_column("ID", style="cyan")
    task_table.add_column("Title", style="white", max_width=40)
    task_table.add_column("Status", style="blue")
    task_table.add_column("Created", style="green")

    for task in result.items:
        title_text = task.title
        if len(title_text) > 37:
            title_text = title_text[:34] + "..."
        task_table.add_row(
            str(task.id), title_text, task.status.value, task.created_at.isoformat()[:19]
        )

    console.print(task_table)
    console.print(
        f"[dim]Page {result.page} of {result.last_page} ({result.total} tasks)[/dim]"
    )


@app.command()
def show(
    task_id: int = typer.Argument(..., help="ID of the task to show"),
    user_id: int | None = typer.Option(
        None, "--user", "-u", help="Acting user, required when reads are owner-only"
    ),
):
    """Show details of a single task."""
    with _service() as service:
        requester = _requester(service, user_id) if user_id is not None else None
        try:
            task = service.show(task_id, requester)
        except TaskboardError as e:
            _fail(e)

    console.print(
        Panel.fit(
            f"[bold blue]ID:[/bold blue] {task.id}\n"
            f"[bold blue]Title:[/bold blue] {task.title}\n"
            f"[bold blue]Status:[/bold blue] {task.status.value}\n"
            f"[bold blue]Owner:[/bold blue] {task.user_id}\n"
            f"[bold blue]Created:[/bold blue] {task.created_at}\n"
            f"[bold blue]Updated:[/bold blue] {task.updated_at}",
            title=f"Task {task.id}",
        )
    )
    console.print(Panel(task.description, title="Description", border_style="green"))


@app.command()
def complete(
    user_id: int = typer.Argument(..., help="Acting user"),
    task_id: int = typer.Argument(..., help="Task to mark completed"),
):
    """Mark a task as completed."""
    with _service() as service:
        requester = _requester(service, user_id)
        try:
            task = service.update(
                requester, task_id, {"status": TaskStatus.COMPLETED.value}
            )
        except TaskboardError as e:
            _fail(e)
        console.print(f"[green]Task {task.id} marked {task.status.value}[/green]")


@app.command()
def delete(
    user_id: int = typer.Argument(..., help="Acting user"),
    task_id: int = typer.Argument(..., help="Task to delete"),
):
    """Permanently delete a task."""
    with _service() as service:
        requester = _requester(service, user_id)
        try:
            service.destroy(requester, task_id)
        except TaskboardError as e:
            _fail(e)
        console.print(f"[green]Deleted task {task_id}[/green]")


if __name__ == "__main__":
    app()
