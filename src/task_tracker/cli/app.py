"""CLI application using Typer."""

try:
    import typer
    from rich.console import Console
    from rich.table import Table
except ImportError as e:
    raise ImportError(
        "CLI requires typer and rich. Install with: pip install task-tracker[cli]"
    ) from e

import json
import logging
import sys
from typing import Any, Dict, Optional

from task_tracker.config import USER_ID_ENV, configure_logging
from task_tracker.domain.entities.result_types import DomainErrorType, DomainResult
from task_tracker.services import get_service_factory

console = Console()
app = typer.Typer(
    name="tasktrack",
    help="Task Tracker - personal tasks with per-user ownership",
    no_args_is_help=True,
)

# Domain error kind -> process exit code
EXIT_CODES = {
    DomainErrorType.INTERNAL: 1,
    DomainErrorType.VALIDATION_ERROR: 2,
    DomainErrorType.FORBIDDEN: 3,
    DomainErrorType.NOT_FOUND: 4,
    DomainErrorType.CONFLICT: 5,
}
UNAUTHENTICATED_EXIT_CODE = 6

STATUS_STYLES = {"todo": "[dim]○", "in-progress": "[yellow]→", "done": "[green]✓"}


@app.callback()
def main_callback(
    ctx: typer.Context,
    user: Optional[str] = typer.Option(
        None, "--user", "-u", envvar=USER_ID_ENV, help="ID of the user to act as"
    ),
) -> None:
    """Task Tracker command line."""
    configure_logging(default_level=logging.WARNING)
    ctx.obj = {"user": user}


def _require_user(ctx: typer.Context) -> str:
    """Get the caller identity or exit."""
    user = (ctx.obj or {}).get("user")
    if not user:
        console.print(f"[red]Error:[/red] No user given. Use --user or set {USER_ID_ENV}.")
        raise typer.Exit(UNAUTHENTICATED_EXIT_CODE)
    return user


def _fail(result: DomainResult[Any], format: str = "text") -> None:
    """Report a failed result and exit with the code for its error kind."""
    error_type = result.error_type or DomainErrorType.INTERNAL
    if format == "json":
        json.dump(
            {
                "success": False,
                "error": result.error_message,
                "error_type": error_type.value,
                "reason": result.reason,
            },
            sys.stdout,
            default=str,
        )
        sys.stdout.write("\n")
    else:
        console.print(f"[red]Error ({error_type.value}):[/red] {result.error_message}")
    raise typer.Exit(EXIT_CODES[error_type])


def _emit_json(data: Any) -> None:
    json.dump({"success": True, "data": data}, sys.stdout, default=str)
    sys.stdout.write("\n")


def _print_task(task: Dict[str, Any]) -> None:
    console.print(f"\n[bold]{task['title']}[/bold]")
    console.print(f"ID: {task['id']}")
    console.print(f"Status: {task['status']}")
    if task.get("description"):
        console.print(f"Description: {task['description']}")
    console.print(f"Created: {task['created_at']}")
    console.print(f"Updated: {task['updated_at']}")


# User commands
user_app = typer.Typer(help="User commands")
app.add_typer(user_app, name="user")


@user_app.command("create")
def user_create(
    username: str = typer.Argument(..., help="Username"),
    format: str = typer.Option("text", "--format", "-f", help="Output format (text/json)"),
) -> None:
    """Register a user that tasks can belong to."""
    factory = get_service_factory()
    result = factory.get_user_repository().create(username)

    if result.is_failure:
        _fail(result, format)
    if format == "json":
        _emit_json(result.data.to_dict())
    else:
        console.print(f"[green]User created:[/green] {result.data.id}")
        console.print(f"Username: {result.data.username}")


# Task commands
task_app = typer.Typer(help="Task management commands")
app.add_typer(task_app, name="task")


@task_app.command("create")
def task_create(
    ctx: typer.Context,
    title: str = typer.Argument(..., help="Task title"),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="Description"),
    status: Optional[str] = typer.Option(None, "--status", "-s", help="Initial status"),
    format: str = typer.Option("text", "--format", "-f", help="Output format (text/json)"),
) -> None:
    """Create a new task."""
    owner_id = _require_user(ctx)
    service = get_service_factory().get_task_service()
    result = service.create_task(owner_id, title=title, description=description, status=status)

    if result.is_failure:
        _fail(result, format)
    if format == "json":
        _emit_json(result.data)
    else:
        console.print(f"[green]Task created:[/green] {result.data['id']}")
        console.print(f"Title: {result.data['title']}")


@task_app.command("list")
def task_list(
    ctx: typer.Context,
    status: Optional[str] = typer.Option(None, "--status", "-s", help="Filter by status"),
    search: Optional[str] = typer.Option(None, "--search", "-q", help="Search in titles"),
    format: str = typer.Option("text", "--format", "-f", help="Output format (text/json)"),
) -> None:
    """List your tasks."""
    owner_id = _require_user(ctx)
    service = get_service_factory().get_task_service()
    result = service.list_tasks(owner_id, status=status, search=search)

    if result.is_failure:
        _fail(result, format)
    if format == "json":
        _emit_json(result.data)
        return

    tasks = result.data or []
    if not tasks:
        console.print("No tasks found.")
        return

    table = Table(title="Tasks")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title", style="green")
    table.add_column("Status")

    for t in tasks:
        icon = STATUS_STYLES.get(t["status"], "[dim]○")
        table.add_row(t["id"][:8] + "...", t["title"], f"{icon}[/] {t['status']}")

    console.print(table)


@task_app.command("show")
def task_show(
    ctx: typer.Context,
    task_id: str = typer.Argument(..., help="Task ID"),
    format: str = typer.Option("text", "--format", "-f", help="Output format (text/json)"),
) -> None:
    """Show task details."""
    owner_id = _require_user(ctx)
    service = get_service_factory().get_task_service()
    result = service.get_task(owner_id, task_id)

    if result.is_failure:
        _fail(result, format)
    if format == "json":
        _emit_json(result.data)
    else:
        _print_task(result.data)


@task_app.command("update")
def task_update(
    ctx: typer.Context,
    task_id: str = typer.Argument(..., help="Task ID"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="New title"),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="New description"),
    status: Optional[str] = typer.Option(None, "--status", "-s", help="New status"),
    format: str = typer.Option("text", "--format", "-f", help="Output format (text/json)"),
) -> None:
    """Update a task."""
    owner_id = _require_user(ctx)

    updates = {}
    if title is not None:
        updates["title"] = title
    if description is not None:
        updates["description"] = description
    if status is not None:
        updates["status"] = status

    if not updates:
        console.print("[yellow]No updates specified[/yellow]")
        return

    service = get_service_factory().get_task_service()
    result = service.update_task(owner_id, task_id, **updates)

    if result.is_failure:
        _fail(result, format)
    if format == "json":
        _emit_json(result.data)
    else:
        data = result.data
        console.print(f"[green]Task updated:[/green] {data['title']} ({data['status']})")


@task_app.command("delete")
def task_delete(
    ctx: typer.Context,
    task_id: str = typer.Argument(..., help="Task ID"),
    format: str = typer.Option("text", "--format", "-f", help="Output format (text/json)"),
) -> None:
    """Delete a task."""
    owner_id = _require_user(ctx)
    service = get_service_factory().get_task_service()
    result = service.delete_task(owner_id, task_id)

    if result.is_failure:
        _fail(result, format)
    if format == "json":
        _emit_json(result.data)
    else:
        console.print(f"[green]Task deleted:[/green] {task_id}")


# Database commands
db_app = typer.Typer(help="Database commands")
app.add_typer(db_app, name="db")


@db_app.command("check")
def db_check() -> None:
    """Check database connectivity and schema."""
    health = get_service_factory().orm_manager.perform_health_check()

    if health.get("healthy"):
        console.print(f"[green]Database OK[/green] ({health['backend']})")
        console.print(f"Tables: {', '.join(health['tables'])}")
    else:
        console.print(f"[red]Database check failed:[/red] {health.get('error')}")
        raise typer.Exit(1)


def create_app() -> typer.Typer:
    """Create and return the Typer app."""
    return app
