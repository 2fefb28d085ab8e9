"""Task management CLI commands.

Create, list, show, update and delete tasks.
"""

from typing import Optional

import typer

from devfocus.application import (
    create_task,
    delete_task,
    get_task_with_subtasks,
    list_tasks_with_active_subtasks,
    update_task_status,
)
from devfocus.domain.task import SubtaskStatus, TaskStatus
from devfocus.interfaces.cli.common import (
    DbOption,
    format_duration,
    JsonOption,
    open_store,
    print_header,
    print_json,
    print_success,
    unwrap,
)

app = typer.Typer(help="Task management commands")

STATUS_MARKS = {
    SubtaskStatus.TODO: "[ ]",
    SubtaskStatus.IN_PROGRESS: "[>]",
    SubtaskStatus.PAUSED: "[=]",
    SubtaskStatus.DONE: "[x]",
}


@app.command("create")
def create(
    title: str = typer.Argument(..., help="Task title"),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="Task description"),
    db: DbOption = None,
    as_json: JsonOption = False,
) -> None:
    """Create a new task."""
    with open_store(db) as store:
        task = unwrap(create_task(store, title, description))
    if as_json:
        print_json(task)
        return
    print_success(f"Created task {task.id}: {task.title}")


@app.command("list")
def list_tasks(
    status: Optional[str] = typer.Option(
        None, "--status", "-s", help="Filter by status (todo, in_progress, done)"
    ),
    db: DbOption = None,
    as_json: JsonOption = False,
) -> None:
    """List tasks, newest first, with the subtask being worked on."""
    with open_store(db) as store:
        tasks = unwrap(list_tasks_with_active_subtasks(store, status))
    if as_json:
        print_json(tasks)
        return
    if not tasks:
        typer.echo("No tasks.")
        return
    for task in tasks:
        typer.echo(f"{task.id}  [{task.status.value}]  {task.title}")
        if task.active_subtask:
            active = task.active_subtask
            current = (
                f", current session ~{format_duration(active.current_session_time)}"
                if active.current_session_time is not None
                else ""
            )
            typer.echo(
                f"    > {active.title} ({format_duration(active.total_time_seconds)} logged{current})"
            )


@app.command("show")
def show(
    task_id: str = typer.Argument(..., help="Task ID"),
    db: DbOption = None,
    as_json: JsonOption = False,
) -> None:
    """Show a task and its subtasks."""
    with open_store(db) as store:
        task = unwrap(get_task_with_subtasks(store, task_id))
    if as_json:
        print_json(task)
        return

    print_header(f"TASK: {task.title}")
    typer.echo(f"id:      {task.id}")
    typer.echo(f"status:  {task.status.value}")
    if task.description:
        typer.echo(f"\n{task.description}")
    typer.echo("")
    if not task.subtasks:
        typer.echo("No subtasks.")
    for subtask in task.subtasks:
        category = f" #{subtask.category.name}" if subtask.category else ""
        typer.echo(
            f"{STATUS_MARKS[subtask.status]} {subtask.title}{category}  "
            f"{format_duration(subtask.total_time_seconds)}  ({subtask.id})"
        )


@app.command("status")
def set_status(
    task_id: str = typer.Argument(..., help="Task ID"),
    status: str = typer.Argument(..., help=f"New status ({', '.join(s.value for s in TaskStatus)})"),
    db: DbOption = None,
) -> None:
    """Set a task's status."""
    with open_store(db) as store:
        task = unwrap(update_task_status(store, task_id, status))
    print_success(f"Task {task.id} is now {task.status.value}")


@app.command("delete")
def delete(
    task_id: str = typer.Argument(..., help="Task ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    db: DbOption = None,
) -> None:
    """Delete a task with all its subtasks and sessions."""
    if not yes:
        typer.confirm(f"Delete task {task_id} and all its subtasks?", abort=True)
    with open_store(db) as store:
        unwrap(delete_task(store, task_id))
    print_success(f"Deleted task {task_id}")
