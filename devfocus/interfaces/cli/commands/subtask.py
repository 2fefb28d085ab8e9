"""Subtask and time tracking CLI commands.

The elapsed seconds passed to pause/complete/checkpoint are measured by
the caller; these commands only record them.
"""

from typing import Annotated, Optional

import typer

from devfocus.application import (
    complete_subtask,
    create_subtask,
    delete_subtask,
    get_subtask_with_session,
    pause_subtask,
    resume_subtask,
    start_subtask,
    update_session_duration,
)
from devfocus.interfaces.cli.common import (
    DbOption,
    ElapsedArgument,
    format_duration,
    JsonOption,
    max_elapsed_seconds,
    open_store,
    print_info,
    print_json,
    print_success,
    unwrap,
)

app = typer.Typer(help="Subtask and time tracking commands")

SubtaskIdArgument = Annotated[str, typer.Argument(help="Subtask ID")]


@app.command("add")
def add(
    task_id: str = typer.Argument(..., help="Parent task ID"),
    title: str = typer.Argument(..., help="Subtask title"),
    category: Optional[str] = typer.Option(None, "--category", "-c", help="Category ID"),
    db: DbOption = None,
    as_json: JsonOption = False,
) -> None:
    """Add a subtask to a task."""
    with open_store(db) as store:
        subtask = unwrap(create_subtask(store, task_id, title, category))
    if as_json:
        print_json(subtask)
        return
    print_success(f"Created subtask {subtask.id}: {subtask.title}")


@app.command("delete")
def delete(
    subtask_id: SubtaskIdArgument,
    db: DbOption = None,
) -> None:
    """Delete a subtask and its sessions."""
    with open_store(db) as store:
        unwrap(delete_subtask(store, subtask_id))
    print_success(f"Deleted subtask {subtask_id}")


@app.command("show")
def show(
    subtask_id: SubtaskIdArgument,
    db: DbOption = None,
    as_json: JsonOption = False,
) -> None:
    """Show a subtask with its logged time and active session."""
    with open_store(db) as store:
        view = unwrap(get_subtask_with_session(store, subtask_id))
    if as_json:
        print_json(view)
        return
    subtask = view.subtask
    typer.echo(f"{subtask.title} [{subtask.status.value}]")
    typer.echo(f"logged: {format_duration(subtask.total_time_seconds)}")
    if view.session:
        typer.echo(
            f"active session {view.session.id} since {view.session.started_at} "
            f"({format_duration(view.session.duration_seconds)} recorded)"
        )


@app.command("start")
def start(
    subtask_id: SubtaskIdArgument,
    db: DbOption = None,
) -> None:
    """Start working on a subtask."""
    with open_store(db) as store:
        session = unwrap(start_subtask(store, subtask_id))
    print_success(f"Started subtask {subtask_id} (session {session.id})")


@app.command("pause")
def pause(
    subtask_id: SubtaskIdArgument,
    elapsed: ElapsedArgument,
    db: DbOption = None,
) -> None:
    """Pause a subtask, recording the elapsed time."""
    with open_store(db) as store:
        session = unwrap(pause_subtask(store, subtask_id, elapsed, max_elapsed_seconds=max_elapsed_seconds()))
    print_success(f"Paused at {format_duration(session.duration_seconds)}")


@app.command("resume")
def resume(
    subtask_id: SubtaskIdArgument,
    db: DbOption = None,
) -> None:
    """Resume a paused subtask."""
    with open_store(db) as store:
        session = unwrap(resume_subtask(store, subtask_id))
    print_success(f"Resumed at {format_duration(session.duration_seconds)}")


@app.command("checkpoint")
def checkpoint(
    subtask_id: SubtaskIdArgument,
    elapsed: ElapsedArgument,
    db: DbOption = None,
) -> None:
    """Record the running elapsed time without changing state."""
    with open_store(db) as store:
        session = unwrap(
            update_session_duration(store, subtask_id, elapsed, max_elapsed_seconds=max_elapsed_seconds())
        )
    print_info(f"Recorded {format_duration(session.duration_seconds)}")


@app.command("complete")
def complete(
    subtask_id: SubtaskIdArgument,
    elapsed: ElapsedArgument,
    db: DbOption = None,
    as_json: JsonOption = False,
) -> None:
    """Complete a subtask and collect points and XP."""
    with open_store(db) as store:
        completion = unwrap(
            complete_subtask(store, subtask_id, elapsed, max_elapsed_seconds=max_elapsed_seconds())
        )
    if as_json:
        print_json(completion)
        return
    print_success(
        f"Completed '{completion.subtask.title}' in "
        f"{format_duration(completion.time_spent_seconds)}: +{completion.points_earned} pts"
    )
    if completion.category:
        print_info(f"+{completion.xp_gained} XP for {completion.category.name}")
