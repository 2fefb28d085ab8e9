"""CLI interface for DevFocus using Typer.

Usage:
    devfocus task create "Ship login page"
    devfocus subtask add <task-id> "Build form" --category <category-id>
    devfocus start <subtask-id>
    devfocus complete <subtask-id> 1200
    devfocus metrics profile

The CLI is structured as:
- app: Main Typer application
- commands/: Command groups (task, subtask, category, metrics)
- common.py: Shared utilities for CLI commands
- main.py: Entry point that runs the app
"""

from typing import Optional

import typer

from devfocus import __version__
from devfocus.interfaces.cli.commands import category, metrics, subtask, task
from devfocus.interfaces.cli.common import (
    DbOption,
    ElapsedArgument,
    JsonOption,
    configure_logging,
)

app = typer.Typer(
    name="devfocus",
    help="Local task and focus-time tracker with points and XP",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"devfocus version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """DevFocus - break tasks into subtasks, time them, earn points and XP."""
    configure_logging(verbose)


# =============================================================================
# Register Command Groups
# =============================================================================

app.add_typer(task.app, name="task")
app.add_typer(subtask.app, name="subtask")
app.add_typer(category.app, name="category")
app.add_typer(metrics.app, name="metrics")


# =============================================================================
# Top-Level Shortcuts for Common Commands
# =============================================================================


@app.command("start")
def start(
    subtask_id: subtask.SubtaskIdArgument,
    db: DbOption = None,
) -> None:
    """Start a subtask (shortcut for 'subtask start')."""
    subtask.start(subtask_id=subtask_id, db=db)


@app.command("pause")
def pause(
    subtask_id: subtask.SubtaskIdArgument,
    elapsed: ElapsedArgument,
    db: DbOption = None,
) -> None:
    """Pause a subtask (shortcut for 'subtask pause')."""
    subtask.pause(subtask_id=subtask_id, elapsed=elapsed, db=db)


@app.command("resume")
def resume(
    subtask_id: subtask.SubtaskIdArgument,
    db: DbOption = None,
) -> None:
    """Resume a subtask (shortcut for 'subtask resume')."""
    subtask.resume(subtask_id=subtask_id, db=db)


@app.command("complete")
def complete(
    subtask_id: subtask.SubtaskIdArgument,
    elapsed: ElapsedArgument,
    db: DbOption = None,
    as_json: JsonOption = False,
) -> None:
    """Complete a subtask (shortcut for 'subtask complete')."""
    subtask.complete(subtask_id=subtask_id, elapsed=elapsed, db=db, as_json=as_json)


@app.command("status")
def status(
    db: DbOption = None,
) -> None:
    """Show tasks with their active subtasks (shortcut for 'task list')."""
    task.list_tasks(status=None, db=db, as_json=False)
