"""Metrics CLI commands: per-task summary, overall stats and profile."""

import typer

from devfocus.application import get_general_metrics, get_task_metrics, get_user_profile
from devfocus.interfaces.cli.common import (
    DbOption,
    format_duration,
    JsonOption,
    open_store,
    print_header,
    print_json,
    unwrap,
)

app = typer.Typer(help="Points, metrics and profile commands")


@app.command("task")
def task_metrics(
    task_id: str = typer.Argument(..., help="Task ID"),
    db: DbOption = None,
    as_json: JsonOption = False,
) -> None:
    """Show time, points and efficiency for one task."""
    with open_store(db) as store:
        metrics = unwrap(get_task_metrics(store, task_id))
    if as_json:
        print_json(metrics)
        return

    print_header(f"METRICS: {metrics.task_title}")
    typer.echo(f"subtasks:    {metrics.subtasks_completed}/{metrics.subtasks_total} done")
    typer.echo(f"time:        {format_duration(metrics.total_time_seconds)}")
    typer.echo(f"average:     {format_duration(metrics.average_time_per_subtask)}")
    typer.echo(f"points:      {metrics.total_points} (bonus {metrics.complexity_bonus})")
    typer.echo(f"efficiency:  {metrics.efficiency_rate:.0f}%")
    for entry in metrics.subtasks_with_time:
        typer.echo(f"  {format_duration(entry.total_time_seconds)}  {entry.subtask.title}")


@app.command("general")
def general(
    db: DbOption = None,
    as_json: JsonOption = False,
) -> None:
    """Show points across all tasks with the last seven days."""
    with open_store(db) as store:
        metrics = unwrap(get_general_metrics(store))
    if as_json:
        print_json(metrics)
        return

    print_header("OVERVIEW")
    typer.echo(f"total points:       {metrics.total_points}")
    typer.echo(f"today:              {metrics.points_today}")
    typer.echo(f"last 7 days:        {metrics.points_this_week}")
    typer.echo(f"tasks completed:    {metrics.total_tasks_completed}")
    typer.echo(f"subtasks completed: {metrics.total_subtasks_completed}")
    typer.echo(f"average subtask:    {format_duration(metrics.average_completion_time_seconds)}")
    if metrics.best_day:
        typer.echo(f"best day:           {metrics.best_day.date} ({metrics.best_day.points} pts)")
    typer.echo("")
    for day in metrics.points_last_7_days:
        typer.echo(f"  {day.date}  {day.points:>5} pts  {day.subtasks_completed} done")


@app.command("profile")
def profile(
    db: DbOption = None,
    as_json: JsonOption = False,
) -> None:
    """Show global level, title and streaks."""
    with open_store(db) as store:
        user = unwrap(get_user_profile(store))
    if as_json:
        print_json(user)
        return

    print_header(f"{user.title.upper()} - level {user.level}")
    typer.echo(f"xp:       {user.total_xp}/{user.xp_for_next_level} ({user.progress_percent:.0f}%)")
    typer.echo(f"streak:   {user.current_streak} days (best {user.longest_streak})")
    if user.streak_bonus_percent:
        typer.echo(f"bonus:    +{user.streak_bonus_percent}%")
