"""CLI command groups for DevFocus.

Each module is a Typer app registered with the main app via
app.add_typer():

- task: Task management (create, list, show, status, delete)
- subtask: Subtasks and time tracking (add, start, pause, complete, ...)
- category: Categories and experience ledgers
- metrics: Task metrics, overall stats and the user profile
"""

from devfocus.interfaces.cli.commands import category, metrics, subtask, task

__all__ = ["task", "subtask", "category", "metrics"]
