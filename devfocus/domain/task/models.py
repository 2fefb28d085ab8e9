"""Task domain models.

Tasks own subtasks; subtasks are the unit against which time is tracked.
Statuses are closed enums whose values are the persisted strings.
"""

from enum import Enum

from pydantic import BaseModel, Field

from devfocus.domain.category.models import Category
from devfocus.domain.shared import Err, Ok, Result, ServiceError, validation


class TaskStatus(str, Enum):
    """Status of a top-level task."""

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"


class SubtaskStatus(str, Enum):
    """Status of a subtask in the session state machine."""

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    PAUSED = "paused"
    DONE = "done"


def parse_task_status(raw: str) -> Result[TaskStatus, ServiceError]:
    """Convert an input string to a TaskStatus, rejecting unknown values."""
    try:
        return Ok(TaskStatus(raw.strip().lower()))
    except ValueError:
        allowed = ", ".join(s.value for s in TaskStatus)
        return Err(validation(f"Unknown task status {raw!r} (expected one of: {allowed})"))


def validate_title(title: str) -> Result[str, ServiceError]:
    """Trim a title, rejecting empty ones."""
    cleaned = title.strip()
    if not cleaned:
        return Err(validation("Title must not be empty"))
    return Ok(cleaned)


class Task(BaseModel):
    """A top-level unit of work.

    ``completed_at`` is set iff ``status`` is DONE.
    """

    id: str
    title: str
    description: str | None = None
    status: TaskStatus = TaskStatus.TODO
    created_at: str
    updated_at: str
    completed_at: str | None = None


class Subtask(BaseModel):
    """A unit of work belonging to exactly one task.

    ``total_time_seconds`` is the historical total (ended sessions only)
    and is filled in by views; it is not a persisted column.
    """

    id: str
    task_id: str
    title: str
    status: SubtaskStatus = SubtaskStatus.TODO
    category_id: str | None = None
    created_at: str
    updated_at: str
    completed_at: str | None = None
    total_time_seconds: int = 0
    category: Category | None = None

    def is_done(self) -> bool:
        return self.status == SubtaskStatus.DONE


class TaskWithSubtasks(Task):
    """A task together with its subtasks, oldest first."""

    subtasks: list[Subtask] = Field(default_factory=list)


class ActiveSubtaskInfo(BaseModel):
    """Summary of the subtask currently being worked on within a task."""

    id: str
    title: str
    total_time_seconds: int
    current_session_time: int | None = None


class TaskWithActiveSubtask(Task):
    """A task with its in-progress subtask, if any."""

    active_subtask: ActiveSubtaskInfo | None = None
