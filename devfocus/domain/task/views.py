"""Read views combining tasks, subtasks and their sessions."""

from pydantic import BaseModel, Field

from devfocus.domain.category.models import Category
from devfocus.domain.session.models import TimeSession
from devfocus.domain.task.models import Subtask, Task


class SubtaskWithSession(BaseModel):
    """A subtask paired with its active session, if one exists."""

    subtask: Subtask
    session: TimeSession | None = None


class TaskWithSubtasksAndSessions(Task):
    """A task with every subtask and its active session."""

    subtasks_with_sessions: list[SubtaskWithSession] = Field(default_factory=list)


class SubtaskCompletion(BaseModel):
    """Outcome of completing a subtask."""

    subtask: Subtask
    points_earned: int
    time_spent_seconds: int
    xp_gained: int
    category: Category | None = None
