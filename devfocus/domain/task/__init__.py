"""Task domain - tasks, subtasks and their read views.

Key Types:
    TaskStatus / SubtaskStatus - Closed status enums
    Task / Subtask - Persisted entities
    TaskWithSubtasks, TaskWithActiveSubtask - Task views
    SubtaskWithSession, TaskWithSubtasksAndSessions - Session-aware views
    SubtaskCompletion - Result of completing a subtask

Domain Events:
    SubtaskStarted, SubtaskPaused, SubtaskResumed, SubtaskCompleted
"""

from .events import SubtaskCompleted, SubtaskPaused, SubtaskResumed, SubtaskStarted
from .models import (
    ActiveSubtaskInfo,
    Subtask,
    SubtaskStatus,
    Task,
    TaskStatus,
    TaskWithActiveSubtask,
    TaskWithSubtasks,
    parse_task_status,
    validate_title,
)
from .views import SubtaskCompletion, SubtaskWithSession, TaskWithSubtasksAndSessions

__all__ = [
    # Models
    "TaskStatus",
    "SubtaskStatus",
    "Task",
    "Subtask",
    "TaskWithSubtasks",
    "TaskWithActiveSubtask",
    "ActiveSubtaskInfo",
    "parse_task_status",
    "validate_title",
    # Views
    "SubtaskWithSession",
    "TaskWithSubtasksAndSessions",
    "SubtaskCompletion",
    # Events
    "SubtaskStarted",
    "SubtaskPaused",
    "SubtaskResumed",
    "SubtaskCompleted",
]
