"""Application service layer for DevFocus.

Services orchestrate domain functions over an explicitly passed
``Store``. Every function runs as one locked transaction and returns a
Result.

Services:
    task_service - Task and subtask lifecycle (create, list, delete)
    session_service - Start/pause/resume/complete time tracking
    category_service - Categories and experience ledgers
    metrics_service - Task metrics, general metrics, user profile

Example usage:
    >>> from devfocus.application import create_task, start_subtask
    >>> from devfocus.domain.shared import is_ok
    >>>
    >>> result = create_task(store, "Ship login page")
    >>> if is_ok(result):
    ...     print(f"Created: {result.value.id}")
"""

from devfocus.application.category_service import (
    apply_xp,
    create_category,
    delete_category,
    get_all_category_stats,
    get_category_experience,
    list_categories,
)
from devfocus.application.metrics_service import (
    get_general_metrics,
    get_task_metrics,
    get_user_profile,
)
from devfocus.application.session_service import (
    complete_subtask,
    get_subtask_with_session,
    pause_subtask,
    resume_subtask,
    start_subtask,
    update_session_duration,
)
from devfocus.application.task_service import (
    create_subtask,
    create_task,
    delete_subtask,
    delete_task,
    get_task_with_subtasks,
    get_task_with_subtasks_and_sessions,
    list_tasks_with_active_subtasks,
    update_task_status,
)

__all__ = [
    # Task service
    "create_task",
    "list_tasks_with_active_subtasks",
    "get_task_with_subtasks",
    "get_task_with_subtasks_and_sessions",
    "update_task_status",
    "delete_task",
    "create_subtask",
    "delete_subtask",
    # Session service
    "start_subtask",
    "pause_subtask",
    "resume_subtask",
    "complete_subtask",
    "update_session_duration",
    "get_subtask_with_session",
    # Category service
    "create_category",
    "list_categories",
    "delete_category",
    "get_category_experience",
    "apply_xp",
    "get_all_category_stats",
    # Metrics service
    "get_task_metrics",
    "get_general_metrics",
    "get_user_profile",
]
