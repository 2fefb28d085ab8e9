"""Metrics application service.

Read-only: loads tasks, subtasks and ledgers under the store lock and
hands them to the pure aggregation functions.
"""

from datetime import date

from devfocus.application.base import resolve_now, store_operation
from devfocus.domain.metrics import (
    GeneralMetrics,
    TaskMetrics,
    UserProfile,
    build_general_metrics,
    build_task_metrics,
    build_user_profile,
)
from devfocus.domain.shared import Err, Ok, Result, ServiceError
from devfocus.domain.task import TaskWithSubtasks
from devfocus.infrastructure.storage import (
    CategoryRepository,
    Store,
    SubtaskRepository,
    TaskRepository,
)


@store_operation
def get_task_metrics(store: Store, task_id: str) -> Result[TaskMetrics, ServiceError]:
    """Time, points and efficiency for one task, or Err(not_found)."""
    with store.transaction() as session:
        found = TaskRepository(session).get(task_id)
        if isinstance(found, Err):
            return found
        subtasks = SubtaskRepository(session).list_for_task(task_id)
    return Ok(build_task_metrics(TaskWithSubtasks(**found.value.model_dump(), subtasks=subtasks)))


@store_operation
def get_general_metrics(store: Store, today: date | None = None) -> Result[GeneralMetrics, ServiceError]:
    """Statistics across all tasks with a seven-day series ending ``today`` (UTC)."""
    day = today or resolve_now(None).date()
    with store.transaction() as session:
        subtasks = SubtaskRepository(session)
        tasks = [
            TaskWithSubtasks(**task.model_dump(), subtasks=subtasks.list_for_task(task.id))
            for task in TaskRepository(session).list_all()
        ]
    return Ok(build_general_metrics(tasks, day))


@store_operation
def get_user_profile(store: Store, today: date | None = None) -> Result[UserProfile, ServiceError]:
    """Global level, title and streaks across every category."""
    day = today or resolve_now(None).date()
    with store.transaction() as session:
        experiences = CategoryRepository(session).list_experience()
        done = SubtaskRepository(session).list_done()
    return Ok(build_user_profile(experiences, done, day))
