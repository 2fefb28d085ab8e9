"""Task and subtask application service.

Creates, lists and deletes tasks and subtasks. Each function runs as one
store transaction and returns a Result.
"""

import logging
from datetime import datetime
from uuid import uuid4

from devfocus.application.base import resolve_now, store_operation
from devfocus.domain.session import current_session_elapsed
from devfocus.domain.shared import Err, Ok, Result, ServiceError, to_timestamp
from devfocus.domain.task import (
    ActiveSubtaskInfo,
    Subtask,
    SubtaskStatus,
    SubtaskWithSession,
    Task,
    TaskStatus,
    TaskWithActiveSubtask,
    TaskWithSubtasks,
    TaskWithSubtasksAndSessions,
    parse_task_status,
    validate_title,
)
from devfocus.infrastructure.storage import (
    CategoryRepository,
    SessionRepository,
    Store,
    SubtaskRepository,
    TaskRepository,
)

logger = logging.getLogger(__name__)


@store_operation
def create_task(
    store: Store,
    title: str,
    description: str | None = None,
    now: datetime | None = None,
) -> Result[Task, ServiceError]:
    """Create a new task in TODO.

    Args:
        store: The store to write to.
        title: Task title; must not be blank.
        description: Optional free text.
        now: Creation time (defaults to the current UTC time).

    Returns:
        Ok(Task), or Err(validation) for a blank title.
    """
    checked = validate_title(title)
    if isinstance(checked, Err):
        return checked

    stamp = to_timestamp(resolve_now(now))
    task = Task(
        id=str(uuid4()),
        title=checked.value,
        description=(description or "").strip() or None,
        status=TaskStatus.TODO,
        created_at=stamp,
        updated_at=stamp,
    )
    with store.transaction() as session:
        TaskRepository(session).add(task)

    logger.info(f"Created task {task.id} '{task.title}'")
    return Ok(task)


@store_operation
def list_tasks_with_active_subtasks(
    store: Store,
    status_filter: str | None = None,
    now: datetime | None = None,
) -> Result[list[TaskWithActiveSubtask], ServiceError]:
    """List tasks newest first, each with its in-progress subtask if any.

    The active subtask's ``current_session_time`` is an approximation
    (now minus the session start); its ``total_time_seconds`` counts only
    ended sessions.

    Args:
        store: The store to read from.
        status_filter: Optional task status string to filter by.
        now: Reference time for the current session estimate.

    Returns:
        Ok(list), or Err(validation) for an unknown status filter.
    """
    status: TaskStatus | None = None
    if status_filter:
        parsed = parse_task_status(status_filter)
        if isinstance(parsed, Err):
            return parsed
        status = parsed.value

    moment = resolve_now(now)
    with store.transaction() as session:
        subtasks = SubtaskRepository(session)
        sessions = SessionRepository(session)
        results: list[TaskWithActiveSubtask] = []
        for task in TaskRepository(session).list_all(status):
            info = None
            active = subtasks.find_in_progress(task.id)
            if active is not None:
                active_session = sessions.get_active(active.id)
                info = ActiveSubtaskInfo(
                    id=active.id,
                    title=active.title,
                    total_time_seconds=active.total_time_seconds,
                    current_session_time=(
                        current_session_elapsed(active_session, moment)
                        if active_session
                        else None
                    ),
                )
            results.append(TaskWithActiveSubtask(**task.model_dump(), active_subtask=info))
    return Ok(results)


@store_operation
def get_task_with_subtasks(store: Store, task_id: str) -> Result[TaskWithSubtasks, ServiceError]:
    """Get a task and its subtasks (oldest first), or Err(not_found)."""
    with store.transaction() as session:
        found = TaskRepository(session).get(task_id)
        if isinstance(found, Err):
            return found
        subtasks = SubtaskRepository(session).list_for_task(task_id)
    return Ok(TaskWithSubtasks(**found.value.model_dump(), subtasks=subtasks))


@store_operation
def get_task_with_subtasks_and_sessions(
    store: Store,
    task_id: str,
) -> Result[TaskWithSubtasksAndSessions, ServiceError]:
    """Get a task with every subtask paired with its active session."""
    with store.transaction() as session:
        found = TaskRepository(session).get(task_id)
        if isinstance(found, Err):
            return found
        sessions = SessionRepository(session)
        pairs = [
            SubtaskWithSession(subtask=subtask, session=sessions.get_active(subtask.id))
            for subtask in SubtaskRepository(session).list_for_task(task_id)
        ]
    return Ok(TaskWithSubtasksAndSessions(**found.value.model_dump(), subtasks_with_sessions=pairs))


@store_operation
def update_task_status(
    store: Store,
    task_id: str,
    status: str,
    now: datetime | None = None,
) -> Result[Task, ServiceError]:
    """Set a task's status.

    ``completed_at`` is stamped when the task becomes DONE (kept if it
    already was) and cleared for any other status.

    Returns:
        Ok(updated Task), Err(validation) for an unknown status, or
        Err(not_found) for an unknown task.
    """
    parsed = parse_task_status(status)
    if isinstance(parsed, Err):
        return parsed
    new_status = parsed.value

    stamp = to_timestamp(resolve_now(now))
    with store.transaction() as session:
        tasks = TaskRepository(session)
        found = tasks.get(task_id)
        if isinstance(found, Err):
            return found
        task = found.value

        if new_status == TaskStatus.DONE:
            completed_at = task.completed_at if task.status == TaskStatus.DONE else stamp
        else:
            completed_at = None
        updated = task.model_copy(
            update={"status": new_status, "updated_at": stamp, "completed_at": completed_at}
        )
        tasks.update(updated)

    logger.info(f"Task {task_id} status -> {new_status.value}")
    return Ok(updated)


@store_operation
def delete_task(store: Store, task_id: str) -> Result[None, ServiceError]:
    """Delete a task with its subtasks and their sessions."""
    with store.transaction() as session:
        deleted = TaskRepository(session).delete(task_id)
    if isinstance(deleted, Ok):
        logger.info(f"Deleted task {task_id}")
    return deleted


@store_operation
def create_subtask(
    store: Store,
    task_id: str,
    title: str,
    category_id: str | None = None,
    now: datetime | None = None,
) -> Result[Subtask, ServiceError]:
    """Add a TODO subtask to a task, optionally in a category.

    Returns:
        Ok(Subtask), Err(validation) for a blank title, or Err(not_found)
        if the task or category does not exist.
    """
    checked = validate_title(title)
    if isinstance(checked, Err):
        return checked

    stamp = to_timestamp(resolve_now(now))
    with store.transaction() as session:
        task = TaskRepository(session).get(task_id)
        if isinstance(task, Err):
            return task
        category = None
        if category_id:
            found = CategoryRepository(session).get(category_id)
            if isinstance(found, Err):
                return found
            category = found.value

        subtask = Subtask(
            id=str(uuid4()),
            task_id=task_id,
            title=checked.value,
            status=SubtaskStatus.TODO,
            category_id=category.id if category else None,
            created_at=stamp,
            updated_at=stamp,
            category=category,
        )
        SubtaskRepository(session).add(subtask)

    logger.info(f"Created subtask {subtask.id} '{subtask.title}' in task {task_id}")
    return Ok(subtask)


@store_operation
def delete_subtask(store: Store, subtask_id: str) -> Result[None, ServiceError]:
    """Delete a subtask and its sessions."""
    with store.transaction() as session:
        deleted = SubtaskRepository(session).delete(subtask_id)
    if isinstance(deleted, Ok):
        logger.info(f"Deleted subtask {subtask_id}")
    return deleted
