from __future__ import annotations

from datetime import UTC, datetime, timedelta

from devfocus.domain.shared import Ok, Result, to_timestamp
from devfocus.domain.task import Subtask, SubtaskStatus, TaskStatus, TaskWithSubtasks
from devfocus.infrastructure.storage import Store

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=UTC)
TODAY = NOW.date()


def make_store() -> Store:
    store = Store("sqlite://")
    store.initialize()
    return store


def ok_value(result: Result):
    assert isinstance(result, Ok), f"expected Ok, got {result!r}"
    return result.value


def make_subtask(
    *,
    status: SubtaskStatus = SubtaskStatus.TODO,
    seconds: int = 0,
    completed_at: str | None = None,
    category_id: str | None = None,
    subtask_id: str = "sub-1",
    task_id: str = "task-1",
) -> Subtask:
    stamp = to_timestamp(NOW)
    return Subtask(
        id=subtask_id,
        task_id=task_id,
        title=f"subtask {subtask_id}",
        status=status,
        category_id=category_id,
        created_at=stamp,
        updated_at=stamp,
        completed_at=completed_at,
        total_time_seconds=seconds,
    )


def done_subtask(seconds: int, days_ago: int = 0, index: int = 0, task_id: str = "task-1") -> Subtask:
    completed = NOW - timedelta(days=days_ago)
    return make_subtask(
        status=SubtaskStatus.DONE,
        seconds=seconds,
        completed_at=to_timestamp(completed),
        subtask_id=f"{task_id}-sub-{index}",
        task_id=task_id,
    )


def make_task(
    subtasks: list[Subtask],
    *,
    task_id: str = "task-1",
    status: TaskStatus = TaskStatus.TODO,
) -> TaskWithSubtasks:
    stamp = to_timestamp(NOW)
    return TaskWithSubtasks(
        id=task_id,
        title=f"task {task_id}",
        status=status,
        created_at=stamp,
        updated_at=stamp,
        completed_at=stamp if status == TaskStatus.DONE else None,
        subtasks=subtasks,
    )

