"""Repositories mapping ORM rows to domain models.

Each repository works inside a session handed out by
``Store.transaction()``. Lookups by id return Result types; writes take
domain models and let database errors propagate to the service layer,
which rolls the transaction back.
"""

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from devfocus.domain.category import Category, CategoryExperience
from devfocus.domain.session import TimeSession, historical_total
from devfocus.domain.shared import Err, Ok, Result, ServiceError, not_found
from devfocus.domain.task import Subtask, SubtaskStatus, Task, TaskStatus
from devfocus.infrastructure.storage.tables import (
    CategoryExperienceRow,
    CategoryRow,
    SubtaskRow,
    TaskRow,
    TimeSessionRow,
)


class CorruptRowError(Exception):
    """A stored row is missing or holds a value the domain cannot read."""


# =============================================================================
# Row <-> Model Mapping
# =============================================================================


def _status(enum_type, value: str):
    try:
        return enum_type(value)
    except ValueError as e:
        raise CorruptRowError(f"Unknown {enum_type.__name__} in store: {value!r}") from e


def _task_from_row(row: TaskRow) -> Task:
    return Task(
        id=row.id,
        title=row.title,
        description=row.description,
        status=_status(TaskStatus, row.status),
        created_at=row.created_at,
        updated_at=row.updated_at,
        completed_at=row.completed_at,
    )


def _category_from_row(row: CategoryRow) -> Category:
    return Category(id=row.id, name=row.name, color=row.color, created_at=row.created_at)


def _experience_from_row(row: CategoryExperienceRow) -> CategoryExperience:
    return CategoryExperience(
        id=row.id,
        category_id=row.category_id,
        total_xp=row.total_xp,
        level=row.level,
        updated_at=row.updated_at,
    )


def _session_from_row(row: TimeSessionRow) -> TimeSession:
    return TimeSession(
        id=row.id,
        subtask_id=row.subtask_id,
        started_at=row.started_at,
        paused_at=row.paused_at,
        resumed_at=row.resumed_at,
        ended_at=row.ended_at,
        duration_seconds=row.duration_seconds,
    )


def _subtask_from_row(row: SubtaskRow) -> Subtask:
    """Map a subtask row, filling its historical total and category."""
    return Subtask(
        id=row.id,
        task_id=row.task_id,
        title=row.title,
        status=_status(SubtaskStatus, row.status),
        category_id=row.category_id,
        created_at=row.created_at,
        updated_at=row.updated_at,
        completed_at=row.completed_at,
        total_time_seconds=historical_total(_session_from_row(s) for s in row.sessions),
        category=_category_from_row(row.category) if row.category else None,
    )


# =============================================================================
# Repositories
# =============================================================================


class TaskRepository:
    """Persistence for tasks."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, task_id: str) -> Result[Task, ServiceError]:
        row = self._session.get(TaskRow, task_id)
        if row is None:
            return Err(not_found("Task", task_id))
        return Ok(_task_from_row(row))

    def list_all(self, status: TaskStatus | None = None) -> list[Task]:
        """List tasks, newest first, optionally filtered by status."""
        query = select(TaskRow).order_by(TaskRow.created_at.desc())
        if status is not None:
            query = query.where(TaskRow.status == status.value)
        return [_task_from_row(row) for row in self._session.scalars(query)]

    def add(self, task: Task) -> None:
        self._session.add(
            TaskRow(
                id=task.id,
                title=task.title,
                description=task.description,
                status=task.status.value,
                created_at=task.created_at,
                updated_at=task.updated_at,
                completed_at=task.completed_at,
            )
        )

    def update(self, task: Task) -> None:
        row = self._session.get(TaskRow, task.id)
        if row is None:
            raise CorruptRowError(f"Task row vanished: {task.id}")
        row.title = task.title
        row.description = task.description
        row.status = task.status.value
        row.updated_at = task.updated_at
        row.completed_at = task.completed_at

    def delete(self, task_id: str) -> Result[None, ServiceError]:
        row = self._session.get(TaskRow, task_id)
        if row is None:
            return Err(not_found("Task", task_id))
        self._session.delete(row)
        return Ok(None)


class SubtaskRepository:
    """Persistence for subtasks. Returned subtasks carry their historical time."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, subtask_id: str) -> Result[Subtask, ServiceError]:
        row = self._session.get(SubtaskRow, subtask_id)
        if row is None:
            return Err(not_found("Subtask", subtask_id))
        return Ok(_subtask_from_row(row))

    def list_for_task(self, task_id: str) -> list[Subtask]:
        query = (
            select(SubtaskRow)
            .where(SubtaskRow.task_id == task_id)
            .order_by(SubtaskRow.created_at)
        )
        return [_subtask_from_row(row) for row in self._session.scalars(query)]

    def list_done(self) -> list[Subtask]:
        query = select(SubtaskRow).where(SubtaskRow.status == SubtaskStatus.DONE.value)
        return [_subtask_from_row(row) for row in self._session.scalars(query)]

    def find_in_progress(self, task_id: str) -> Subtask | None:
        """Return the first in-progress subtask of a task, if any."""
        query = (
            select(SubtaskRow)
            .where(
                SubtaskRow.task_id == task_id,
                SubtaskRow.status == SubtaskStatus.IN_PROGRESS.value,
            )
            .order_by(SubtaskRow.created_at)
            .limit(1)
        )
        row = self._session.scalars(query).first()
        return _subtask_from_row(row) if row else None

    def add(self, subtask: Subtask) -> None:
        self._session.add(
            SubtaskRow(
                id=subtask.id,
                task_id=subtask.task_id,
                title=subtask.title,
                status=subtask.status.value,
                created_at=subtask.created_at,
                updated_at=subtask.updated_at,
                completed_at=subtask.completed_at,
                category_id=subtask.category_id,
            )
        )

    def update(self, subtask: Subtask) -> None:
        row = self._session.get(SubtaskRow, subtask.id)
        if row is None:
            raise CorruptRowError(f"Subtask row vanished: {subtask.id}")
        row.title = subtask.title
        row.status = subtask.status.value
        row.updated_at = subtask.updated_at
        row.completed_at = subtask.completed_at
        row.category_id = subtask.category_id

    def delete(self, subtask_id: str) -> Result[None, ServiceError]:
        row = self._session.get(SubtaskRow, subtask_id)
        if row is None:
            return Err(not_found("Subtask", subtask_id))
        self._session.delete(row)
        return Ok(None)


class SessionRepository:
    """Persistence for time sessions."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_active(self, subtask_id: str) -> TimeSession | None:
        """Return the subtask's session with no end time, if any."""
        query = select(TimeSessionRow).where(
            TimeSessionRow.subtask_id == subtask_id,
            TimeSessionRow.ended_at.is_(None),
        )
        row = self._session.scalars(query).first()
        return _session_from_row(row) if row else None

    def list_for_subtask(self, subtask_id: str) -> list[TimeSession]:
        query = (
            select(TimeSessionRow)
            .where(TimeSessionRow.subtask_id == subtask_id)
            .order_by(TimeSessionRow.started_at)
        )
        return [_session_from_row(row) for row in self._session.scalars(query)]

    def add(self, time_session: TimeSession) -> None:
        self._session.add(
            TimeSessionRow(
                id=time_session.id,
                subtask_id=time_session.subtask_id,
                started_at=time_session.started_at,
                paused_at=time_session.paused_at,
                resumed_at=time_session.resumed_at,
                ended_at=time_session.ended_at,
                duration_seconds=time_session.duration_seconds,
            )
        )

    def update(self, time_session: TimeSession) -> None:
        row = self._session.get(TimeSessionRow, time_session.id)
        if row is None:
            raise CorruptRowError(f"Session row vanished: {time_session.id}")
        row.paused_at = time_session.paused_at
        row.resumed_at = time_session.resumed_at
        row.ended_at = time_session.ended_at
        row.duration_seconds = time_session.duration_seconds


class CategoryRepository:
    """Persistence for categories and their experience ledgers."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, category_id: str) -> Result[Category, ServiceError]:
        row = self._session.get(CategoryRow, category_id)
        if row is None:
            return Err(not_found("Category", category_id))
        return Ok(_category_from_row(row))

    def get_by_name(self, name: str) -> Category | None:
        query = select(CategoryRow).where(func.lower(CategoryRow.name) == name.lower())
        row = self._session.scalars(query).first()
        return _category_from_row(row) if row else None

    def list_all(self) -> list[Category]:
        query = select(CategoryRow).order_by(CategoryRow.name)
        return [_category_from_row(row) for row in self._session.scalars(query)]

    def add(self, category: Category, experience: CategoryExperience) -> None:
        """Insert a category together with its ledger row."""
        self._session.add(
            CategoryRow(
                id=category.id,
                name=category.name,
                color=category.color,
                created_at=category.created_at,
            )
        )
        self._session.add(
            CategoryExperienceRow(
                id=experience.id,
                category_id=experience.category_id,
                total_xp=experience.total_xp,
                level=experience.level,
                updated_at=experience.updated_at,
            )
        )

    def delete(self, category_id: str) -> Result[None, ServiceError]:
        row = self._session.get(CategoryRow, category_id)
        if row is None:
            return Err(not_found("Category", category_id))
        self._session.delete(row)
        return Ok(None)

    def get_experience(self, category_id: str) -> Result[CategoryExperience, ServiceError]:
        query = select(CategoryExperienceRow).where(
            CategoryExperienceRow.category_id == category_id
        )
        row = self._session.scalars(query).first()
        if row is None:
            return Err(not_found("Experience for category", category_id))
        return Ok(_experience_from_row(row))

    def list_experience(self) -> list[CategoryExperience]:
        return [
            _experience_from_row(row)
            for row in self._session.scalars(select(CategoryExperienceRow))
        ]

    def update_experience(self, experience: CategoryExperience) -> None:
        row = self._session.get(CategoryExperienceRow, experience.id)
        if row is None:
            raise CorruptRowError(f"Experience row vanished: {experience.id}")
        row.total_xp = experience.total_xp
        row.level = experience.level
        row.updated_at = experience.updated_at
