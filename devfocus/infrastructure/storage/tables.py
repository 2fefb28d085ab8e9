"""SQLAlchemy ORM tables.

Statuses and timestamps are stored as text; conversion to domain enums
and models happens in the repositories.
"""

from typing import Optional

from sqlalchemy import ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    pass


class TaskRow(Base):
    __tablename__ = "tasks"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[str] = mapped_column(String(40), nullable=False)
    updated_at: Mapped[str] = mapped_column(String(40), nullable=False)
    completed_at: Mapped[str | None] = mapped_column(String(40), nullable=True)

    subtasks: Mapped[list["SubtaskRow"]] = relationship(
        back_populates="task",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="SubtaskRow.created_at",
    )


class CategoryRow(Base):
    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    color: Mapped[str] = mapped_column(String(7), nullable=False)
    created_at: Mapped[str] = mapped_column(String(40), nullable=False)

    experience: Mapped[Optional["CategoryExperienceRow"]] = relationship(
        back_populates="category",
        cascade="all, delete-orphan",
        passive_deletes=True,
        uselist=False,
    )


class CategoryExperienceRow(Base):
    __tablename__ = "category_experience"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    category_id: Mapped[str] = mapped_column(
        ForeignKey("categories.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
        index=True,
    )
    total_xp: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    level: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    updated_at: Mapped[str] = mapped_column(String(40), nullable=False)

    category: Mapped[CategoryRow] = relationship(back_populates="experience")


class SubtaskRow(Base):
    __tablename__ = "subtasks"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    task_id: Mapped[str] = mapped_column(
        ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[str] = mapped_column(String(40), nullable=False)
    updated_at: Mapped[str] = mapped_column(String(40), nullable=False)
    completed_at: Mapped[str | None] = mapped_column(String(40), nullable=True)
    category_id: Mapped[str | None] = mapped_column(
        ForeignKey("categories.id", ondelete="SET NULL"), nullable=True
    )

    task: Mapped[TaskRow] = relationship(back_populates="subtasks")
    category: Mapped[CategoryRow | None] = relationship()
    sessions: Mapped[list["TimeSessionRow"]] = relationship(
        back_populates="subtask",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="TimeSessionRow.started_at",
    )

    __table_args__ = (
        Index("idx_subtasks_task_id", "task_id"),
        Index("idx_subtasks_category_id", "category_id"),
    )


class TimeSessionRow(Base):
    __tablename__ = "time_sessions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    subtask_id: Mapped[str] = mapped_column(
        ForeignKey("subtasks.id", ondelete="CASCADE"), nullable=False
    )
    started_at: Mapped[str] = mapped_column(String(40), nullable=False)
    paused_at: Mapped[str | None] = mapped_column(String(40), nullable=True)
    resumed_at: Mapped[str | None] = mapped_column(String(40), nullable=True)
    ended_at: Mapped[str | None] = mapped_column(String(40), nullable=True)
    duration_seconds: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    subtask: Mapped[SubtaskRow] = relationship(back_populates="sessions")

    __table_args__ = (Index("idx_time_sessions_subtask_id", "subtask_id"),)
