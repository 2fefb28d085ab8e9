"""Metrics view models."""

import datetime

from pydantic import BaseModel, Field

from devfocus.domain.task.models import Subtask


class SubtaskWithTime(BaseModel):
    subtask: Subtask
    total_time_seconds: int


class TaskMetrics(BaseModel):
    """Summary of time, points and efficiency for one task."""

    task_id: str
    task_title: str
    total_time_seconds: int
    total_points: int
    complexity_bonus: int
    subtasks_completed: int
    subtasks_total: int
    average_time_per_subtask: float
    efficiency_rate: float
    completed_at: str | None = None
    subtasks_with_time: list[SubtaskWithTime] = Field(default_factory=list)


class DailyPoints(BaseModel):
    """Points and completed subtasks for one UTC calendar day."""

    date: datetime.date
    points: int = 0
    subtasks_completed: int = 0


class GeneralMetrics(BaseModel):
    """Statistics across all tasks.

    ``points_last_7_days`` always holds seven entries, oldest first,
    ending today.
    """

    total_points: int
    points_today: int
    points_this_week: int
    points_last_7_days: list[DailyPoints]
    best_day: DailyPoints | None = None
    total_tasks_completed: int
    total_subtasks_completed: int
    average_completion_time_seconds: float


class UserProfile(BaseModel):
    """Global progression across every category."""

    total_xp: int
    level: int
    title: str
    xp_for_next_level: int
    progress_percent: float
    current_streak: int
    longest_streak: int
    last_work_date: datetime.date | None = None
    streak_bonus_percent: int = 0
