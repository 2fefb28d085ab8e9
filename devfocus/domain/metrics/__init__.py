"""Metrics domain - read-only statistics over tasks and ledgers."""

from .aggregation import (
    LEVEL_TITLES,
    WINDOW_DAYS,
    build_general_metrics,
    build_task_metrics,
    build_user_profile,
    compute_streaks,
    streak_bonus_percent,
    task_bonus,
    title_for_level,
)
from .models import DailyPoints, GeneralMetrics, SubtaskWithTime, TaskMetrics, UserProfile

__all__ = [
    "DailyPoints",
    "GeneralMetrics",
    "SubtaskWithTime",
    "TaskMetrics",
    "UserProfile",
    "WINDOW_DAYS",
    "LEVEL_TITLES",
    "task_bonus",
    "build_task_metrics",
    "build_general_metrics",
    "build_user_profile",
    "compute_streaks",
    "streak_bonus_percent",
    "title_for_level",
]
