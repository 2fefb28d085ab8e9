"""Scoring domain - points, XP and bonuses for completed work."""

from .scoring import (
    BASE_POINTS,
    COMPLEXITY_BONUS,
    COMPLEXITY_MIN_SUBTASKS,
    EFFICIENCY_BONUS,
    EFFICIENCY_THRESHOLD_SECONDS,
    XP_PER_SECOND,
    CompletionScore,
    completion_points,
    complexity_bonus,
    is_efficient,
    score_completion,
)

__all__ = [
    "BASE_POINTS",
    "EFFICIENCY_BONUS",
    "EFFICIENCY_THRESHOLD_SECONDS",
    "COMPLEXITY_BONUS",
    "COMPLEXITY_MIN_SUBTASKS",
    "XP_PER_SECOND",
    "CompletionScore",
    "is_efficient",
    "completion_points",
    "score_completion",
    "complexity_bonus",
]
