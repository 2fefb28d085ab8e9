"""Points and experience scoring.

Pure functions converting completed work into points and XP.
All functions are pure - no I/O, no side effects.
"""

from collections.abc import Iterable

from pydantic import BaseModel

# =============================================================================
# Scoring Constants
# =============================================================================

BASE_POINTS = 10  # Every completed subtask
EFFICIENCY_BONUS = 5  # Completed in under the threshold
EFFICIENCY_THRESHOLD_SECONDS = 1500  # 25 minutes
COMPLEXITY_BONUS = 20  # Task with enough subtasks, all done
COMPLEXITY_MIN_SUBTASKS = 5
XP_PER_SECOND = 1


# =============================================================================
# Value Objects
# =============================================================================


class CompletionScore(BaseModel):
    """Points and XP earned by completing one subtask."""

    points: int
    xp: int
    efficient: bool


# =============================================================================
# Scoring Functions
# =============================================================================


def is_efficient(duration_seconds: int) -> bool:
    """Return True if the work finished under the efficiency threshold."""
    return duration_seconds < EFFICIENCY_THRESHOLD_SECONDS


def completion_points(duration_seconds: int) -> int:
    """Points for completing a subtask that took ``duration_seconds``."""
    if is_efficient(duration_seconds):
        return BASE_POINTS + EFFICIENCY_BONUS
    return BASE_POINTS


def score_completion(duration_seconds: int, category_id: str | None) -> CompletionScore:
    """Score a subtask completion.

    XP is one per second of focused work and only counts when the subtask
    has a category to credit; uncategorized work still earns points.

    Args:
        duration_seconds: Final elapsed time reported for the session.
        category_id: Category of the subtask, if any.

    Returns:
        CompletionScore with points, xp and whether the bonus applied.
    """
    xp = duration_seconds * XP_PER_SECOND if category_id else 0
    return CompletionScore(
        points=completion_points(duration_seconds),
        xp=xp,
        efficient=is_efficient(duration_seconds),
    )


def complexity_bonus(subtasks_done: Iterable[bool]) -> int:
    """Bonus points for a task, given the done-flag of each of its subtasks.

    Awarded when the task has at least ``COMPLEXITY_MIN_SUBTASKS`` subtasks
    and every one is done. Derived on demand, so it is safe to evaluate
    any number of times.
    """
    flags = list(subtasks_done)
    if len(flags) >= COMPLEXITY_MIN_SUBTASKS and all(flags):
        return COMPLEXITY_BONUS
    return 0
