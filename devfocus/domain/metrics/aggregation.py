"""Pure aggregation over loaded tasks and subtasks.

All functions are pure - no I/O, no side effects. Totals are derived
from the current records every time, never from running counters, so
they stay consistent when completions are edited or deleted.
"""

from collections.abc import Iterable
from datetime import date, timedelta

from devfocus.domain.category.leveling import level_for_xp, progress_percent, xp_threshold
from devfocus.domain.category.models import CategoryExperience
from devfocus.domain.metrics.models import (
    DailyPoints,
    GeneralMetrics,
    SubtaskWithTime,
    TaskMetrics,
    UserProfile,
)
from devfocus.domain.scoring import completion_points, complexity_bonus, is_efficient
from devfocus.domain.shared import timestamp_date
from devfocus.domain.task.models import Subtask, TaskStatus, TaskWithSubtasks

WINDOW_DAYS = 7

# (minimum level, title), highest first
LEVEL_TITLES: list[tuple[int, str]] = [
    (50, "legend"),
    (30, "master"),
    (20, "expert"),
    (15, "senior"),
    (10, "mid"),
    (5, "junior"),
    (1, "novice"),
]

STREAK_BONUS_STEP_DAYS = 7
STREAK_BONUS_STEP_PERCENT = 5
STREAK_BONUS_MAX_PERCENT = 50


def _done(subtasks: Iterable[Subtask]) -> list[Subtask]:
    return [s for s in subtasks if s.is_done()]


def task_bonus(task: TaskWithSubtasks) -> int:
    """Complexity bonus earned by a task, recomputed from its subtasks."""
    return complexity_bonus(s.is_done() for s in task.subtasks)


def build_task_metrics(task: TaskWithSubtasks) -> TaskMetrics:
    """Compute metrics for one task from its subtasks' historical times.

    Args:
        task: The task with subtasks whose ``total_time_seconds`` is filled.

    Returns:
        TaskMetrics for the task.
    """
    done = _done(task.subtasks)
    total_time = sum(s.total_time_seconds for s in task.subtasks)
    done_time = sum(s.total_time_seconds for s in done)
    efficient = sum(1 for s in done if is_efficient(s.total_time_seconds))
    bonus = task_bonus(task)

    completed = len(done)
    average = done_time / completed if completed else 0.0
    efficiency_rate = efficient / completed * 100 if completed else 0.0

    return TaskMetrics(
        task_id=task.id,
        task_title=task.title,
        total_time_seconds=total_time,
        total_points=sum(completion_points(s.total_time_seconds) for s in done) + bonus,
        complexity_bonus=bonus,
        subtasks_completed=completed,
        subtasks_total=len(task.subtasks),
        average_time_per_subtask=average,
        efficiency_rate=efficiency_rate,
        completed_at=task.completed_at,
        subtasks_with_time=[
            SubtaskWithTime(subtask=s, total_time_seconds=s.total_time_seconds)
            for s in task.subtasks
        ],
    )


def _bonus_date(task: TaskWithSubtasks) -> date | None:
    """Day a task's bonus was earned: the latest parsable subtask completion."""
    dates = [d for d in (timestamp_date(s.completed_at) for s in task.subtasks) if d]
    return max(dates) if dates else None


def build_general_metrics(tasks: list[TaskWithSubtasks], today: date) -> GeneralMetrics:
    """Compute statistics across every task.

    Daily buckets use the UTC date of each subtask's ``completed_at``;
    completions whose timestamp is missing or unparsable still count in
    the totals but in no day. A task's complexity bonus is bucketed on
    the day its last subtask was completed.

    Args:
        tasks: Every task with its subtasks' historical times filled in.
        today: The current UTC date; the window ends here.

    Returns:
        GeneralMetrics with a seven-day series ending today.
    """
    window = [today - timedelta(days=offset) for offset in range(WINDOW_DAYS - 1, -1, -1)]
    buckets = {day: DailyPoints(date=day) for day in window}

    total_points = 0
    total_subtasks = 0
    done_time = 0
    for task in tasks:
        for subtask in _done(task.subtasks):
            points = completion_points(subtask.total_time_seconds)
            total_points += points
            total_subtasks += 1
            done_time += subtask.total_time_seconds

            day = timestamp_date(subtask.completed_at)
            if day in buckets:
                buckets[day].points += points
                buckets[day].subtasks_completed += 1

        bonus = task_bonus(task)
        if bonus:
            total_points += bonus
            day = _bonus_date(task)
            if day in buckets:
                buckets[day].points += bonus

    series = [buckets[day] for day in window]

    # First-seen wins on ties: replace only on strictly greater points
    best_day: DailyPoints | None = None
    for day in series:
        if day.points > 0 and (best_day is None or day.points > best_day.points):
            best_day = day

    return GeneralMetrics(
        total_points=total_points,
        points_today=buckets[today].points,
        points_this_week=sum(day.points for day in series),
        points_last_7_days=series,
        best_day=best_day,
        total_tasks_completed=sum(1 for t in tasks if t.status == TaskStatus.DONE),
        total_subtasks_completed=total_subtasks,
        average_completion_time_seconds=done_time / total_subtasks if total_subtasks else 0.0,
    )


def title_for_level(level: int) -> str:
    for minimum, title in LEVEL_TITLES:
        if level >= minimum:
            return title
    return LEVEL_TITLES[-1][1]


def compute_streaks(work_dates: Iterable[date], today: date) -> tuple[int, int]:
    """Return (current, longest) runs of consecutive days with completions.

    The current streak is still alive if the last work day is today or
    yesterday; otherwise it is zero.
    """
    days = sorted(set(work_dates))
    if not days:
        return 0, 0

    longest = run = 1
    for previous, current in zip(days, days[1:]):
        run = run + 1 if current - previous == timedelta(days=1) else 1
        longest = max(longest, run)

    if today - days[-1] > timedelta(days=1):
        return 0, longest
    return run, longest


def streak_bonus_percent(current_streak: int) -> int:
    steps = current_streak // STREAK_BONUS_STEP_DAYS
    return min(steps * STREAK_BONUS_STEP_PERCENT, STREAK_BONUS_MAX_PERCENT)


def build_user_profile(
    experiences: Iterable[CategoryExperience],
    completed_subtasks: Iterable[Subtask],
    today: date,
) -> UserProfile:
    """Compute global progression from every category ledger.

    Args:
        experiences: All category experience rows.
        completed_subtasks: Done subtasks; their completion dates drive streaks.
        today: The current UTC date.

    Returns:
        UserProfile with level, title and streaks.
    """
    total_xp = sum(e.total_xp for e in experiences)
    level = level_for_xp(total_xp)
    work_dates = [d for d in (timestamp_date(s.completed_at) for s in completed_subtasks) if d]
    current, longest = compute_streaks(work_dates, today)

    return UserProfile(
        total_xp=total_xp,
        level=level,
        title=title_for_level(level),
        xp_for_next_level=xp_threshold(level + 1),
        progress_percent=progress_percent(total_xp, level),
        current_streak=current,
        longest_streak=longest,
        last_work_date=max(work_dates) if work_dates else None,
        streak_bonus_percent=streak_bonus_percent(current),
    )
