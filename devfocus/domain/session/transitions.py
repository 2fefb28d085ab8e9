"""Subtask session state machine.

Pure functions implementing the start/pause/resume/complete transitions.
Each takes the subtask, its active session (if any) and the current time,
validates the transition, and returns the updated subtask, the new or
updated session and a domain event. Nothing is persisted here.

    TODO --start--> IN_PROGRESS --pause--> PAUSED --resume--> IN_PROGRESS
    IN_PROGRESS / PAUSED --complete--> DONE (terminal)
"""

from collections.abc import Iterable
from datetime import datetime
from uuid import uuid4

from devfocus.domain.scoring import CompletionScore, score_completion
from devfocus.domain.session.models import TimeSession
from devfocus.domain.shared import (
    Err,
    Ok,
    Result,
    ServiceError,
    conflict,
    parse_timestamp,
    to_timestamp,
    validation,
)
from devfocus.domain.task.events import (
    SubtaskCompleted,
    SubtaskPaused,
    SubtaskResumed,
    SubtaskStarted,
)
from devfocus.domain.task.models import Subtask, SubtaskStatus

DEFAULT_MAX_ELAPSED_SECONDS = 7 * 24 * 60 * 60


def validate_elapsed(
    elapsed_seconds: int,
    current_seconds: int = 0,
    max_elapsed_seconds: int = DEFAULT_MAX_ELAPSED_SECONDS,
) -> Result[int, ServiceError]:
    """Check a caller-reported elapsed time.

    The value must be a non-negative integer no larger than
    ``max_elapsed_seconds`` and must not go below the session's current
    duration.
    """
    if isinstance(elapsed_seconds, bool) or not isinstance(elapsed_seconds, int):
        return Err(validation(f"Elapsed seconds must be an integer, got {elapsed_seconds!r}"))
    if elapsed_seconds < 0:
        return Err(validation(f"Elapsed seconds must not be negative: {elapsed_seconds}"))
    if elapsed_seconds > max_elapsed_seconds:
        return Err(
            validation(
                f"Elapsed seconds {elapsed_seconds} exceeds the maximum of {max_elapsed_seconds}"
            )
        )
    if elapsed_seconds < current_seconds:
        return Err(
            validation(
                f"Elapsed seconds {elapsed_seconds} is lower than the "
                f"session's recorded {current_seconds}"
            )
        )
    return Ok(elapsed_seconds)


def _require_active(subtask: Subtask, session: TimeSession | None) -> Result[TimeSession, ServiceError]:
    if session is None or not session.is_active():
        return Err(conflict(f"Subtask '{subtask.title}' has no active session"))
    return Ok(session)


def _invalid_transition(subtask: Subtask, action: str) -> ServiceError:
    return conflict(
        f"Cannot {action} subtask '{subtask.title}' (current status: {subtask.status.value})"
    )


def start_session(
    subtask: Subtask,
    active_session: TimeSession | None,
    now: datetime,
) -> Result[tuple[Subtask, TimeSession, SubtaskStarted], ServiceError]:
    """Start work on a subtask, opening a new active session.

    Only valid from TODO with no active session.
    """
    if active_session is not None:
        return Err(conflict(f"Subtask '{subtask.title}' already has an active session"))
    if subtask.status != SubtaskStatus.TODO:
        return Err(_invalid_transition(subtask, "start"))

    stamp = to_timestamp(now)
    session = TimeSession(
        id=str(uuid4()),
        subtask_id=subtask.id,
        started_at=stamp,
        duration_seconds=0,
    )
    updated = subtask.model_copy(
        update={"status": SubtaskStatus.IN_PROGRESS, "updated_at": stamp}
    )
    event = SubtaskStarted(subtask_id=subtask.id, session_id=session.id)
    return Ok((updated, session, event))


def pause_session(
    subtask: Subtask,
    active_session: TimeSession | None,
    elapsed_seconds: int,
    now: datetime,
    max_elapsed_seconds: int = DEFAULT_MAX_ELAPSED_SECONDS,
) -> Result[tuple[Subtask, TimeSession, SubtaskPaused], ServiceError]:
    """Pause an in-progress subtask, recording the caller's elapsed time."""
    if subtask.status != SubtaskStatus.IN_PROGRESS:
        return Err(_invalid_transition(subtask, "pause"))
    active = _require_active(subtask, active_session)
    if isinstance(active, Err):
        return active
    session = active.value

    checked = validate_elapsed(elapsed_seconds, session.duration_seconds, max_elapsed_seconds)
    if isinstance(checked, Err):
        return checked

    stamp = to_timestamp(now)
    updated_session = session.model_copy(
        update={"paused_at": stamp, "duration_seconds": checked.value}
    )
    updated = subtask.model_copy(update={"status": SubtaskStatus.PAUSED, "updated_at": stamp})
    event = SubtaskPaused(
        subtask_id=subtask.id,
        session_id=session.id,
        duration_seconds=checked.value,
    )
    return Ok((updated, updated_session, event))


def resume_session(
    subtask: Subtask,
    active_session: TimeSession | None,
    now: datetime,
) -> Result[tuple[Subtask, TimeSession, SubtaskResumed], ServiceError]:
    """Resume a paused subtask. The recorded duration is left unchanged."""
    if subtask.status != SubtaskStatus.PAUSED:
        return Err(_invalid_transition(subtask, "resume"))
    active = _require_active(subtask, active_session)
    if isinstance(active, Err):
        return active
    session = active.value

    stamp = to_timestamp(now)
    updated_session = session.model_copy(update={"resumed_at": stamp})
    updated = subtask.model_copy(
        update={"status": SubtaskStatus.IN_PROGRESS, "updated_at": stamp}
    )
    event = SubtaskResumed(subtask_id=subtask.id, session_id=session.id)
    return Ok((updated, updated_session, event))


def complete_session(
    subtask: Subtask,
    active_session: TimeSession | None,
    elapsed_seconds: int,
    now: datetime,
    max_elapsed_seconds: int = DEFAULT_MAX_ELAPSED_SECONDS,
) -> Result[tuple[Subtask, TimeSession, SubtaskCompleted], ServiceError]:
    """Complete a subtask, closing its active session and scoring the work.

    Valid from IN_PROGRESS or PAUSED. The returned event carries the
    points and XP for the caller to apply.
    """
    if subtask.status not in (SubtaskStatus.IN_PROGRESS, SubtaskStatus.PAUSED):
        return Err(_invalid_transition(subtask, "complete"))
    active = _require_active(subtask, active_session)
    if isinstance(active, Err):
        return active
    session = active.value

    checked = validate_elapsed(elapsed_seconds, session.duration_seconds, max_elapsed_seconds)
    if isinstance(checked, Err):
        return checked
    duration = checked.value

    stamp = to_timestamp(now)
    closed = session.model_copy(update={"ended_at": stamp, "duration_seconds": duration})
    updated = subtask.model_copy(
        update={
            "status": SubtaskStatus.DONE,
            "updated_at": stamp,
            "completed_at": stamp,
            "total_time_seconds": subtask.total_time_seconds + duration,
        }
    )
    score: CompletionScore = score_completion(duration, subtask.category_id)
    event = SubtaskCompleted(
        subtask_id=subtask.id,
        session_id=session.id,
        duration_seconds=duration,
        points=score.points,
        xp=score.xp,
        category_id=subtask.category_id,
    )
    return Ok((updated, closed, event))


def checkpoint_session(
    subtask: Subtask,
    active_session: TimeSession | None,
    elapsed_seconds: int,
    max_elapsed_seconds: int = DEFAULT_MAX_ELAPSED_SECONDS,
) -> Result[TimeSession, ServiceError]:
    """Record a new running duration on the active session without a transition."""
    active = _require_active(subtask, active_session)
    if isinstance(active, Err):
        return active
    session = active.value

    checked = validate_elapsed(elapsed_seconds, session.duration_seconds, max_elapsed_seconds)
    if isinstance(checked, Err):
        return checked
    return Ok(session.model_copy(update={"duration_seconds": checked.value}))


def historical_total(sessions: Iterable[TimeSession]) -> int:
    """Sum the durations of ended sessions; active sessions are excluded."""
    return sum(s.duration_seconds for s in sessions if not s.is_active())


def current_session_elapsed(session: TimeSession, now: datetime) -> int | None:
    """Approximate seconds since an active session started.

    Returns None for ended sessions or an unparsable start time.
    """
    if not session.is_active():
        return None
    started = parse_timestamp(session.started_at)
    if started is None:
        return None
    return max(0, int((now - started).total_seconds()))
