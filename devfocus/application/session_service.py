"""Subtask session application service.

Applies the session state machine to stored subtasks. Each transition
loads the subtask and its active session, validates the move with the
pure domain functions, then writes the subtask, the session and (on
completion) the category ledger in a single transaction.

The caller owns the ticking clock: pause, complete and checkpoint take
the elapsed seconds it measured. Server timestamps are an audit trail.
"""

import logging
from datetime import datetime

from devfocus.application.base import resolve_now, store_operation
from devfocus.domain.category import gain_xp
from devfocus.domain.session import (
    DEFAULT_MAX_ELAPSED_SECONDS,
    TimeSession,
    checkpoint_session,
    complete_session,
    pause_session,
    resume_session,
    start_session,
)
from devfocus.domain.shared import Err, Ok, Result, ServiceError
from devfocus.domain.task import SubtaskCompletion, SubtaskWithSession
from devfocus.infrastructure.storage import (
    CategoryRepository,
    SessionRepository,
    Store,
    SubtaskRepository,
)

logger = logging.getLogger(__name__)


@store_operation
def start_subtask(
    store: Store,
    subtask_id: str,
    now: datetime | None = None,
) -> Result[TimeSession, ServiceError]:
    """Start a TODO subtask, opening a new active session.

    Returns:
        Ok(new active TimeSession), Err(not_found) for an unknown subtask,
        or Err(conflict) if it is not TODO or already has a session.
    """
    moment = resolve_now(now)
    with store.transaction() as session:
        subtasks = SubtaskRepository(session)
        sessions = SessionRepository(session)

        found = subtasks.get(subtask_id)
        if isinstance(found, Err):
            return found
        transition = start_session(found.value, sessions.get_active(subtask_id), moment)
        if isinstance(transition, Err):
            logger.warning(f"Rejected start of subtask {subtask_id}: {transition.error.message}")
            return transition

        subtask, time_session, event = transition.value
        subtasks.update(subtask)
        sessions.add(time_session)

    logger.info(f"Subtask {event.subtask_id} started (session {event.session_id})")
    return Ok(time_session)


@store_operation
def pause_subtask(
    store: Store,
    subtask_id: str,
    elapsed_seconds: int,
    now: datetime | None = None,
    max_elapsed_seconds: int = DEFAULT_MAX_ELAPSED_SECONDS,
) -> Result[TimeSession, ServiceError]:
    """Pause an in-progress subtask, recording the caller's elapsed time.

    Returns:
        Ok(updated active TimeSession), Err(not_found), Err(conflict) for
        an invalid transition, or Err(validation) for a bad elapsed value.
    """
    moment = resolve_now(now)
    with store.transaction() as session:
        subtasks = SubtaskRepository(session)
        sessions = SessionRepository(session)

        found = subtasks.get(subtask_id)
        if isinstance(found, Err):
            return found
        transition = pause_session(
            found.value,
            sessions.get_active(subtask_id),
            elapsed_seconds,
            moment,
            max_elapsed_seconds,
        )
        if isinstance(transition, Err):
            logger.warning(f"Rejected pause of subtask {subtask_id}: {transition.error.message}")
            return transition

        subtask, time_session, event = transition.value
        subtasks.update(subtask)
        sessions.update(time_session)

    logger.info(f"Subtask {event.subtask_id} paused at {event.duration_seconds}s")
    return Ok(time_session)


@store_operation
def resume_subtask(
    store: Store,
    subtask_id: str,
    now: datetime | None = None,
) -> Result[TimeSession, ServiceError]:
    """Resume a paused subtask. Elapsed time is not reset."""
    moment = resolve_now(now)
    with store.transaction() as session:
        subtasks = SubtaskRepository(session)
        sessions = SessionRepository(session)

        found = subtasks.get(subtask_id)
        if isinstance(found, Err):
            return found
        transition = resume_session(found.value, sessions.get_active(subtask_id), moment)
        if isinstance(transition, Err):
            logger.warning(f"Rejected resume of subtask {subtask_id}: {transition.error.message}")
            return transition

        subtask, time_session, event = transition.value
        subtasks.update(subtask)
        sessions.update(time_session)

    logger.info(f"Subtask {event.subtask_id} resumed")
    return Ok(time_session)


@store_operation
def complete_subtask(
    store: Store,
    subtask_id: str,
    elapsed_seconds: int,
    now: datetime | None = None,
    max_elapsed_seconds: int = DEFAULT_MAX_ELAPSED_SECONDS,
) -> Result[SubtaskCompletion, ServiceError]:
    """Complete a subtask, close its session, score it and credit its category.

    Points are ``10`` plus ``5`` under 25 minutes; the subtask's category
    (if any) gains one XP per second. The status change, the closed
    session and the ledger update commit together.

    Returns:
        Ok(SubtaskCompletion), Err(not_found), Err(conflict) for an invalid
        transition, or Err(validation) for a bad elapsed value.
    """
    moment = resolve_now(now)
    with store.transaction() as session:
        subtasks = SubtaskRepository(session)
        sessions = SessionRepository(session)
        categories = CategoryRepository(session)

        found = subtasks.get(subtask_id)
        if isinstance(found, Err):
            return found
        transition = complete_session(
            found.value,
            sessions.get_active(subtask_id),
            elapsed_seconds,
            moment,
            max_elapsed_seconds,
        )
        if isinstance(transition, Err):
            logger.warning(f"Rejected completion of subtask {subtask_id}: {transition.error.message}")
            return transition
        subtask, time_session, event = transition.value

        experience = None
        if event.category_id:
            ledger = categories.get_experience(event.category_id)
            if isinstance(ledger, Err):
                return ledger
            gained = gain_xp(ledger.value, event.xp, moment)
            if isinstance(gained, Err):
                return gained
            experience = gained.value

        subtasks.update(subtask)
        sessions.update(time_session)
        if experience is not None:
            categories.update_experience(experience)

    logger.info(
        f"Subtask {event.subtask_id} completed in {event.duration_seconds}s: "
        f"+{event.points} pts, +{event.xp} XP"
    )
    if experience is not None:
        logger.info(
            f"Category {experience.category_id} now at {experience.total_xp} XP "
            f"(level {experience.level})"
        )
    return Ok(
        SubtaskCompletion(
            subtask=subtask,
            points_earned=event.points,
            time_spent_seconds=event.duration_seconds,
            xp_gained=event.xp,
            category=subtask.category,
        )
    )


@store_operation
def update_session_duration(
    store: Store,
    subtask_id: str,
    elapsed_seconds: int,
    max_elapsed_seconds: int = DEFAULT_MAX_ELAPSED_SECONDS,
) -> Result[TimeSession, ServiceError]:
    """Checkpoint the running duration of the active session."""
    with store.transaction() as session:
        sessions = SessionRepository(session)
        found = SubtaskRepository(session).get(subtask_id)
        if isinstance(found, Err):
            return found
        updated = checkpoint_session(
            found.value,
            sessions.get_active(subtask_id),
            elapsed_seconds,
            max_elapsed_seconds,
        )
        if isinstance(updated, Err):
            return updated
        sessions.update(updated.value)
    return updated


@store_operation
def get_subtask_with_session(
    store: Store,
    subtask_id: str,
) -> Result[SubtaskWithSession, ServiceError]:
    """Get a subtask (with its historical total) and its active session."""
    with store.transaction() as session:
        found = SubtaskRepository(session).get(subtask_id)
        if isinstance(found, Err):
            return found
        active = SessionRepository(session).get_active(subtask_id)
    return Ok(SubtaskWithSession(subtask=found.value, session=active))
