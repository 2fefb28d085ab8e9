"""Session domain - time sessions and the subtask state machine.

Key Types:
    TimeSession - One stretch of work on a subtask

Transition Functions:
    start_session, pause_session, resume_session, complete_session
    checkpoint_session - Update the running duration only

Helpers:
    validate_elapsed - Check a caller-reported elapsed time
    historical_total - Total of ended sessions
    current_session_elapsed - Approximate age of an active session
"""

from .models import TimeSession
from .transitions import (
    DEFAULT_MAX_ELAPSED_SECONDS,
    checkpoint_session,
    complete_session,
    current_session_elapsed,
    historical_total,
    pause_session,
    resume_session,
    start_session,
    validate_elapsed,
)

__all__ = [
    "TimeSession",
    "DEFAULT_MAX_ELAPSED_SECONDS",
    "validate_elapsed",
    "start_session",
    "pause_session",
    "resume_session",
    "complete_session",
    "checkpoint_session",
    "historical_total",
    "current_session_elapsed",
]
