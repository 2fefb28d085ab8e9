"""Task and subtask domain events.

Immutable records of state changes, returned by the session state
machine and used by services for logging.
"""

from devfocus.domain.shared.events import DomainEvent


class SubtaskStarted(DomainEvent):
    """Work on a subtask began and a new session was opened."""

    subtask_id: str
    session_id: str


class SubtaskPaused(DomainEvent):
    """The active session was paused with the caller's elapsed time."""

    subtask_id: str
    session_id: str
    duration_seconds: int


class SubtaskResumed(DomainEvent):
    subtask_id: str
    session_id: str


class SubtaskCompleted(DomainEvent):
    """The subtask reached DONE and its session was closed.

    Carries the score so ledgers can be updated from the event alone.
    """

    subtask_id: str
    session_id: str
    duration_seconds: int
    points: int
    xp: int
    category_id: str | None = None
