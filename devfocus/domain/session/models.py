"""Time session domain model."""

from pydantic import BaseModel


class TimeSession(BaseModel):
    """One stretch of work on a subtask.

    A session is active while ``ended_at`` is None; a subtask has at most
    one active session. ``duration_seconds`` is the caller-reported
    elapsed time and never decreases while the session is active. The
    timestamps are an audit trail, not the source of the duration.
    """

    id: str
    subtask_id: str
    started_at: str
    paused_at: str | None = None
    resumed_at: str | None = None
    ended_at: str | None = None
    duration_seconds: int = 0

    def is_active(self) -> bool:
        return self.ended_at is None
