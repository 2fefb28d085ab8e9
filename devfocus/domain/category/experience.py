"""Experience ledger updates (pure)."""

from datetime import datetime

from devfocus.domain.category.leveling import level_for_xp
from devfocus.domain.category.models import CategoryExperience
from devfocus.domain.shared import Err, Ok, Result, ServiceError, to_timestamp, validation


def gain_xp(
    experience: CategoryExperience,
    delta: int,
    now: datetime,
) -> Result[CategoryExperience, ServiceError]:
    """Add XP to a ledger and recompute its level.

    XP is never revoked, so a negative delta is rejected.
    """
    if delta < 0:
        return Err(validation(f"XP delta must not be negative: {delta}"))
    total = experience.total_xp + delta
    return Ok(
        experience.model_copy(
            update={
                "total_xp": total,
                "level": level_for_xp(total),
                "updated_at": to_timestamp(now),
            }
        )
    )
