"""Experience and level formulas.

Pure functions shared by category ledgers and the global user profile.

The three functions agree: for every xp >= 0, ``level_for_xp(xp)`` is the
unique L with ``xp_threshold(L) <= xp < xp_threshold(L + 1)``.
"""

from math import isqrt

XP_PER_LEVEL_UNIT = 100


def level_for_xp(xp: int) -> int:
    """Return the level reached with ``xp`` experience.

    ``floor(sqrt(xp / 100)) + 1``, computed in integers so that exact
    thresholds (100, 400, 900, ...) never fall on the wrong side.
    """
    if xp <= 0:
        return 1
    return isqrt(xp // XP_PER_LEVEL_UNIT) + 1


def xp_threshold(level: int) -> int:
    """Return the minimum XP at which ``level`` is reached."""
    return (level - 1) ** 2 * XP_PER_LEVEL_UNIT


def progress_percent(xp: int, level: int) -> float:
    """Return progress from ``level`` towards the next one, in [0, 100]."""
    current = xp_threshold(level)
    span = xp_threshold(level + 1) - current
    if span <= 0:
        return 100.0
    percent = (xp - current) / span * 100
    return max(0.0, min(100.0, percent))
