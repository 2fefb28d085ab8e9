"""Category domain - categories, experience ledgers and leveling.

Key Types:
    Category - A label carrying a colour
    CategoryExperience - XP/level ledger row for a category
    CategoryStats - Category plus level progress

Ledger Functions:
    gain_xp - Add XP and recompute the level

Leveling Functions:
    level_for_xp - Level reached with a given XP
    xp_threshold - Minimum XP for a level
    progress_percent - Progress towards the next level
"""

from .experience import gain_xp
from .leveling import XP_PER_LEVEL_UNIT, level_for_xp, progress_percent, xp_threshold
from .models import (
    Category,
    CategoryExperience,
    CategoryStats,
    normalize_category_name,
    validate_color,
)

__all__ = [
    "Category",
    "CategoryExperience",
    "CategoryStats",
    "gain_xp",
    "normalize_category_name",
    "validate_color",
    "XP_PER_LEVEL_UNIT",
    "level_for_xp",
    "xp_threshold",
    "progress_percent",
]
