"""Category domain models."""

import re

from pydantic import BaseModel

from devfocus.domain.shared import Err, Ok, Result, ServiceError, validation

COLOR_PATTERN = re.compile(r"^#[0-9a-fA-F]{6}$")


class Category(BaseModel):
    """A label for subtasks that accumulates experience."""

    id: str
    name: str
    color: str
    created_at: str


class CategoryExperience(BaseModel):
    """Experience ledger row for one category.

    ``level`` is always ``level_for_xp(total_xp)``.
    """

    id: str
    category_id: str
    total_xp: int = 0
    level: int = 1
    updated_at: str


class CategoryStats(BaseModel):
    """A category with its progression summary, for dashboards."""

    category: Category
    total_xp: int
    level: int
    xp_for_next_level: int
    progress_percent: float


def normalize_category_name(name: str) -> Result[str, ServiceError]:
    """Case-fold and trim a category name, rejecting empty names."""
    normalized = name.strip().casefold()
    if not normalized:
        return Err(validation("Category name must not be empty"))
    return Ok(normalized)


def validate_color(color: str) -> Result[str, ServiceError]:
    """Accept ``#rrggbb`` colours, returned lower-cased."""
    if not COLOR_PATTERN.match(color.strip()):
        return Err(validation(f"Invalid colour (expected #rrggbb): {color!r}"))
    return Ok(color.strip().lower())
