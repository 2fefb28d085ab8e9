"""Category and experience ledger application service."""

import logging
from datetime import datetime
from uuid import uuid4

from devfocus.application.base import resolve_now, store_operation
from devfocus.domain.category import (
    Category,
    CategoryExperience,
    CategoryStats,
    gain_xp,
    normalize_category_name,
    progress_percent,
    validate_color,
    xp_threshold,
)
from devfocus.domain.shared import Err, Ok, Result, ServiceError, conflict, to_timestamp
from devfocus.infrastructure.storage import CategoryRepository, Store

logger = logging.getLogger(__name__)


@store_operation
def create_category(
    store: Store,
    name: str,
    color: str,
    now: datetime | None = None,
) -> Result[Category, ServiceError]:
    """Create a category and its experience ledger (0 XP, level 1).

    The name is case-folded; a name that already exists is a conflict.

    Returns:
        Ok(Category), Err(validation) for a blank name or bad colour, or
        Err(conflict) for a duplicate name.
    """
    normalized = normalize_category_name(name)
    if isinstance(normalized, Err):
        return normalized
    checked_color = validate_color(color)
    if isinstance(checked_color, Err):
        return checked_color

    stamp = to_timestamp(resolve_now(now))
    with store.transaction() as session:
        categories = CategoryRepository(session)
        if categories.get_by_name(normalized.value) is not None:
            return Err(conflict(f"Category already exists: {normalized.value}"))

        category = Category(
            id=str(uuid4()),
            name=normalized.value,
            color=checked_color.value,
            created_at=stamp,
        )
        experience = CategoryExperience(
            id=str(uuid4()),
            category_id=category.id,
            total_xp=0,
            level=1,
            updated_at=stamp,
        )
        categories.add(category, experience)

    logger.info(f"Created category '{category.name}' ({category.id})")
    return Ok(category)


@store_operation
def list_categories(store: Store) -> Result[list[Category], ServiceError]:
    """List all categories ordered by name."""
    with store.transaction() as session:
        return Ok(CategoryRepository(session).list_all())


@store_operation
def delete_category(store: Store, category_id: str) -> Result[None, ServiceError]:
    """Delete a category and its ledger; its subtasks become uncategorized."""
    with store.transaction() as session:
        deleted = CategoryRepository(session).delete(category_id)
    if isinstance(deleted, Ok):
        logger.info(f"Deleted category {category_id}")
    return deleted


@store_operation
def get_category_experience(
    store: Store,
    category_id: str,
) -> Result[CategoryExperience, ServiceError]:
    """Get the ledger row for a category, or Err(not_found)."""
    with store.transaction() as session:
        return CategoryRepository(session).get_experience(category_id)


@store_operation
def apply_xp(
    store: Store,
    category_id: str,
    delta: int,
    now: datetime | None = None,
) -> Result[CategoryExperience, ServiceError]:
    """Add XP to a category ledger and recompute its level.

    Returns:
        Ok(updated ledger), Err(validation) for a negative delta, or
        Err(not_found) if the category has no ledger.
    """
    moment = resolve_now(now)
    with store.transaction() as session:
        categories = CategoryRepository(session)
        ledger = categories.get_experience(category_id)
        if isinstance(ledger, Err):
            return ledger
        gained = gain_xp(ledger.value, delta, moment)
        if isinstance(gained, Err):
            return gained
        categories.update_experience(gained.value)

    logger.info(f"Category {category_id} +{delta} XP -> level {gained.value.level}")
    return gained


def _stats(category: Category, experience: CategoryExperience | None) -> CategoryStats:
    total_xp = experience.total_xp if experience else 0
    level = experience.level if experience else 1
    return CategoryStats(
        category=category,
        total_xp=total_xp,
        level=level,
        xp_for_next_level=xp_threshold(level + 1),
        progress_percent=progress_percent(total_xp, level),
    )


@store_operation
def get_all_category_stats(store: Store) -> Result[list[CategoryStats], ServiceError]:
    """Every category with XP, level and progress to the next level, by name."""
    with store.transaction() as session:
        categories = CategoryRepository(session)
        ledgers = {e.category_id: e for e in categories.list_experience()}
        return Ok([_stats(c, ledgers.get(c.id)) for c in categories.list_all()])
