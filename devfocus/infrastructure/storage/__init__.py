"""Storage infrastructure for DevFocus.

SQLite persistence through SQLAlchemy: the Store (engine, lock and
transactions) and repositories that map rows to domain models.
"""

from devfocus.infrastructure.storage.database import (
    DEFAULT_CATEGORIES,
    Store,
    StoreUnavailableError,
    seed_default_categories,
)
from devfocus.infrastructure.storage.repositories import (
    CategoryRepository,
    CorruptRowError,
    SessionRepository,
    SubtaskRepository,
    TaskRepository,
)

__all__ = [
    "Store",
    "StoreUnavailableError",
    "CorruptRowError",
    "DEFAULT_CATEGORIES",
    "seed_default_categories",
    "TaskRepository",
    "SubtaskRepository",
    "SessionRepository",
    "CategoryRepository",
]
