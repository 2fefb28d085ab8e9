"""Infrastructure layer for DevFocus.

Exports:
    Storage:
        - Store: Engine, store-wide lock and transactions
        - TaskRepository, SubtaskRepository, SessionRepository,
          CategoryRepository: Row/model mapping
"""

from devfocus.infrastructure.storage import (
    CategoryRepository,
    SessionRepository,
    Store,
    StoreUnavailableError,
    SubtaskRepository,
    TaskRepository,
)

__all__ = [
    "Store",
    "StoreUnavailableError",
    "TaskRepository",
    "SubtaskRepository",
    "SessionRepository",
    "CategoryRepository",
]
