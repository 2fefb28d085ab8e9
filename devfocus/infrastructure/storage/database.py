"""SQLite store with a single store-wide lock.

The ``Store`` owns the engine and session factory. Every operation runs
inside ``Store.transaction()``, which holds one mutual-exclusion lock for
the whole unit of work and wraps it in a database transaction, so
multi-table transitions apply all-or-nothing and never interleave.
"""

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from uuid import uuid4

from sqlalchemy import create_engine, event, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from devfocus.domain.shared import to_timestamp, utc_now
from devfocus.infrastructure.storage.tables import (
    Base,
    CategoryExperienceRow,
    CategoryRow,
)

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES: list[tuple[str, str]] = [
    ("frontend", "#3b82f6"),
    ("backend", "#10b981"),
    ("architecture", "#8b5cf6"),
    ("css", "#ec4899"),
    ("tailwind", "#06b6d4"),
]


class StoreUnavailableError(Exception):
    """The store lock could not be acquired or the store is closed."""


def _enable_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _make_engine(url: str) -> Engine:
    if url in ("sqlite://", "sqlite:///:memory:"):
        # One shared connection so every session sees the same in-memory DB
        engine = create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(url, connect_args={"check_same_thread": False})
    event.listen(engine, "connect", _enable_foreign_keys)
    return engine


class Store:
    """Explicitly constructed handle to the DevFocus database.

    Example:
        store = Store("sqlite://")
        store.initialize()
        with store.transaction() as session:
            ...
    """

    def __init__(self, url: str, lock_timeout_seconds: float = 5.0) -> None:
        """Create the engine without touching the schema.

        Args:
            url: SQLAlchemy database URL (``sqlite://`` for in-memory).
            lock_timeout_seconds: How long to wait for the store lock
                before reporting the store as unavailable.
        """
        self.url = url
        self._engine = _make_engine(url)
        self._session_factory = sessionmaker(self._engine, expire_on_commit=False)
        self._lock = threading.Lock()
        self._lock_timeout = lock_timeout_seconds
        self._closed = False

    def initialize(self) -> None:
        """Create tables and seed the default categories (idempotent)."""
        Base.metadata.create_all(self._engine)
        with self.transaction() as session:
            seeded = seed_default_categories(session)
        if seeded:
            logger.info(f"Seeded {seeded} default categories")

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """Hold the store lock and a database transaction for one operation.

        Commits when the block exits normally and rolls back on any
        exception; the lock is released either way.

        Raises:
            StoreUnavailableError: If the lock is not acquired in time or
                the store has been closed.
        """
        if self._closed:
            raise StoreUnavailableError("Store is closed")
        if not self._lock.acquire(timeout=self._lock_timeout):
            raise StoreUnavailableError(
                f"Timed out after {self._lock_timeout}s waiting for the store lock"
            )
        try:
            with self._session_factory.begin() as session:
                yield session
        finally:
            self._lock.release()

    def close(self) -> None:
        self._closed = True
        self._engine.dispose()


def seed_default_categories(session: Session) -> int:
    """Insert the default categories and their ledgers if absent.

    Returns:
        Number of categories created.
    """
    now = to_timestamp(utc_now())
    existing = set(session.scalars(select(CategoryRow.name)))
    created = 0
    for name, color in DEFAULT_CATEGORIES:
        if name in existing:
            continue
        category_id = str(uuid4())
        session.add(CategoryRow(id=category_id, name=name, color=color, created_at=now))
        session.add(
            CategoryExperienceRow(
                id=str(uuid4()),
                category_id=category_id,
                total_xp=0,
                level=1,
                updated_at=now,
            )
        )
        created += 1

    # Ledger rows for any category that is missing one
    orphans = session.scalars(
        select(CategoryRow).where(~CategoryRow.experience.has())
    ).all()
    for category in orphans:
        session.add(
            CategoryExperienceRow(
                id=str(uuid4()),
                category_id=category.id,
                total_xp=0,
                level=1,
                updated_at=now,
            )
        )
    return created
