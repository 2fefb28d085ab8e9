"""Shared plumbing for application services."""

import functools
import logging
from collections.abc import Callable
from datetime import datetime
from typing import ParamSpec, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from devfocus.domain.shared import Err, store_unavailable, utc_now
from devfocus.infrastructure.storage import CorruptRowError, StoreUnavailableError

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def store_operation(fn: Callable[P, R]) -> Callable[P, R]:
    """Turn store failures raised by a service into ``Err(store_unavailable)``.

    Expected failures are already returned as Err by the service itself;
    this only covers the lock, the connection and corrupt rows. Other
    exceptions are bugs and propagate. The transaction has been rolled
    back by the time the error is returned.
    """

    @functools.wraps(fn)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return fn(*args, **kwargs)
        except StoreUnavailableError as e:
            logger.error(f"{fn.__name__}: store unavailable: {e}")
            return Err(store_unavailable(str(e)))  # type: ignore[return-value]
        except (SQLAlchemyError, CorruptRowError) as e:
            logger.exception(f"{fn.__name__}: storage failure")
            return Err(store_unavailable(f"Storage error: {e}"))  # type: ignore[return-value]

    return wrapper


def resolve_now(now: datetime | None) -> datetime:
    return now if now is not None else utc_now()
