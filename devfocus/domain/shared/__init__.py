"""Shared domain building blocks.

- Result monad for explicit error handling
- ServiceError / ErrorKind for distinguishable failures
- Base domain event
- Timestamp helpers

Example usage:
    >>> from devfocus.domain.shared import Ok, Err, Result, not_found
    >>>
    >>> def find_subtask(subtask_id: str) -> Result[dict, ServiceError]:
    ...     if subtask_id == "missing":
    ...         return Err(not_found("Subtask", subtask_id))
    ...     return Ok({"id": subtask_id})
"""

from devfocus.domain.shared.clock import (
    parse_timestamp,
    timestamp_date,
    to_timestamp,
    utc_now,
)
from devfocus.domain.shared.errors import (
    ErrorKind,
    ServiceError,
    conflict,
    not_found,
    store_unavailable,
    validation,
)
from devfocus.domain.shared.events import DomainEvent
from devfocus.domain.shared.result import (
    Err,
    Ok,
    Result,
    is_err,
    is_ok,
)

__all__ = [
    # Result monad
    "Ok",
    "Err",
    "Result",
    "is_ok",
    "is_err",
    # Errors
    "ErrorKind",
    "ServiceError",
    "not_found",
    "conflict",
    "validation",
    "store_unavailable",
    # Events
    "DomainEvent",
    # Time
    "utc_now",
    "to_timestamp",
    "parse_timestamp",
    "timestamp_date",
]
