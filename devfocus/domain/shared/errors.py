"""Error kinds returned by DevFocus operations.

Every failure a caller can act on is represented by a ``ServiceError``
with a closed ``ErrorKind``, so interfaces can render targeted messages
(e.g. "no such subtask" vs. "subtask is already running").
"""

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    """Category of a failed operation."""

    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    VALIDATION = "validation"
    STORE_UNAVAILABLE = "store_unavailable"


@dataclass(frozen=True, slots=True)
class ServiceError:
    """An expected failure of a domain or service operation.

    Attributes:
        kind: What went wrong, as a closed category.
        message: Human-readable detail.
    """

    kind: ErrorKind
    message: str

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


def not_found(entity: str, entity_id: str) -> ServiceError:
    """Build a NOT_FOUND error for an unknown id."""
    return ServiceError(ErrorKind.NOT_FOUND, f"{entity} not found: {entity_id}")


def conflict(message: str) -> ServiceError:
    return ServiceError(ErrorKind.CONFLICT, message)


def validation(message: str) -> ServiceError:
    return ServiceError(ErrorKind.VALIDATION, message)


def store_unavailable(message: str) -> ServiceError:
    return ServiceError(ErrorKind.STORE_UNAVAILABLE, message)
