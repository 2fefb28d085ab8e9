"""Ok/Err results for expected failures.

Domain functions and services never raise for an unknown id, a rejected
transition or bad input. They return ``Err(ServiceError)`` and leave
exceptions to infrastructure faults.

Example usage:
    >>> outcome = validate_elapsed(1200)
    >>> if is_ok(outcome):
    ...     print(f"{outcome.value}s")
    1200s
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    error: E


# Union rather than | so the alias can be subscripted at runtime
Result = Union[Ok[T], Err[E]]  # noqa: UP007


def is_ok(result: Ok[T] | Err[E]) -> bool:
    return isinstance(result, Ok)


def is_err(result: Ok[T] | Err[E]) -> bool:
    return isinstance(result, Err)
