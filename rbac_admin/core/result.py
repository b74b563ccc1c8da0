"""Result types for railway-oriented error handling.

Operations that can fail return ``Success`` or ``Failure`` instead of
raising, so callers branch on the outcome explicitly.

Usage:
    result = await role_repository.find_by_name("admin")
    match result:
        case Success(value=role):
            ...
        case Failure(error=error):
            ...
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Successful outcome carrying ``value``."""

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Failed outcome carrying ``error``."""

    error: E


type Result[T, E] = Success[T] | Failure[E]
