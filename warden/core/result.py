"""Result types for railway-oriented programming.

Store and resolver operations never raise for expected failures (missing
role, duplicate permission, guard mismatch). They return a Result so callers
branch on the outcome explicitly.

Usage:
    result = await roles.find_by_name("editor", "web")
    match result:
        case Success(value=role):
            print(role.id)
        case Failure(error=error):
            print(error.code)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Successful outcome.

    Attributes:
        value: The produced value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Failed outcome.

    Attributes:
        error: The error describing the failure.
    """

    error: E


type Result[T, E] = Success[T] | Failure[E]
