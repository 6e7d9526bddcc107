"""
Result type for explicit error handling.

A small Result[T, E] ADT used where a failure is an expected branch rather than
an exceptional one: parsing host-supplied credentials, or presigning a URL that
may fall back to a deterministic template.

Usage:
    >>> match parse_credentials(raw):
    ...     case Success(credentials):
    ...         use(credentials)
    ...     case Failure(error):
    ...         report(error)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar


T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Represents a successful result containing a value of type T."""

    value: T


@dataclass(frozen=True)
class Failure(Generic[E]):
    """Represents a failed result containing an error of type E."""

    error: E


Result = Success[T] | Failure[E]
