"""Two-branch results for operations that recover from failure locally.

Public callers only ever see ``.data``; tests and logs use the branch to tell
whether the primary path or the recovery path produced it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    data: T


@dataclass(frozen=True)
class Fallback(Generic[T]):
    data: T
    reason: str


Outcome = Ok[T] | Fallback[T]
