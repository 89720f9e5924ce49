"""Result type for explicit error handling.

Services return ``Result[T, E]`` instead of raising for expected failures
(a busy port, a failed type-check, a bundler exiting non-zero). The CLI layer
is the only place that turns an ``Err`` into a process exit.

Usage:
    result = run_silent(cmd, cwd=root).map_err(to_build_error)
    if isinstance(result, Err):
        return result
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeAlias, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")
F = TypeVar("F")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T

    def map_err(self, f: Callable[[Any], object]) -> Ok[T]:
        return self

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    error: E

    def map_err(self, f: Callable[[E], F]) -> Err[F]:
        """Translate the error, typically from a lower layer's error kind."""
        return Err(f(self.error))

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = Union[Ok[T], Err[E]]
