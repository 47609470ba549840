"""Result type for explicit error handling.

Every check in this package that can fail for an expected reason (an unsafe
base URL, an issue pattern that does not compile, a tracker call that was
refused) returns a Result instead of raising. Callers narrow with
`isinstance(result, Err)` and turn the payload into a field error or a
failed plugin response.

    found = client.find_version("PROJ", "1.0.0")
    if isinstance(found, Err):
        return Err(f"failed to look up version: {found.error}")
    version_id = found.value
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")
F = TypeVar("F")

__all__ = ["Ok", "Err", "Result"]


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def map_err(self, f: Callable[[object], object]) -> Ok[T]:
        return self

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    error: E

    def unwrap(self) -> None:
        """Raises ValueError carrying the error; for tests and scripts."""
        raise ValueError(f"called unwrap on Err: {self.error}")

    def unwrap_or(self, default: T) -> T:
        return default

    def map_err(self, f: Callable[[E], F]) -> Err[F]:
        """Convert the error payload, e.g. a SecurityError into a ClientError."""
        return Err(f(self.error))

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Union[Ok[T], Err[E]]
