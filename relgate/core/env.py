"""Credential lookup abstraction.

Services never read `os.environ` directly. They receive a CredentialLookup,
so tests can supply a fixed mapping instead of mutating process state.
"""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

__all__ = [
    "CredentialLookup",
    "EnvironLookup",
    "MappingLookup",
    "first_set",
]


@runtime_checkable
class CredentialLookup(Protocol):
    """Protocol for named credential sources (environment-style)."""

    def get(self, name: str) -> str | None:
        """Return the value for `name`, or None when it is not set."""
        ...


class EnvironLookup:
    """Lookup backed by the process environment."""

    def get(self, name: str) -> str | None:
        return os.environ.get(name)


def _empty_values() -> dict[str, str]:
    return {}


@dataclass(frozen=True)
class MappingLookup:
    """Lookup backed by a fixed mapping (tests, embedding hosts)."""

    values: Mapping[str, str] = field(default_factory=_empty_values)

    def get(self, name: str) -> str | None:
        return self.values.get(name)


def first_set(lookup: CredentialLookup, names: Sequence[str]) -> str:
    """Return the first non-empty value among `names`, or ""."""
    for name in names:
        value = lookup.get(name)
        if value:
            return value
    return ""
