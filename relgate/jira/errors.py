"""Error values returned by the Jira integration.

None of these are raised. They travel inside `Err` so callers decide how to
report them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

FieldCode = Literal["required", "format"]

SecurityErrorKind = Literal[
    "required",
    "invalid_url",
    "scheme",
    "localhost",
    "metadata",
    "private_address",
]


@dataclass(frozen=True, slots=True)
class SecurityError:
    """A base URL rejected by the outbound-request safety gate."""

    kind: SecurityErrorKind
    message: str

    @property
    def field_code(self) -> FieldCode:
        return "required" if self.kind == "required" else "format"

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class IssuePatternError:
    """A configured issue pattern that does not compile."""

    pattern: str
    message: str

    def __str__(self) -> str:
        return f"invalid issue pattern {self.pattern!r}: {self.message}"


@dataclass(frozen=True, slots=True)
class ClientError:
    """Why a Jira client could not be obtained for the current config."""

    kind: Literal[
        "base_url_required",
        "unsafe_url",
        "credentials_required",
        "no_factory",
    ]
    message: str

    def __str__(self) -> str:
        return self.message
