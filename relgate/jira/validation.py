"""Configuration validation for the Jira plugin.

Every check runs on every call; errors accumulate so the user sees all the
problems in one pass instead of fixing them one at a time.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from relgate.core.env import CredentialLookup
from relgate.core.result import Err
from relgate.jira.config import (
    TOKEN_ENV_VARS,
    USERNAME_ENV_VARS,
    normalize,
    resolve_credentials,
)
from relgate.jira.errors import FieldCode
from relgate.jira.issues import compile_issue_pattern
from relgate.jira.urlsafety import Resolver, resolve_host, validate_base_url

__all__ = ["FieldError", "ValidationResult", "validate"]


@dataclass(frozen=True, slots=True)
class FieldError:
    """One invalid config field. `code` is "required" or "format"."""

    field: str
    message: str
    code: FieldCode


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """All field errors found in one pass; valid when there are none."""

    errors: tuple[FieldError, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.errors

    def fields(self) -> tuple[str, ...]:
        return tuple(e.field for e in self.errors)


def validate(
    raw: Mapping[str, object] | None,
    env: CredentialLookup,
    *,
    resolver: Resolver = resolve_host,
) -> ValidationResult:
    cfg = normalize(raw)
    errors: list[FieldError] = []

    if not cfg.base_url:
        errors.append(FieldError("base_url", "Jira base URL is required", "required"))
    else:
        url_check = validate_base_url(cfg.base_url, resolver=resolver)
        if isinstance(url_check, Err):
            sec = url_check.error
            errors.append(FieldError("base_url", sec.message, sec.field_code))

    if not cfg.project_key:
        errors.append(FieldError("project_key", "Jira project key is required", "required"))

    creds = resolve_credentials(cfg, env)
    if not creds.complete:
        errors.append(
            FieldError(
                "token",
                f"Jira API token is required (set token or {' / '.join(TOKEN_ENV_VARS)})",
                "required",
            )
        )
        errors.append(
            FieldError(
                "username",
                f"Jira username is required (set username or {' / '.join(USERNAME_ENV_VARS)})",
                "required",
            )
        )

    if cfg.issue_pattern:
        compiled = compile_issue_pattern(cfg.issue_pattern)
        if isinstance(compiled, Err):
            errors.append(FieldError("issue_pattern", str(compiled.error), "format"))

    if cfg.transition_issues and not cfg.transition_name:
        errors.append(
            FieldError(
                "transition_name",
                "transition name is required when transition_issues is enabled",
                "required",
            )
        )

    if cfg.add_comment and not cfg.comment_template:
        errors.append(
            FieldError(
                "comment_template",
                "comment template is required when add_comment is enabled",
                "required",
            )
        )

    return ValidationResult(tuple(errors))
