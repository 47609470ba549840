"""Typed Jira plugin configuration.

The host passes the user's plugin configuration as a loosely typed mapping.
`normalize` turns it into a JiraConfig: every field is read with an exact
type check and falls back to its documented default on a mismatch, so a
quoted `"false"` or a numeric project key never leaks through coerced.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from relgate.core.env import CredentialLookup, first_set
from relgate.core.structured import get_bool, get_exact_str

__all__ = [
    "JiraConfig",
    "JiraCredentials",
    "normalize",
    "resolve_credentials",
    "DEFAULT_ISSUE_PATTERN",
    "TOKEN_ENV_VARS",
    "USERNAME_ENV_VARS",
]

DEFAULT_ISSUE_PATTERN = r"\b[A-Z][A-Z0-9]+-\d+(?![A-Za-z0-9])"

# Candidate environment names, in priority order.
TOKEN_ENV_VARS: tuple[str, ...] = ("JIRA_TOKEN", "JIRA_API_TOKEN")
USERNAME_ENV_VARS: tuple[str, ...] = ("JIRA_USERNAME", "JIRA_EMAIL")

DEFAULT_CREATE_VERSION = True
DEFAULT_RELEASE_VERSION = True
DEFAULT_ASSOCIATE_ISSUES = True
DEFAULT_TRANSITION_ISSUES = False
DEFAULT_ADD_COMMENT = False


@dataclass(frozen=True, slots=True)
class JiraConfig:
    base_url: str = ""
    username: str = ""
    token: str = ""
    project_key: str = ""
    version_name: str = ""
    version_description: str = ""
    create_version: bool = DEFAULT_CREATE_VERSION
    release_version: bool = DEFAULT_RELEASE_VERSION
    associate_issues: bool = DEFAULT_ASSOCIATE_ISSUES
    transition_issues: bool = DEFAULT_TRANSITION_ISSUES
    transition_name: str = ""
    add_comment: bool = DEFAULT_ADD_COMMENT
    comment_template: str = ""
    issue_pattern: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> JiraConfig:
        return cls(
            base_url=get_exact_str(data, "base_url"),
            username=get_exact_str(data, "username"),
            token=get_exact_str(data, "token"),
            project_key=get_exact_str(data, "project_key"),
            version_name=get_exact_str(data, "version_name"),
            version_description=get_exact_str(data, "version_description"),
            create_version=get_bool(data, "create_version", DEFAULT_CREATE_VERSION),
            release_version=get_bool(data, "release_version", DEFAULT_RELEASE_VERSION),
            associate_issues=get_bool(data, "associate_issues", DEFAULT_ASSOCIATE_ISSUES),
            transition_issues=get_bool(data, "transition_issues", DEFAULT_TRANSITION_ISSUES),
            transition_name=get_exact_str(data, "transition_name"),
            add_comment=get_bool(data, "add_comment", DEFAULT_ADD_COMMENT),
            comment_template=get_exact_str(data, "comment_template"),
            issue_pattern=get_exact_str(data, "issue_pattern"),
        )

    def effective_version_name(self, release_version: str) -> str:
        """The configured version name, or the release's own version."""
        return self.version_name or release_version


@dataclass(frozen=True, slots=True)
class JiraCredentials:
    base_url: str
    username: str
    token: str

    @property
    def complete(self) -> bool:
        return bool(self.username and self.token)

    def __repr__(self) -> str:
        return f"JiraCredentials(base_url={self.base_url!r}, username={self.username!r}, token=***)"


def normalize(raw: Mapping[str, object] | None) -> JiraConfig:
    """Build a JiraConfig from a raw mapping. Never fails."""
    return JiraConfig.from_dict(raw or {})


def resolve_credentials(cfg: JiraConfig, lookup: CredentialLookup) -> JiraCredentials:
    """Config values win; otherwise the first set environment candidate."""
    return JiraCredentials(
        base_url=cfg.base_url,
        username=cfg.username or first_set(lookup, USERNAME_ENV_VARS),
        token=cfg.token or first_set(lookup, TOKEN_ENV_VARS),
    )
