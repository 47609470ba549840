"""Jira client seam.

The HTTP client that talks to Jira lives outside this package. It is handed
to the plugin as a ClientFactory and used through the JiraClient protocol.
Downstream failures come back as opaque reason strings; this package does
not retry or interpret them.

`get_client` is the only way a client gets built, and it refuses to build
one for a base URL that fails the safety gate.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from relgate.core.env import CredentialLookup
from relgate.core.result import Err, Ok, Result
from relgate.jira.config import JiraConfig, JiraCredentials, resolve_credentials
from relgate.jira.errors import ClientError
from relgate.jira.urlsafety import Resolver, resolve_host, validate_base_url

__all__ = [
    "JiraClient",
    "ClientFactory",
    "MockJiraClient",
    "ClientCall",
    "get_client",
]


@runtime_checkable
class JiraClient(Protocol):
    """Operations the publish step needs from Jira."""

    def find_version(self, project_key: str, name: str) -> Result[str | None, str]:
        """Return the id of version `name` in the project, or None if absent."""
        ...

    def create_version(self, project_key: str, name: str, description: str) -> Result[str, str]:
        """Create an unreleased version and return its id."""
        ...

    def release_version(self, version_id: str) -> Result[None, str]: ...

    def add_fix_version(self, issue_key: str, version_name: str) -> Result[None, str]: ...

    def transition_issue(self, issue_key: str, transition_name: str) -> Result[None, str]:
        """Apply the named workflow transition (matched case-insensitively by Jira)."""
        ...

    def add_comment(self, issue_key: str, body: str) -> Result[None, str]: ...


ClientFactory = Callable[[JiraCredentials], JiraClient]


def get_client(
    cfg: JiraConfig,
    lookup: CredentialLookup,
    factory: ClientFactory | None,
    *,
    resolver: Resolver = resolve_host,
) -> Result[JiraClient, ClientError]:
    if not cfg.base_url:
        return Err(ClientError(kind="base_url_required", message="base URL is required"))

    url_check = validate_base_url(cfg.base_url, resolver=resolver).map_err(
        lambda sec: ClientError(kind="unsafe_url", message=sec.message)
    )
    if isinstance(url_check, Err):
        return url_check

    creds = resolve_credentials(cfg, lookup)
    if not creds.complete:
        return Err(
            ClientError(
                kind="credentials_required",
                message="username and token are required",
            )
        )

    if factory is None:
        return Err(ClientError(kind="no_factory", message="no Jira client factory configured"))

    return Ok(factory(creds))


@dataclass(frozen=True, slots=True)
class ClientCall:
    """One recorded call on MockJiraClient."""

    operation: str
    args: tuple[str, ...]


def _empty_calls() -> list[ClientCall]:
    return []


def _empty_versions() -> dict[tuple[str, str], str]:
    return {}


def _empty_failures() -> dict[str, str]:
    return {}


@dataclass
class MockJiraClient:
    """In-memory JiraClient for tests.

    `failures` maps an operation name to the reason it should fail with.
    """

    versions: dict[tuple[str, str], str] = field(default_factory=_empty_versions)
    failures: dict[str, str] = field(default_factory=_empty_failures)
    calls: list[ClientCall] = field(default_factory=_empty_calls)
    released: set[str] = field(default_factory=set)

    def _record(self, operation: str, *args: str) -> Err[str] | None:
        self.calls.append(ClientCall(operation, args))
        reason = self.failures.get(operation)
        return Err(reason) if reason is not None else None

    def find_version(self, project_key: str, name: str) -> Result[str | None, str]:
        if (failed := self._record("find_version", project_key, name)) is not None:
            return failed
        return Ok(self.versions.get((project_key, name)))

    def create_version(self, project_key: str, name: str, description: str) -> Result[str, str]:
        if (failed := self._record("create_version", project_key, name, description)) is not None:
            return failed
        version_id = str(10000 + len(self.versions))
        self.versions[(project_key, name)] = version_id
        return Ok(version_id)

    def release_version(self, version_id: str) -> Result[None, str]:
        if (failed := self._record("release_version", version_id)) is not None:
            return failed
        self.released.add(version_id)
        return Ok(None)

    def add_fix_version(self, issue_key: str, version_name: str) -> Result[None, str]:
        if (failed := self._record("add_fix_version", issue_key, version_name)) is not None:
            return failed
        return Ok(None)

    def transition_issue(self, issue_key: str, transition_name: str) -> Result[None, str]:
        if (failed := self._record("transition_issue", issue_key, transition_name)) is not None:
            return failed
        return Ok(None)

    def add_comment(self, issue_key: str, body: str) -> Result[None, str]:
        if (failed := self._record("add_comment", issue_key, body)) is not None:
            return failed
        return Ok(None)

    def operations(self) -> list[str]:
        return [c.operation for c in self.calls]
