"""Publish-time execution against a real Jira client.

Steps run in the same order the dry-run plan lists them. The first failed
tracker call ends the run; its reason is reported with the step that failed,
and steps already done are not rolled back. Each step is reported on the
console as soon as it completes.
"""

from __future__ import annotations

from dataclasses import dataclass

from relgate.core.result import Err, Ok, Result
from relgate.jira.client import JiraClient
from relgate.jira.comment import build_comment
from relgate.jira.config import JiraConfig
from relgate.jira.model import ReleaseContext
from relgate.output.console import ConsoleProtocol


@dataclass(frozen=True, slots=True)
class PublishOutcome:
    """What a committed publish did."""

    version_name: str
    version_id: str | None
    issues: tuple[str, ...]
    actions: tuple[str, ...]

    @property
    def message(self) -> str:
        if not self.actions:
            return "Jira: no actions performed"
        return "Jira: " + ", ".join(self.actions)


def _ensure_version(
    client: JiraClient,
    cfg: JiraConfig,
    version_name: str,
    console: ConsoleProtocol,
) -> Result[tuple[str, bool], str]:
    """Return (version id, created) for `version_name`, creating it if missing."""
    found = client.find_version(cfg.project_key, version_name)
    if isinstance(found, Err):
        return Err(f"failed to look up version '{version_name}': {found.error}")
    if found.value is not None:
        console.info(f"version '{version_name}' already exists in {cfg.project_key}")
        return Ok((found.value, False))

    created = client.create_version(cfg.project_key, version_name, cfg.version_description)
    if isinstance(created, Err):
        return Err(f"failed to create version '{version_name}': {created.error}")
    return Ok((created.value, True))


def execute_publish(
    client: JiraClient,
    cfg: JiraConfig,
    context: ReleaseContext,
    issues: tuple[str, ...],
    *,
    console: ConsoleProtocol,
) -> Result[PublishOutcome, str]:
    version_name = cfg.effective_version_name(context.version)
    version_id: str | None = None
    actions: list[str] = []

    def done(action: str) -> None:
        actions.append(action)
        console.success(action)

    if cfg.create_version:
        ensured = _ensure_version(client, cfg, version_name, console)
        if isinstance(ensured, Err):
            return ensured
        version_id, created = ensured.value
        if created:
            done(f"Created version '{version_name}'")

    if cfg.release_version:
        if version_id is None:
            found = client.find_version(cfg.project_key, version_name)
            if isinstance(found, Err):
                return Err(f"failed to look up version '{version_name}': {found.error}")
            if found.value is None:
                return Err(
                    f"cannot release version '{version_name}': "
                    f"it does not exist in project {cfg.project_key}"
                )
            version_id = found.value
        released = client.release_version(version_id)
        if isinstance(released, Err):
            return Err(f"failed to release version '{version_name}': {released.error}")
        done(f"Released version '{version_name}'")

    if issues and cfg.associate_issues:
        for key in issues:
            linked = client.add_fix_version(key, version_name)
            if isinstance(linked, Err):
                return Err(f"failed to associate issue {key}: {linked.error}")
        done(f"Associated {len(issues)} issues with version '{version_name}'")

    if issues and cfg.transition_issues:
        for key in issues:
            moved = client.transition_issue(key, cfg.transition_name)
            if isinstance(moved, Err):
                return Err(f"failed to transition issue {key}: {moved.error}")
        done(f"Transitioned {len(issues)} issues to '{cfg.transition_name}'")

    if issues and cfg.add_comment:
        body = build_comment(cfg.comment_template, context)
        for key in issues:
            commented = client.add_comment(key, body)
            if isinstance(commented, Err):
                return Err(f"failed to comment on issue {key}: {commented.error}")
        done(f"Added comment to {len(issues)} issues")

    return Ok(
        PublishOutcome(
            version_name=version_name,
            version_id=version_id,
            issues=issues,
            actions=tuple(actions),
        )
    )
