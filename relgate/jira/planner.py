"""Dry-run planning: the ordered list of actions a publish would perform."""

from __future__ import annotations

from dataclasses import dataclass

from relgate.jira.config import JiraConfig
from relgate.jira.model import ReleaseContext

DRY_RUN_PREFIX = "Would perform: "


@dataclass(frozen=True, slots=True)
class PublishPlan:
    """What a publish would do, without touching Jira."""

    version_name: str
    project_key: str
    issues: tuple[str, ...]
    actions: tuple[str, ...]

    @property
    def message(self) -> str:
        return format_plan_message(self.actions)


def plan_actions(cfg: JiraConfig, version_name: str, issue_count: int) -> tuple[str, ...]:
    """Describe, in execution order, what a publish would do.

    Create and release are independent flags: releasing is planned even when
    the version is not created by this run. Issue-level actions need at least
    one issue key and are silently left out otherwise.
    """
    actions: list[str] = []

    if cfg.create_version:
        actions.append(f"Create version '{version_name}'")

    if cfg.release_version:
        actions.append(f"Mark version '{version_name}' as released")

    if issue_count > 0:
        if cfg.associate_issues:
            actions.append(f"Associate {issue_count} issues with version '{version_name}'")
        if cfg.transition_issues:
            actions.append(f"Transition {issue_count} issues to '{cfg.transition_name}'")
        if cfg.add_comment:
            actions.append(f"Add comment to {issue_count} issues")

    return tuple(actions)


def format_plan_message(actions: tuple[str, ...]) -> str:
    return DRY_RUN_PREFIX + ", ".join(actions)


def build_publish_plan(cfg: JiraConfig, context: ReleaseContext, issues: tuple[str, ...]) -> PublishPlan:
    version_name = cfg.effective_version_name(context.version)
    return PublishPlan(
        version_name=version_name,
        project_key=cfg.project_key,
        issues=issues,
        actions=plan_actions(cfg, version_name, len(issues)),
    )
