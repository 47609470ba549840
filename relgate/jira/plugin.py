"""Jira release plugin facade.

The plugin-protocol adapter decodes host requests into ExecuteRequest and
encodes ExecuteResponse back; everything in between is handled here. Each
call is stateless: configuration is normalized fresh from the request.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum

from relgate.core.env import CredentialLookup, EnvironLookup
from relgate.core.result import Err
from relgate.jira.client import ClientFactory, get_client
from relgate.jira.config import JiraConfig, normalize, resolve_credentials
from relgate.jira.executor import execute_publish
from relgate.jira.issues import extract_issue_keys
from relgate.jira.model import ReleaseContext
from relgate.jira.planner import build_publish_plan
from relgate.jira.urlsafety import Resolver, resolve_host, validate_base_url
from relgate.jira.validation import ValidationResult, validate
from relgate.output.console import ConsoleProtocol, RichConsole

PLUGIN_NAME = "jira"
PLUGIN_VERSION = "2.0.0"


class Hook(StrEnum):
    PRE_INIT = "pre-init"
    POST_INIT = "post-init"
    PRE_PLAN = "pre-plan"
    POST_PLAN = "post-plan"
    PRE_VERSION = "pre-version"
    POST_VERSION = "post-version"
    PRE_NOTES = "pre-notes"
    POST_NOTES = "post-notes"
    PRE_APPROVE = "pre-approve"
    POST_APPROVE = "post-approve"
    PRE_PUBLISH = "pre-publish"
    POST_PUBLISH = "post-publish"
    ON_SUCCESS = "on-success"
    ON_ERROR = "on-error"


HANDLED_HOOKS: tuple[Hook, ...] = (
    Hook.POST_PLAN,
    Hook.POST_PUBLISH,
    Hook.ON_SUCCESS,
    Hook.ON_ERROR,
)

CONFIG_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "base_url": {"type": "string", "description": "Jira base URL (https)"},
        "username": {"type": "string", "description": "Jira username or email (or JIRA_USERNAME / JIRA_EMAIL)"},
        "token": {"type": "string", "description": "Jira API token (or JIRA_TOKEN / JIRA_API_TOKEN)"},
        "project_key": {"type": "string", "description": "Jira project key"},
        "version_name": {"type": "string", "description": "Version name (defaults to the release version)"},
        "version_description": {"type": "string"},
        "create_version": {"type": "boolean", "default": True},
        "release_version": {"type": "boolean", "default": True},
        "associate_issues": {"type": "boolean", "default": True},
        "transition_issues": {"type": "boolean", "default": False},
        "transition_name": {"type": "string", "description": "Workflow transition to apply"},
        "add_comment": {"type": "boolean", "default": False},
        "comment_template": {
            "type": "string",
            "description": "Supports {version}, {tag}, {release_url}, {repository}",
        },
        "issue_pattern": {"type": "string", "description": "Regex for issue keys"},
    },
    "required": ["base_url", "project_key"],
}


@dataclass(frozen=True, slots=True)
class PluginInfo:
    name: str
    version: str
    description: str
    author: str
    hooks: tuple[Hook, ...]
    config_schema: str


@dataclass(frozen=True, slots=True)
class ExecuteRequest:
    hook: Hook
    config: Mapping[str, object]
    context: ReleaseContext
    dry_run: bool = False


def _empty_outputs() -> dict[str, object]:
    return {}


@dataclass(frozen=True, slots=True)
class ExecuteResponse:
    success: bool
    message: str = ""
    outputs: dict[str, object] = field(default_factory=_empty_outputs)
    error: str = ""

    @classmethod
    def ok(cls, message: str, outputs: dict[str, object] | None = None) -> ExecuteResponse:
        return cls(success=True, message=message, outputs=outputs or {})

    @classmethod
    def failed(cls, error: str) -> ExecuteResponse:
        return cls(success=False, error=error)


class JiraPlugin:
    """Decides and performs Jira actions at the release hooks it handles."""

    def __init__(
        self,
        *,
        env: CredentialLookup | None = None,
        client_factory: ClientFactory | None = None,
        resolver: Resolver | None = None,
        console: ConsoleProtocol | None = None,
    ) -> None:
        self._env = env if env is not None else EnvironLookup()
        self._client_factory = client_factory
        self._resolver = resolver if resolver is not None else resolve_host
        self._console = console if console is not None else RichConsole()

    def get_info(self) -> PluginInfo:
        return PluginInfo(
            name=PLUGIN_NAME,
            version=PLUGIN_VERSION,
            description="Integrate with Jira for version management and issue tracking",
            author="Relicta Team",
            hooks=HANDLED_HOOKS,
            config_schema=json.dumps(CONFIG_SCHEMA),
        )

    def validate(self, raw: Mapping[str, object] | None) -> ValidationResult:
        return validate(raw, self._env, resolver=self._resolver)

    def execute(self, request: ExecuteRequest) -> ExecuteResponse:
        cfg = normalize(request.config)

        match request.hook:
            case Hook.POST_PLAN:
                return self._post_plan(cfg, request.context)
            case Hook.POST_PUBLISH:
                return self._post_publish(cfg, request.context, dry_run=request.dry_run)
            case Hook.ON_SUCCESS:
                return ExecuteResponse.ok(f"Release successful: {request.context.version}")
            case Hook.ON_ERROR:
                return ExecuteResponse.ok(f"Release failed: {request.context.version}")
            case _:
                return ExecuteResponse.ok(f"Hook {request.hook} not handled")

    def _post_plan(self, cfg: JiraConfig, context: ReleaseContext) -> ExecuteResponse:
        keys = self._extract(cfg, context)
        if isinstance(keys, ExecuteResponse):
            return keys

        outputs: dict[str, object] = {"issues_found": len(keys), "issues": list(keys)}
        if not keys:
            return ExecuteResponse.ok("No Jira issues found in commits", outputs)

        message = f"Found {len(keys)} Jira issue(s): {', '.join(keys)}"
        self._console.info(message)
        return ExecuteResponse.ok(message, outputs)

    def _extract(self, cfg: JiraConfig, context: ReleaseContext) -> tuple[str, ...] | ExecuteResponse:
        extracted = extract_issue_keys(cfg, context.changes)
        if isinstance(extracted, Err):
            self._console.error(str(extracted.error))
            return ExecuteResponse.failed(str(extracted.error))
        return extracted.value

    def _post_publish(self, cfg: JiraConfig, context: ReleaseContext, *, dry_run: bool) -> ExecuteResponse:
        if dry_run:
            return self._preview_publish(cfg, context)

        client = get_client(cfg, self._env, self._client_factory, resolver=self._resolver)
        if isinstance(client, Err):
            error = f"failed to create Jira client: {client.error}"
            self._console.error(error)
            return ExecuteResponse.failed(error)

        keys = self._extract(cfg, context)
        if isinstance(keys, ExecuteResponse):
            return keys

        outcome = execute_publish(client.value, cfg, context, keys, console=self._console)
        if isinstance(outcome, Err):
            self._console.error(outcome.error)
            return ExecuteResponse.failed(outcome.error)

        done = outcome.value
        outputs: dict[str, object] = {
            "version_name": done.version_name,
            "project_key": cfg.project_key,
            "issues": list(done.issues),
            "actions": list(done.actions),
        }
        if done.version_id is not None:
            outputs["version_id"] = done.version_id
        return ExecuteResponse.ok(done.message, outputs)

    def _preview_publish(self, cfg: JiraConfig, context: ReleaseContext) -> ExecuteResponse:
        # Preview needs no credentials, but an unsafe URL is still fatal.
        url_check = validate_base_url(cfg.base_url, resolver=self._resolver)
        if isinstance(url_check, Err):
            self._console.error(url_check.error.message)
            return ExecuteResponse.failed(url_check.error.message)

        if not resolve_credentials(cfg, self._env).complete:
            self._console.warning("Jira credentials are not set; a real publish would fail")

        keys = self._extract(cfg, context)
        if isinstance(keys, ExecuteResponse):
            return keys

        plan = build_publish_plan(cfg, context, keys)
        return ExecuteResponse.ok(
            plan.message,
            {
                "version_name": plan.version_name,
                "project_key": plan.project_key,
                "issues": list(plan.issues),
                "actions": list(plan.actions),
                "dry_run": True,
            },
        )
