"""Tests for relgate.jira.client module."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from relgate.core.env import MappingLookup
from relgate.core.result import Err, Ok
from relgate.jira.client import ClientCall, JiraClient, MockJiraClient, get_client
from relgate.jira.config import JiraConfig, JiraCredentials

CREDS_ENV = MappingLookup({"JIRA_TOKEN": "t", "JIRA_USERNAME": "u"})


def public_resolver(host: str) -> Sequence[str]:
    return ["104.192.141.1"]


class RecordingFactory:
    def __init__(self) -> None:
        self.seen: list[JiraCredentials] = []
        self.client = MockJiraClient()

    def __call__(self, creds: JiraCredentials) -> JiraClient:
        self.seen.append(creds)
        return self.client


class TestGetClient:
    """Tests for get_client."""

    def test_builds_client_with_resolved_credentials(self) -> None:
        """The factory receives credentials resolved from config and env."""
        factory = RecordingFactory()
        cfg = JiraConfig(base_url="https://company.atlassian.net", project_key="PROJ")
        result = get_client(cfg, CREDS_ENV, factory, resolver=public_resolver)
        assert isinstance(result, Ok)
        assert result.value is factory.client
        assert factory.seen == [JiraCredentials("https://company.atlassian.net", "u", "t")]

    def test_missing_base_url(self) -> None:
        """No base URL means no client, before any other check."""
        result = get_client(JiraConfig(), CREDS_ENV, RecordingFactory(), resolver=public_resolver)
        assert isinstance(result, Err)
        assert result.error.kind == "base_url_required"
        assert str(result.error) == "base URL is required"

    @pytest.mark.parametrize(
        ("url", "needle"),
        [
            ("http://company.atlassian.net", "HTTPS"),
            ("https://localhost", "localhost"),
            ("https://169.254.169.254", "private"),
            ("https://metadata.google.internal", "metadata"),
        ],
    )
    def test_unsafe_url_is_refused(self, url: str, needle: str) -> None:
        """The safety gate reason is carried into the client error."""
        factory = RecordingFactory()
        result = get_client(JiraConfig(base_url=url), CREDS_ENV, factory, resolver=public_resolver)
        assert isinstance(result, Err)
        assert result.error.kind == "unsafe_url"
        assert needle in result.error.message
        assert factory.seen == []

    def test_url_checked_before_credentials(self) -> None:
        """An unsafe URL is reported even when credentials are missing."""
        result = get_client(JiraConfig(base_url="ftp://x"), MappingLookup(), None, resolver=public_resolver)
        assert isinstance(result, Err)
        assert result.error.kind == "unsafe_url"

    def test_missing_credentials(self) -> None:
        """Username and token must both be present."""
        cfg = JiraConfig(base_url="https://company.atlassian.net", username="u")
        result = get_client(cfg, MappingLookup(), RecordingFactory(), resolver=public_resolver)
        assert isinstance(result, Err)
        assert result.error.kind == "credentials_required"

    def test_missing_factory(self) -> None:
        """A complete config without a factory still yields an error."""
        cfg = JiraConfig(base_url="https://company.atlassian.net")
        result = get_client(cfg, CREDS_ENV, None, resolver=public_resolver)
        assert isinstance(result, Err)
        assert result.error.kind == "no_factory"


class TestMockJiraClient:
    """Tests for the in-memory client used across the test suite."""

    def test_satisfies_protocol(self) -> None:
        assert isinstance(MockJiraClient(), JiraClient)

    def test_create_then_find(self) -> None:
        client = MockJiraClient()
        assert client.find_version("PROJ", "1.0.0") == Ok(None)
        assert client.create_version("PROJ", "1.0.0", "desc") == Ok("10000")
        assert client.find_version("PROJ", "1.0.0") == Ok("10000")
        assert client.create_version("PROJ", "1.1.0", "") == Ok("10001")

    def test_records_calls(self) -> None:
        """Every call is recorded with its arguments, in order."""
        client = MockJiraClient()
        client.release_version("10000")
        client.add_fix_version("PROJ-1", "1.0.0")
        client.transition_issue("PROJ-1", "Done")
        client.add_comment("PROJ-1", "Released")
        assert client.operations() == ["release_version", "add_fix_version", "transition_issue", "add_comment"]
        assert client.calls[1] == ClientCall("add_fix_version", ("PROJ-1", "1.0.0"))
        assert client.released == {"10000"}

    def test_configured_failure(self) -> None:
        """An operation listed in failures returns Err with that reason."""
        client = MockJiraClient(failures={"transition_issue": "transition 'Done' not available"})
        assert client.transition_issue("PROJ-1", "Done") == Err("transition 'Done' not available")
        assert client.add_comment("PROJ-1", "x") == Ok(None)
