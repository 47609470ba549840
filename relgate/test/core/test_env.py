"""Tests for relgate.core.env module."""

from __future__ import annotations

import pytest

from relgate.core.env import CredentialLookup, EnvironLookup, MappingLookup, first_set


def test_mapping_lookup() -> None:
    lookup = MappingLookup({"JIRA_TOKEN": "t"})
    assert lookup.get("JIRA_TOKEN") == "t"
    assert lookup.get("JIRA_API_TOKEN") is None
    assert MappingLookup().get("anything") is None


def test_environ_lookup_reads_process_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RELGATE_TEST_VALUE", "from-env")
    monkeypatch.delenv("RELGATE_TEST_MISSING", raising=False)
    lookup = EnvironLookup()
    assert lookup.get("RELGATE_TEST_VALUE") == "from-env"
    assert lookup.get("RELGATE_TEST_MISSING") is None


def test_lookups_satisfy_protocol() -> None:
    assert isinstance(EnvironLookup(), CredentialLookup)
    assert isinstance(MappingLookup(), CredentialLookup)


class TestFirstSet:
    """Tests for first_set."""

    def test_primary_wins(self) -> None:
        lookup = MappingLookup({"A": "primary", "B": "fallback"})
        assert first_set(lookup, ("A", "B")) == "primary"

    def test_empty_primary_falls_through(self) -> None:
        """An empty value counts as unset."""
        lookup = MappingLookup({"A": "", "B": "fallback"})
        assert first_set(lookup, ("A", "B")) == "fallback"

    def test_nothing_set(self) -> None:
        assert first_set(MappingLookup(), ("A", "B")) == ""
