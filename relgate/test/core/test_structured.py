"""Tests for relgate.core.structured module."""

from __future__ import annotations

import pytest

from relgate.core.structured import (
    as_obj_list,
    as_str_dict,
    get_bool,
    get_exact_str,
    get_list,
    get_str_list,
    get_table,
    is_str_dict,
)


class TestGetBool:
    """Tests for get_bool."""

    def test_reads_real_bools(self) -> None:
        assert get_bool({"flag": False}, "flag", True) is False
        assert get_bool({"flag": True}, "flag", False) is True

    @pytest.mark.parametrize("value", ["false", "true", 0, 1, None, [], 1.0])
    def test_wrong_type_uses_default(self, value: object) -> None:
        """Only real bools are read; truthy values are not coerced."""
        assert get_bool({"flag": value}, "flag", True) is True
        assert get_bool({"flag": value}, "flag", False) is False

    def test_missing_uses_default(self) -> None:
        assert get_bool({}, "flag", True) is True


class TestGetExactStr:
    """Tests for get_exact_str."""

    def test_verbatim(self) -> None:
        """Strings come back untouched, whitespace included."""
        assert get_exact_str({"k": "  Done "}, "k") == "  Done "

    @pytest.mark.parametrize("value", [123, None, True, ["a"], {"a": 1}])
    def test_non_string_is_empty(self, value: object) -> None:
        assert get_exact_str({"k": value}, "k") == ""


def test_tables_and_lists() -> None:
    data: dict[str, object] = {"t": {"a": 1}, "bad": {1: "a"}, "l": [1, "x"], "s": "x"}
    assert get_table(data, "t") == {"a": 1}
    assert get_table(data, "bad") is None
    assert get_list(data, "l") == [1, "x"]
    assert get_list(data, "s") is None
    assert is_str_dict({"a": 1}) is True
    assert as_str_dict("nope") is None
    assert as_obj_list(("tuple",)) is None


def test_get_str_list_keeps_only_strings() -> None:
    assert get_str_list({"issues": ["PROJ-1", 2, None, "PROJ-2"]}, "issues") == ("PROJ-1", "PROJ-2")
    assert get_str_list({}, "issues") == ()
