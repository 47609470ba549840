"""Helpers for safely reading dynamic (untyped) structures.

The plugin host hands us configuration and release context as plain maps
decoded from JSON. These helpers read one field at a time and check its
runtime type; a value of the wrong type is treated as absent, never coerced.
"""

from __future__ import annotations

from typing import Mapping, TypeGuard, cast

StrDict = dict[str, object]
ObjList = list[object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    """Return True if obj is a dict with string keys."""
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d.keys())


def as_str_dict(obj: object) -> StrDict | None:
    if is_str_dict(obj):
        return obj
    return None


def as_obj_list(obj: object) -> ObjList | None:
    if isinstance(obj, list):
        return cast(ObjList, obj)
    return None


def get_bool(table: Mapping[str, object], key: str, default: bool) -> bool:
    """Get a boolean value, or `default` when missing or not a real bool.

    Ints are rejected even though bool subclasses int: `1` is not `True` here.
    """
    value = table.get(key)
    if isinstance(value, bool):
        return value
    return default


def get_exact_str(table: Mapping[str, object], key: str) -> str:
    """Get a string value verbatim, or "" when missing or not a str."""
    value = table.get(key)
    if isinstance(value, str):
        return value
    return ""


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    """Get a nested table (dict with string keys) from a mapping."""
    return as_str_dict(table.get(key))


def get_list(table: Mapping[str, object], key: str) -> ObjList | None:
    return as_obj_list(table.get(key))


def get_str_list(table: Mapping[str, object], key: str) -> tuple[str, ...]:
    """Get the string items of a list value; non-string items are dropped."""
    items = get_list(table, key) or []
    return tuple(item for item in items if isinstance(item, str))
