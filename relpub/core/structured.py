"""Helpers for safely reading untyped TOML data.

They provide runtime validation and static type narrowing at the config
boundary.
"""

from __future__ import annotations

from typing import Mapping, TypeGuard, cast

StrDict = dict[str, object]


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


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Get a string value from a mapping, stripping whitespace.

    Returns None if missing, not a str, or empty after stripping.
    """
    value = table.get(key)
    if not isinstance(value, str):
        return None
    s = value.strip()
    return s or None


def get_bool(table: Mapping[str, object], key: str) -> bool | None:
    value = table.get(key)
    if isinstance(value, bool):
        return value
    return None


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    """Get a nested table (dict with string keys) from a mapping."""
    return as_str_dict(table.get(key))


def get_str_list(table: Mapping[str, object], key: str) -> list[str] | None:
    """Get a list of non-empty strings, or None if the value is not a list.

    Non-string and blank items are dropped.
    """
    value = table.get(key)
    if not isinstance(value, list):
        return None
    items = cast(list[object], value)
    return [s.strip() for s in items if isinstance(s, str) and s.strip()]
