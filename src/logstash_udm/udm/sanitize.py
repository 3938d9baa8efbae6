"""Recursive removal of empty values from a mapped event."""

from __future__ import annotations

from typing import Any


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or value == [] or value == {}


def prune(value: Any) -> Any:
    """Drop None, empty strings, empty lists and dicts that end up empty.

    Non-empty lists are returned unchanged (no reordering or dedup).
    Returns None when ``value`` itself prunes away. Idempotent.
    """
    if isinstance(value, dict):
        cleaned = {}
        for key, child in value.items():
            child = prune(child)
            if not _is_empty(child):
                cleaned[key] = child
        return cleaned or None
    if _is_empty(value):
        return None
    return value
