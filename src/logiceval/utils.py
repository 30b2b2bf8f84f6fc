from __future__ import annotations

from collections.abc import Mapping
from typing import Any


MISSING: Any = object()
"""Returned by ``deep_get()`` (as the default) when a path does not resolve."""


def deep_get(obj: Any, path: str, default: Any = MISSING) -> Any:
    """Retrieve a nested value from an object using dot-separated path notation.

    Traverses nested mappings and lists to retrieve a value at the
    specified path. Returns the default value if any part of the path
    cannot be resolved.

    Args:
        obj: The object to traverse (typically a dict or list).
        path: Dot-separated path to the desired value. Examples:
            - ``"user.name"`` for ``{"user": {"name": "Alice"}}``
            - ``"items.0.id"`` for ``{"items": [{"id": 1}]}``
            - ``"1"`` for the second element of a list document
        default: Value to return if the path cannot be resolved.
            Defaults to the ``MISSING`` sentinel so callers can tell a
            stored ``None`` apart from an absent key.

    Returns:
        The value at the specified path, or ``default`` if not found.

    Path resolution rules:
        - Mapping: Keys are matched by string lookup
        - List/tuple: Segments must be non-negative integers
        - Empty segments (consecutive dots) are ignored
        - Returns ``default`` if any segment fails to resolve

    Examples:
        >>> deep_get({"a": {"b": 1}}, "a.b")
        1
        >>> deep_get({"items": [10, 20]}, "items.1")
        20
        >>> deep_get({}, "missing.path", default="N/A")
        'N/A'
    """
    parts = [p for p in path.split(".") if p]
    cur = obj
    for part in parts:
        if isinstance(cur, Mapping):
            if part in cur:
                cur = cur[part]
                continue
            return default
        if isinstance(cur, (list, tuple)):
            if not part.isdigit():
                return default
            try:
                index = int(part)
            except ValueError:
                return default
            if index < len(cur):
                cur = cur[index]
                continue
            return default
        return default
    return cur


def has_path(obj: Any, path: str) -> bool:
    """Return True if ``path`` resolves inside ``obj``."""
    return deep_get(obj, path) is not MISSING
