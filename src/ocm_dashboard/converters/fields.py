"""Best-effort field extraction for unstructured Kubernetes objects.

Every helper returns ``None`` (or the supplied default) when a path is
missing or holds a value of the wrong type. None of them raise. All
schema fragility of the raw API objects stays behind these functions.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def nested(obj: Any, *path: str) -> Any | None:
    """Walk ``path`` through nested mappings."""
    current = obj
    for key in path:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
        if current is None:
            return None
    return current


def nested_str(obj: Any, *path: str, default: str | None = None) -> str | None:
    value = nested(obj, *path)
    return value if isinstance(value, str) else default


def nested_map(obj: Any, *path: str) -> Mapping[str, Any] | None:
    value = nested(obj, *path)
    return value if isinstance(value, Mapping) else None


def nested_list(obj: Any, *path: str) -> list[Any] | None:
    value = nested(obj, *path)
    return list(value) if isinstance(value, (list, tuple)) else None


def nested_int(obj: Any, *path: str) -> int | None:
    value = nested(obj, *path)
    # bool is an int subclass
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def nested_bool(obj: Any, *path: str) -> bool | None:
    value = nested(obj, *path)
    return value if isinstance(value, bool) else None


def string_map(value: Any, *, stringify: bool = False) -> dict[str, str] | None:
    """Copy a mapping keeping only string values.

    Args:
        value: Candidate mapping
        stringify: Also keep numeric values, converted with ``str()``
            (resource quantities are sometimes sent as bare numbers)

    Returns:
        A new dict, or None when ``value`` is not a mapping or is empty
    """
    if not isinstance(value, Mapping):
        return None
    result: dict[str, str] = {}
    for key, item in value.items():
        if isinstance(item, str):
            result[str(key)] = item
        elif stringify and isinstance(item, (int, float)) and not isinstance(item, bool):
            result[str(key)] = str(item)
    return result or None


def string_list(value: Any) -> list[str] | None:
    """Keep the string entries of a list; None when not a list or empty."""
    if not isinstance(value, (list, tuple)):
        return None
    result = [item for item in value if isinstance(item, str)]
    return result or None


def mappings(value: Any) -> list[Mapping[str, Any]]:
    """Mapping entries of a list, skipping anything else."""
    if not isinstance(value, (list, tuple)):
        return []
    return [item for item in value if isinstance(item, Mapping)]
