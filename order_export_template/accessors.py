from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .paths import normalize_for_read, parse_segment, split_path


class _Missing:
    """Marker for a path that resolved to nothing (distinct from JSON null)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'MISSING'

    def __bool__(self) -> bool:
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


MISSING = _Missing()


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _descend(current: Any, key: str) -> Any:
    if isinstance(current, Mapping):
        if key in current:
            return current[key]
        return MISSING
    if _is_sequence(current) and key.isdigit():
        idx = int(key)
        return current[idx] if idx < len(current) else MISSING
    return MISSING


def resolve_path(record: Any, path: str) -> Any:
    """Retrieve a value from a nested record using a dot/index path.

    Supports 'a.b', 'a.b[2]', 'a.b[]' (first element) and an optional
    leading 'raw.' namespace. Anything that cannot be followed resolves
    to MISSING; this function never raises.
    """
    if not path or not isinstance(path, str):
        return MISSING

    keys = split_path(normalize_for_read(path))
    if not keys:
        return MISSING

    val = record
    try:
        for key in keys:
            if val is None or val is MISSING:
                return MISSING

            name, index = parse_segment(key)
            val = _descend(val, name)
            if index is None:
                continue

            if not _is_sequence(val):
                return MISSING
            val = val[index] if index < len(val) else MISSING
        return val
    except Exception:
        return MISSING


def is_missing(value: Any) -> bool:
    return value is None or value is MISSING
