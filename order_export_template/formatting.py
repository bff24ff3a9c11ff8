from __future__ import annotations

import json
import math
from decimal import Decimal
from typing import Any, Union

from .accessors import is_missing

PLACEHOLDER = '-'

ExportValue = Union[str, int, float, bool]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def _is_finite(value: Any) -> bool:
    if isinstance(value, Decimal):
        return value.is_finite()
    if isinstance(value, float):
        return math.isfinite(value)
    return True


def number_text(value: Any, default: str = PLACEHOLDER) -> str:
    """Decimal text for a finite number; integral floats drop the trailing '.0'.

    Returns `default` when the number has no decimal rendering (ints past the
    interpreter's digit limit).
    """
    try:
        if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        if isinstance(value, float):
            return repr(value)
        return str(value)
    except (ValueError, OverflowError):
        return default


def to_json_text(value: Any) -> str:
    """Compact JSON for structured values, degrading to str() when encoding fails."""
    try:
        return json.dumps(value, ensure_ascii=False, separators=(',', ':'), allow_nan=False)
    except Exception:
        try:
            return str(value)
        except Exception:
            return object.__repr__(value)


def format_for_display(value: Any) -> str:
    if is_missing(value):
        return PLACEHOLDER
    if isinstance(value, str):
        return value if value else PLACEHOLDER
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if _is_number(value):
        return number_text(value) if _is_finite(value) else PLACEHOLDER
    return to_json_text(value)


def format_for_export(value: Any) -> ExportValue:
    """Cell value for export; primitives keep their type so 0/False differ from ''."""
    if is_missing(value):
        return ''
    if isinstance(value, (str, bool)) or _is_number(value):
        return value
    return to_json_text(value)
