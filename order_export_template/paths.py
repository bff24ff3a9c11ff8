from __future__ import annotations

import re
from typing import List, Optional, Tuple

RAW_PREFIX = 'raw.'

_INDEXED_SEGMENT = re.compile(r'^(.+?)\[(\d+)\]$')


def normalize_for_read(path: str) -> str:
    """Rewrite '[]' to '[0]' and strip a leading 'raw.' namespace."""
    if not isinstance(path, str):
        return ''
    path = path.replace('[]', '[0]')
    if path.startswith(RAW_PREFIX):
        path = path[len(RAW_PREFIX):]
    return path


def split_path(path: str) -> List[str]:
    """Split a dot path, trimming each segment and dropping empty ones."""
    if not isinstance(path, str):
        return []
    parts = (p.strip() for p in path.split('.'))
    return [p for p in parts if p]


def parse_segment(segment: str) -> Tuple[str, Optional[int]]:
    """Return (key, index) for 'key[3]', or (segment, None) for a plain key."""
    m = _INDEXED_SEGMENT.match(segment)
    if m:
        return m.group(1), int(m.group(2))
    return segment, None
