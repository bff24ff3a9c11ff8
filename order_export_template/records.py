from __future__ import annotations

from collections.abc import Mapping
from typing import Any, List, Optional

from .accessors import resolve_path

ROOT = '(root)'
RAW_KEY = 'raw'


def resolve_items_by_root(data: Any, root_path: str = ROOT) -> List[Any]:
    if data is None:
        return []

    if root_path in (None, '', ROOT):
        if isinstance(data, list):
            return data
        return [data]

    target = resolve_path(data, root_path)
    if isinstance(target, list):
        return target
    if isinstance(target, Mapping):
        return [target]
    return []


def unwrap_record(item: Any) -> Any:
    """Persisted order rows keep the platform payload under 'raw'; use that payload."""
    if isinstance(item, Mapping) and isinstance(item.get(RAW_KEY), Mapping):
        return item[RAW_KEY]
    return item


def load_records(data: Any, root_path: str = ROOT, limit: Optional[int] = None) -> List[Any]:
    """Order records under `root_path`, unwrapped, optionally capped at `limit`."""
    items = [unwrap_record(item) for item in resolve_items_by_root(data, root_path)]
    items = [item for item in items if isinstance(item, Mapping)]
    if limit is not None and limit >= 0:
        items = items[:limit]
    return items
