from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

EXPORTED_TIMESTAMP = '__static.exportedTimestamp'


class _NotHandled:
    def __repr__(self) -> str:
        return 'NOT_HANDLED'

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


NOT_HANDLED = _NotHandled()


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_iso_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC with millisecond precision, e.g. 2024-05-01T09:30:00.123Z."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.strftime('%Y-%m-%dT%H:%M:%S.') + f'{moment.microsecond // 1000:03d}Z'


class SyntheticFieldProvider:
    """Values for `__static.*` paths, computed without looking at the record."""

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock or _utc_now
        self._fields: Dict[str, Callable[[], Any]] = {
            EXPORTED_TIMESTAMP: self._exported_timestamp,
        }

    def _exported_timestamp(self) -> str:
        return format_iso_timestamp(self._clock())

    def handles(self, path: str) -> bool:
        return isinstance(path, str) and path in self._fields

    def provide(self, path: str) -> Any:
        if not self.handles(path):
            return NOT_HANDLED
        return self._fields[path]()


default_provider = SyntheticFieldProvider()


def provide(path: str) -> Any:
    return default_provider.provide(path)
