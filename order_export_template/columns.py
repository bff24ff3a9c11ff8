from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from .catalogue import FieldCatalogue

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Column:
    id: str
    label: str
    path: str


DEFAULT_COLUMNS: Tuple[Column, ...] = (
    Column(id='name', label='Order Name', path='raw.name'),
    Column(id='createdAt', label='Order Created Date', path='raw.created_at'),
    Column(id='financialStatus', label='Financial Status', path='raw.financial_status'),
    Column(id='totalPrice', label='Subtotal Price Set', path='raw.subtotal_price_set.shop_money.amount'),
)


def column_id_for(path: str, taken: Iterable[str] = ()) -> str:
    """Id for a synthesized column: the path, or 'path-<n>' if that id is taken.

    The result depends only on `path` and `taken`, so it is stable across calls.
    """
    taken = set(taken)
    if path not in taken:
        return path
    n = 1
    while f'{path}-{n}' in taken:
        n += 1
    return f'{path}-{n}'


def _clean_path(path) -> str:
    return path.strip() if isinstance(path, str) else ''


class ColumnSet:
    """Ordered, id-unique set of active columns.

    Mutations never raise; input that cannot be applied is ignored.
    """

    def __init__(self, catalogue: FieldCatalogue, columns: Optional[Iterable[Column]] = None):
        self.catalogue = catalogue
        self._columns: List[Column] = []
        for column in DEFAULT_COLUMNS if columns is None else columns:
            self._append(column)

    def _append(self, column: Column) -> None:
        if any(c.id == column.id or c.path == column.path for c in self._columns):
            return
        self._columns.append(column)

    def _index_of(self, column_id: str) -> int:
        for i, column in enumerate(self._columns):
            if column.id == column_id:
                return i
        return -1

    def _new_column(self, path: str, taken: Iterable[str]) -> Column:
        label = self.catalogue.label_for(path, default=path)
        return Column(id=column_id_for(path, taken), label=label, path=path)

    @property
    def columns(self) -> Tuple[Column, ...]:
        return tuple(self._columns)

    def __len__(self) -> int:
        return len(self._columns)

    def __iter__(self):
        return iter(tuple(self._columns))

    def __repr__(self) -> str:
        return f"ColumnSet({[c.id for c in self._columns]!r})"

    def ids(self) -> List[str]:
        return [c.id for c in self._columns]

    def paths(self) -> List[str]:
        return [c.path for c in self._columns]

    def labels(self) -> List[str]:
        return [c.label for c in self._columns]

    def reorder(self, from_id: str, to_id: str) -> None:
        """Move `from_id` to the index currently held by `to_id`."""
        if from_id == to_id:
            return
        old_index = self._index_of(from_id)
        new_index = self._index_of(to_id)
        if old_index < 0 or new_index < 0:
            return

        column = self._columns.pop(old_index)
        self._columns.insert(new_index, column)
        logger.debug("Moved column %s from %d to %d", from_id, old_index, new_index)

    def replace_selection(self, paths: Sequence[str]) -> None:
        """Rebuild the set from catalogue paths, keeping ids of columns already present."""
        previous = {c.path: c for c in self._columns}
        selected: List[str] = []
        for raw_path in paths or []:
            path = _clean_path(raw_path)
            if not path or path in selected:
                continue
            if path not in previous and path not in self.catalogue:
                logger.debug("Dropping unknown path %r from selection", path)
                continue
            selected.append(path)

        # Kept columns hold their ids; new ids must not collide with them.
        taken_ids = {previous[p].id for p in selected if p in previous}
        rebuilt: List[Column] = []
        for path in selected:
            column = previous.get(path)
            if column is None:
                column = self._new_column(path, taken_ids)
                taken_ids.add(column.id)
            rebuilt.append(column)

        self._columns = rebuilt
        logger.debug("Column selection replaced: %s", [c.id for c in rebuilt])

    def add(self, path: str) -> None:
        path = _clean_path(path)
        if not path or path in self.paths():
            return
        column = self._new_column(path, self.ids())
        self._columns.append(column)
        logger.debug("Added column %s as %s", path, column.id)

    def remove(self, path: str) -> None:
        path = _clean_path(path)
        before = len(self._columns)
        self._columns = [c for c in self._columns if c.path != path]
        if len(self._columns) != before:
            logger.debug("Removed column %s", path)
