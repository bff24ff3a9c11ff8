"""Field picker state.

The picker keeps a draft selection apart from the live column set until
the user confirms. Every function here takes a `PickerState` and returns a
new one; the UI layer only wires its events to these transitions.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Tuple

from .catalogue import FieldCatalogue, FieldDescriptor
from .columns import ColumnSet


@dataclass(frozen=True)
class PickerState:
    query: str = ''
    draft: Tuple[str, ...] = ()
    is_open: bool = False


def _dedupe(paths: Iterable[str]) -> Tuple[str, ...]:
    seen = []
    for path in paths:
        if isinstance(path, str) and path and path not in seen:
            seen.append(path)
    return tuple(seen)


def open_picker(state: PickerState, column_set: ColumnSet) -> PickerState:
    return replace(state, draft=tuple(column_set.paths()), is_open=True)


def search(state: PickerState, query: str) -> PickerState:
    return replace(state, query=query if isinstance(query, str) else '')


def visible_fields(state: PickerState, catalogue: FieldCatalogue) -> Tuple[FieldDescriptor, ...]:
    return catalogue.search(state.query)


def available_fields(
    state: PickerState,
    catalogue: FieldCatalogue,
    column_set: ColumnSet,
) -> Tuple[FieldDescriptor, ...]:
    """Search results minus anything already drafted or already a column."""
    taken = set(state.draft) | set(column_set.paths())
    return tuple(f for f in catalogue.search(state.query) if f.path not in taken)


def select(state: PickerState, path: str) -> PickerState:
    return replace(state, draft=_dedupe(state.draft + (path,)))


def deselect(state: PickerState, path: str) -> PickerState:
    return replace(state, draft=tuple(p for p in state.draft if p != path))


def toggle(state: PickerState, path: str) -> PickerState:
    if path in state.draft:
        return deselect(state, path)
    return select(state, path)


def set_visible_selection(
    state: PickerState,
    visible: Iterable[str],
    checked: Iterable[str],
) -> PickerState:
    """Merge a filtered multi-select back into the draft.

    Paths hidden by the current query keep their draft membership; visible
    ones follow `checked`. Newly checked paths are appended in `checked` order.
    """
    visible = set(visible)
    checked = _dedupe(checked)
    kept = tuple(p for p in state.draft if p not in visible or p in checked)
    return replace(state, draft=_dedupe(kept + checked))


def confirm(state: PickerState, column_set: ColumnSet) -> PickerState:
    column_set.replace_selection(state.draft)
    return PickerState(query='', draft=tuple(column_set.paths()), is_open=False)


def cancel(state: PickerState, column_set: ColumnSet) -> PickerState:
    return PickerState(query='', draft=tuple(column_set.paths()), is_open=False)
