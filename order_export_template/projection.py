from __future__ import annotations

from typing import Any, Iterable, List, Optional

import pandas as pd

from .accessors import resolve_path
from .columns import Column
from .formatting import format_for_display
from .synthetic import NOT_HANDLED, SyntheticFieldProvider, default_provider


def resolve_cell(column: Column, record: Any, provider: Optional[SyntheticFieldProvider] = None) -> Any:
    """Synthetic fields win over record data; everything else goes through the resolver."""
    provider = provider or default_provider
    value = provider.provide(column.path)
    if value is not NOT_HANDLED:
        return value
    # resolve_path applies the '[]' rewrite and 'raw.' strip itself
    return resolve_path(record, column.path)


def project(
    columns: Iterable[Column],
    records: Iterable[Any],
    provider: Optional[SyntheticFieldProvider] = None,
) -> List[List[str]]:
    """Display grid: one row per record, one cell per column, both in input order."""
    columns = list(columns)
    grid: List[List[str]] = []
    for record in records:
        grid.append([format_for_display(resolve_cell(c, record, provider)) for c in columns])
    return grid


def project_frame(
    columns: Iterable[Column],
    records: Iterable[Any],
    provider: Optional[SyntheticFieldProvider] = None,
) -> pd.DataFrame:
    columns = list(columns)
    grid = project(columns, records, provider)
    return pd.DataFrame(grid, columns=[c.label for c in columns], dtype=object)


def project_transposed(
    columns: Iterable[Column],
    records: Iterable[Any],
    provider: Optional[SyntheticFieldProvider] = None,
) -> pd.DataFrame:
    """Field-per-row layout: a 'Field' column, then 'Row 1'..'Row n' per record."""
    columns = list(columns)
    grid = project(columns, records, provider)
    data = {'Field': [c.label for c in columns]}
    for i, row in enumerate(grid, start=1):
        data[f'Row {i}'] = row
    return pd.DataFrame(data, dtype=object)
