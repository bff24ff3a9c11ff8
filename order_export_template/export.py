"""CSV export of projected orders.

The document is built by hand rather than with `csv.writer`: the writer adds a
trailing line terminator and quotes a lone empty field, neither of which the
spreadsheet template format expects.
"""
from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any, Iterable, List, Optional

from .columns import Column
from .formatting import format_for_export, number_text
from .projection import resolve_cell
from .synthetic import SyntheticFieldProvider

logger = logging.getLogger(__name__)

BOM = '\ufeff'
LINE_SEPARATOR = '\r\n'
CSV_MIME_TYPE = 'text/csv;charset=utf-8'
DEFAULT_TEMPLATE_NAME = 'order-export-template'

_QUOTE_TRIGGERS = (',', '"', '\n', '\r')


def cell_text(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float) and not math.isfinite(value):
        if math.isnan(value):
            return 'NaN'
        return 'Infinity' if value > 0 else '-Infinity'
    if isinstance(value, (int, float, Decimal)):
        return number_text(value, default='')
    return str(value)


def escape_field(value: Any) -> str:
    text = cell_text(value)
    if any(ch in text for ch in _QUOTE_TRIGGERS):
        return '"' + text.replace('"', '""') + '"'
    return text


def _join(cells: Iterable[Any]) -> str:
    return ','.join(escape_field(cell) for cell in cells)


def serialize(
    columns: Iterable[Column],
    records: Iterable[Any],
    provider: Optional[SyntheticFieldProvider] = None,
) -> str:
    """Header of labels, then one row per record, CRLF-joined."""
    columns = list(columns)
    records = list(records)

    lines: List[str] = [_join(c.label for c in columns)]
    for record in records:
        lines.append(_join(format_for_export(resolve_cell(c, record, provider)) for c in columns))
    return LINE_SEPARATOR.join(lines)


def encode_document(text: str) -> bytes:
    return (BOM + text).encode('utf-8')


def default_filename(template_name: Optional[str], today: Optional[date] = None) -> str:
    name = (template_name or '').strip() or DEFAULT_TEMPLATE_NAME
    name = name.replace('/', '-').replace('\\', '-')
    today = today or date.today()
    return f"{name}-{today.isoformat()}.csv"


@dataclass
class ExportResult:
    filename: str
    content: str
    row_count: int
    mime_type: str = CSV_MIME_TYPE

    def to_bytes(self) -> bytes:
        return encode_document(self.content)


def build_export(
    columns: Iterable[Column],
    records: Iterable[Any],
    template_name: Optional[str] = None,
    today: Optional[date] = None,
    provider: Optional[SyntheticFieldProvider] = None,
) -> ExportResult:
    records = list(records)
    content = serialize(columns, records, provider)
    return ExportResult(
        filename=default_filename(template_name, today),
        content=content,
        row_count=len(records),
    )


def write_export(result: ExportResult, directory: str | os.PathLike) -> Path:
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / result.filename
    path.write_bytes(result.to_bytes())
    logger.info("Wrote %d rows to %s", result.row_count, path)
    return path
