from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence

import gradio as gr
import pandas as pd

from . import picker
from .catalogue import FieldCatalogue
from .columns import ColumnSet
from .errors import RecordLoadError
from .export import build_export, write_export
from .io_utils import read_json_content
from .projection import project_frame, project_transposed
from .records import ROOT, load_records
from .settings import Settings

logger = logging.getLogger(__name__)

LAYOUT_BY_FIELD = "Rows per field"
LAYOUT_BY_ORDER = "Rows per order"
COLUMN_TABLE_HEADERS = ["Label", "Path", "ID"]


def column_table(column_set: ColumnSet) -> List[List[str]]:
    return [[c.label, c.path, c.id] for c in column_set]


def column_choices(column_set: ColumnSet):
    return [(c.label, c.id) for c in column_set]


def _column_dropdowns(column_set: ColumnSet):
    choices = column_choices(column_set)
    return gr.update(choices=choices, value=None), gr.update(choices=choices, value=None)


def render_preview(column_set: ColumnSet, records, layout: str = LAYOUT_BY_FIELD, limit: int = 50) -> pd.DataFrame:
    rows = list(records or [])[:max(0, int(limit))]
    if layout == LAYOUT_BY_ORDER:
        return project_frame(column_set.columns, rows)
    return project_transposed(column_set.columns, rows)


def compute_document_count_text(records) -> str:
    if records is None:
        return ""
    return f"Orders: {len(records)}"


def load_orders_handler(file_obj, root_path, column_set: ColumnSet, layout, settings: Settings):
    try:
        data = read_json_content(file_obj)
    except RecordLoadError as exc:
        logger.warning("Rejected upload: %s", exc)
        return None, [], str(exc), "", None

    records = load_records(data, root_path or ROOT)
    message = f"Successfully loaded {len(records)} orders."
    preview = render_preview(column_set, records, layout, settings.preview_limit)
    return data, records, message, compute_document_count_text(records), preview


def handle_root_change(data: Any, root_path: str, column_set: ColumnSet, layout, settings: Settings):
    if data is None:
        return [], "", None
    records = load_records(data, root_path or ROOT)
    preview = render_preview(column_set, records, layout, settings.preview_limit)
    return records, compute_document_count_text(records), preview


def _column_outputs(column_set: ColumnSet, records, layout, settings: Settings):
    move_from, move_to = _column_dropdowns(column_set)
    remove = gr.update(choices=[(c.label, c.path) for c in column_set], value=None)
    preview = render_preview(column_set, records, layout, settings.preview_limit)
    return column_set, column_table(column_set), move_from, move_to, remove, preview


def reorder_handler(column_set: ColumnSet, from_id, to_id, records, layout, settings: Settings):
    column_set.reorder(from_id, to_id)
    return _column_outputs(column_set, records, layout, settings)


def remove_column_handler(column_set: ColumnSet, path, records, layout, settings: Settings):
    if path:
        column_set.remove(path)
    return _column_outputs(column_set, records, layout, settings)


def _picker_outputs(state: picker.PickerState, catalogue: FieldCatalogue):
    visible = picker.visible_fields(state, catalogue)
    visible_paths = {f.path for f in visible}
    checkboxes = gr.update(
        choices=[(f.label, f.path) for f in visible],
        value=[p for p in state.draft if p in visible_paths],
    )
    return state, gr.update(visible=state.is_open), gr.update(value=state.query), checkboxes


def open_picker_handler(state: picker.PickerState, column_set: ColumnSet, catalogue: FieldCatalogue):
    return _picker_outputs(picker.open_picker(state, column_set), catalogue)


def search_fields_handler(state: picker.PickerState, query: str, catalogue: FieldCatalogue):
    return _picker_outputs(picker.search(state, query), catalogue)


def select_fields_handler(state: picker.PickerState, checked: Optional[Sequence[str]], catalogue: FieldCatalogue):
    visible = [f.path for f in picker.visible_fields(state, catalogue)]
    return picker.set_visible_selection(state, visible, checked or [])


def save_fields_handler(state: picker.PickerState, column_set: ColumnSet, records, layout,
                        catalogue: FieldCatalogue, settings: Settings):
    state = picker.confirm(state, column_set)
    return _picker_outputs(state, catalogue) + _column_outputs(column_set, records, layout, settings)


def cancel_fields_handler(state: picker.PickerState, column_set: ColumnSet, catalogue: FieldCatalogue):
    return _picker_outputs(picker.cancel(state, column_set), catalogue)


def export_data_handler(column_set: ColumnSet, records, template_name, settings: Settings):
    if records is None or not records:
        return None, "No data loaded."

    if not len(column_set):
        return None, "No fields selected."

    result = build_export(column_set.columns, records, template_name or settings.template_name)

    try:
        path = write_export(result, settings.output_dir)
    except OSError as e:
        logger.exception("Export failed")
        return None, f"Error during export: {str(e)}"

    return str(path), f"Export successful! {result.row_count} orders saved to {path}"
