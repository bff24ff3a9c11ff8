"""Core logic for the Order Export Template.

The Gradio UI lives in `app.py`. This package contains the pieces that:
- resolve dot/index paths against order records
- format resolved values for display and for CSV cells
- hold the field catalogue and the ordered column set
- project records into a preview grid and a CSV document
"""
from .accessors import MISSING, resolve_path
from .catalogue import FieldCatalogue, FieldDescriptor, default_catalogue
from .columns import Column, ColumnSet
from .export import build_export, serialize
from .formatting import format_for_display, format_for_export
from .projection import project
from .synthetic import NOT_HANDLED, provide

__all__ = [
    "MISSING",
    "NOT_HANDLED",
    "Column",
    "ColumnSet",
    "FieldCatalogue",
    "FieldDescriptor",
    "build_export",
    "default_catalogue",
    "format_for_display",
    "format_for_export",
    "project",
    "provide",
    "resolve_path",
    "serialize",
]
