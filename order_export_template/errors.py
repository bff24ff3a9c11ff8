from __future__ import annotations


class OrderExportError(Exception):
    """Base class for errors raised by this package."""


class DuplicateFieldError(OrderExportError):
    def __init__(self, paths):
        self.paths = list(paths)
        super().__init__("Duplicate catalogue paths: " + ", ".join(self.paths))


class RecordLoadError(OrderExportError):
    """Uploaded data could not be read as JSON records."""
