from __future__ import annotations

import logging
from typing import Optional

from pythonjsonlogger import jsonlogger

from .settings import Settings

LOG_LINE = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def build_formatter(log_format: str) -> logging.Formatter:
    """JSON lines for anything but "plain"."""
    if log_format == "plain":
        return logging.Formatter(LOG_LINE)
    return jsonlogger.JsonFormatter(LOG_LINE)


def configure_logging(settings: Optional[Settings] = None) -> None:
    """
    Point the root logger at stderr using the level and format from `settings`
    (read from the environment when not given).
    """
    settings = settings or Settings.from_env()

    root = logging.getLogger()
    root.setLevel(settings.log_level)

    handler = logging.StreamHandler()
    handler.setFormatter(build_formatter(settings.log_format))

    # Replace any existing handlers to avoid duplicate logs
    root.handlers.clear()
    root.addHandler(handler)
