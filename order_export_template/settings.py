from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass, field
from typing import Mapping, Optional

from .export import DEFAULT_TEMPLATE_NAME

DEFAULT_PREVIEW_LIMIT = 50


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_level(env: Mapping[str, str], name: str, default: int) -> int:
    raw = (env.get(name) or '').strip().upper()
    level = logging.getLevelName(raw) if raw else default
    return level if isinstance(level, int) else default


@dataclass(frozen=True)
class Settings:
    log_format: str = 'json'
    log_level: int = logging.INFO
    template_name: str = DEFAULT_TEMPLATE_NAME
    preview_limit: int = DEFAULT_PREVIEW_LIMIT
    output_dir: str = field(default_factory=tempfile.gettempdir)

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        return cls(
            log_format=(env.get('ORDER_EXPORT_LOG_FORMAT') or 'json').strip().lower(),
            log_level=_env_level(env, 'ORDER_EXPORT_LOG_LEVEL', logging.INFO),
            template_name=(env.get('ORDER_EXPORT_TEMPLATE_NAME') or '').strip() or DEFAULT_TEMPLATE_NAME,
            preview_limit=_env_int(env, 'ORDER_EXPORT_PREVIEW_LIMIT', DEFAULT_PREVIEW_LIMIT),
            output_dir=(env.get('ORDER_EXPORT_OUTPUT_DIR') or '').strip() or tempfile.gettempdir(),
        )
