import json
import logging
import tempfile

import pytest

from order_export_template.logging_config import configure_logging
from order_export_template.settings import DEFAULT_PREVIEW_LIMIT, Settings


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_defaults_from_empty_env():
    settings = Settings.from_env({})
    assert settings.log_format == "json"
    assert settings.log_level == logging.INFO
    assert settings.template_name == "order-export-template"
    assert settings.preview_limit == DEFAULT_PREVIEW_LIMIT
    assert settings.output_dir == tempfile.gettempdir()


def test_values_from_env(tmp_path):
    settings = Settings.from_env({
        "ORDER_EXPORT_LOG_FORMAT": "PLAIN",
        "ORDER_EXPORT_LOG_LEVEL": "debug",
        "ORDER_EXPORT_TEMPLATE_NAME": " daily ",
        "ORDER_EXPORT_PREVIEW_LIMIT": "10",
        "ORDER_EXPORT_OUTPUT_DIR": str(tmp_path),
    })
    assert settings.log_format == "plain"
    assert settings.log_level == logging.DEBUG
    assert settings.template_name == "daily"
    assert settings.preview_limit == 10
    assert settings.output_dir == str(tmp_path)


def test_invalid_values_fall_back():
    settings = Settings.from_env({
        "ORDER_EXPORT_LOG_LEVEL": "chatty",
        "ORDER_EXPORT_PREVIEW_LIMIT": "lots",
    })
    assert settings.log_level == logging.INFO
    assert settings.preview_limit == DEFAULT_PREVIEW_LIMIT


def test_configure_logging_plain(capsys):
    configure_logging(Settings(log_format="plain", log_level=logging.INFO))
    logging.getLogger("order_export_template.test").info("hello")
    err = capsys.readouterr().err
    assert "[INFO] order_export_template.test: hello" in err


def test_configure_logging_reads_env_without_settings(monkeypatch, capsys):
    monkeypatch.setenv("ORDER_EXPORT_LOG_FORMAT", "json")
    monkeypatch.setenv("ORDER_EXPORT_LOG_LEVEL", "warning")
    configure_logging()
    logging.getLogger("order_export_template.test").info("dropped")
    logging.getLogger("order_export_template.test").warning("exported")
    line = capsys.readouterr().err.strip().splitlines()[-1]
    assert json.loads(line)["message"] == "exported"
    assert len(logging.getLogger().handlers) == 1
