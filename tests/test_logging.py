"""Tests for structured logging functionality."""

from __future__ import annotations

import json
import logging
import logging.handlers

import pytest

from apexerp.config import BaseConfig
from apexerp.logging_config import JSONFormatter, get_logger, setup_logging


def _record(**kwargs) -> logging.LogRecord:
    values = dict(
        name="test.logger",
        level=logging.INFO,
        pathname="test.py",
        lineno=42,
        msg="Test message",
        args=(),
        exc_info=None,
    )
    values.update(kwargs)
    record = logging.LogRecord(**values)
    record.module = "test_module"
    record.funcName = "test_function"
    return record


def test_json_formatter():
    """JSONFormatter emits the standard keys."""
    log_data = json.loads(JSONFormatter().format(_record()))

    assert log_data["level"] == "INFO"
    assert log_data["logger"] == "test.logger"
    assert log_data["message"] == "Test message"
    assert log_data["module"] == "test_module"
    assert log_data["function"] == "test_function"
    assert log_data["line"] == 42
    assert "timestamp" in log_data
    assert "extra" not in log_data


def test_json_formatter_with_exception():
    try:
        raise ValueError("Test error")
    except ValueError:
        import sys

        exc_info = sys.exc_info()

    log_data = json.loads(
        JSONFormatter().format(_record(level=logging.ERROR, msg="Error occurred", exc_info=exc_info))
    )

    assert log_data["exception"]["type"] == "ValueError"
    assert "Test error" in log_data["exception"]["message"]
    assert log_data["exception"]["traceback"] is not None


def test_json_formatter_collects_extra_fields():
    record = _record()
    record.module_slug = "sales"
    record.form_slug = "inquiry"

    log_data = json.loads(JSONFormatter().format(record))

    assert log_data["extra"] == {"module_slug": "sales", "form_slug": "inquiry"}


def test_setup_logging(tmp_path):
    """Logging setup creates a rotating JSON log file."""
    config = BaseConfig()
    config.DATA_DIR = str(tmp_path)
    config.DEV_MODE = True

    logger = setup_logging(config)

    assert logger.name == "apexerp"
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2  # Console + File

    log_file = tmp_path / "logs" / "apexerp.log"
    assert log_file.exists()

    logger.info("Test info message")
    logger.warning("Test warning message")

    lines = [line for line in log_file.read_text(encoding="utf-8").splitlines() if line.strip()]
    assert len(lines) >= 3
    for line in lines:
        log_entry = json.loads(line)
        assert "timestamp" in log_entry
        assert "level" in log_entry
        assert "message" in log_entry


def test_setup_logging_replaces_handlers(tmp_path):
    config = BaseConfig()
    config.DATA_DIR = str(tmp_path)

    setup_logging(config)
    logger = setup_logging(config)

    assert len(logger.handlers) == 2


def test_get_logger():
    """get_logger returns loggers under the package tree."""
    logger1 = get_logger("module1")
    logger2 = get_logger("apexerp.blueprints.tabbed")

    assert logger1.name == "apexerp.module1"
    assert logger2.name == "apexerp.blueprints.tabbed"
    assert logger1 != logger2


@pytest.mark.parametrize("dev_mode", [True, False])
def test_logging_levels_by_mode(tmp_path, dev_mode):
    """Console logging level adjusts based on dev mode."""
    config = BaseConfig()
    config.DATA_DIR = str(tmp_path)
    config.DEV_MODE = dev_mode

    logger = setup_logging(config)

    console_handler = next(
        handler
        for handler in logger.handlers
        if isinstance(handler, logging.StreamHandler)
        and not isinstance(handler, logging.handlers.RotatingFileHandler)
    )

    expected_level = logging.INFO if dev_mode else logging.WARNING
    assert console_handler.level == expected_level


def test_submissions_are_logged(client, tmp_path):
    client.post(
        "/finance/journal-voucher",
        json={
            "date": "2024-05-01",
            "debit_account": "Rent Expense",
            "credit_account": "Cash",
            "amount": 1500,
            "narration": "May rent",
        },
    )

    entries = [
        json.loads(line)
        for line in (tmp_path / "logs" / "apexerp.log").read_text(encoding="utf-8").splitlines()
        if line.strip()
    ]
    submitted = [entry for entry in entries if entry["message"] == "Form submitted"]
    assert len(submitted) == 1
    extra = submitted[0]["extra"]
    assert extra["module_slug"] == "finance"
    assert extra["form_slug"] == "journal-voucher"
    assert extra["payload"]["amount"] == 1500.0
