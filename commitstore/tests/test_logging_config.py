"""
Tests for structured logging setup.
"""

import json
import logging

import pytest

from commitstore.logging_config import TraceIDFilter, get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_logs_carry_trace_id(monkeypatch, capsys):
    monkeypatch.setenv("COMMITSTORE_LOG_LEVEL", "INFO")
    monkeypatch.setenv("COMMITSTORE_LOG_FORMAT", "json")
    setup_logging()

    get_logger("commitstore.test", trace_id="order-1").info("Appended", extra={"version": 3})

    record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
    assert record["message"] == "Appended"
    assert record["level"] == "INFO"
    assert record["logger"] == "commitstore.test"
    assert record["trace_id"] == "order-1"
    assert record["version"] == 3


def test_text_format_and_default_trace_id(monkeypatch, capsys):
    monkeypatch.setenv("COMMITSTORE_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("COMMITSTORE_LOG_FORMAT", "text")
    setup_logging()

    logging.getLogger("commitstore.test").debug("plain record")

    line = capsys.readouterr().err.strip().splitlines()[-1]
    assert "plain record" in line
    assert "[trace_id=N/A]" in line


def test_level_filters_records(monkeypatch, capsys):
    monkeypatch.setenv("COMMITSTORE_LOG_LEVEL", "ERROR")
    setup_logging()

    logging.getLogger("commitstore.test").warning("hidden")

    assert "hidden" not in capsys.readouterr().err


def test_trace_id_filter_keeps_existing_value():
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
    record.trace_id = "abc"

    assert TraceIDFilter().filter(record)
    assert record.trace_id == "abc"
