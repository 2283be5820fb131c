# tests/unit/logging/test_logger.py — v1
"""Tests for logging/logger.py — logger factory and formatters."""

from __future__ import annotations

import json
import logging
import sys
from logging.handlers import RotatingFileHandler

from tokencount.logging.context import clear_context, set_request_context
from tokencount.logging.logger import (
    ROOT_LOGGER_NAME,
    JsonFormatter,
    TextFormatter,
    get_logger,
    setup_logging,
)


def _record(msg: str = "Hello", exc_info=None) -> logging.LogRecord:
    return logging.LogRecord(
        name="test", level=logging.INFO, pathname="", lineno=0,
        msg=msg, args=(), exc_info=exc_info,
    )


class TestJsonFormatter:
    def setup_method(self):
        clear_context()

    def teardown_method(self):
        clear_context()

    def test_format_basic(self):
        parsed = json.loads(JsonFormatter().format(_record()))
        assert parsed["level"] == "INFO"
        assert parsed["message"] == "Hello"
        assert "timestamp" in parsed
        assert "context" not in parsed

    def test_format_with_context(self):
        set_request_context("gemini", "gemini-1.5-pro")
        parsed = json.loads(JsonFormatter().format(_record("test msg")))
        assert parsed["context"] == {"provider": "gemini", "model": "gemini-1.5-pro"}

    def test_non_ascii_kept(self):
        output = JsonFormatter().format(_record("トークン"))
        assert "トークン" in output

    def test_exception_included(self):
        try:
            raise ValueError("kaboom")
        except ValueError:
            record = _record("failed", exc_info=sys.exc_info())
        parsed = json.loads(JsonFormatter().format(record))
        assert "kaboom" in parsed["exception"]


class TestTextFormatter:
    def setup_method(self):
        clear_context()

    def teardown_method(self):
        clear_context()

    def test_format_basic(self):
        output = TextFormatter().format(_record("Hello text"))
        assert "[INFO    ]" in output
        assert output.endswith("- Hello text")

    def test_format_with_provider_and_model(self):
        set_request_context("openai", "gpt-4o")
        output = TextFormatter().format(_record())
        assert "[openai/gpt-4o]" in output

    def test_format_with_provider_only(self):
        set_request_context("anthropic")
        output = TextFormatter().format(_record())
        assert "[anthropic]" in output


class TestGetLogger:
    def test_namespaced(self):
        assert get_logger("counting").name == f"{ROOT_LOGGER_NAME}.counting"


class TestSetupLogging:
    def teardown_method(self):
        logging.getLogger(ROOT_LOGGER_NAME).handlers.clear()

    def test_text_console(self):
        setup_logging(level="DEBUG")
        root = logging.getLogger(ROOT_LOGGER_NAME)
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, TextFormatter)

    def test_json_format(self):
        setup_logging(log_format="json")
        root = logging.getLogger(ROOT_LOGGER_NAME)
        assert isinstance(root.handlers[0].formatter, JsonFormatter)

    def test_no_duplicate_handlers(self):
        setup_logging()
        setup_logging()
        assert len(logging.getLogger(ROOT_LOGGER_NAME).handlers) == 1

    def test_with_file(self, tmp_path):
        setup_logging(log_file=str(tmp_path / "logs" / "app.log"), rotation="1KB", retention=2)
        handlers = logging.getLogger(ROOT_LOGGER_NAME).handlers
        assert len(handlers) == 2
        file_handler = handlers[1]
        assert isinstance(file_handler, RotatingFileHandler)
        assert file_handler.maxBytes == 1024
        file_handler.close()

    def test_aiohttp_quieted(self):
        setup_logging(level="DEBUG")
        assert logging.getLogger("aiohttp").level == logging.WARNING
