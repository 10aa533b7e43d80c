"""Tests for the fetcher's logging setup."""

import json
import logging
import os
import sys
from unittest.mock import patch

import pytest

from src.logging_config import (
    NOISY_LOGGERS,
    TEXT_FORMAT,
    JSONFormatter,
    _build_formatter,
    configure_logging,
)


@pytest.fixture(autouse=True)
def _restore_logging():
    """Put the root and third-party loggers back after each test."""
    root = logging.getLogger()
    saved_root = (root.level, root.handlers[:])
    saved_noisy = {name: logging.getLogger(name).level for name in NOISY_LOGGERS}
    yield
    for handler in root.handlers:
        if handler not in saved_root[1]:
            handler.close()
    root.setLevel(saved_root[0])
    root.handlers = saved_root[1]
    for name, level in saved_noisy.items():
        logging.getLogger(name).setLevel(level)


def _configure(env: dict, **kwargs) -> logging.Logger:
    with patch.dict(os.environ, env, clear=True):
        configure_logging(**kwargs)
    return logging.getLogger()


class TestBuildFormatter:
    def test_json(self):
        assert isinstance(_build_formatter("json"), JSONFormatter)

    @pytest.mark.parametrize("log_format", ["text", "plain", ""])
    def test_anything_else_is_text(self, log_format):
        formatter = _build_formatter(log_format)
        assert not isinstance(formatter, JSONFormatter)
        assert formatter._fmt == TEXT_FORMAT


class TestConfigureLogging:
    """Tests for configure_logging()."""

    @pytest.mark.parametrize(
        "env,override,expected",
        [
            ({}, None, logging.INFO),
            ({"LOG_LEVEL": "debug"}, None, logging.DEBUG),
            ({"LOG_LEVEL": "WARNING"}, "ERROR", logging.ERROR),
            ({"LOG_LEVEL": "bogus"}, None, logging.INFO),
        ],
    )
    def test_level_resolution(self, env, override, expected):
        root = _configure(env, level_override=override)

        assert root.level == expected
        assert all(handler.level == expected for handler in root.handlers)

    def test_single_console_handler_without_log_file(self):
        root = logging.getLogger()
        root.addHandler(logging.NullHandler())

        root = _configure({})

        assert len(root.handlers) == 1
        assert type(root.handlers[0]) is logging.StreamHandler

    def test_oauth_stack_quieted_to_warning(self):
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.DEBUG)

        _configure({"LOG_LEVEL": "DEBUG"})

        assert {logging.getLogger(name).level for name in NOISY_LOGGERS} == {
            logging.WARNING
        }

    def test_noisy_loggers_cover_google_client_libraries(self):
        for name in ("googleapiclient", "google.auth", "google_auth_oauthlib", "oauthlib"):
            assert name in NOISY_LOGGERS

    def test_log_file_receives_records(self, tmp_path):
        """Test that LOG_FILE adds a file handler next to the console one."""
        log_path = tmp_path / "fetch.log"

        root = _configure({"LOG_FILE": str(log_path)})
        file_handlers = [h for h in root.handlers if isinstance(h, logging.FileHandler)]

        assert len(root.handlers) == 2
        assert len(file_handlers) == 1

        logging.getLogger("src.fetcher.paginator").warning("page %d failed", 3)
        file_handlers[0].flush()
        assert "src.fetcher.paginator: page 3 failed" in log_path.read_text()

    def test_log_file_shares_json_format(self, tmp_path):
        log_path = tmp_path / "fetch.log"

        root = _configure({"LOG_FILE": str(log_path), "LOG_FORMAT": "JSON"})
        assert all(isinstance(h.formatter, JSONFormatter) for h in root.handlers)

        logging.getLogger("src.orchestrator.pipeline").error("label missing")
        for handler in root.handlers:
            handler.flush()

        entry = json.loads(log_path.read_text().strip())
        assert entry["logger"] == "src.orchestrator.pipeline"
        assert entry["level"] == "ERROR"
        assert entry["message"] == "label missing"

    def test_log_file_below_threshold_not_written(self, tmp_path):
        log_path = tmp_path / "fetch.log"

        _configure({"LOG_FILE": str(log_path), "LOG_LEVEL": "WARNING"})
        logging.getLogger("src.fetcher.gmail_auth").info("loaded token")

        assert "loaded token" not in log_path.read_text()


class TestJSONFormatter:
    def test_exception_is_serialized(self):
        try:
            raise RuntimeError("connection reset")
        except RuntimeError:
            record = logging.getLogger("src.fetcher").makeRecord(
                "src.fetcher", logging.ERROR, __file__, 1, "fetch failed", (),
                sys.exc_info(),
            )

        entry = json.loads(JSONFormatter().format(record))

        assert entry["message"] == "fetch failed"
        assert "RuntimeError: connection reset" in entry["exception"]
        assert entry["timestamp"].endswith("+00:00")
