import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from unittest.mock import patch

import pytest
import structlog

from shared.logging import _drop_color_message_key, setup_logging


@pytest.fixture(autouse=True)
def _cleanup_root_logger():
    """Close and remove all handlers from the root logger after each test."""
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        handler.close()
        root.removeHandler(handler)


@pytest.fixture(autouse=True)
def _allow_file_logging():
    """Disable the _is_test guard so logging tests can create real file handlers."""
    with patch("shared.logging._is_test", return_value=False):
        yield


@pytest.fixture(autouse=True)
def _default_env(monkeypatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("LOG_FORMAT", raising=False)


class TestSetupLogging:
    def test_configures_stdout_handler(self):
        setup_logging()
        root = logging.getLogger()

        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)

    def test_log_file_has_datetime_in_name(self, tmp_path):
        fixed_time = datetime(2025, 3, 15, 10, 30, 45, tzinfo=UTC)
        with patch("shared.logging.datetime") as mock_dt:
            mock_dt.now.return_value = fixed_time
            log_path = setup_logging(log_dir=tmp_path / "catalog")

        assert log_path is not None
        assert log_path.name == "2025-03-15_10-30-45.log"
        assert log_path.parent == tmp_path / "catalog"

    def test_returns_none_without_log_dir(self):
        assert setup_logging() is None

    def test_writes_to_file(self, tmp_path):
        log_path = setup_logging(log_dir=tmp_path / "nested" / "dir")

        structlog.get_logger("test.writes_to_file").info("hello from test")

        assert log_path is not None
        assert "hello from test" in log_path.read_text()

    def test_clears_existing_handlers_on_repeated_calls(self):
        setup_logging()
        setup_logging()

        assert len(logging.getLogger().handlers) == 1

    def test_log_level_from_env(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        setup_logging()

        assert logging.getLogger().level == logging.DEBUG

    def test_invalid_log_level_raises(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "bogus")
        with pytest.raises(ValueError, match="Invalid LOG_LEVEL"):
            setup_logging()

    def test_invalid_log_format_raises(self, monkeypatch):
        monkeypatch.setenv("LOG_FORMAT", "xml")
        with pytest.raises(ValueError, match="Invalid LOG_FORMAT"):
            setup_logging()

    def test_json_mode_includes_bound_context(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LOG_FORMAT", "json")
        log_path = setup_logging(log_dir=tmp_path / "catalog")

        structlog.contextvars.bind_contextvars(request_id="req-1")
        structlog.get_logger("test.json").info("game created", game_id="g1")
        structlog.contextvars.clear_contextvars()

        assert log_path is not None
        parsed = json.loads(log_path.read_text().strip().splitlines()[0])
        assert parsed["event"] == "game created"
        assert parsed["request_id"] == "req-1"
        assert parsed["game_id"] == "g1"

    def test_stdlib_records_are_rendered(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LOG_FORMAT", "json")
        log_path = setup_logging(log_dir=tmp_path / "catalog")

        logging.getLogger("uvicorn.error").info("Started server process")

        assert log_path is not None
        parsed = json.loads(log_path.read_text().strip().splitlines()[0])
        assert parsed["event"] == "Started server process"
        assert parsed["logger"] == "uvicorn.error"

    def test_uvicorn_access_log_is_silenced(self, tmp_path):
        log_path = setup_logging(log_dir=tmp_path / "catalog")

        logging.getLogger("uvicorn.access").info("GET /games 200")

        assert log_path is not None
        assert "GET /games 200" not in log_path.read_text()


class TestDropColorMessageKey:
    def test_removes_color_message(self):
        event_dict = {"event": "hello", "color_message": "\x1b[1mhello\x1b[0m"}
        assert _drop_color_message_key(None, "", event_dict) == {"event": "hello"}

    def test_leaves_other_keys(self):
        event_dict = {"event": "hello", "count": 3}
        assert _drop_color_message_key(None, "", event_dict) == {"event": "hello", "count": 3}


def test_log_path_is_path_instance(tmp_path):
    assert isinstance(setup_logging(log_dir=str(tmp_path)), Path)
