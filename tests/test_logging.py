"""Tests for structured logging setup."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest
import structlog

from transit_feed.logging import LOADER_LOGGER, feed_log_context, get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_logging() -> Iterator[None]:
    root_logger = logging.getLogger()
    handlers, level = list(root_logger.handlers), root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
    logging.getLogger(LOADER_LOGGER).setLevel(logging.NOTSET)
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()


class TestSetupLogging:
    """Tests for root logger configuration."""

    def test_level_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "debug")
        setup_logging()
        root_logger = logging.getLogger()
        assert root_logger.level == logging.DEBUG
        assert len(root_logger.handlers) == 1
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_json_renderer_outside_development(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setenv("ENVIRONMENT", "production")
        setup_logging()
        logging.getLogger("transit_feed.test").warning("GTFS file absent")
        assert '"event": "GTFS file absent"' in capsys.readouterr().out

    def test_explicit_arguments_win(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setenv("ENVIRONMENT", "production")
        setup_logging("warning", json_logs=False)
        assert logging.getLogger().level == logging.WARNING
        logging.getLogger("transit_feed.test").warning("GTFS file absent")
        out = capsys.readouterr().out
        assert "GTFS file absent" in out
        assert '"event"' not in out

    def test_loader_level_separate_from_root(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setenv("LOG_LEVEL", "info")
        monkeypatch.setenv("GTFS_LOG_LEVEL", "error")
        setup_logging()
        assert logging.getLogger(LOADER_LOGGER).level == logging.ERROR
        assert logging.getLogger("httpcore").level == logging.WARNING

        logging.getLogger("transit_feed.records").warning("Skipping invalid row")
        logging.getLogger("app").info("Feed refreshed")
        out = capsys.readouterr().out
        assert "Skipping invalid row" not in out
        assert "Feed refreshed" in out

    def test_loader_follows_root_when_unset(self) -> None:
        setup_logging("debug")
        loader = logging.getLogger(LOADER_LOGGER)
        assert loader.level == logging.NOTSET
        assert loader.getEffectiveLevel() == logging.DEBUG

    def test_get_logger(self) -> None:
        logger = get_logger(__name__)
        logger.info("GTFS file absent", filename="shapes.txt")
        assert callable(logger.warning)


class TestFeedLogContext:
    """Tests for binding feed identity to log events."""

    def test_binds_within_block(self) -> None:
        with feed_log_context(feed_url="https://example.com/gtfs.zip"):
            bound = structlog.contextvars.get_contextvars()
            assert bound["feed_url"] == "https://example.com/gtfs.zip"
        assert "feed_url" not in structlog.contextvars.get_contextvars()

    def test_context_rendered_on_events(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setenv("ENVIRONMENT", "production")
        setup_logging()
        with feed_log_context(feed_dir="/data/gtfs"):
            get_logger("transit_feed.test").warning("GTFS file absent", filename="shapes.txt")
        out = capsys.readouterr().out
        assert '"feed_dir": "/data/gtfs"' in out
        assert '"filename": "shapes.txt"' in out
