"""Tests for sketch-aware log output."""

import logging

import pytest

import main
from sketchbook.engine import SketchEngine
from sketchbook.exceptions import ConfigurationError
from sketchbook.logging_config import (
    LOG_LEVEL_ENV,
    configure_logging,
    resolve_level,
    set_sketch_context,
    sketch_context,
)
from sketchbook.sketches.market_triangles import MarketTriangles


def format_through(handler, message):
    record = logging.LogRecord("sketchbook.test", logging.INFO, __file__, 1, message, None, None)
    assert handler.filter(record)
    return handler.format(record)


class TestResolveLevel:
    def test_explicit_level_wins(self, monkeypatch):
        monkeypatch.setenv(LOG_LEVEL_ENV, "ERROR")
        assert resolve_level("debug") == logging.DEBUG

    def test_falls_back_to_environment(self, monkeypatch):
        monkeypatch.setenv(LOG_LEVEL_ENV, "warning")
        assert resolve_level() == logging.WARNING

    def test_defaults_to_info(self, monkeypatch):
        monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
        assert resolve_level() == logging.INFO

    def test_unknown_level(self):
        with pytest.raises(ConfigurationError):
            resolve_level("chatty")


class TestConfigureLogging:
    def test_lines_carry_sketch_and_frame(self):
        handler = configure_logging("info")
        set_sketch_context(sketch="letter-fish", frame=12)
        assert format_through(handler, "hello") == "INFO:sketchbook.test:[letter-fish #12] hello"

    def test_reconfiguring_replaces_the_handler(self):
        root = logging.getLogger()
        first = configure_logging("info")
        second = configure_logging("debug")
        assert first not in root.handlers
        assert second in root.handlers
        assert root.level == logging.DEBUG

    def test_engine_updates_the_context(self):
        engine = SketchEngine(MarketTriangles())
        engine.run(max_frames=1)
        assert sketch_context.sketch == engine.sketch.name
        assert sketch_context.frame == 1

    def test_runner_rejects_unknown_level(self):
        with pytest.raises(SystemExit):
            main.main(["--list", "--log-level", "chatty"])
