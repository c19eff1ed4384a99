"""Tests for ColoredFormatter and setup_logging."""

import logging
from io import StringIO
from unittest.mock import patch

import pytest

from music_dispatcher.utils.logging import ColoredFormatter, setup_logging

RESET = "\033[0m"
LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[1;31m",
}


def _make_record(level: int, message: str = "test") -> logging.LogRecord:
    return logging.LogRecord(
        name="music_dispatcher.test",
        level=level,
        pathname="test.py",
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )


def _tty_stream() -> StringIO:
    stream = StringIO()
    stream.isatty = lambda: True  # type: ignore[method-assign]
    return stream


class TestColoredFormatter:
    """Tests for ANSI color formatting."""

    @pytest.mark.parametrize(
        "level",
        [logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR, logging.CRITICAL],
    )
    def test_color_applied_per_level(self, level: int, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        fmt = ColoredFormatter("%(levelname)s | %(message)s", stream=_tty_stream())

        output = fmt.format(_make_record(level))

        assert output.startswith(LEVEL_COLORS[level])
        assert RESET in output

    def test_no_color_when_no_color_env_set(self):
        fmt = ColoredFormatter("%(levelname)s | %(message)s", stream=_tty_stream())

        with patch.dict("os.environ", {"NO_COLOR": "1"}):
            output = fmt.format(_make_record(logging.INFO))

        assert output == "INFO | test"

    def test_no_color_when_stream_not_tty(self):
        fmt = ColoredFormatter("%(levelname)s | %(message)s", stream=StringIO())

        output = fmt.format(_make_record(logging.ERROR))

        assert "\033[" not in output

    def test_original_record_not_mutated(self, monkeypatch):
        """Other handlers sharing the record should still see the plain level name."""
        monkeypatch.delenv("NO_COLOR", raising=False)
        fmt = ColoredFormatter("%(levelname)s", stream=_tty_stream())
        record = _make_record(logging.WARNING)

        fmt.format(record)

        assert record.levelname == "WARNING"


class TestSetupLogging:
    """Tests for root logger configuration."""

    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers = list(root.handlers)
        level = root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_installs_handler_and_level(self):
        stream = StringIO()

        handler = setup_logging("debug", stream=stream)

        root = logging.getLogger()
        assert handler in root.handlers
        assert root.level == logging.DEBUG
        assert isinstance(handler.formatter, ColoredFormatter)

    def test_repeated_setup_replaces_handler(self):
        first = setup_logging("INFO", stream=StringIO())
        second = setup_logging("WARNING", stream=StringIO())

        root = logging.getLogger()
        assert first not in root.handlers
        assert second in root.handlers
        assert root.level == logging.WARNING

    def test_writes_formatted_records(self):
        stream = StringIO()
        setup_logging("INFO", stream=stream)

        logging.getLogger("music_dispatcher.test").info("Starting '%s' in guild %s", "Track 1", 42)

        line = stream.getvalue().strip()
        assert "| INFO     | music_dispatcher.test | Starting 'Track 1' in guild 42" in line

    def test_unknown_level_falls_back_to_info(self):
        setup_logging("chatty", stream=StringIO())

        assert logging.getLogger().level == logging.INFO
