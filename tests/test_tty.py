"""Tests for tty.py - integration with the logging module."""

import io
import logging

import pytest

from colorline import ColoredFormatter, ColoredLineFormatter, Level, load, unload
from colorline.colors import DEFAULT_COLORS, RESET
from colorline.tty import to_log_record


@pytest.fixture
def logger():
    log = logging.getLogger("colorline.tests.tty")
    log.setLevel(logging.DEBUG)
    log.propagate = False
    yield log
    unload()
    log.handlers.clear()


def make_record(msg="hello", level=logging.WARNING, exc_info=None, **extra):
    record = logging.LogRecord("myapp.db", level, __file__, 1, msg, (), exc_info)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestToLogRecord:
    """Tests for converting stdlib records."""

    def test_fields(self):
        rec = to_log_record(make_record("count=%d"))
        assert rec.level is Level.WARNING
        assert rec.channel == "myapp.db"
        assert rec.message == "count=%d"
        assert rec.error is None
        assert rec.context == {}
        assert rec.datetime.tzinfo is not None

    def test_message_arguments(self):
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "n=%d", (5,), None)
        assert to_log_record(record).message == "n=5"

    def test_extra_becomes_context(self):
        rec = to_log_record(make_record(user="bob", request_id=7))
        assert rec.context == {"user": "bob", "request_id": 7}

    def test_exc_info(self):
        try:
            raise ValueError("bad")
        except ValueError as e:
            exc_info = (type(e), e, e.__traceback__)
        rec = to_log_record(make_record(exc_info=exc_info))
        assert isinstance(rec.error, ValueError)


class TestColoredFormatter:
    """Tests for the logging.Formatter adapter."""

    def test_format_has_no_terminator(self):
        formatter = ColoredFormatter(fmt="%message%")
        out = formatter.format(make_record())
        assert out == f"{DEFAULT_COLORS[Level.WARNING]}hello{RESET}"

    def test_uses_given_line_formatter(self):
        line_formatter = ColoredLineFormatter(fmt="%channel%: %message%")
        formatter = ColoredFormatter(line_formatter)
        assert formatter.line_formatter is line_formatter
        assert "myapp.db: hello" in formatter.format(make_record())


class TestLoad:
    """Tests for load() and unload()."""

    def test_colored_line(self, logger):
        stream = io.StringIO()
        load(logger, stream=stream, fmt="%message%")
        logger.error("failed")
        assert stream.getvalue() == f"{DEFAULT_COLORS[Level.ERROR]}failed{RESET}\n"

    def test_by_name(self, logger):
        stream = io.StringIO()
        handler = load(logger.name, stream=stream)
        assert handler in logger.handlers

    def test_exception(self, logger):
        stream = io.StringIO()
        load(logger, stream=stream, fmt="%message% %error%", include_stacktraces=True)
        try:
            raise ValueError("bad value")
        except ValueError:
            logger.exception("oops")
        out = stream.getvalue()
        assert out.startswith(f"{DEFAULT_COLORS[Level.ERROR]}oops [object] (ValueError(code: 0): bad value at ")
        assert "\n[stacktrace]\n#0 " in out
        assert "test_exception" in out
        assert out.endswith(f"{RESET}\n")

    def test_extra(self, logger):
        stream = io.StringIO()
        load(logger, stream=stream, fmt="%message% %context%")
        logger.info("hi", extra={"user": "bob"})
        assert '{"user":"bob"}' in stream.getvalue()

    def test_unload(self, logger):
        stream = io.StringIO()
        handler = load(logger, stream=stream, fmt="%message%")
        unload()
        assert handler not in logger.handlers
        logger.warning("after")
        assert stream.getvalue() == ""
