"""
Tests for terminal styling helpers and logger setup.
"""

import io
import logging

from readcommand.ui import (
    ColorizingStreamHandler,
    PlainFormatter,
    colorize,
    init_logger,
    readline_safe,
    strip_ansi,
)


def test_colorize_and_strip():
    text = colorize("ok", "green", "bold")
    assert text.startswith("\x1b[32m\x1b[1m")
    assert text.endswith("\x1b[0m")
    assert strip_ansi(text) == "ok"


def test_colorize_unknown_style():
    assert colorize("ok", "plaid") == "ok"


def test_readline_safe_marks_escapes():
    prompt = readline_safe(colorize("> ", "cyan"))
    assert prompt == "\x01\x1b[36m\x02> \x01\x1b[0m\x02"
    assert readline_safe("> ") == "> "


def test_stream_handler_strips_ansi_when_not_a_tty():
    stream = io.StringIO()
    handler = ColorizingStreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(message)s"))
    record = logging.LogRecord("t", logging.ERROR, __file__, 1,
                               colorize("bad", "red"), None, None)
    handler.emit(record)
    assert stream.getvalue() == "bad\n"


def test_plain_formatter():
    record = logging.LogRecord("t", logging.INFO, __file__, 1,
                               colorize("hi", "blue"), None, None)
    assert PlainFormatter("%(message)s").format(record) == "hi"


def test_init_logger_is_idempotent(tmp_path):
    logfile = tmp_path / "logs" / "reader.log"
    logger = init_logger("readcommand_test_logger", level="INFO", logfile=logfile)
    init_logger("readcommand_test_logger", level="INFO", logfile=logfile)
    try:
        assert len(logger.handlers) == 2
        assert logger.propagate is False
        logger.debug(colorize("to file only", "red"))
        for handler in logger.handlers:
            handler.flush()
        assert "to file only" in logfile.read_text(encoding="utf-8")
        assert "\x1b[" not in logfile.read_text(encoding="utf-8")
    finally:
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
