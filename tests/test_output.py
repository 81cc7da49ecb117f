import io
import logging

import pytest

from scopeshell.errors import InvalidInput
from scopeshell.ui import LineSink, OutputBuffer, colorize, init_logger, parse_level, strip_ansi


def test_buffer_is_a_line_sink():
    assert isinstance(OutputBuffer(), LineSink)


def test_flush_prints_warnings_errors_then_lines():
    buffer = OutputBuffer()
    buffer.append_line("first")
    buffer.add_error("broken")
    buffer.add_warning("careful")
    buffer.append_lines(["second", 3])

    out = io.StringIO()
    buffer.flush(out)

    assert strip_ansi(out.getvalue()).splitlines() == [
        "Warning: careful",
        "Error: broken",
        "first",
        "second",
        "3",
    ]
    assert colorize("Error: broken", "red") in out.getvalue()
    assert buffer.lines == [] and buffer.warnings == [] and buffer.errors == []


def test_filter_and_inverted_filter():
    buffer = OutputBuffer()
    buffer.append_lines(["acme", "acme2", "other"])

    buffer.set_filter("^acme")
    assert buffer.visible_lines() == ["acme", "acme2"]

    buffer.set_filter("acme", invert=True)
    assert buffer.visible_lines() == ["other"]

    buffer.clear_filter()
    assert buffer.visible_lines() == ["acme", "acme2", "other"]


def test_filter_survives_flush():
    buffer = OutputBuffer()
    buffer.set_filter("keep")
    buffer.append_lines(["keep me", "drop me"])
    out = io.StringIO()
    buffer.flush(out)
    assert out.getvalue() == "keep me\n"


def test_invalid_filter_pattern():
    with pytest.raises(InvalidInput, match="Invalid filter pattern"):
        OutputBuffer().set_filter("[unclosed")


@pytest.mark.parametrize(
    "level,expected",
    [("debug", logging.DEBUG), ("WARNING", logging.WARNING), (None, logging.WARNING), (15, 15), ("bogus", logging.WARNING)],
)
def test_parse_level(level, expected):
    assert parse_level(level) == expected


def test_init_logger_writes_plain_file(tmp_path, scopeshell_logger):
    logfile = tmp_path / "log.txt"
    logger = init_logger("scopeshell", level="ERROR", logfile=logfile)
    logging.getLogger("scopeshell.tests").debug("\x1b[31mcoloured\x1b[0m detail")
    for handler in logger.handlers:
        handler.flush()
    content = logfile.read_text(encoding="utf-8")
    assert "scopeshell.tests: coloured detail" in content
    assert "\x1b[" not in content
