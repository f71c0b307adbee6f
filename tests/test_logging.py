import io
import logging

import pytest
from rich.console import Console

from core.logging_config import TRACE, configure_logging, get_logger, level_name, parse_log_level


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("trace", TRACE),
        ("debug", logging.DEBUG),
        ("INFO", logging.INFO),
        ("error", logging.ERROR),
        ("fatal", logging.CRITICAL),
        ("verbose", logging.CRITICAL),
        (None, logging.CRITICAL),
    ],
)
def test_parse_log_level(name, expected):
    assert parse_log_level(name) == expected


def test_level_name():
    assert level_name(TRACE) == "trace"
    assert level_name(logging.CRITICAL) == "fatal"
    assert level_name(logging.WARNING) == "unknown"


def _buffer_console() -> tuple[Console, io.StringIO]:
    buffer = io.StringIO()
    return Console(file=buffer, width=200, force_terminal=False), buffer


def test_configure_logging_writes_to_given_console(capsys):
    console, buffer = _buffer_console()
    configure_logging("debug", console=console)

    get_logger("client").debug("Making API request")

    assert "Making API request" in buffer.getvalue()
    assert capsys.readouterr().out == ""


def test_fatal_level_hides_errors():
    console, buffer = _buffer_console()
    configure_logging("fatal", console=console)

    get_logger("client").error("request failed")

    assert buffer.getvalue() == ""


def test_reconfiguring_replaces_handler():
    console, _ = _buffer_console()
    configure_logging("info", console=console)
    logger = configure_logging("trace", console=console)

    assert len(logger.handlers) == 1
    assert logger.level == TRACE
