from __future__ import annotations

"""
Unit tests for the Console Backend.
"""

import io

from pluglog.core.console import ConsoleLogger
from pluglog.domain.levels import LogLevel


def test_writes_formatted_lines_to_stream() -> None:
    stream = io.StringIO()
    lg = ConsoleLogger(level="TRACE", tag="cli", stream=stream)

    lg.trace("step %d", 3)
    lg.debug("too verbose")
    lg.destroy()

    out = stream.getvalue().splitlines()
    assert len(out) == 1
    assert " : cli[" in out[0]
    assert "LOG_TRACE [test_console_logger.py (" in out[0]
    assert out[0].endswith("]: step 3")


def test_defaults_to_stderr(capsys) -> None:
    lg = ConsoleLogger(level=LogLevel.INFO)
    try:
        lg.info("to stderr")
    finally:
        lg.destroy()

    assert "to stderr" in capsys.readouterr().err


def test_file_operations_are_noops() -> None:
    stream = io.StringIO()
    lg = ConsoleLogger(stream=stream)

    lg.set_log_file("/definitely/not/created.log")
    lg.set_max_log_size(1)
    lg.set_log_file_count(1)
    lg.log_rotate()
    lg.destroy()

    assert lg.get_type() == "console"
    assert stream.getvalue() == ""
