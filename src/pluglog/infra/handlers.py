from __future__ import annotations

"""
Logging Handlers and Low-Level Utilities.

Provides the stdlib handler subclasses used by the real backends, their
factories, and the internal tagging mechanism that distinguishes pluglog's
own handlers from external or library-injected ones.
"""

import logging
import os
import sys
from logging.handlers import SYSLOG_UDP_PORT, RotatingFileHandler, SysLogHandler
from typing import Dict, Optional, TextIO, Tuple, Union

from pluglog.domain.levels import LogLevel
from pluglog.infra.fs import ensure_parent_dir

# Internal attribute used to tag and identify our own handlers
_HANDLER_TAG_ATTR: str = "_pluglog_handler"

FILE_FORMAT: str = (
    "%(asctime)s : %(tag)s[%(process)d] : %(levelname)s "
    "[%(filename)s (%(lineno)d)]: %(message)s"
)
SYSLOG_FORMAT: str = "%(levelname)s [%(filename)s (%(lineno)d)]: %(message)s"
DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"

# Candidate local syslog sockets, checked in order
_SYSLOG_SOCKETS: Tuple[str, ...] = ("/dev/log", "/var/run/syslog", "/var/run/log")

_SYSLOG_PRIORITIES: Dict[str, str] = {
    LogLevel.CRITICAL.label: "critical",
    LogLevel.ERROR.label: "error",
    LogLevel.WARNING.label: "warning",
    LogLevel.INFO.label: "info",
    LogLevel.TRACE.label: "debug",
    LogLevel.DEBUG.label: "debug",
}

_STDLIB_TO_LABEL: Dict[int, str] = {level.to_stdlib(): level.label for level in LogLevel}


# ==============================================================================
# INTERNAL LOGGING UTILITIES
# ==============================================================================

def tag_handler(handler: logging.Handler) -> None:
    """
    Mark a handler as an internally-managed pluglog handler.

    Args:
        handler: The logging handler instance to tag.
    """
    setattr(handler, _HANDLER_TAG_ATTR, True)


def is_our_handler(handler: logging.Handler) -> bool:
    """
    Verify if a handler was initialized by this module.

    Args:
        handler: The handler to inspect.

    Returns:
        bool: True if the handler carries our internal tag.
    """
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


class LevelLabelFilter(logging.Filter):
    """Rewrite stdlib level names into 'LOG_<LEVEL>' labels."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.levelname = _STDLIB_TO_LABEL.get(record.levelno, record.levelname)
        return True


class _FailureCountingMixin:
    """Count emission failures instead of reporting them on stderr."""

    failures: int = 0

    def handleError(self, record: logging.LogRecord) -> None:
        self.failures += 1


# ==============================================================================
# HANDLER TYPES
# ==============================================================================

class RotatingLogFileHandler(_FailureCountingMixin, RotatingFileHandler):
    """
    Size-triggered rotating file handler with forced rotation support.

    A failed rename never loses output: the active file is reopened in
    append mode and writing continues there. Such failures are tallied in
    `rollover_failures`, apart from `failures` which counts lost records.
    """

    def __init__(self, filename: str, max_bytes: int, backup_count: int) -> None:
        super().__init__(
            filename,
            maxBytes=int(max_bytes),
            backupCount=int(backup_count),
            encoding="utf-8",
        )
        self.rotation_count = 0
        self.rollover_failures = 0

    def emit(self, record: logging.LogRecord) -> None:
        try:
            if self.shouldRollover(record):
                try:
                    self.doRollover()
                except OSError:
                    self.rollover_failures += 1
            logging.FileHandler.emit(self, record)
        except Exception:
            self.handleError(record)

    def doRollover(self) -> None:
        try:
            super().doRollover()
        except OSError:
            if self.stream is None:
                self.stream = self._open()
            raise
        self.rotation_count += 1

    def force_rollover(self) -> bool:
        """
        Rotate immediately if the active file holds any data.

        Reopens the target first when an external tool moved or removed it,
        in which case the fresh file is empty and nothing is rotated.

        Returns:
            bool: True if a rotation was performed.

        Raises:
            OSError: If reopening or renaming fails.
        """
        self.acquire()
        try:
            self._reopen_if_moved()
            self.stream.seek(0, os.SEEK_END)
            if self.stream.tell() == 0:
                return False
            self.doRollover()
            return True
        finally:
            self.release()

    def _reopen_if_moved(self) -> None:
        try:
            sres: Optional[os.stat_result] = os.stat(self.baseFilename)
        except FileNotFoundError:
            sres = None

        if self.stream is not None:
            fres = os.fstat(self.stream.fileno())
            if sres is None or (sres.st_dev, sres.st_ino) != (fres.st_dev, fres.st_ino):
                self.stream.flush()
                self.stream.close()
                self.stream = None

        if self.stream is None:
            self.stream = self._open()


class SyslogTransportHandler(_FailureCountingMixin, SysLogHandler):
    """SysLogHandler that maps 'LOG_<LEVEL>' labels to syslog priorities."""

    def mapPriority(self, levelName: str) -> str:
        return _SYSLOG_PRIORITIES.get(levelName, "debug")


class ConsoleStreamHandler(_FailureCountingMixin, logging.StreamHandler):
    """StreamHandler with counted failures."""


# ==============================================================================
# HANDLER FACTORIES
# ==============================================================================

def create_rotating_file_handler(
        log_file: str,
        max_bytes: int,
        backup_count: int,
) -> RotatingLogFileHandler:
    """
    Initialize a tagged RotatingLogFileHandler.

    Args:
        log_file: Absolute target path for the log file.
        max_bytes: Rollover threshold in bytes.
        backup_count: Number of archived files to keep.

    Returns:
        RotatingLogFileHandler: Configured handler.

    Raises:
        OSError: If the parent directory or the file cannot be created.
    """
    ensure_parent_dir(log_file)
    fh = RotatingLogFileHandler(log_file, max_bytes, backup_count)
    _finish(fh, logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
    return fh


def create_syslog_handler(
        address: Optional[Union[str, Tuple[str, int]]],
        facility: str,
        tag: str,
) -> SyslogTransportHandler:
    """
    Initialize a tagged SyslogTransportHandler.

    Args:
        address: Unix socket path, (host, port) pair, or None to autodetect.
        facility: Syslog facility name (e.g. 'user', 'daemon').
        tag: Program identifier prepended to every message.

    Raises:
        OSError: If the transport socket cannot be opened.
    """
    target = address if address is not None else _detect_syslog_address()
    sh = SyslogTransportHandler(
        address=target,
        facility=SysLogHandler.facility_names[facility],
    )
    sh.ident = f"{tag}[{os.getpid()}]: "
    _finish(sh, logging.Formatter(SYSLOG_FORMAT))
    return sh


def create_console_handler(stream: Optional[TextIO] = None) -> ConsoleStreamHandler:
    """
    Initialize a tagged console handler writing to `stream` (stderr by default).
    """
    ch = ConsoleStreamHandler(stream if stream is not None else sys.stderr)
    _finish(ch, logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
    return ch


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _finish(handler: logging.Handler, formatter: logging.Formatter) -> None:
    handler.setLevel(logging.NOTSET)
    handler.setFormatter(formatter)
    handler.addFilter(LevelLabelFilter())
    tag_handler(handler)


def _detect_syslog_address() -> Union[str, Tuple[str, int]]:
    """Prefer a local syslog socket, falling back to UDP on localhost."""
    for path in _SYSLOG_SOCKETS:
        if os.path.exists(path):
            return path
    return "localhost", SYSLOG_UDP_PORT
