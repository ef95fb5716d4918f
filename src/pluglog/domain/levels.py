from __future__ import annotations

"""
Severity Scale.

Defines the totally ordered verbosity scale shared by every backend and the
predicate used to decide whether a message passes the active threshold.
Ordinals grow with verbosity: OFF silences everything, DEBUG lets everything
through.
"""

import logging
from enum import IntEnum
from typing import Any, Dict

from pluglog.domain.errors import InvalidLevelError

# Custom stdlib number for TRACE, between DEBUG (10) and INFO (20)
TRACE_STDLIB_LEVEL: int = 15
_OFF_STDLIB_LEVEL: int = logging.CRITICAL + 10

_LABEL_PREFIX: str = "LOG_"


class LogLevel(IntEnum):
    """
    Ordered verbosity scale, from least to most verbose.
    """
    OFF = 0
    CRITICAL = 1
    ERROR = 2
    WARNING = 3
    INFO = 4
    TRACE = 5
    DEBUG = 6

    def __str__(self) -> str:
        return self.name

    @property
    def label(self) -> str:
        """Prefixed name written into log lines (e.g. 'LOG_INFO')."""
        return _LABEL_PREFIX + self.name

    def less_or_equal(self, other: LogLevel) -> bool:
        """Return True if this level is no more verbose than `other`."""
        return int(self) <= int(other)

    def is_enabled_under(self, threshold: LogLevel) -> bool:
        """
        Filtering predicate applied to every emission.

        Args:
            threshold: Currently configured verbosity ceiling.

        Returns:
            bool: True if a message at this level must be written.
        """
        if self is LogLevel.OFF:
            return False
        return int(self) <= int(threshold)

    def to_stdlib(self) -> int:
        """Map to the numeric scale of the `logging` module."""
        return _STDLIB_MAP[self]

    @classmethod
    def parse(cls, text: Any) -> LogLevel:
        """
        Resolve a human-readable level name.

        Accepts canonical names ('WARNING'), prefixed labels ('LOG_WARNING')
        and the short aliases CRIT, ERR and WARN, case-insensitively.

        Args:
            text: Raw level name.

        Returns:
            LogLevel: The matching level.

        Raises:
            InvalidLevelError: If the name is not recognized.
        """
        if isinstance(text, LogLevel):
            return text
        if not isinstance(text, str):
            raise InvalidLevelError(f"Invalid log level: {text!r}")

        key = text.strip().upper()
        if key.startswith(_LABEL_PREFIX):
            key = key[len(_LABEL_PREFIX):]

        level = _NAME_MAP.get(key)
        if level is None:
            raise InvalidLevelError(f"Invalid log level: {text!r}")
        return level


_STDLIB_MAP: Dict[LogLevel, int] = {
    LogLevel.OFF: _OFF_STDLIB_LEVEL,
    LogLevel.CRITICAL: logging.CRITICAL,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.INFO: logging.INFO,
    LogLevel.TRACE: TRACE_STDLIB_LEVEL,
    LogLevel.DEBUG: logging.DEBUG,
}

_NAME_MAP: Dict[str, LogLevel] = {level.name: level for level in LogLevel}
_NAME_MAP.update({
    "CRIT": LogLevel.CRITICAL,
    "ERR": LogLevel.ERROR,
    "WARN": LogLevel.WARNING,
})
