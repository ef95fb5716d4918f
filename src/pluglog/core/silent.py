from __future__ import annotations

"""
Silent Backend.

Null-object variant of the Logger contract: selecting it disables logging
entirely while call sites stay branch-free.
"""

from typing import Any

from pluglog.core.base import LevelLike, Logger
from pluglog.domain.levels import LogLevel


class SilentLogger(Logger):
    """
    Logger whose every operation is a successful no-op.

    The threshold is fixed at OFF; setters are accepted and discarded. Safe
    to keep using after `destroy`.
    """

    TYPE = "silent"

    def get_type(self) -> str:
        return self.TYPE

    def get_log_level(self) -> LogLevel:
        return LogLevel.OFF

    def set_log_level(self, level: LevelLike) -> None:
        pass

    def debug(self, msg: str, *args: Any) -> None:
        pass

    def trace(self, msg: str, *args: Any) -> None:
        pass

    def info(self, msg: str, *args: Any) -> None:
        pass

    def warn(self, msg: str, *args: Any) -> None:
        pass

    def err(self, msg: str, *args: Any) -> None:
        pass

    def crit(self, msg: str, *args: Any) -> None:
        pass

    def set_log_file(self, path: str) -> None:
        pass

    def set_max_log_size(self, size_bytes: int) -> None:
        pass

    def set_log_file_count(self, count: int) -> None:
        pass

    def log_rotate(self) -> None:
        pass

    def destroy(self) -> None:
        pass
