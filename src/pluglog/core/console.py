from __future__ import annotations

"""
Console Backend.

Writes file-formatted lines to a terminal stream (stderr by default). Used
as the fallback when a file target is unusable.
"""

from typing import Optional, TextIO

from pluglog.core.base import HandlerLogger, LevelLike
from pluglog.domain.config import DEFAULT_TAG
from pluglog.domain.levels import LogLevel
from pluglog.infra.handlers import create_console_handler


class ConsoleLogger(HandlerLogger):
    """Logger writing to a text stream; rotation and retargeting are no-ops."""

    TYPE = "console"

    def __init__(
            self,
            level: LevelLike = LogLevel.INFO,
            tag: str = DEFAULT_TAG,
            stream: Optional[TextIO] = None,
    ) -> None:
        super().__init__(level=level, tag=tag)
        with self._lock:
            self._swap_handler(create_console_handler(stream))
