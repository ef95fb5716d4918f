from __future__ import annotations

"""
Synchronization Wrapper.

Serializes every operation of an arbitrary Logger behind one re-entrant
lock, giving backends without internal locking the concurrency guarantees
of the contract.
"""

import logging
import threading
from typing import Any, Callable, Optional

from pluglog.core.base import LevelLike, Logger
from pluglog.domain.levels import LogLevel


class SynchronizedLogger(Logger):
    """
    Thread-safe proxy around another Logger.

    Identity and behavior are those of the wrapped backend; only the
    scheduling changes.
    """

    def __init__(self, inner: Logger) -> None:
        if isinstance(inner, SynchronizedLogger):
            inner = inner.inner
        self._inner = inner
        self._lock = threading.RLock()
        self._dropped = 0

    @property
    def inner(self) -> Logger:
        return self._inner

    @property
    def dropped_count(self) -> int:
        """Emissions whose wrapped call raised and was swallowed."""
        return self._dropped

    def get_type(self) -> str:
        return self._inner.get_type()

    def get_log_level(self) -> LogLevel:
        with self._lock:
            return self._inner.get_log_level()

    def set_log_level(self, level: LevelLike) -> None:
        with self._lock:
            self._inner.set_log_level(level)

    def debug(self, msg: str, *args: Any) -> None:
        self._emit(self._inner.debug, msg, args)

    def trace(self, msg: str, *args: Any) -> None:
        self._emit(self._inner.trace, msg, args)

    def info(self, msg: str, *args: Any) -> None:
        self._emit(self._inner.info, msg, args)

    def warn(self, msg: str, *args: Any) -> None:
        self._emit(self._inner.warn, msg, args)

    def err(self, msg: str, *args: Any) -> None:
        self._emit(self._inner.err, msg, args)

    def crit(self, msg: str, *args: Any) -> None:
        self._emit(self._inner.crit, msg, args)

    def set_log_file(self, path: str) -> None:
        with self._lock:
            self._inner.set_log_file(path)

    def set_max_log_size(self, size_bytes: int) -> None:
        with self._lock:
            self._inner.set_max_log_size(size_bytes)

    def set_log_file_count(self, count: int) -> None:
        with self._lock:
            self._inner.set_log_file_count(count)

    def log_rotate(self) -> None:
        with self._lock:
            self._inner.log_rotate()

    def destroy(self) -> None:
        with self._lock:
            self._inner.destroy()

    def get_logger_obj(self) -> Optional[logging.Logger]:
        return self._inner.get_logger_obj()

    def _emit(self, method: Callable[..., None], msg: str, args: tuple) -> None:
        with self._lock:
            try:
                method(msg, *args)
            except Exception:
                self._dropped += 1
