from __future__ import annotations

"""
Logger Contract.

Defines the abstract interface every backend satisfies and the shared
machinery of handler-backed variants: threshold storage, level filtering
ahead of any formatting, serialized access to the output resource and the
destroy lifecycle.
"""

import itertools
import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Optional, Union

from pluglog.domain.config import DEFAULT_TAG
from pluglog.domain.errors import LogIOError
from pluglog.domain.levels import LogLevel

logger = logging.getLogger(__name__)

LevelLike = Union[LogLevel, str]

# Frames between the user call site and the stdlib logger: emit method -> _emit -> log
_CALLER_STACKLEVEL = 3

_instance_ids = itertools.count(1)


# -----------------------------------------------------------------------------
# CONTRACT
# -----------------------------------------------------------------------------

class Logger(ABC):
    """
    Polymorphic logging backend.

    Callers hold a single instance and never branch on its concrete type.
    Operations meaningless for a variant are no-ops, never errors. Emission
    methods use printf-style lazy formatting and never raise.
    """

    @abstractmethod
    def get_type(self) -> str:
        """Stable identifier of the concrete backend."""

    @abstractmethod
    def get_log_level(self) -> LogLevel:
        """Current filtering threshold."""

    @abstractmethod
    def set_log_level(self, level: LevelLike) -> None:
        """
        Replace the filtering threshold for all subsequent emissions.

        Raises:
            InvalidLevelError: If `level` is an unrecognized name.
        """

    @abstractmethod
    def debug(self, msg: str, *args: Any) -> None:
        pass

    @abstractmethod
    def trace(self, msg: str, *args: Any) -> None:
        pass

    @abstractmethod
    def info(self, msg: str, *args: Any) -> None:
        pass

    @abstractmethod
    def warn(self, msg: str, *args: Any) -> None:
        pass

    @abstractmethod
    def err(self, msg: str, *args: Any) -> None:
        pass

    @abstractmethod
    def crit(self, msg: str, *args: Any) -> None:
        pass

    @abstractmethod
    def set_log_file(self, path: str) -> None:
        """
        Retarget file output.

        Raises:
            PathError: If the target cannot be created or opened.
        """

    @abstractmethod
    def set_max_log_size(self, size_bytes: int) -> None:
        """Update the rotation size threshold (0 selects the default)."""

    @abstractmethod
    def set_log_file_count(self, count: int) -> None:
        """Update the number of retained rotated files (0 selects the default)."""

    @abstractmethod
    def log_rotate(self) -> None:
        """
        Rotate now if rotation is meaningful; idempotent when nothing is due.

        Raises:
            RotationError: If the rotation step fails.
        """

    @abstractmethod
    def destroy(self) -> None:
        """
        Flush and release backend resources.

        Raises:
            LogIOError: If flushing or closing fails.
        """

    def get_logger_obj(self) -> Optional[logging.Logger]:
        """Underlying stdlib logger, if the backend has one."""
        return None


# -----------------------------------------------------------------------------
# HANDLER-BACKED BASE
# -----------------------------------------------------------------------------

class HandlerLogger(Logger):
    """
    Base for backends that write through a single stdlib handler.

    Every access to the handler happens under one re-entrant lock, so a
    message is never split across targets and rotation never tears a line.
    Subclasses install their handler with `_swap_handler`.
    """

    TYPE: str = ""

    def __init__(self, level: LevelLike = LogLevel.INFO, tag: str = DEFAULT_TAG) -> None:
        self._lock = threading.RLock()
        self._level = LogLevel.parse(level)
        self._tag = tag or DEFAULT_TAG
        self._handler: Optional[logging.Handler] = None
        self._destroyed = False
        self._dropped = 0

        # Unmanaged logger: invisible to logging.getLogger and to host configuration
        self._logger = logging.Logger(f"pluglog.{self.TYPE}.{next(_instance_ids)}")
        self._logger.propagate = False
        self._logger.setLevel(logging.DEBUG)

    # --- Identity & threshold ---

    def get_type(self) -> str:
        return self.TYPE

    def get_log_level(self) -> LogLevel:
        return self._level

    def set_log_level(self, level: LevelLike) -> None:
        new_level = LogLevel.parse(level)
        with self._lock:
            self._level = new_level

    def get_logger_obj(self) -> Optional[logging.Logger]:
        return self._logger

    @property
    def tag(self) -> str:
        return self._tag

    @property
    def dropped_count(self) -> int:
        """Messages that never reached the output since construction."""
        with self._lock:
            return self._dropped + getattr(self._handler, "failures", 0)

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    # --- Emission ---

    def debug(self, msg: str, *args: Any) -> None:
        self._emit(LogLevel.DEBUG, msg, args)

    def trace(self, msg: str, *args: Any) -> None:
        self._emit(LogLevel.TRACE, msg, args)

    def info(self, msg: str, *args: Any) -> None:
        self._emit(LogLevel.INFO, msg, args)

    def warn(self, msg: str, *args: Any) -> None:
        self._emit(LogLevel.WARNING, msg, args)

    def err(self, msg: str, *args: Any) -> None:
        self._emit(LogLevel.ERROR, msg, args)

    def crit(self, msg: str, *args: Any) -> None:
        self._emit(LogLevel.CRITICAL, msg, args)

    def _emit(self, level: LogLevel, msg: str, args: tuple) -> None:
        if not level.is_enabled_under(self._level):
            return

        with self._lock:
            if self._handler is None:
                return
            try:
                self._logger.log(
                    level.to_stdlib(),
                    msg,
                    *args,
                    extra={"tag": self._tag},
                    stacklevel=_CALLER_STACKLEVEL,
                )
            except Exception:
                self._dropped += 1

    # --- Configuration surface (no-ops unless overridden) ---

    def set_log_file(self, path: str) -> None:
        return None

    def set_max_log_size(self, size_bytes: int) -> None:
        return None

    def set_log_file_count(self, count: int) -> None:
        return None

    def log_rotate(self) -> None:
        return None

    # --- Lifecycle ---

    def destroy(self) -> None:
        with self._lock:
            if self._destroyed:
                return
            self._destroyed = True
            handler = self._swap_handler(None)

        if handler is None:
            return
        try:
            try:
                handler.flush()
            finally:
                handler.close()
        except OSError as e:
            raise LogIOError(f"Failed to release {self.TYPE} logger output: {e}") from e
        logger.debug(f"{self.TYPE} logger destroyed")

    def _swap_handler(self, handler: Optional[logging.Handler]) -> Optional[logging.Handler]:
        """
        Replace the active handler and return the previous one.

        Must be called with `self._lock` held. The caller closes the old handler.
        """
        old = self._handler
        if old is not None:
            self._logger.removeHandler(old)
            self._dropped += getattr(old, "failures", 0)
        if handler is not None:
            self._logger.addHandler(handler)
        self._handler = handler
        return old
