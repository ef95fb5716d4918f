from __future__ import annotations

"""
File Backend.

Writes formatted lines to a local file with size-triggered rotation. The
active file is `<path>`; rotated files are `<path>.1` (newest) through
`<path>.N` (oldest), N being the configured retention count.
"""

import logging
from dataclasses import replace
from typing import Optional

from pluglog.core.base import HandlerLogger, LevelLike
from pluglog.domain.config import DEFAULT_TAG, RotationPolicy
from pluglog.domain.errors import PathError, RotationError
from pluglog.domain.levels import LogLevel
from pluglog.infra.fs import get_default_log_path, normalize_path
from pluglog.infra.handlers import RotatingLogFileHandler, create_rotating_file_handler

logger = logging.getLogger(__name__)


class FileLogger(HandlerLogger):
    """
    Rotating file-backed logger.

    Args:
        file_path: Target file. None selects the per-user default location.
        level: Initial filtering threshold.
        rotation: Size and retention limits (zeros select the defaults).
        tag: Program tag written into every line.

    Raises:
        PathError: If the target cannot be created or opened.
    """

    TYPE = "file"

    def __init__(
            self,
            file_path: Optional[str] = None,
            level: LevelLike = LogLevel.INFO,
            rotation: Optional[RotationPolicy] = None,
            tag: str = DEFAULT_TAG,
    ) -> None:
        super().__init__(level=level, tag=tag)
        self._rotation = rotation or RotationPolicy()
        self._path: Optional[str] = None
        self._rotations_before = 0
        self._rollover_failures_before = 0
        self.set_log_file(file_path or get_default_log_path())

    # --- Introspection ---

    @property
    def file_path(self) -> Optional[str]:
        return self._path

    @property
    def rotation_policy(self) -> RotationPolicy:
        return self._rotation

    @property
    def rotation_count(self) -> int:
        """Rotations performed since construction, across file retargets."""
        with self._lock:
            handler = self._handler
            current = handler.rotation_count if isinstance(handler, RotatingLogFileHandler) else 0
            return self._rotations_before + current

    @property
    def rollover_failures(self) -> int:
        """Size-triggered rotations that failed; the line was kept in the active file."""
        with self._lock:
            handler = self._handler
            current = handler.rollover_failures if isinstance(handler, RotatingLogFileHandler) else 0
            return self._rollover_failures_before + current

    # --- Configuration surface ---

    def set_log_file(self, path: str) -> None:
        target = normalize_path(path)
        if not target:
            raise PathError(f"Invalid log file path: {path!r}")
        if self._destroyed:
            logger.debug(f"Ignoring retarget to {target}: logger destroyed")
            return

        policy = self._rotation
        try:
            new_handler = create_rotating_file_handler(
                target,
                policy.effective_max_size,
                policy.effective_file_count,
            )
        except OSError as e:
            raise PathError(f"Cannot open log file {target}: {e}") from e

        with self._lock:
            if self._destroyed:
                old = new_handler
                previous = target
            else:
                self._apply_policy(new_handler)
                old = self._swap_handler(new_handler)
                previous, self._path = self._path, target

        if old is not None:
            _close_quietly(old)
        if previous and previous != target:
            logger.info(f"Log output moved from {previous} to {target}")

    def set_max_log_size(self, size_bytes: int) -> None:
        with self._lock:
            self._rotation = replace(self._rotation, max_size_bytes=int(size_bytes))
            self._apply_policy(self._handler)

    def set_log_file_count(self, count: int) -> None:
        with self._lock:
            self._rotation = replace(self._rotation, max_file_count=int(count))
            self._apply_policy(self._handler)

    # --- Lifecycle ---

    def log_rotate(self) -> None:
        with self._lock:
            handler = self._handler
            if not isinstance(handler, RotatingLogFileHandler):
                return
            try:
                rotated = handler.force_rollover()
            except OSError as e:
                raise RotationError(f"Rotation of {self._path} failed: {e}") from e

        if rotated:
            logger.debug(f"Rotated {self._path}")

    # --- Helpers ---

    def _swap_handler(self, handler: Optional[logging.Handler]) -> Optional[logging.Handler]:
        old = super()._swap_handler(handler)
        if isinstance(old, RotatingLogFileHandler):
            self._rotations_before += old.rotation_count
            self._rollover_failures_before += old.rollover_failures
        return old

    def _apply_policy(self, handler: Optional[logging.Handler]) -> None:
        if isinstance(handler, RotatingLogFileHandler):
            handler.maxBytes = self._rotation.effective_max_size
            handler.backupCount = self._rotation.effective_file_count


def _close_quietly(handler: logging.Handler) -> None:
    """Release a replaced handler; its messages were already flushed per line."""
    try:
        handler.close()
    except OSError as e:
        logger.warning(f"Failed to close previous log target: {e}")
