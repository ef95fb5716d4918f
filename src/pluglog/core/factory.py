from __future__ import annotations

"""
Logger Factory and Backend Registry.

Resolves a backend type identifier to a registered builder and returns a
fully configured Logger. Construction applies level, target, rotation
policy and tag before returning; there is no separate start step.
"""

import logging
import threading
from typing import Any, Callable, Dict, List, Optional, Union

from pluglog.core.base import Logger
from pluglog.core.console import ConsoleLogger
from pluglog.core.file import FileLogger
from pluglog.core.silent import SilentLogger
from pluglog.core.synchronized import SynchronizedLogger
from pluglog.core.syslog import SyslogLogger
from pluglog.domain.config import LogConfig, build_config_from_dict
from pluglog.domain.errors import UnknownBackendError

logger = logging.getLogger(__name__)

LoggerBuilder = Callable[[LogConfig], Logger]
ConfigLike = Union[LogConfig, Dict[str, Any], None]

# -----------------------------------------------------------------------------
# TYPE IDENTIFIER ALIASES
# -----------------------------------------------------------------------------
_ALIASES: Dict[str, str] = {
    "base": FileLogger.TYPE,
    "none": SilentLogger.TYPE,
    "off": SilentLogger.TYPE,
    "stderr": ConsoleLogger.TYPE,
}


class LoggerFactory:
    """
    Registry of backend builders keyed by type identifier.

    Safe to share between threads; registration and lookup are serialized.
    """

    def __init__(self, *, register_builtins: bool = True) -> None:
        self._builders: Dict[str, LoggerBuilder] = {}
        self._lock = threading.Lock()
        if register_builtins:
            self.register(FileLogger.TYPE, _build_file)
            self.register(SyslogLogger.TYPE, _build_syslog)
            self.register(ConsoleLogger.TYPE, _build_console)
            self.register(SilentLogger.TYPE, _build_silent)

    def register(
            self,
            type_id: str,
            builder: LoggerBuilder,
            *,
            thread_safe: bool = True,
            replace: bool = False,
    ) -> None:
        """
        Make a backend available under `type_id`.

        Args:
            type_id: Identifier matched case-insensitively by `create`.
            builder: Callable receiving the LogConfig and returning a Logger.
            thread_safe: False wraps every built instance in SynchronizedLogger.
            replace: Allow overriding an existing registration.

        Raises:
            ValueError: If the identifier is empty or already registered.
        """
        key = _normalize(type_id)
        if not key:
            raise ValueError("Backend type identifier must not be empty.")

        final_builder = builder if thread_safe else _synchronized(builder)

        with self._lock:
            if key in self._builders and not replace:
                raise ValueError(f"Backend '{key}' is already registered.")
            self._builders[key] = final_builder
        logger.debug(f"Registered logger backend '{key}'")

    def available_backends(self) -> List[str]:
        with self._lock:
            return sorted(self._builders)

    def create(self, type_id: Optional[str] = None, config: ConfigLike = None) -> Logger:
        """
        Construct the backend selected by `type_id`.

        Args:
            type_id: Backend identifier. None uses `config.type`.
            config: LogConfig, raw mapping, or None for defaults.

        Returns:
            Logger: A ready-to-use logger.

        Raises:
            UnknownBackendError: If no backend matches the identifier.
            PathError: If a file target cannot be opened.
            LogIOError: If a transport cannot be opened.
        """
        cfg = _resolve_config(config)
        requested = type_id if type_id is not None else cfg.type
        key = _normalize(requested)

        with self._lock:
            builder = self._builders.get(key)
        if builder is None:
            raise UnknownBackendError(str(requested))

        instance = builder(cfg)
        logger.debug(f"Created '{instance.get_type()}' logger at level {instance.get_log_level()}")
        return instance


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _normalize(type_id: Any) -> str:
    key = str(type_id or "").strip().lower()
    return _ALIASES.get(key, key)


def _resolve_config(config: ConfigLike) -> LogConfig:
    if isinstance(config, LogConfig):
        return config
    cfg, warnings = build_config_from_dict(config)
    for w in warnings:
        logger.warning(f"Logger configuration: {w}")
    return cfg


def _synchronized(builder: LoggerBuilder) -> LoggerBuilder:
    def build(cfg: LogConfig) -> Logger:
        return SynchronizedLogger(builder(cfg))
    return build


def _build_file(cfg: LogConfig) -> Logger:
    return FileLogger(
        file_path=cfg.file_path,
        level=cfg.level,
        rotation=cfg.rotation,
        tag=cfg.tag,
    )


def _build_syslog(cfg: LogConfig) -> Logger:
    return SyslogLogger(
        level=cfg.level,
        tag=cfg.tag,
        address=cfg.syslog_address,
        facility=cfg.syslog_facility,
    )


def _build_console(cfg: LogConfig) -> Logger:
    return ConsoleLogger(level=cfg.level, tag=cfg.tag)


def _build_silent(cfg: LogConfig) -> Logger:
    return SilentLogger()


# -----------------------------------------------------------------------------
# MODULE-LEVEL CONVENIENCE
# -----------------------------------------------------------------------------

_default_factory = LoggerFactory()


def get_default_factory() -> LoggerFactory:
    """Factory pre-loaded with the built-in backends."""
    return _default_factory


def create_logger(type_id: Optional[str] = None, config: ConfigLike = None) -> Logger:
    """Shortcut for `get_default_factory().create(type_id, config)`."""
    return _default_factory.create(type_id, config)
