from __future__ import annotations

"""
pluglog: pluggable logging backends behind one Logger contract.
"""

__version__ = "1.0.0"

from pluglog.core import (
    ConsoleLogger,
    FileLogger,
    HandlerLogger,
    Logger,
    LoggerFactory,
    SilentLogger,
    SynchronizedLogger,
    SyslogLogger,
    create_logger,
    get_default_factory,
)
from pluglog.domain.config import LogConfig, RotationPolicy, build_config_from_dict, load_config
from pluglog.domain.errors import (
    InvalidLevelError,
    LoggerError,
    LogIOError,
    PathError,
    RotationError,
    UnknownBackendError,
)
from pluglog.domain.levels import LogLevel

__all__ = [
    "__version__",
    "Logger",
    "HandlerLogger",
    "FileLogger",
    "SyslogLogger",
    "ConsoleLogger",
    "SilentLogger",
    "SynchronizedLogger",
    "LoggerFactory",
    "create_logger",
    "get_default_factory",
    "LogConfig",
    "RotationPolicy",
    "build_config_from_dict",
    "load_config",
    "LogLevel",
    "LoggerError",
    "UnknownBackendError",
    "InvalidLevelError",
    "PathError",
    "RotationError",
    "LogIOError",
]
