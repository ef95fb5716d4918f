from __future__ import annotations

from .base import HandlerLogger, Logger
from .console import ConsoleLogger
from .factory import LoggerFactory, create_logger, get_default_factory
from .file import FileLogger
from .silent import SilentLogger
from .synchronized import SynchronizedLogger
from .syslog import SyslogLogger

__all__ = [
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
]
