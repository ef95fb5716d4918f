from __future__ import annotations

"""
Syslog Backend.

Forwards messages to the system logger through the stdlib SysLogHandler,
over a local socket when one exists and UDP otherwise. File targeting and
rotation belong to the syslog daemon, so those operations are no-ops here.
"""

import logging
from typing import Optional

from pluglog.core.base import HandlerLogger, LevelLike
from pluglog.domain.config import DEFAULT_SYSLOG_FACILITY, DEFAULT_TAG, SyslogAddress
from pluglog.domain.errors import LogIOError
from pluglog.domain.levels import LogLevel
from pluglog.infra.handlers import create_syslog_handler

logger = logging.getLogger(__name__)


class SyslogLogger(HandlerLogger):
    """
    Logger writing to the system log.

    Args:
        level: Initial filtering threshold.
        tag: Program identifier used as the syslog ident.
        address: Socket path or (host, port); None autodetects.
        facility: Syslog facility name.

    Raises:
        LogIOError: If the syslog transport cannot be opened.
    """

    TYPE = "syslog"

    def __init__(
            self,
            level: LevelLike = LogLevel.INFO,
            tag: str = DEFAULT_TAG,
            address: Optional[SyslogAddress] = None,
            facility: str = DEFAULT_SYSLOG_FACILITY,
    ) -> None:
        super().__init__(level=level, tag=tag)
        try:
            handler = create_syslog_handler(address, facility, self._tag)
        except OSError as e:
            raise LogIOError(f"Cannot open syslog transport {address!r}: {e}") from e

        with self._lock:
            self._swap_handler(handler)
        logger.debug(f"Syslog transport opened at {handler.address!r}")
