from __future__ import annotations

"""
Diagnostic Logging Bootstrap.

Configures the stdlib 'pluglog' logger namespace that library modules use
for their own lifecycle messages (registrations, retargets, rotation
failures). Called only by entry points; library code never configures
logging. Idempotent, and never touches handlers it did not create.
"""

import logging
import sys
from typing import Dict, Optional, TextIO

from pluglog.infra.handlers import is_our_handler, tag_handler

NAMESPACE: str = "pluglog"
DIAGNOSTIC_FORMAT: str = "%(levelname)s | %(name)s | %(message)s"

_CONFIGURED_FLAG_ATTR: str = "_pluglog_configured"

_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_diagnostics(
        level: str = "WARNING",
        *,
        stream: Optional[TextIO] = None,
        force: bool = False,
) -> logging.Logger:
    """
    Attach a stderr handler to the 'pluglog' namespace logger.

    Args:
        level: Minimum severity name for diagnostic output.
        stream: Destination stream (stderr by default).
        force: If True, replace a previous configuration.

    Returns:
        logging.Logger: The namespace logger.
    """
    ns_logger = logging.getLogger(NAMESPACE)

    if getattr(ns_logger, _CONFIGURED_FLAG_ATTR, False) and not force:
        return ns_logger

    level_int = _parse_level(level)
    ns_logger.setLevel(level_int)
    reset_diagnostics(ns_logger)

    sh = logging.StreamHandler(stream if stream is not None else sys.stderr)
    sh.setLevel(level_int)
    sh.setFormatter(logging.Formatter(DIAGNOSTIC_FORMAT))
    tag_handler(sh)
    ns_logger.addHandler(sh)

    setattr(ns_logger, _CONFIGURED_FLAG_ATTR, True)
    return ns_logger


def reset_diagnostics(ns_logger: Optional[logging.Logger] = None) -> None:
    """Detach and close every handler this module attached."""
    target = ns_logger if ns_logger is not None else logging.getLogger(NAMESPACE)
    for h in list(target.handlers):
        if is_our_handler(h):
            target.removeHandler(h)
            h.close()
    setattr(target, _CONFIGURED_FLAG_ATTR, False)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _parse_level(level: str) -> int:
    """Convert a string-based logging level to its numeric constant."""
    if not level:
        return logging.WARNING
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.WARNING)
