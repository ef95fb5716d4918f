from __future__ import annotations

"""
Operational Signal Wiring.

Connects process signals to the logger lifecycle: a rotation signal (SIGHUP
by default, as sent by logrotate's postrotate hooks) triggers `log_rotate`,
and termination signals trigger `destroy` before the previous disposition
runs. The logger is passed in explicitly; nothing here holds global state.
"""

import logging
import signal
import threading
from typing import Any, Callable, Dict, Iterable, Optional, Union

from pluglog.core.base import Logger
from pluglog.domain.errors import LoggerError

logger = logging.getLogger(__name__)

SignalHandler = Union[Callable[[int, Any], Any], int, None]


def bind_rotation_signal(target: Logger, signum: Optional[int] = None) -> SignalHandler:
    """
    Install a handler that rotates `target` when `signum` is received.

    The handler only starts a worker thread. The interrupted frame may be
    inside an emit holding the logger lock; the worker blocks on that lock
    until the line is complete, then rotates. Rotation failures are
    reported through this module's logger and never propagate.

    Args:
        target: Logger to rotate.
        signum: Signal number. Defaults to SIGHUP.

    Returns:
        SignalHandler: The previously installed handler.
    """
    sig = signum if signum is not None else signal.SIGHUP

    def _rotate() -> None:
        try:
            target.log_rotate()
        except LoggerError as e:
            logger.warning(f"Signal-triggered rotation failed: {e}")

    def _on_rotate(received: int, frame: Any) -> None:
        threading.Thread(target=_rotate, name="pluglog-rotate", daemon=True).start()

    previous = signal.signal(sig, _on_rotate)
    logger.debug(f"Bound log rotation to signal {sig}")
    return previous


def bind_shutdown_signals(
        target: Logger,
        signals: Iterable[int] = (signal.SIGTERM, signal.SIGINT),
) -> Dict[int, SignalHandler]:
    """
    Destroy `target` on termination signals, then defer to the prior handler.

    `destroy` runs inline since the prior disposition may end the process.
    A line being emitted by the interrupted frame at that moment is lost.

    Args:
        target: Logger to release.
        signals: Signal numbers to intercept.

    Returns:
        Dict[int, SignalHandler]: Previous handlers keyed by signal number.
    """
    previous: Dict[int, SignalHandler] = {}

    for sig in signals:
        prior = signal.getsignal(sig)
        previous[sig] = prior
        signal.signal(sig, _make_shutdown_handler(target, prior))

    return previous


def _make_shutdown_handler(target: Logger, prior: SignalHandler) -> Callable[[int, Any], None]:
    def _on_shutdown(received: int, frame: Any) -> None:
        try:
            target.destroy()
        except LoggerError as e:
            logger.warning(f"Logger shutdown failed: {e}")

        if callable(prior):
            prior(received, frame)
        elif prior == signal.SIG_DFL:
            signal.signal(received, signal.SIG_DFL)
            signal.raise_signal(received)

    return _on_shutdown
