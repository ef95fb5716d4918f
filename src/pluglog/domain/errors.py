from __future__ import annotations

"""
Logger Error Taxonomy.

Emission methods never raise; these exceptions are reserved for the explicit
configuration and lifecycle operations a host can react to.
"""


class LoggerError(Exception):
    """Root of every error raised by pluglog."""


class UnknownBackendError(LoggerError, LookupError):
    """The factory could not resolve a backend type identifier."""

    def __init__(self, type_id: str) -> None:
        super().__init__(f"Unknown logger backend: {type_id!r}")
        self.type_id = type_id


class InvalidLevelError(LoggerError, ValueError):
    """A level name did not match any entry of the severity scale."""


class PathError(LoggerError, OSError):
    """A file target could not be created or opened."""


class RotationError(LoggerError, OSError):
    """A rotation step failed; output keeps appending to the active file."""


class LogIOError(LoggerError, OSError):
    """Flushing or releasing a backend resource failed."""
