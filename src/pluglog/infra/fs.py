from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform resolution of the default log location and the
path preparation shared by file-backed loggers.
"""

import os
from typing import Optional

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "pluglog"
UNIX_APP_DIR_NAME = ".pluglog"
DEFAULT_LOG_FILE_NAME = "pluglog.log"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent data.

    Standards:
    - Windows: %LOCALAPPDATA%/pluglog
    - Linux/Mac: ~/.pluglog

    The directory is not created here; file loggers create it on demand.

    Returns:
        str: Absolute path to the data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    return os.path.abspath(path)


def get_default_log_path(file_name: str = DEFAULT_LOG_FILE_NAME) -> str:
    """
    Resolve the log file used when no explicit target is configured.

    Args:
        file_name: Target log filename.

    Returns:
        str: Absolute path to the default log file.
    """
    return os.path.join(get_user_data_dir(), "logs", file_name)


def normalize_path(path: Optional[str]) -> Optional[str]:
    """
    Expand user and environment shortcuts into an absolute path.

    Args:
        path: Raw path string, possibly empty.

    Returns:
        Optional[str]: Absolute path, or None for empty input.
    """
    p = (path or "").strip()
    if not p:
        return None
    return os.path.abspath(os.path.expandvars(os.path.expanduser(p)))


def ensure_parent_dir(path: str) -> None:
    """
    Create the parent directory hierarchy for a target file.

    Args:
        path: Absolute path to the target file.

    Raises:
        OSError: If the hierarchy cannot be created.
    """
    parent = os.path.dirname(os.path.abspath(path))
    if parent and not os.path.isdir(parent):
        os.makedirs(parent, exist_ok=True)
