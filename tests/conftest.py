from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for log targets and configuration dictionaries.
3. Isolation of the diagnostic 'pluglog' namespace between tests.
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict, Iterator, List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from pluglog.core.base import Logger  # noqa: E402
from pluglog.infra.diagnostics import reset_diagnostics  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def isolate_diagnostics() -> Iterator[None]:
    """Detach diagnostic handlers installed by CLI runs."""
    yield
    reset_diagnostics()


@pytest.fixture
def log_path(tmp_path: Path) -> Path:
    """Target file inside a not-yet-existing subdirectory."""
    return tmp_path / "logs" / "app.log"


@pytest.fixture
def cleanup_loggers() -> Iterator[List[Logger]]:
    """
    Collect loggers created by a test and destroy them afterwards.

    Yields:
        List[Logger]: Append every logger that owns resources.
    """
    created: List[Logger] = []
    yield created
    for lg in created:
        lg.destroy()


@pytest.fixture
def mock_config_dict(log_path: Path) -> Dict[str, Any]:
    """
    Return a valid, complete configuration dictionary for testing.

    Reflects the structure defined in 'pluglog.domain.config'.

    Returns:
        Dict[str, Any]: A sample configuration dictionary.
    """
    return {
        # Backend
        "type": "file",
        "level": "DEBUG",
        "tag": "testapp",

        # File target & rotation
        "file_path": str(log_path),
        "max_size_bytes": 4096,
        "file_count": 3,

        # Syslog transport
        "syslog_address": None,
        "syslog_facility": "local0",
    }
