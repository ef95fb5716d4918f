from __future__ import annotations

"""
Integration tests for size-triggered rotation and retention.

Scenario: a file logger limited to 1024 bytes and 2 rotated files, driven
through the factory exactly as a host application would.
"""

from pathlib import Path
from typing import List

from pluglog.core.base import Logger
from pluglog.core.factory import create_logger


def _rotated(target: Path, index: int) -> Path:
    return Path(f"{target}.{index}")


def test_first_size_rotation(tmp_path: Path, cleanup_loggers: List[Logger]) -> None:
    """TC-01: Exceeding the size limit once yields <path> and <path>.1 only."""
    target = tmp_path / "app.log"
    lg = create_logger("file", {"file_path": str(target), "max_size_bytes": 1024, "file_count": 2})
    cleanup_loggers.append(lg)

    for i in range(100):
        lg.info("message number %03d with some padding to take space", i)
        if lg.rotation_count:
            break

    assert lg.rotation_count == 1
    assert target.exists()
    assert _rotated(target, 1).exists()
    assert not _rotated(target, 2).exists()

    # The rotated file holds the oldest lines and never exceeds the limit
    rotated = _rotated(target, 1).read_text(encoding="utf-8")
    assert "message number 000" in rotated
    assert len(rotated.encode("utf-8")) <= 1024


def test_retention_evicts_oldest_files(tmp_path: Path, cleanup_loggers: List[Logger]) -> None:
    """TC-02: With count 2, the third rotation evicts the oldest archive."""
    target = tmp_path / "app.log"
    lg = create_logger("file", {"file_path": str(target), "max_size_bytes": 1024, "file_count": 2})
    cleanup_loggers.append(lg)

    for generation in ("gen-a", "gen-b", "gen-c"):
        lg.info(generation)
        lg.log_rotate()

    assert lg.rotation_count == 3
    assert "gen-c" in _rotated(target, 1).read_text(encoding="utf-8")
    assert "gen-b" in _rotated(target, 2).read_text(encoding="utf-8")
    assert not _rotated(target, 3).exists()
    assert target.read_text(encoding="utf-8") == ""


def test_shrinking_retention_applies_to_next_rotation(tmp_path: Path, cleanup_loggers: List[Logger]) -> None:
    """TC-03: Lowering the file count takes effect at the next rotation."""
    target = tmp_path / "app.log"
    lg = create_logger("file", {"file_path": str(target), "file_count": 5})
    cleanup_loggers.append(lg)

    for generation in ("g1", "g2", "g3"):
        lg.info(generation)
        lg.log_rotate()
    lg.set_log_file_count(1)
    lg.info("g4")
    lg.log_rotate()

    assert "g4" in _rotated(target, 1).read_text(encoding="utf-8")


def test_external_rotation_then_forced_rotate(tmp_path: Path, cleanup_loggers: List[Logger]) -> None:
    """TC-04: After an external tool moved the file, rotate reopens the path."""
    target = tmp_path / "app.log"
    lg = create_logger("file", {"file_path": str(target)})
    cleanup_loggers.append(lg)

    lg.info("before logrotate")
    target.rename(tmp_path / "app.log-20260101")

    lg.log_rotate()
    lg.info("after logrotate")

    assert "after logrotate" in target.read_text(encoding="utf-8")
    assert "after logrotate" not in (tmp_path / "app.log-20260101").read_text(encoding="utf-8")
    assert not _rotated(target, 1).exists()
