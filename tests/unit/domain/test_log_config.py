from __future__ import annotations

"""
Unit tests for the Logger Configuration Models.

Verifies:
1. Defaults of LogConfig and RotationPolicy.
2. Tolerant validation with warnings versus strict validation.
3. Key aliases, size expressions and syslog address forms.
4. JSON loading (top-level and nested 'logging' section).
"""

import json
from pathlib import Path
from typing import Any, Dict

import pytest

from pluglog.domain.config import (
    DEFAULT_FILE_COUNT,
    DEFAULT_MAX_SIZE_BYTES,
    LogConfig,
    RotationPolicy,
    build_config_from_dict,
    config_to_dict,
    load_config,
    parse_size,
)
from pluglog.domain.errors import InvalidLevelError
from pluglog.domain.levels import LogLevel


# -----------------------------------------------------------------------------
# Data Models
# -----------------------------------------------------------------------------

def test_log_config_defaults() -> None:
    cfg = LogConfig()

    assert cfg.type == "file"
    assert cfg.level is LogLevel.INFO
    assert cfg.file_path is None
    assert cfg.tag == "pluglog"
    assert cfg.syslog_facility == "user"
    assert cfg.max_size_bytes == 0
    assert cfg.file_count == 0


def test_rotation_policy_zero_selects_defaults() -> None:
    """TC-01: Zero size and count fall back to 512 MiB and 10 files."""
    policy = RotationPolicy()

    assert policy.effective_max_size == DEFAULT_MAX_SIZE_BYTES == 512 * 1024 * 1024
    assert policy.effective_file_count == DEFAULT_FILE_COUNT == 10

    custom = RotationPolicy(max_size_bytes=1024, max_file_count=2)
    assert custom.effective_max_size == 1024
    assert custom.effective_file_count == 2


@pytest.mark.parametrize("kwargs", [{"max_size_bytes": -1}, {"max_file_count": -5}])
def test_rotation_policy_rejects_negatives(kwargs: Dict[str, int]) -> None:
    """TC-02: Negative limits are rejected at construction."""
    with pytest.raises(ValueError):
        RotationPolicy(**kwargs)


# -----------------------------------------------------------------------------
# Dictionary Validation
# -----------------------------------------------------------------------------

def test_build_config_happy_path(mock_config_dict: Dict[str, Any]) -> None:
    cfg, warnings = build_config_from_dict(mock_config_dict)

    assert warnings == []
    assert cfg.type == "file"
    assert cfg.level is LogLevel.DEBUG
    assert cfg.tag == "testapp"
    assert cfg.file_path == mock_config_dict["file_path"]
    assert cfg.rotation == RotationPolicy(max_size_bytes=4096, max_file_count=3)
    assert cfg.syslog_facility == "local0"


def test_build_config_none_returns_defaults() -> None:
    cfg, warnings = build_config_from_dict(None)
    assert cfg == LogConfig()
    assert warnings == []


def test_build_config_non_dict_input() -> None:
    """TC-03: Non-mapping input yields defaults plus a warning, or TypeError if strict."""
    cfg, warnings = build_config_from_dict(["not", "a", "dict"])
    assert cfg == LogConfig()
    assert len(warnings) == 1
    assert "expected dict" in warnings[0]

    with pytest.raises(TypeError):
        build_config_from_dict("file", strict=True)


def test_build_config_accepts_key_aliases() -> None:
    """TC-04: Legacy spellings map onto the canonical fields."""
    cfg, warnings = build_config_from_dict({
        "logging_type": "SYSLOG",
        "log_level": "LOG_WARNING",
        "log_file": "/tmp/x.log",
        "max_file_size": "1k",
        "log_file_count": 4,
    })

    assert warnings == []
    assert cfg.type == "syslog"
    assert cfg.level is LogLevel.WARNING
    assert cfg.file_path == "/tmp/x.log"
    assert cfg.max_size_bytes == 1024
    assert cfg.file_count == 4


def test_build_config_invalid_values_are_coerced_with_warnings() -> None:
    """TC-05: Tolerant mode replaces invalid values by defaults."""
    cfg, warnings = build_config_from_dict({
        "type": 42,
        "level": "LOUD",
        "max_size_bytes": -10,
        "file_count": "three",
        "syslog_facility": "nope",
    })

    assert cfg.type == "file"
    assert cfg.level is LogLevel.INFO
    assert cfg.max_size_bytes == 0
    assert cfg.file_count == 0
    assert cfg.syslog_facility == "user"
    assert len(warnings) == 5


def test_build_config_numeric_string_count_is_converted() -> None:
    cfg, warnings = build_config_from_dict({"file_count": " 7 "})
    assert cfg.file_count == 7
    assert any("converted" in w for w in warnings)


@pytest.mark.parametrize(
    "raw, exc",
    [
        ({"level": "LOUD"}, InvalidLevelError),
        ({"type": 1}, TypeError),
        ({"max_size_bytes": "12 parsecs"}, ValueError),
        ({"file_count": -1}, ValueError),
        ({"file_count": "3"}, TypeError),
        ({"syslog_address": 514}, ValueError),
        ({"syslog_facility": "bogus"}, ValueError),
    ],
)
def test_build_config_strict_mode_raises(raw: Dict[str, Any], exc: type) -> None:
    """TC-06: Strict mode raises on the first invalid value."""
    with pytest.raises(exc):
        build_config_from_dict(raw, strict=True)


def test_build_config_empty_strings_fall_back() -> None:
    cfg, warnings = build_config_from_dict({"file_path": "   ", "tag": ""})
    assert cfg.file_path is None
    assert cfg.tag == "pluglog"
    assert warnings == []


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("/dev/log", "/dev/log"),
        ("logs.example.com:1514", ("logs.example.com", 1514)),
        ("loghost", ("loghost", 514)),
        (["10.0.0.1", 5140], ("10.0.0.1", 5140)),
        ("", None),
    ],
)
def test_build_config_syslog_address_forms(raw: Any, expected: Any) -> None:
    cfg, warnings = build_config_from_dict({"syslog_address": raw})
    assert cfg.syslog_address == expected
    assert warnings == []


# -----------------------------------------------------------------------------
# Size Expressions
# -----------------------------------------------------------------------------

@pytest.mark.parametrize(
    "value, expected",
    [
        (0, 0),
        (2048, 2048),
        ("1024", 1024),
        ("512k", 512 * 1024),
        ("10MB", 10 * 1024 ** 2),
        (" 1 g ", 1024 ** 3),
    ],
)
def test_parse_size_valid(value: Any, expected: int) -> None:
    assert parse_size(value) == expected


def test_parse_size_invalid() -> None:
    with pytest.raises(ValueError):
        parse_size(-1)
    with pytest.raises(ValueError):
        parse_size("10 TB")
    with pytest.raises(TypeError):
        parse_size(True)
    with pytest.raises(TypeError):
        parse_size(1.5)


# -----------------------------------------------------------------------------
# Serialization & JSON Loading
# -----------------------------------------------------------------------------

def test_config_to_dict_is_json_compatible() -> None:
    cfg = LogConfig(
        type="syslog",
        level=LogLevel.TRACE,
        syslog_address=("loghost", 514),
    )

    data = config_to_dict(cfg)

    assert data["level"] == "TRACE"
    assert data["syslog_address"] == ["loghost", 514]
    json.dumps(data)

    rebuilt, warnings = build_config_from_dict(data)
    assert rebuilt == cfg
    assert warnings == []


def test_load_config_top_level(tmp_path: Path) -> None:
    path = tmp_path / "log.json"
    path.write_text(json.dumps({"type": "console", "level": "error"}), encoding="utf-8")

    cfg, warnings = load_config(str(path))

    assert cfg.type == "console"
    assert cfg.level is LogLevel.ERROR
    assert warnings == []


def test_load_config_nested_logging_section(tmp_path: Path) -> None:
    """TC-07: Settings under a 'logging' key of a host config are used."""
    path = tmp_path / "host.json"
    path.write_text(
        json.dumps({"app": {"port": 8080}, "logging": {"logging_type": "silent"}}),
        encoding="utf-8",
    )

    cfg, _ = load_config(str(path))

    assert cfg.type == "silent"


def test_load_config_missing_file_uses_defaults(tmp_path: Path) -> None:
    cfg, warnings = load_config(str(tmp_path / "absent.json"))

    assert cfg == LogConfig()
    assert len(warnings) == 1
    assert "not found" in warnings[0]


def test_load_config_malformed_json(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{type: file", encoding="utf-8")

    with pytest.raises(ValueError, match="Malformed"):
        load_config(str(path))
