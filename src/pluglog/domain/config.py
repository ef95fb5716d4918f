from __future__ import annotations

"""
Logger Configuration Models.

Defines the immutable configuration handed by the host's configuration
loader to the LoggerFactory, the rotation policy embedded in file-backed
backends, and the tolerant dict/JSON loaders that build them.
"""

import json
import logging
import os
import re
from dataclasses import dataclass, field
from logging.handlers import SYSLOG_UDP_PORT, SysLogHandler
from typing import Any, Dict, List, Optional, Tuple, Union

from pluglog.domain.errors import InvalidLevelError
from pluglog.domain.levels import LogLevel

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
DEFAULT_BACKEND = "file"
DEFAULT_TAG = "pluglog"
DEFAULT_MAX_SIZE_BYTES = 512 * 1024 * 1024  # 512 MiB
DEFAULT_FILE_COUNT = 10
DEFAULT_SYSLOG_FACILITY = "user"

SyslogAddress = Union[str, Tuple[str, int]]

_SIZE_UNITS: Dict[str, int] = {
    "": 1,
    "b": 1,
    "k": 1024,
    "kb": 1024,
    "m": 1024 ** 2,
    "mb": 1024 ** 2,
    "g": 1024 ** 3,
    "gb": 1024 ** 3,
}
_SIZE_RE = re.compile(r"^\s*(\d+)\s*([a-zA-Z]*)\s*$")

# Accepted spellings for each LogConfig field
_KEY_ALIASES: Dict[str, Tuple[str, ...]] = {
    "type": ("type", "logging_type"),
    "level": ("level", "log_level"),
    "file_path": ("file_path", "log_file", "file"),
    "max_size_bytes": ("max_size_bytes", "max_file_size"),
    "file_count": ("file_count", "log_file_count"),
    "tag": ("tag",),
    "syslog_address": ("syslog_address",),
    "syslog_facility": ("syslog_facility",),
}


# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class RotationPolicy:
    """
    Size-triggered rotation settings of a file-backed logger.

    Attributes:
        max_size_bytes: Size of the active file that triggers rotation.
        max_file_count: Number of rotated files to retain.

    A value of 0 in either field selects the backend default.
    """
    max_size_bytes: int = 0
    max_file_count: int = 0

    def __post_init__(self) -> None:
        if self.max_size_bytes < 0:
            raise ValueError(f"max_size_bytes must be >= 0, got {self.max_size_bytes}")
        if self.max_file_count < 0:
            raise ValueError(f"max_file_count must be >= 0, got {self.max_file_count}")

    @property
    def effective_max_size(self) -> int:
        return self.max_size_bytes or DEFAULT_MAX_SIZE_BYTES

    @property
    def effective_file_count(self) -> int:
        return self.max_file_count or DEFAULT_FILE_COUNT


@dataclass(frozen=True)
class LogConfig:
    """
    Immutable settings consumed by the LoggerFactory.

    Attributes:
        type: Backend identifier ("file", "syslog", "console", "silent").
        level: Initial filtering threshold.
        file_path: Target file of the file backend. None selects the default.
        rotation: Rotation policy of the file backend.
        tag: Program tag written into every line.
        syslog_address: Unix socket path or (host, port). None autodetects.
        syslog_facility: Facility name understood by SysLogHandler.
    """
    type: str = DEFAULT_BACKEND
    level: LogLevel = LogLevel.INFO
    file_path: Optional[str] = None
    rotation: RotationPolicy = field(default_factory=RotationPolicy)
    tag: str = DEFAULT_TAG
    syslog_address: Optional[SyslogAddress] = None
    syslog_facility: str = DEFAULT_SYSLOG_FACILITY

    @property
    def max_size_bytes(self) -> int:
        return self.rotation.max_size_bytes

    @property
    def file_count(self) -> int:
        return self.rotation.max_file_count


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_config_from_dict(
        d: Any,
        *,
        strict: bool = False,
) -> Tuple[LogConfig, List[str]]:
    """
    Validate a raw mapping (e.g. parsed JSON) into a LogConfig.

    Unknown keys are ignored. Invalid values are replaced by defaults and
    reported as warnings, unless `strict` is set.

    Args:
        d: Raw configuration mapping.
        strict: If True, raise on the first invalid value instead of coercing.

    Returns:
        Tuple[LogConfig, List[str]]: The configuration and collected warnings.

    Raises:
        TypeError: In strict mode, for values of the wrong type.
        ValueError: In strict mode, for out-of-range values.
        InvalidLevelError: In strict mode, for unrecognized level names.
    """
    warnings: List[str] = []
    defaults = LogConfig()

    if d is None:
        return defaults, warnings

    if not isinstance(d, dict):
        msg = f"Invalid config type: expected dict, received {type(d).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        return defaults, warnings

    raw = {name: _pick(d, aliases) for name, aliases in _KEY_ALIASES.items()}

    backend = _as_str(raw["type"], defaults.type, "type", warnings, strict).lower()
    level = _as_level(raw["level"], defaults.level, warnings, strict)

    file_path: Optional[str] = None
    if raw["file_path"] is not None:
        file_path = _as_str(raw["file_path"], "", "file_path", warnings, strict) or None

    max_size = _as_size(raw["max_size_bytes"], 0, "max_size_bytes", warnings, strict)
    file_count = _as_count(raw["file_count"], 0, "file_count", warnings, strict)

    tag = _as_str(raw["tag"], defaults.tag, "tag", warnings, strict)
    address = _as_address(raw["syslog_address"], warnings, strict)
    facility = _as_facility(raw["syslog_facility"], warnings, strict)

    cfg = LogConfig(
        type=backend,
        level=level,
        file_path=file_path,
        rotation=RotationPolicy(max_size_bytes=max_size, max_file_count=file_count),
        tag=tag,
        syslog_address=address,
        syslog_facility=facility,
    )
    return cfg, warnings


def load_config(path: str, *, strict: bool = False) -> Tuple[LogConfig, List[str]]:
    """
    Load a LogConfig from a JSON file.

    The logger settings may sit at the top level of the document or
    under a "logging" key.

    Args:
        path: Path to the JSON file.
        strict: Forwarded to build_config_from_dict.

    Returns:
        Tuple[LogConfig, List[str]]: The configuration and collected warnings.

    Raises:
        ValueError: If the file exists but is not valid JSON.
    """
    if not os.path.exists(path):
        msg = f"Config file not found: {path}. Using defaults."
        logger.warning(msg)
        return LogConfig(), [msg]

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Malformed config file {path}: {e}") from e

    if isinstance(data, dict) and isinstance(data.get("logging"), dict):
        data = data["logging"]

    logger.debug(f"Loaded logger configuration from {path}")
    return build_config_from_dict(data, strict=strict)


def parse_size(value: Any) -> int:
    """
    Convert a size expression into bytes.

    Accepts non-negative integers and strings such as "1024", "512k",
    "10MB" or "1g" (binary multiples).

    Raises:
        TypeError: For unsupported types.
        ValueError: For negative or malformed values.
    """
    if isinstance(value, bool):
        raise TypeError("expected int or size string, received bool")
    if isinstance(value, int):
        if value < 0:
            raise ValueError(f"size must be >= 0, got {value}")
        return value
    if isinstance(value, str):
        m = _SIZE_RE.match(value)
        if not m or m.group(2).lower() not in _SIZE_UNITS:
            raise ValueError(f"malformed size: {value!r}")
        return int(m.group(1)) * _SIZE_UNITS[m.group(2).lower()]
    raise TypeError(f"expected int or size string, received {type(value).__name__}")


def config_to_dict(cfg: LogConfig) -> Dict[str, Any]:
    """
    Serialize a LogConfig into the raw form accepted by build_config_from_dict.

    Args:
        cfg: Configuration to serialize.

    Returns:
        Dict[str, Any]: JSON-compatible mapping.
    """
    address: Any = cfg.syslog_address
    if isinstance(address, tuple):
        address = list(address)
    return {
        "type": cfg.type,
        "level": cfg.level.name,
        "file_path": cfg.file_path,
        "max_size_bytes": cfg.max_size_bytes,
        "file_count": cfg.file_count,
        "tag": cfg.tag,
        "syslog_address": address,
        "syslog_facility": cfg.syslog_facility,
    }


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _pick(d: Dict[str, Any], aliases: Tuple[str, ...]) -> Any:
    for key in aliases:
        if key in d:
            return d[key]
    return None


def _as_str(value: Any, fallback: str, field_name: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field_name}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_level(value: Any, fallback: LogLevel, warnings: List[str], strict: bool) -> LogLevel:
    if value is None:
        return fallback
    try:
        return LogLevel.parse(value)
    except InvalidLevelError as e:
        if strict:
            raise
        warnings.append(f"{e}. Using {fallback.name}.")
        return fallback


def _as_size(value: Any, fallback: int, field_name: str, warnings: List[str], strict: bool) -> int:
    if value is None:
        return fallback
    try:
        return parse_size(value)
    except (TypeError, ValueError) as e:
        if strict:
            raise
        warnings.append(f"Invalid field '{field_name}': {e}. Using backend default.")
        return fallback


def _as_count(value: Any, fallback: int, field_name: str, warnings: List[str], strict: bool) -> int:
    if value is None:
        return fallback
    if not strict and isinstance(value, str) and value.strip().isdigit():
        warnings.append(f"Field '{field_name}' converted from '{value}' to int.")
        return int(value.strip())
    if isinstance(value, int) and not isinstance(value, bool):
        if value >= 0:
            return value
        msg = f"Invalid field '{field_name}': must be >= 0, got {value}."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using backend default.")
        return fallback

    msg = f"Invalid field '{field_name}': expected int, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using backend default.")
    return fallback


def _as_address(value: Any, warnings: List[str], strict: bool) -> Optional[SyslogAddress]:
    """Accept a socket path, 'host:port' or a [host, port] pair."""
    if value is None:
        return None
    if isinstance(value, str):
        v = value.strip()
        if not v:
            return None
        if v.startswith("/"):
            return v
        host, sep, port = v.rpartition(":")
        if sep and host and port.isdigit():
            return host, int(port)
        return v, SYSLOG_UDP_PORT
    if isinstance(value, (list, tuple)) and len(value) == 2:
        host, port = value
        if isinstance(host, str) and isinstance(port, int) and not isinstance(port, bool):
            return host, port

    msg = f"Invalid field 'syslog_address': unsupported value {value!r}."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using autodetection.")
    return None


def _as_facility(value: Any, warnings: List[str], strict: bool) -> str:
    if value is None:
        return DEFAULT_SYSLOG_FACILITY
    if isinstance(value, str) and value.strip().lower() in SysLogHandler.facility_names:
        return value.strip().lower()

    msg = f"Invalid field 'syslog_facility': unknown facility {value!r}."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using '{DEFAULT_SYSLOG_FACILITY}'.")
    return DEFAULT_SYSLOG_FACILITY
