from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: diagnostic logging bootstrap, merging of
configuration sources (defaults, JSON file, command-line overrides), logger
construction through the factory, command execution and guaranteed
release of the logger on exit.
"""

import json
import logging
import sys
from typing import Any, Dict, List, Optional

from pluglog.core.base import Logger
from pluglog.core.factory import get_default_factory
from pluglog.domain.config import LogConfig, build_config_from_dict, config_to_dict, load_config
from pluglog.domain.errors import (
    InvalidLevelError,
    LoggerError,
    PathError,
    UnknownBackendError,
)
from pluglog.domain.levels import LogLevel
from pluglog.infra.diagnostics import configure_diagnostics
from pluglog.interface.cli import args as cli_args

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2

# Errors caused by the invocation itself rather than the environment
_USAGE_ERRORS = (UnknownBackendError, InvalidLevelError, PathError)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 for success, non-zero for failure).
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Diagnostic logging bootstrap
    configure_diagnostics("DEBUG" if args.debug else "WARNING")
    logger.debug("CLI execution initiated. Resolving configuration hierarchy...")

    # 3. Commands that need no backend
    if args.command == "levels":
        _print_levels()
        return EXIT_OK
    if args.command == "backends":
        for name in get_default_factory().available_backends():
            print(name)
        return EXIT_OK

    # 4. Resolve configuration hierarchy
    try:
        cfg = _resolve_config(args)
    except (InvalidLevelError, TypeError, ValueError) as e:
        return _fail(f"Invalid configuration: {e}", EXIT_USAGE)

    if args.dump_config:
        print(json.dumps(config_to_dict(cfg), ensure_ascii=False, indent=2))
        return EXIT_OK

    if args.command is None:
        parser.print_help(sys.stderr)
        return EXIT_USAGE

    # 5. Backend construction and command execution
    try:
        log = get_default_factory().create(cfg.type, cfg)
    except LoggerError as e:
        return _fail(str(e), _exit_code_for(e))

    try:
        return _run_command(args, log)
    except LoggerError as e:
        return _fail(str(e), _exit_code_for(e))
    finally:
        try:
            log.destroy()
        except LoggerError as e:
            print(f"ERROR: {e}", file=sys.stderr)

# -----------------------------------------------------------------------------
# COMMAND EXECUTION
# -----------------------------------------------------------------------------

def _run_command(args: Any, log: Logger) -> int:
    """
    Dispatch the selected command against the constructed logger.

    Raises:
        LoggerError: Propagated from lifecycle operations.
    """
    if args.command == "emit":
        level = LogLevel.parse(args.emit_level)
        if level is LogLevel.OFF:
            raise InvalidLevelError("Cannot emit at level OFF")
        emit = _emitter_for(log, level)
        for message in args.messages:
            emit("%s", message)
        return EXIT_OK

    if args.command == "rotate":
        log.log_rotate()
        return EXIT_OK

    return _fail(f"Unknown command: {args.command}", EXIT_USAGE)


def _emitter_for(log: Logger, level: LogLevel) -> Any:
    methods = {
        LogLevel.CRITICAL: log.crit,
        LogLevel.ERROR: log.err,
        LogLevel.WARNING: log.warn,
        LogLevel.INFO: log.info,
        LogLevel.TRACE: log.trace,
        LogLevel.DEBUG: log.debug,
    }
    return methods[level]

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _resolve_config(args: Any) -> LogConfig:
    """
    Merge the JSON file (if any) with command-line overrides.

    The file is validated tolerantly; values typed on the command line are
    validated strictly.

    Returns:
        LogConfig: The validated configuration.

    Raises:
        InvalidLevelError: If --level names no known level.
        TypeError: For an override of the wrong type.
        ValueError: For a malformed config file or an out-of-range override.
    """
    base: Dict[str, Any] = {}
    if args.config_path:
        file_cfg, warnings = load_config(args.config_path)
        for w in warnings:
            logger.warning(f"Configuration Constraint: {w}")
        base = config_to_dict(file_cfg)

    overrides = cli_args.args_to_overrides(args)
    build_config_from_dict(overrides, strict=True)

    raw = dict(base)
    raw.update(overrides)

    cfg, warnings = build_config_from_dict(raw)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")
    return cfg

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _print_levels() -> None:
    for level in LogLevel:
        print(f"{int(level)}  {level.name:<8}  {level.label}")


def _exit_code_for(error: LoggerError) -> int:
    return EXIT_USAGE if isinstance(error, _USAGE_ERRORS) else EXIT_FAILURE


def _fail(message: str, code: int) -> int:
    logger.debug(message)
    print(f"ERROR: {message}", file=sys.stderr)
    return code

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
