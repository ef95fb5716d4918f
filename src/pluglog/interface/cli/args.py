from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema of the `pluglog` tool and translates the
parsed namespace into configuration overrides understood by
`build_config_from_dict`.
"""

import argparse
from typing import Any, Dict

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the pluglog CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="pluglog",
        description="Emit, rotate and inspect logs through a pluggable backend.",
    )

    # --- Backend Selection ---
    p.add_argument(
        "-t", "--type",
        dest="backend",
        default=None,
        help="Backend identifier (file, syslog, console, silent).",
    )
    p.add_argument(
        "-l", "--level",
        dest="level",
        default=None,
        help="Filtering threshold (OFF, CRITICAL, ERROR, WARNING, INFO, TRACE, DEBUG).",
    )
    p.add_argument(
        "--tag",
        dest="tag",
        default=None,
        help="Program tag written into every line.",
    )

    # --- File Backend ---
    p.add_argument(
        "-f", "--file",
        dest="file_path",
        default=None,
        help="Target log file of the file backend.",
    )
    p.add_argument(
        "--max-size",
        dest="max_size",
        default=None,
        help="Rotation threshold, in bytes or with a k/MB/g suffix.",
    )
    p.add_argument(
        "--file-count",
        dest="file_count",
        type=int,
        default=None,
        help="Number of rotated files to retain.",
    )

    # --- Syslog Backend ---
    p.add_argument(
        "--syslog-address",
        dest="syslog_address",
        default=None,
        help="Syslog socket path or host:port.",
    )
    p.add_argument(
        "--syslog-facility",
        dest="syslog_facility",
        default=None,
        help="Syslog facility name.",
    )

    # --- Configuration and Diagnostics ---
    p.add_argument(
        "-c", "--config",
        dest="config_path",
        default=None,
        help="JSON configuration file; command-line options take precedence.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the resolved configuration as JSON and exit.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Show pluglog's own diagnostic messages on stderr.",
    )

    # --- Commands ---
    sub = p.add_subparsers(dest="command")

    emit = sub.add_parser("emit", help="Emit one line per MESSAGE at LEVEL.")
    emit.add_argument("emit_level", metavar="LEVEL")
    emit.add_argument("messages", metavar="MESSAGE", nargs="+")

    sub.add_parser("rotate", help="Force a rotation check on the active file.")
    sub.add_parser("levels", help="List the severity scale.")
    sub.add_parser("backends", help="List the registered backends.")

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Only options given on the command line appear in the result.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    mapping = {
        "type": args.backend,
        "level": args.level,
        "file_path": args.file_path,
        "max_size_bytes": args.max_size,
        "file_count": args.file_count,
        "tag": args.tag,
        "syslog_address": args.syslog_address,
        "syslog_facility": args.syslog_facility,
    }
    return {k: v for k, v in mapping.items() if v is not None}
