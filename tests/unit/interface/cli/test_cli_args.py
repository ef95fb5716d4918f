from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.

Verifies:
1. Mapping of CLI flags to configuration keys.
2. Omission of options not given on the command line.
3. Subcommand parsing.
"""

import pytest

from pluglog.interface.cli.args import args_to_overrides, build_parser


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    parser = build_parser()
    return parser.parse_args(arg_list)


def test_cli_backend_flags_mapping():
    """Verify backend options are mapped to config overrides."""
    args = parse_args([
        "-t", "file",
        "-l", "trace",
        "--tag", "worker",
        "-f", "/var/log/app.log",
        "--max-size", "10MB",
        "--file-count", "4",
    ])

    overrides = args_to_overrides(args)

    assert overrides == {
        "type": "file",
        "level": "trace",
        "tag": "worker",
        "file_path": "/var/log/app.log",
        "max_size_bytes": "10MB",
        "file_count": 4,
    }


def test_cli_syslog_flags_mapping():
    args = parse_args([
        "--type", "syslog",
        "--syslog-address", "loghost:1514",
        "--syslog-facility", "local1",
    ])

    overrides = args_to_overrides(args)

    assert overrides["syslog_address"] == "loghost:1514"
    assert overrides["syslog_facility"] == "local1"


def test_cli_omitted_options_are_not_overrides():
    """Options left unset must not mask values from a config file."""
    args = parse_args([])

    assert args_to_overrides(args) == {}
    assert args.command is None
    assert args.config_path is None
    assert args.dump_config is False
    assert args.debug is False


def test_cli_emit_subcommand():
    args = parse_args(["-c", "log.json", "emit", "warning", "first", "second"])

    assert args.config_path == "log.json"
    assert args.command == "emit"
    assert args.emit_level == "warning"
    assert args.messages == ["first", "second"]


def test_cli_emit_requires_a_message():
    with pytest.raises(SystemExit):
        parse_args(["emit", "info"])


@pytest.mark.parametrize("command", ["rotate", "levels", "backends"])
def test_cli_simple_subcommands(command):
    assert parse_args([command]).command == command


def test_cli_file_count_must_be_integer():
    with pytest.raises(SystemExit):
        parse_args(["--file-count", "many"])
