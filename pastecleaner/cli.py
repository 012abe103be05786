#!/usr/bin/env python3
"""Command-line interface for PasteCleaner.

This module provides the CLI for cleaning copied base files:
- Sub-command argument parsing and validation
- Configuration loading (YAML file, environment, arguments)
- Logging setup
- Exit codes (0 success, 1 any failure)

Example:
    >>> from pastecleaner.cli import parse_arguments
    >>> args = parse_arguments(["get-info", "--input", "base.json"])
"""

import argparse
import sys
from typing import List, Optional

from pastecleaner.core.config import AppConfig, ConfigManager
from pastecleaner.core.constants import PASTECLEANER_VERSION
from pastecleaner.core.errors import CleanerError, UsageError
from pastecleaner.core.logging import Logger, install_logger

DESCRIPTION = "PasteCleaner - clean copied base files"


class ArgumentParser(argparse.ArgumentParser):
    """Argument parser reporting errors as UsageError instead of exiting."""

    def error(self, message):
        raise UsageError(message, hint=f"Use '{self.prog} --help' for usage information")


def build_parser() -> ArgumentParser:
    """Create the argument parser with all sub-commands."""
    parser = ArgumentParser(
        prog="pastecleaner",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Display information about a copied base
  pastecleaner get-info --input copied-base.json

  # Create the sample settings file
  pastecleaner init-settings

  # Clean a file containing a copied base
  pastecleaner do-clean --input copied-base.json --output cleaned.json --filter-id default-clean

  # Clean a directory containing copied bases files
  pastecleaner do-clean --input copied-bases --output cleaned-bases --filter-id default-clean
        """,
    )

    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {PASTECLEANER_VERSION}",
    )
    parser.add_argument(
        "-c",
        "--config",
        metavar="FILE",
        type=str,
        help="Configuration file path (YAML format)",
    )
    parser.add_argument(
        "--settings",
        metavar="FILE",
        type=str,
        help="Settings file holding the filters (default: pastecleaner.json beside the program)",
    )

    log_group = parser.add_argument_group("logging options")
    log_group.add_argument("--debug", action="store_true", help="Enable debug logging")
    log_group.add_argument("--log-file", metavar="FILE", type=str, help="Also log to this file")

    commands = parser.add_subparsers(dest="command", metavar="COMMAND", required=True)

    info = commands.add_parser("get-info", help="Get information about a copied base")
    info.add_argument("--input", required=True, help="The file containing data to be queried")

    init = commands.add_parser(
        "init-settings",
        help="Create a sample settings file that can be used to clean copied bases",
    )
    init.add_argument("--force", action="store_true", help="Replace an existing settings file")

    commands.add_parser("list-filters", help="List the filters of the settings file")

    clean = commands.add_parser(
        "do-clean", help="Clean a copied base file or a directory containing copied base files"
    )
    clean.add_argument(
        "--input",
        required=True,
        help="The file or directory containing data to be cleaned. "
        "When a directory is given, --output must also be a directory.",
    )
    clean.add_argument(
        "--output",
        required=True,
        help="The file or directory to be written with cleaned data. "
        "A directory must already exist.",
    )
    clean.add_argument(
        "--overwrite", action="store_true", help="Overwrite output files that already exist"
    )
    clean.add_argument(
        "--filter-id",
        help="The filter to apply; optional if the settings file holds only one filter. "
        "Caution: the filter id is case sensitive.",
    )
    clean.add_argument(
        "--owner-id",
        type=int,
        default=0,
        help="The owner id assigned to entities (default 0: entities without owner "
        "are given to the biggest builder)",
    )
    clean.add_argument("--lock-code", help="The 4 digits number assigned to code locks")
    clean.add_argument(
        "--lock-remove", action="store_true", help="Remove all code and key locks"
    )
    clean.add_argument(
        "--removed-items-from-prefabs",
        metavar="PATTERN",
        nargs="+",
        default=[],
        help="Additional prefab patterns whose items are removed",
    )

    space = commands.add_parser(
        "do-space", help="Split a copied base into a space layout and the other entities"
    )
    space.add_argument("--input", required=True, help="The copied base file")
    space.add_argument("--output", required=True, help="Existing directory for the documents")
    space.add_argument(
        "--overwrite", action="store_true", help="Overwrite output files that already exist"
    )

    return parser


def parse_arguments(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        args: Argument list to parse (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace

    Raises:
        UsageError: On invalid arguments
        SystemExit: On --help/--version
    """
    return build_parser().parse_args(args)


def build_app_config(args: argparse.Namespace) -> AppConfig:
    """Resolve configuration from the config file, environment and arguments."""
    manager = ConfigManager(args.config)

    if args.settings:
        manager.set("settings_file", args.settings)
    if args.debug:
        manager.set("logging.level", "DEBUG")
    if args.log_file:
        manager.set("logging.file", args.log_file)

    return manager.to_app_config()


def setup_logging(app_config: AppConfig) -> Logger:
    """
    Setup logging based on configuration.

    Returns:
        Configured logger instance, also installed as the global logger
    """
    logger = Logger(level=app_config.log_level, log_file=app_config.log_file)
    install_logger(logger)
    return logger


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Exit code: 0 on success, 1 on any failure, 130 when interrupted
    """
    try:
        args = parse_arguments(argv)
        app_config = build_app_config(args)
        logger = setup_logging(app_config)

        from pastecleaner.main import run_command

        return run_command(args, app_config, logger)

    except CleanerError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        if e.hint:
            print(e.hint, file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130

    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        import traceback

        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
