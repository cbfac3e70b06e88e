"""Command line entry point for log_bundler."""

from __future__ import annotations

import argparse
import logging
from typing import Sequence

from . import __version__
from .codegen.cli_integration import create_codegen_subparser
from .logging_config import get_logger, setup_logging

logger = get_logger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def create_parser() -> argparse.ArgumentParser:
    """Build the top-level argument parser with its subcommands."""
    parser = argparse.ArgumentParser(
        prog="log-bundler",
        description="Compile log message bundle declarations into implementation classes",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=LOG_LEVELS,
        type=str.upper,
        help="Diagnostic logging level (default: WARNING)",
    )
    parser.add_argument(
        "--plain-logs",
        action="store_true",
        help="Use plain log formatting instead of rich output",
    )

    subparsers = parser.add_subparsers(dest="command")
    create_codegen_subparser(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line interface.

    Args:
        argv: Arguments without the program name; sys.argv is used when None.

    Returns:
        Process exit code.
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(getattr(logging, args.log_level), rich_output=not args.plain_logs)
    logger.debug("Parsed arguments: %s", args)

    if not getattr(args, "func", None):
        parser.print_help()
        return 1

    return args.func(args)
