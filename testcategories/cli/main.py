import argparse
import sys
from pathlib import Path
from typing import Optional

from .configure import configure_configure_parser, run_configure_command
from .evaluate import configure_evaluate_parser, run_evaluate_command
from .logging_setup import setup_logging


def main(args: Optional[list[str]] = None) -> int:
    """
    Main entry point for the 'test-categories' CLI.
    """
    parser = argparse.ArgumentParser(
        prog="test-categories",
        description="Test size categorization: timing, hermeticity and distribution enforcement",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Append JSON-lines logs to this file",
    )
    subparsers = parser.add_subparsers(
        dest="command", required=True, help="Subcommands"
    )

    # -------------------------------------------------------------------------
    # Subcommand: configure
    # -------------------------------------------------------------------------
    configure_parser = subparsers.add_parser(
        "configure",
        help="Validate and print enforcement configuration",
        description="Validate enforcement modes and distribution targets, then print them as JSON.",
    )
    configure_configure_parser(configure_parser)

    # -------------------------------------------------------------------------
    # Subcommand: evaluate
    # -------------------------------------------------------------------------
    evaluate_parser = subparsers.add_parser(
        "evaluate",
        help="Enforce policy over recorded test results",
        description="Replay a results file through enforcement and emit the suite report.",
    )
    configure_evaluate_parser(evaluate_parser)

    # -------------------------------------------------------------------------
    # Parse & Execute
    # -------------------------------------------------------------------------
    parsed_args = parser.parse_args(args)
    setup_logging(level=parsed_args.log_level, log_file=parsed_args.log_file)

    if parsed_args.command == "configure":
        return run_configure_command(parsed_args)
    if parsed_args.command == "evaluate":
        return run_evaluate_command(parsed_args)

    return 0


if __name__ == "__main__":
    sys.exit(main())
