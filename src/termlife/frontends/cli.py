"""Command-line interface for the terminal Game of Life."""

import argparse
import curses
import locale
import logging
import sys
from typing import List, Optional

from ..core.log import configure_logging, remove_logging
from ..core.settings import Settings
from .curses_ui import DisplayError, run

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="termlife",
        description="Conway's Game of Life filling the terminal, with a live step-time graph",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
        epilog="""
Keys while running:
  q quit   p pause   r reset   i info   c colors   h history   2 double-height

Examples:
  # Two cells per terminal row
  termlife -2

  # No colors, no history graphs
  termlife -nc -nh

  # Reproducible start with only warnings logged
  termlife --seed 42 --log-level WARNING
        """,
    )

    parser.add_argument(
        "-2",
        dest="double_height",
        action="store_true",
        help="Display two cells per block (double-height mode)",
    )
    parser.add_argument("-nc", dest="no_colors", action="store_true", help="No colors will be used")
    parser.add_argument("-nh", dest="no_history", action="store_true", help="Do not show history")
    parser.add_argument("-ni", dest="no_info", action="store_true", help="Do not show info at start")

    parser.add_argument("--seed", type=int, default=None, help="Random seed for the initial grid")
    parser.add_argument(
        "--log-level",
        default="DEBUG",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Diagnostic log threshold (default: DEBUG)",
    )
    parser.add_argument("--log-file", default="log.log", help="Diagnostic log file (default: log.log)")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the terminal interface.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args, unknown = parser.parse_known_args(argv)

    settings = Settings.from_args(args)
    handler = configure_logging(settings.log_level, settings.log_path)

    try:
        logger.info("[=============| START |=============]")

        if unknown:
            logger.error("Unknown option: %s", unknown[0])
            print(f"Error: Unknown option: {unknown[0]}", file=sys.stderr)
            parser.print_usage(sys.stderr)
            return 1

        if settings.double_height and settings.use_colors:
            logger.warning("Two cells per block cannot display colors.")

        # Wide characters need the user's locale before curses starts
        try:
            locale.setlocale(locale.LC_ALL, "")
        except locale.Error as e:
            logger.warning("Could not set locale: %s", e)

        try:
            game = curses.wrapper(run, settings)
        except (DisplayError, curses.error) as e:
            logger.error("Display unavailable: %s", e)
            print(f"Error: {e}", file=sys.stderr)
            return 1
        except KeyboardInterrupt:
            logger.info("Interrupted by user")
            return 1

        logger.info("Finished: %d iterations, average step %.6f sec", game.iteration_count, game.average_step_duration)
        return 0
    finally:
        remove_logging(handler)


if __name__ == "__main__":
    sys.exit(main())
