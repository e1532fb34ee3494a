# main.py

"""Entry point for the restock tracker (scheduled run or status view)."""

import argparse
import logging
import sys

from src.config.logging_config import setup_logging
from src.config.settings import TrackerConfig

logger = logging.getLogger("restock_tracker.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="restock_tracker",
        description=(
            "Check the storefront catalog and send alerts for products "
            "that came back in stock."
        ),
    )
    parser.add_argument(
        "command",
        nargs="?",
        choices=["run", "status"],
        default="run",
        help="'run' performs a stock check (default); "
        "'status' prints the last saved snapshot.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=False,
        dest="dry_run",
        help="Log restock alerts instead of sending them; "
        "leave the state file unchanged.",
    )
    parser.add_argument(
        "--no-cookie-cache",
        action="store_false",
        default=True,
        dest="use_cookie_cache",
        help="Ignore the cached cookie jar and negotiate from scratch.",
    )
    return parser


def main() -> None:
    """Route to a tracker run or the status view and exit."""
    parser = _build_parser()
    args = parser.parse_args()
    config = TrackerConfig.from_env()

    if args.command == "status":
        from src.cli.runner import show_status

        sys.exit(show_status(config))

    log_file = setup_logging()
    logger.info("restock_tracker starting — log file: %s", log_file)

    from src.cli.runner import run_tracker

    try:
        exit_code = run_tracker(
            config,
            dry_run=args.dry_run,
            use_cookie_cache=args.use_cookie_cache,
        )
    except Exception:
        logger.critical("Fatal error during run", exc_info=True)
        raise
    finally:
        logger.info("restock_tracker shutting down")
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
