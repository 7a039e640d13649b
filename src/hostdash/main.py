#!/usr/bin/env python3
"""
hostdash - Main entry point
"""

import argparse
import logging
import signal
import sys
from pathlib import Path
from typing import List, Optional

from .dashboard import Dashboard
from .utils.errors import ConfigurationError
from .widgets.kinds import list_kinds

DEFAULT_LOG_FILE = "~/.hostdash/hostdash.log"


def setup_logging(level: str, log_file: str) -> None:
    """Log to a file; the terminal belongs to the dashboard."""
    path = Path(log_file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        filename=str(path),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="hostdash - terminal dashboard of host metrics")
    parser.add_argument("config", nargs="?", help="Path to YAML configuration file")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    parser.add_argument("--log-file", default=DEFAULT_LOG_FILE, help="Log file path")
    parser.add_argument("--once", action="store_true", help="Paint one frame and exit")
    parser.add_argument(
        "--list-widgets", action="store_true", help="List the available widget names and exit"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list_widgets:
        for name in list_kinds():
            print(name)
        return 0

    if not args.config:
        parser.error("the following arguments are required: config")

    setup_logging(args.log_level, args.log_file)
    logger = logging.getLogger(__name__)

    try:
        dashboard = Dashboard.from_file(args.config)
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    def signal_handler(signum, frame):
        """Handle shutdown signals gracefully"""
        logger.info(f"Received signal {signum}, shutting down gracefully...")
        dashboard.running = False
        dashboard.shutting_down = True
        # Interrupt a fetch waiting on a slow host; run() handles it
        raise KeyboardInterrupt()

    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)

    try:
        dashboard.run(once=args.once)
    except KeyboardInterrupt:
        logger.info("Shutting down...")
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        print(f"Fatal error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
