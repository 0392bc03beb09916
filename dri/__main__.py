"""Entry point: python -m dri"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from . import __version__
from .api import DroneClient
from .app import DriDashboard
from .config import ConfigError, load_config
from .data import DataGateway

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="dri",
        description="Browse Drone CI repositories, builds and step logs in the terminal.",
    )
    parser.add_argument("-v", "--version", action="version", version=f"dri {__version__}")
    parser.add_argument("--server", help="Drone server URL (default: $DRONE_SERVER or config file)")
    parser.add_argument("--token", help="Drone API token (default: $DRONE_TOKEN or config file)")
    parser.add_argument("--config", help="Path to config.yaml (default: ~/.config/dri/config.yaml)")
    return parser.parse_args(argv)


def configure_logging(log_file: Path, level: str) -> None:
    """Log to a file; the terminal belongs to the TUI."""
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=str(log_file),
        level=getattr(logging, level, logging.WARNING),
        format=LOG_FORMAT,
    )


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)

    try:
        config = load_config(args.config, server=args.server, token=args.token)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        configure_logging(config.log_file, config.log_level)
    except OSError as e:
        print(f"Warning: logging disabled ({e})", file=sys.stderr)

    logger = logging.getLogger("dri")
    client = DroneClient(config.server, token=config.token, timeout=config.timeout)
    try:
        app = DriDashboard(DataGateway(client), min_loading=config.min_loading)
        result = app.run()
    except Exception:
        logger.exception("Dashboard crashed")
        raise

    if isinstance(result, BaseException):
        print(f"Error: {result}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
