#!/usr/bin/env python3
"""
SnapSolve Launcher

Reads config.json, picks the vision provider and starts the overlay.

Usage:
    python -m snapsolve                      # Uses ./config.json
    python -m snapsolve --config my.yaml     # Custom config (JSON or YAML)
    python -m snapsolve --debug              # Debug logging + webview devtools
"""

import argparse
import logging
import sys
from pathlib import Path

logger = logging.getLogger("snapsolve")


def setup_logging(debug: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    # Reduce noise from HTTP/SDK libraries
    for name in ("httpx", "httpcore", "openai", "google_genai"):
        logging.getLogger(name).setLevel(logging.WARNING)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="SnapSolve - screenshot a question, get the answer"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to config file (default: ./config.json)"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug mode"
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.debug)

    from snapsolve.config import ConfigError, load_config

    # Config errors are fatal: no window, no hotkeys
    try:
        config = load_config(args.config)
    except ConfigError as e:
        logger.error(f"Error reading config: {e}")
        return 1

    from snapsolve.desktop.app import DesktopSolver
    from snapsolve.desktop.hotkeys import modifier_label

    mod = modifier_label()
    logger.info("=" * 50)
    logger.info("📸 SnapSolve")
    logger.info("=" * 50)
    logger.info(f"   Provider: {config.provider.provider.value} ({config.provider.model})")
    logger.info(f"   Hotkeys: {mod}+Shift+S=solve, {mod}+Shift+A=add, {mod}+Shift+R=reset, {mod}+Shift+Q=quit")
    logger.info("=" * 50)

    app = DesktopSolver(config, debug=args.debug)

    try:
        app.start()
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    finally:
        app.stop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
