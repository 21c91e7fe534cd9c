#!/usr/bin/env python3
"""Entry point for samsungcast2mqtt."""

import argparse
import logging
import sys

from samsung_cast_tv.config import load_config, validate_config

from . import __version__
from .bridge import SamsungCastMQTTBridge


def setup_logging(level: str = "INFO"):
    """Set up logging configuration."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Reduce noise from the client libraries
    for noisy in ("paho", "pychromecast", "websocket", "urllib3"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="samsungcast2mqtt",
        description="MQTT bridge for a Samsung TV and its Chromecast",
    )
    parser.add_argument(
        "-c", "--config",
        help="Path to config file (default: config.yaml)",
    )
    parser.add_argument(
        "-v", "--version",
        action="version",
        version=f"samsungcast2mqtt {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Validate config and exit",
    )

    args = parser.parse_args(argv)

    config = load_config(args.config)

    log_level = "DEBUG" if args.debug else config.get("options", {}).get("log_level", "INFO")
    setup_logging(log_level)

    logger = logging.getLogger(__name__)
    logger.info(f"Loaded config from: {config.get('_loaded_from') or 'defaults'}")

    errors = validate_config(config, for_bridge=True)
    if errors:
        for error in errors:
            logger.error(f"Config error: {error}")
        if args.validate:
            print("Configuration is INVALID")
        sys.exit(1)

    if args.validate:
        print("Configuration is valid")
        print(f"  MQTT Broker: {config['mqtt']['host']}:{config['mqtt']['port']}")
        print(f"  Samsung TV: {config['samsung']['ip']}:{config['samsung']['port']}")
        print(f"  Chromecast: {config['chromecast']['ip']}:{config['chromecast']['port']}")
        print(f"  Send Delay: {config['send_delay']}ms")
        print(f"  Poll Interval: {config['poll_interval']}ms")
        print(f"  Discovery: {config['options']['discovery']}")
        sys.exit(0)

    logger.info(f"samsungcast2mqtt v{__version__} starting...")

    bridge = SamsungCastMQTTBridge(config)

    try:
        bridge.run_forever()
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
