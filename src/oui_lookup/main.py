"""
OUI Vendor Lookup - Main Entry Point.

Command line interface for looking up MAC address vendors and
maintaining the local copy of the IEEE OUI registry.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from .core.config import Config, configure_logging, get_default_config_path
from .core.exceptions import OUILookupError
from .services.lookup_service import LookupService


logger = logging.getLogger(__name__)


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Resolve MAC addresses to IEEE registered vendors"
    )

    parser.add_argument(
        "-c", "--config",
        default=None,
        help="Path to configuration file (YAML)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )

    parser.add_argument(
        "--generate-config",
        action="store_true",
        help="Generate a sample configuration file"
    )

    subparsers = parser.add_subparsers(dest="command")

    lookup = subparsers.add_parser("lookup", help="Look up one or more MAC addresses")
    lookup.add_argument("macs", nargs="+", help="MAC address, e.g. 30:23:03:3A:F3:55")
    lookup.add_argument("--json", action="store_true", help="Print results as JSON")

    subparsers.add_parser("update", help="Download and install the latest registry")
    subparsers.add_parser("update-raw", help="Download the registry into the raw dump only")
    subparsers.add_parser("rebuild", help="Rebuild the vendor cache from the raw dump")
    subparsers.add_parser("status", help="Show vendor store status")

    serve = subparsers.add_parser("serve", help="Start the REST API")
    serve.add_argument("--host", default=None, help="Host to bind to (default: 0.0.0.0)")
    serve.add_argument("-p", "--port", type=int, default=None, help="Port (default: 8000)")

    return parser, parser.parse_args(argv)


def print_result(mac: str, result, as_json: bool = False):
    """Print one lookup result."""
    if as_json:
        print(json.dumps({"input": mac, **result.to_dict()}))
        return

    if result.kind == "no_match":
        print(f"{mac}: no match")
        return

    print(f"{mac}: {result.organization} ({result.mac})")
    if result.kind == "vendor":
        for line in result.address.splitlines():
            print(f"    {line}")


def main(argv=None) -> int:
    """Main entry point."""
    parser, args = parse_args(argv)

    # Generate sample config if requested
    if args.generate_config:
        config = Config()
        config_path = args.config or "config/config.yaml"
        Path(config_path).parent.mkdir(parents=True, exist_ok=True)
        config.to_yaml(config_path)
        print(f"Generated sample configuration: {config_path}")
        return 0

    if not args.command:
        parser.print_help()
        return 1

    # Load configuration
    config_path = args.config or get_default_config_path()
    config = Config.from_yaml(config_path)
    configure_logging(config.logging, verbose=args.verbose)
    logger.debug(f"Loaded configuration from {config_path}")

    if args.command == "serve":
        from .web.api import start_web_server

        start_web_server(
            host=args.host or config.web.host,
            port=args.port or config.web.port,
            app_config=config,
        )
        return 0

    service = LookupService.from_config(config)

    try:
        if args.command == "lookup":
            for mac in args.macs:
                print_result(mac, service.lookup(mac), as_json=args.json)
        elif args.command == "update":
            count = service.update()
            print(f"Installed {count} vendor records")
        elif args.command == "update-raw":
            text = service.update_raw()
            print(f"Saved {len(text)} characters to {config.cache.raw_path}")
        elif args.command == "rebuild":
            count = service.rebuild_from_raw()
            print(f"Installed {count} vendor records from {config.cache.raw_path}")
        elif args.command == "status":
            service.ensure_loaded()
            store = service.store
            print(f"Records: {len(store)}")
            print(f"Loaded at: {store.loaded_at.isoformat() if store.loaded_at else 'never'}")
            print(f"Skipped entries: {service.skipped_entries}")
            print(f"Registry: {config.registry.url}")
            print(f"Cache backend: {config.cache.backend}")
    except OUILookupError as e:
        logger.error(f"{args.command} failed: {e}")
        return 1

    return 0


def run():
    """Entry point for the application."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nInterrupted")
        sys.exit(130)


if __name__ == "__main__":
    run()
