"""Look up the names of a USB device from the command line.

Example:
    usb-name 0403 6001
    python -m usbnames.cli 0x0403 0x6001 --markup -V
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from usbnames.config import load_config, load_env_file
from usbnames.lookup.resolver import DeviceNameResolver


def _hex_id(value: str) -> int:
    """Parse a 16-bit hex ID such as ``0403`` or ``0x0403``."""

    try:
        parsed = int(value, 16)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not a hex USB ID: {value!r}") from exc
    if not 0 <= parsed <= 0xFFFF:
        raise argparse.ArgumentTypeError(f"USB ID out of range [0000, ffff]: {value!r}")
    return parsed


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments for the lookup helper."""

    parser = argparse.ArgumentParser(description="Resolve USB vendor/product IDs via usb-ids.")
    parser.add_argument("vendor", type=_hex_id, help="Vendor ID in hex (e.g. 0403).")
    parser.add_argument("product", type=_hex_id, help="Product ID in hex (e.g. 6001).")
    parser.add_argument("--timeout", type=float, default=None, help="Read timeout in seconds.")
    parser.add_argument(
        "--markup",
        action="store_true",
        help="Parse pages as HTML instead of scanning raw lines.",
    )
    parser.add_argument(
        "-V",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-V info, -VV debug).",
    )
    return parser.parse_args(argv)


def configure_logging(verbosity: int, default_level: str = "WARNING") -> None:
    # Verbosity levels: 0=config default, 1=INFO (-V), 2+=DEBUG (-VV)
    level = getattr(logging, default_level, logging.WARNING)
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    logging.basicConfig(level=level, format='%(asctime)s - %(levelname)s - %(name)s - %(message)s')


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    load_env_file()
    config = load_config()
    configure_logging(args.verbose, config.log_level)

    if args.timeout is not None:
        config = replace(config, read_timeout_sec=args.timeout)
    if args.markup:
        config = replace(config, parser="markup")

    with DeviceNameResolver(config) as resolver:
        result = resolver.resolve_sync(args.vendor, args.product)

    if result.ok:
        print(result.info)
        return 0
    print(f"Lookup failed: {result.describe()}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
