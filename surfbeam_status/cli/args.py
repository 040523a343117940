"""
Command Line Argument Parsing Module

This module handles all argument parsing and validation for the SurfBeam
Modem Status CLI.

License: MIT
"""

import argparse
import logging
from typing import Optional

from surfbeam_status.schema import DEFAULT_FIRMWARE, supported_firmware

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        description="Query ViaSat SurfBeam 2 modem and outdoor unit status and output JSON data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s
  %(prog)s --host 192.168.100.1 --debug
  %(prog)s --watch 0.5 --quiet

Output:
  JSON object with the decoded modem and outdoor unit records, display
  values and per-endpoint state. Summary information is printed to stderr,
  JSON data to stdout.

Watch Mode:
  Use --watch SECONDS to poll repeatedly. A poll that fails or returns a
  document with an unexpected layout keeps the previous values on screen.

Firmware:
  Field positions are pinned to a firmware version. If every document is
  rejected with a field count mismatch, the modem firmware has changed.
        """,
    )

    # Connection settings
    parser.add_argument(
        "--host",
        default="192.168.100.1",
        help="Modem hostname or IP address (default: %(default)s)",
    )
    parser.add_argument(
        "--port",
        default=80,
        type=int,
        help="HTTP port of the modem web interface (default: %(default)s)",
    )
    parser.add_argument(
        "--firmware",
        default=DEFAULT_FIRMWARE,
        choices=supported_firmware(),
        help="Firmware version of the status page layout (default: %(default)s)",
    )

    # Output options
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging output to stderr",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress summary output to stderr (JSON only to stdout)",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write log output to this file",
    )

    # Polling options
    parser.add_argument(
        "--timeout",
        type=float,
        default=5,
        help="Read timeout per status page in seconds (default: %(default)s)",
    )
    parser.add_argument(
        "--retries",
        type=int,
        default=1,
        help=(
            "Maximum retry attempts per status page for timeouts and connection errors; "
            "failed connects are also retried by the HTTP adapter (default: %(default)s)"
        ),
    )
    parser.add_argument(
        "--serial",
        action="store_true",
        help="Fetch the two status pages one after the other instead of in parallel",
    )
    parser.add_argument(
        "--watch",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Poll repeatedly with this interval in seconds",
    )
    parser.add_argument(
        "--count",
        type=int,
        default=None,
        help="Number of polls in watch mode (default: until interrupted)",
    )

    return parser


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    logger.debug(f"Parsed arguments: {args}")

    validate_args(args)

    return args


def validate_args(args: argparse.Namespace) -> None:
    """
    Validate parsed arguments.

    Raises:
        ValueError: If arguments are invalid
    """
    if args.timeout <= 0:
        raise ValueError("Timeout must be greater than 0")

    if args.retries < 0:
        raise ValueError("Retries cannot be negative")

    if args.port < 1 or args.port > 65535:
        raise ValueError("Port must be between 1 and 65535")

    if args.watch is not None and args.watch <= 0:
        raise ValueError("Watch interval must be greater than 0")

    if args.count is not None:
        if args.count < 1:
            raise ValueError("Count must be at least 1")
        if args.watch is None:
            raise ValueError("Count requires --watch")

    logger.debug("Arguments validated successfully")
