"""
Main CLI Orchestration Module

This module provides the main entry point and orchestration logic for the
SurfBeam Modem Status CLI. It coordinates all other CLI modules to provide
a cohesive command-line interface.

License: MIT
"""

import logging
import sys
import time
from datetime import datetime
from typing import Optional

from surfbeam_status import SurfBeamStatusClient, __version__
from surfbeam_status.exceptions import SurfBeamOperationError

from .args import parse_args
from .formatters import (
    format_json_output,
    print_error_suggestions,
    print_json_output,
    print_summary_to_stderr,
)
from .logging_setup import setup_logging

logger = logging.getLogger(__name__)

CONNECT_TIMEOUT = 2.0


def _report(status: dict, args, start_time: float) -> None:
    elapsed = time.time() - start_time

    if not args.quiet:
        print_summary_to_stderr(status)

    print_json_output(format_json_output(status, args, elapsed))
    logger.info(f"Modem status retrieved successfully in {elapsed:.2f}s")


def _watch(client: SurfBeamStatusClient, args, start_time: float) -> int:
    """Poll until the count is reached or interrupted; return the number of reported polls."""
    reported = 0
    polls = 0

    try:
        while args.count is None or polls < args.count:
            if polls > 0:
                time.sleep(args.watch)
            polls += 1

            try:
                status = client.get_status()
            except SurfBeamOperationError as e:
                logger.warning(f"Poll {polls}: {e}")
                continue

            _report(status, args, start_time)
            reported += 1
    except KeyboardInterrupt:
        logger.info(f"Watch stopped by user after {polls} polls")

    return reported


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point for the CLI application."""
    start_time = time.time()
    args = None

    try:
        args = parse_args(argv)

        setup_logging(debug=args.debug, quiet=args.quiet, log_file=args.log_file)

        if not args.quiet:
            timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            mode_str = "serial" if args.serial else "concurrent"
            print(
                f"SurfBeam Modem Status Client v{__version__} - {timestamp}",
                file=sys.stderr,
            )
            print(
                f"Connecting to {args.host}:{args.port} ({mode_str} mode, firmware {args.firmware})",
                file=sys.stderr,
            )

        timeout = (min(CONNECT_TIMEOUT, args.timeout), args.timeout)

        logger.info(f"Initializing SurfBeamStatusClient for {args.host}:{args.port}")
        client = SurfBeamStatusClient(
            host=args.host,
            port=args.port,
            concurrent=not args.serial,
            max_retries=args.retries,
            timeout=timeout,
            firmware=args.firmware,
        )

        with client:
            if args.watch is None:
                _report(client.get_status(), args, start_time)
            else:
                reported = _watch(client, args, start_time)
                if reported == 0:
                    raise SurfBeamOperationError(f"No status could be decoded from {args.host}:{args.port}")

    except KeyboardInterrupt:
        elapsed = time.time() - start_time
        logger.error(f"Operation cancelled by user after {elapsed:.2f}s")
        print(
            f"Operation cancelled by user after {elapsed:.2f}s",
            file=sys.stderr,
        )
        sys.exit(1)

    except Exception as e:
        elapsed = time.time() - start_time
        logger.error(f"Failed to get modem status after {elapsed:.2f}s: {e}")

        print(f"Error after {elapsed:.2f}s: {e}", file=sys.stderr)

        print_error_suggestions(debug=args.debug if args is not None else False)

        sys.exit(1)


if __name__ == "__main__":
    main()
