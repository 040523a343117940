"""
Output Formatting Module

This module provides functions for formatting and displaying modem status
data in various formats, including JSON serialization and human-readable
summaries.

License: MIT
"""

import json
import logging
import sys
from dataclasses import asdict, is_dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from surfbeam_status import __version__

logger = logging.getLogger(__name__)


def _json_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {key: _json_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_value(item) for item in value]
    return value


def format_record_for_display(status: dict) -> dict:
    """
    Convert record dataclasses to dictionaries for JSON serialization.

    The SurfBeamStatusClient returns frozen ModemRecord and OutdoorUnitRecord
    objects whose category fields are enums; both are flattened to plain
    JSON values.

    Args:
        status: Status dictionary from SurfBeamStatusClient.get_status()

    Returns:
        Status dictionary with records converted to JSON-serializable format
    """
    logger.debug("Converting records for JSON serialization")
    output = status.copy()

    for key in ("modem", "outdoor_unit"):
        record = output.get(key)
        if record is not None and is_dataclass(record):
            output[key] = _json_value(asdict(record))
            logger.debug(f"Converted {key} record with {len(output[key])} fields")

    return output


def print_summary_to_stderr(status: dict) -> None:
    """
    Print a human-readable summary to stderr (so JSON output to stdout is clean).

    Args:
        status: Status dictionary from SurfBeamStatusClient.get_status()
    """
    logger.debug("Printing status summary to stderr")

    endpoints = status.get("_endpoints", {})

    print("=" * 60, file=sys.stderr)
    print("SURFBEAM MODEM STATUS SUMMARY", file=sys.stderr)
    print("=" * 60, file=sys.stderr)

    modem = status.get("modem")
    modem_display = status.get("modem_display")
    if modem is not None and modem_display:
        stale = " (stale)" if endpoints.get("modem", {}).get("stale") else ""
        print(f"Modem State: {modem_display['modem_state']}{stale}", file=sys.stderr)
        print(f"Status: {modem_display['status_label']}", file=sys.stderr)
        print(f"Online Time: {modem_display['online_time']}", file=sys.stderr)
        print(f"Beam: {modem_display['beam_color']}", file=sys.stderr)
        print(f"Software: {modem.sw_version}", file=sys.stderr)
        print(
            f"Downlink SNR: {modem_display['rx_snr']} ({modem_display['rx_snr_grade']})",
            file=sys.stderr,
        )
        print(f"Downlink Power: {modem_display['rx_power']}", file=sys.stderr)
        print(f"Cable Attenuation: {modem_display['cable_attenuation']}", file=sys.stderr)
        print(f"Cable Resistance: {modem_display['cable_resistance']}", file=sys.stderr)
        print(
            f"Traffic: rx {modem_display['rx_bytes']}, tx {modem_display['tx_bytes']}",
            file=sys.stderr,
        )
        print(
            f"Symbol Rates: up {modem_display['uplink_symbol_rate']}, "
            f"down {modem_display['downlink_symbol_rate']}",
            file=sys.stderr,
        )
    else:
        print("Modem: no data", file=sys.stderr)

    print("-" * 60, file=sys.stderr)

    outdoor_unit_display = status.get("outdoor_unit_display")
    if status.get("outdoor_unit") is not None and outdoor_unit_display:
        stale = " (stale)" if endpoints.get("outdoor_unit", {}).get("stale") else ""
        print(f"Outdoor Unit Temperature: {outdoor_unit_display['temperature']}{stale}", file=sys.stderr)
        print(f"Polarization: {outdoor_unit_display['polarization']}", file=sys.stderr)
        print(f"Tx IF Power: {outdoor_unit_display['tx_if_power']}", file=sys.stderr)
        print(f"Tx RF Power: {outdoor_unit_display['tx_rf_power']}", file=sys.stderr)
    else:
        print("Outdoor Unit: no data", file=sys.stderr)

    # Show error analysis if available
    error_analysis = status.get("_error_analysis")
    if error_analysis:
        total_errors = error_analysis.get("total_errors", 0)
        recovery_rate = error_analysis.get("recovery_stats", {}).get("recovery_rate", 0) * 100
        structural = error_analysis.get("structural_rejections", 0)

        print(
            f"Error Analysis: {total_errors} errors, {recovery_rate:.1f}% recovery",
            file=sys.stderr,
        )
        if structural > 0:
            print(f"Rejected Documents: {structural}", file=sys.stderr)

    print("=" * 60, file=sys.stderr)


def format_json_output(status: dict, args, elapsed_time: float) -> dict:
    """
    Format the complete JSON output with metadata.

    Args:
        status: Status dictionary from the client
        args: Parsed command line arguments
        elapsed_time: Total elapsed time for the operation

    Returns:
        Complete JSON output dictionary
    """
    logger.debug("Formatting complete JSON output")

    json_output = _json_value(format_record_for_display(status))

    json_output["query_timestamp"] = datetime.now().isoformat()
    json_output["query_host"] = args.host
    json_output["client_version"] = __version__
    json_output["elapsed_time"] = elapsed_time
    json_output["configuration"] = {
        "port": args.port,
        "firmware": args.firmware,
        "max_retries": args.retries,
        "timeout": args.timeout,
        "concurrent_mode": not args.serial,
        "watch_interval": args.watch,
    }

    return json_output


def print_json_output(json_data: dict) -> None:
    """
    Print JSON output to stdout.

    Args:
        json_data: Dictionary to output as JSON
    """
    logger.debug("Outputting JSON to stdout")
    print(json.dumps(json_data, indent=2))


def print_error_suggestions(debug: bool = False) -> None:
    """
    Print helpful error suggestions.

    Args:
        debug: Whether debug mode is enabled
    """
    if debug:
        import traceback

        traceback.print_exc(file=sys.stderr)
    else:
        print("\nTroubleshooting suggestions:", file=sys.stderr)
        print("1. Check that the modem IP address is reachable (default 192.168.100.1)", file=sys.stderr)
        print("2. Ensure the modem web interface answers on the given --port", file=sys.stderr)
        print("3. A field count mismatch means the firmware layout changed; check --firmware", file=sys.stderr)
        print("4. Try with --debug for more detailed error information", file=sys.stderr)
        print("5. Try --serial or a longer --timeout on a slow link", file=sys.stderr)
