"""
Display Values for SurfBeam Telemetry
=====================================

Turns decoded records into the strings and gauge values a status display
needs: power in dBm and Watts, byte counts, symbol rates, temperatures,
classified labels and progress values clamped to 0..255.

Examples:
    >>> format_power(-50.0)
    '-50.0 dBm / 10.0 nW'
    >>> format_byte_count(1536)
    '1.500 kBytes'
    >>> format_symbol_rate(20_000_000)
    '20.000 MSym/s'

License: MIT
"""

from enum import Enum
from typing import Any

from surfbeam_status.conversions import (
    cable_attenuation_percent,
    clamp_percent,
    dbm_to_scaled_string,
    rx_power_percent,
    rx_snr_percent,
    tx_if_power_percent,
    tx_rf_power_percent,
)
from surfbeam_status.models import ModemRecord, OutdoorUnitRecord

OMEGA = "Ω"

ONE_KB = 1024.0
ONE_MB = ONE_KB * ONE_KB
ONE_GB = ONE_KB * ONE_MB


class SignalGrade(Enum):
    """Color grade of the downlink SNR gauge."""

    GREEN = "green"
    YELLOW = "yellow"
    ORANGE = "orange"
    RED = "red"


def snr_grade(snr_db: float) -> SignalGrade:
    """Grade a downlink SNR: green from 10 dB, yellow from 7, orange from 4."""
    if snr_db >= 10:
        return SignalGrade.GREEN
    if snr_db >= 7:
        return SignalGrade.YELLOW
    if snr_db >= 4:
        return SignalGrade.ORANGE
    return SignalGrade.RED


def format_decibels(value: float, unit: str = "dB") -> str:
    return f"{value:.1f} {unit}"


def format_power(dbm: float) -> str:
    """Power as dBm and as prefixed Watts."""
    return f"{format_decibels(dbm, 'dBm')} / {dbm_to_scaled_string(dbm)}"


def format_resistance(ohm: float) -> str:
    return f"{ohm:.1f} {OMEGA}"


def format_temperature(celsius: float) -> str:
    return f"{celsius:g} °C"


def format_byte_count(count: int) -> str:
    """Byte count in 1024-based units, three decimals above one kB."""
    if count >= ONE_GB:
        return f"{count / ONE_GB:.3f} GBytes"
    if count >= ONE_MB:
        return f"{count / ONE_MB:.3f} MBytes"
    if count >= ONE_KB:
        return f"{count / ONE_KB:.3f} kBytes"
    return f"{count} Bytes"


def format_symbol_rate(rate: int) -> str:
    """Symbol rate in Sym/s, kSym/s or MSym/s."""
    if rate >= 1e6:
        return f"{rate / 1e6:.3f} MSym/s"
    if rate >= 1e3:
        return f"{rate / 1e3:.3f} kSym/s"
    return f"{rate} Sym/s"


def summarize_modem(record: ModemRecord) -> dict[str, Any]:
    """
    Display values for a modem record.

    Gauge values are the percentages reported by the modem itself; the
    ``*_interpolated`` entries are recomputed from the physical readings.
    """
    return {
        "modem_state": record.modem_state.value,
        "modem_state_step": record.modem_state.step,
        "status_label": record.status_label,
        "online_time": record.online_time,
        "beam_color": record.beam_color.value,
        "rx_snr": format_decibels(record.rx_snr_db),
        "rx_snr_grade": snr_grade(record.rx_snr_db).value,
        "rx_snr_gauge": clamp_percent(record.rx_snr_percent),
        "rx_snr_interpolated": clamp_percent(rx_snr_percent(record.rx_snr_db)),
        "rx_power": format_power(record.rx_power_dbm),
        "rx_power_gauge": clamp_percent(record.rx_power_percent),
        "rx_power_interpolated": clamp_percent(rx_power_percent(record.rx_power_dbm)),
        "cable_attenuation": format_decibels(record.cable_attenuation_db),
        "cable_attenuation_gauge": clamp_percent(record.cable_attenuation_percent),
        "cable_attenuation_interpolated": clamp_percent(cable_attenuation_percent(record.cable_attenuation_db)),
        "cable_resistance": format_resistance(record.cable_resistance_ohm),
        "cable_resistance_gauge": clamp_percent(record.cable_resistance_percent),
        "tx_packets": str(record.tx_packets),
        "tx_bytes": format_byte_count(record.tx_bytes),
        "rx_packets": str(record.rx_packets),
        "rx_bytes": format_byte_count(record.rx_bytes),
        "uplink_symbol_rate": format_symbol_rate(record.uplink_symbol_rate),
        "downlink_symbol_rate": format_symbol_rate(record.downlink_symbol_rate),
    }


def summarize_outdoor_unit(record: OutdoorUnitRecord) -> dict[str, Any]:
    """Display values for an outdoor unit record."""
    return {
        "polarization": record.polarization.value,
        "beam_color": record.beam_color.value,
        "temperature": format_temperature(record.temperature_celsius),
        "tx_if_power": format_power(record.tx_if_power_dbm),
        "tx_if_power_gauge": clamp_percent(record.tx_if_power_percent),
        "tx_if_power_interpolated": clamp_percent(tx_if_power_percent(record.tx_if_power_dbm)),
        "tx_rf_power": format_power(record.tx_rf_power_dbm),
        "tx_rf_power_gauge": clamp_percent(record.tx_rf_power_percent),
        "tx_rf_power_interpolated": clamp_percent(tx_rf_power_percent(record.tx_rf_power_dbm)),
    }


__all__ = [
    "SignalGrade",
    "format_byte_count",
    "format_decibels",
    "format_power",
    "format_resistance",
    "format_symbol_rate",
    "format_temperature",
    "snr_grade",
    "summarize_modem",
    "summarize_outdoor_unit",
]
