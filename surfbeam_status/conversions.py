"""
Unit Conversions for SurfBeam Modem Status Client
=================================================

Pure numeric helpers that turn raw RF and cable measurements into values a
person can read: dBm to Watts with SI prefixes, and dB/dBm readings to the
percentages the modem's own web interface shows on its gauges.

The percent interpolations are first degree polynomials fitted to the
modem's reporting range. Below each calibration floor the modem shows an
empty gauge, so these functions return 0 there.

Examples:
    >>> dbm_to_watts(30.0)
    1.0
    >>> dbm_to_scaled_string(0.0)
    '1.0 mW'
    >>> round(rx_snr_percent(10.0), 2)
    46.43

License: MIT
"""

import math
from dataclasses import dataclass

MICRO_SIGN = "µ"

PROGRESS_MIN = 0
PROGRESS_MAX = 255

# (threshold, scale, unit) from the largest tier down
_WATT_TIERS = (
    (1.0, 1.0, "W"),
    (1.0e-3, 1.0e3, "mW"),
    (1.0e-6, 1.0e6, f"{MICRO_SIGN}W"),
    (1.0e-9, 1.0e9, "nW"),
    (1.0e-12, 1.0e12, "pW"),
    (1.0e-15, 1.0e15, "fW"),
)


@dataclass(frozen=True)
class PercentInterpolation:
    """Affine map ``offset + slope * x`` valid from ``floor`` upwards."""

    floor: float
    offset: float
    slope: float

    def __call__(self, value: float) -> float:
        if value < self.floor:
            return 0.0
        return self.offset + value * self.slope


RX_SNR = PercentInterpolation(floor=-3.0, offset=10.71429, slope=3.57143)
RX_POWER = PercentInterpolation(floor=-72.586, offset=119.42208, slope=1.64524)
TX_IF_POWER = PercentInterpolation(floor=-35.5, offset=137.86408, slope=3.8835)
TX_RF_POWER = PercentInterpolation(floor=14.5, offset=-56.31068, slope=3.8835)
CABLE_ATTENUATION = PercentInterpolation(floor=0.0, offset=0.0, slope=6.66666)


def dbm_to_watts(dbm: float) -> float:
    """Convert a power in dBm to Watts."""
    return math.pow(10.0, 0.1 * (dbm - 30.0))


def watts_to_scaled_string(watts: float) -> str:
    """
    Format a power in Watts with the largest SI prefix that keeps it >= 1.

    Watts keep three decimals, prefixed tiers one. Values below the femto
    range fall back to three significant digits in plain Watts.

    Args:
        watts: Power in Watts

    Returns:
        Formatted power, e.g. "1.000 W" or "12.6 nW"

    Examples:
        >>> watts_to_scaled_string(1.0)
        '1.000 W'
        >>> watts_to_scaled_string(0.0005)
        '500.0 µW'
    """
    magnitude = abs(watts)
    for threshold, scale, unit in _WATT_TIERS:
        if magnitude >= threshold:
            decimals = 3 if scale == 1.0 else 1
            return f"{watts * scale:.{decimals}f} {unit}"
    return f"{watts:.3g} W"


def dbm_to_scaled_string(dbm: float) -> str:
    """Convert a power in dBm to a prefixed Watt string."""
    return watts_to_scaled_string(dbm_to_watts(dbm))


def rx_snr_percent(rx_snr_db: float) -> float:
    """Downlink SNR in dB as a gauge percentage."""
    return RX_SNR(rx_snr_db)


def rx_power_percent(rx_power_dbm: float) -> float:
    """Downlink power in dBm as a gauge percentage."""
    return RX_POWER(rx_power_dbm)


def tx_if_power_percent(tx_if_power_dbm: float) -> float:
    """Transmit IF power in dBm as a gauge percentage."""
    return TX_IF_POWER(tx_if_power_dbm)


def tx_rf_power_percent(tx_rf_power_dbm: float) -> float:
    """Transmit RF power in dBm as a gauge percentage."""
    return TX_RF_POWER(tx_rf_power_dbm)


def cable_attenuation_percent(cable_attenuation_db: float) -> float:
    """IFL cable attenuation in dB as a gauge percentage."""
    return CABLE_ATTENUATION(cable_attenuation_db)


def clamp_percent(value: float) -> int:
    """Round a percentage into the 0..255 range used by progress indicators."""
    if math.isnan(value):
        return PROGRESS_MIN
    return int(max(PROGRESS_MIN, min(PROGRESS_MAX, round(value))))


__all__ = [
    "CABLE_ATTENUATION",
    "MICRO_SIGN",
    "RX_POWER",
    "RX_SNR",
    "TX_IF_POWER",
    "TX_RF_POWER",
    "PercentInterpolation",
    "cable_attenuation_percent",
    "clamp_percent",
    "dbm_to_scaled_string",
    "dbm_to_watts",
    "rx_power_percent",
    "rx_snr_percent",
    "tx_if_power_percent",
    "tx_rf_power_percent",
    "watts_to_scaled_string",
]
