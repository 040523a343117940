"""
Field Index Schemas for SurfBeam Status Documents
=================================================

The modem's CGI pages return a single line of ``##``-separated values with
no names attached. What each position means was worked out against one
firmware build, so every table here is pinned to a firmware version and to
the total field count observed for it. Positions missing from a table are
reserved and ignored.

A new firmware layout is supported by adding a new RecordSchema instance to
MODEM_SCHEMAS / OUTDOOR_UNIT_SCHEMAS; the decoder itself does not change.

Coercions raise ValueError on bad input. The decoder turns that into the
field's default value, so one garbled number never sinks a whole record.

License: MIT
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Callable, Union

from surfbeam_status.models import (
    BEAM_COLOR_CLASSIFIER,
    MODEM_STATE_CLASSIFIER,
    CategoryClassifier,
    ModemRecord,
    OutdoorUnitRecord,
)

FIELD_DELIMITER = "##"
FIELD_FILL = "#"

DEFAULT_FIRMWARE = "UT_3.7.8.9.5"

UINT8_MAX = 2**8 - 1
UINT32_MAX = 2**32 - 1
UINT64_MAX = 2**64 - 1

_UNSIGNED_PATTERN = re.compile(r"\+?[0-9]+")
_DECIMAL_PATTERN = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

Record = Union[ModemRecord, OutdoorUnitRecord]


def _parse_unsigned(raw: str, maximum: int) -> int:
    stripped = raw.strip()
    if not _UNSIGNED_PATTERN.fullmatch(stripped):
        raise ValueError(f"not an unsigned integer: {raw!r}")
    value = int(stripped, 10)
    if value > maximum:
        raise ValueError(f"{value} exceeds {maximum}")
    return value


def as_text(raw: str) -> str:
    """Copy the field verbatim."""
    return raw


def as_counter(raw: str) -> int:
    """Unsigned 64-bit counter with thousands separators, e.g. "1,234,567"."""
    return _parse_unsigned(raw.replace(",", ""), UINT64_MAX)


def as_unsigned32(raw: str) -> int:
    """Unsigned 32-bit integer."""
    return _parse_unsigned(raw, UINT32_MAX)


def as_percent(raw: str) -> int:
    """Percentage as reported by the modem, e.g. "90%", in the 0..255 range."""
    return _parse_unsigned(raw.replace("%", ""), UINT8_MAX)


def as_decimal(raw: str) -> float:
    """Decimal number with a '.' separator regardless of locale."""
    stripped = raw.strip()
    if not _DECIMAL_PATTERN.fullmatch(stripped):
        raise ValueError(f"not a decimal number: {raw!r}")
    value = float(stripped)
    if not math.isfinite(value):
        raise ValueError(f"out of range: {raw!r}")
    return value


def as_category(classifier: CategoryClassifier) -> Callable[[str], Any]:
    """Classify the field with an ordered substring classifier."""

    def coerce(raw: str) -> Any:
        return classifier(raw)

    return coerce


@dataclass(frozen=True)
class FieldSpec:
    """How one position of a status document maps onto a record attribute."""

    attribute: str
    coerce: Callable[[str], Any]
    default: Any


def text(attribute: str) -> FieldSpec:
    return FieldSpec(attribute, as_text, "")


def counter(attribute: str) -> FieldSpec:
    return FieldSpec(attribute, as_counter, 0)


def unsigned32(attribute: str) -> FieldSpec:
    return FieldSpec(attribute, as_unsigned32, 0)


def percent(attribute: str) -> FieldSpec:
    return FieldSpec(attribute, as_percent, 0)


def decimal(attribute: str) -> FieldSpec:
    return FieldSpec(attribute, as_decimal, 0.0)


def category(attribute: str, classifier: CategoryClassifier) -> FieldSpec:
    return FieldSpec(attribute, as_category(classifier), classifier.default)


@dataclass(frozen=True)
class RecordSchema:
    """
    Firmware-pinned layout of one status document.

    Attributes:
        name: Endpoint name, "modem" or "outdoor_unit"
        firmware: Firmware version the layout was derived from
        field_count: Exact number of ``##``-separated fields expected
        record_type: Record class built from the decoded attributes
        fields: Position to FieldSpec table
    """

    name: str
    firmware: str
    field_count: int
    record_type: type
    fields: dict[int, FieldSpec]

    def __post_init__(self) -> None:
        for index, spec in self.fields.items():
            if not 0 <= index < self.field_count:
                raise ValueError(f"{self.name}: index {index} outside {self.field_count} fields")
            if spec.attribute not in self.record_type.__dataclass_fields__:
                raise ValueError(f"{self.name}: {self.record_type.__name__} has no attribute {spec.attribute!r}")


MODEM_SCHEMA_UT_3_7_8_9_5 = RecordSchema(
    name="modem",
    firmware="UT_3.7.8.9.5",
    field_count=81,
    record_type=ModemRecord,
    fields={
        0: text("ip_address"),
        1: text("mac_address"),
        2: text("sw_version"),
        3: text("hw_version"),
        4: text("status_label"),
        5: counter("rx_packets"),
        6: counter("rx_bytes"),
        7: counter("tx_packets"),
        8: counter("tx_bytes"),
        9: text("online_time"),
        10: unsigned32("loss_of_sync_count"),
        11: decimal("rx_snr_db"),
        12: percent("rx_snr_percent"),
        13: text("serial_number"),
        14: decimal("rx_power_dbm"),
        15: percent("rx_power_percent"),
        16: decimal("cable_resistance_ohm"),
        17: percent("cable_resistance_percent"),
        18: text("odu_telemetry_status"),
        19: decimal("cable_attenuation_db"),
        20: percent("cable_attenuation_percent"),
        21: text("ifl_type"),
        22: text("part_number"),
        23: category("modem_state", MODEM_STATE_CLASSIFIER),
        24: category("beam_color", BEAM_COLOR_CLASSIFIER),
        26: text("client_side_proxy_status"),
        27: text("client_side_proxy_health"),
        30: text("last_page_load_duration"),
        32: unsigned32("uplink_symbol_rate"),
        40: text("bdt_version"),
        46: text("vendor"),
        50: unsigned32("downlink_symbol_rate"),
        51: text("downlink_modulation"),
    },
)

OUTDOOR_UNIT_SCHEMA_UT_3_7_8_9_5 = RecordSchema(
    name="outdoor_unit",
    firmware="UT_3.7.8.9.5",
    field_count=84,
    record_type=OutdoorUnitRecord,
    fields={
        4: text("power_mode"),
        5: text("polarization_type"),
        7: decimal("tx_if_power_dbm"),
        9: text("ifl_type"),
        10: decimal("temperature_celsius"),
        16: text("serial_number"),
        17: decimal("tx_rf_power_dbm"),
        24: text("fw_version"),
        25: percent("tx_if_power_percent"),
        26: percent("tx_rf_power_percent"),
        29: category("beam_color", BEAM_COLOR_CLASSIFIER),
        81: text("vendor"),
    },
)

MODEM_SCHEMAS: dict[str, RecordSchema] = {
    MODEM_SCHEMA_UT_3_7_8_9_5.firmware: MODEM_SCHEMA_UT_3_7_8_9_5,
}

OUTDOOR_UNIT_SCHEMAS: dict[str, RecordSchema] = {
    OUTDOOR_UNIT_SCHEMA_UT_3_7_8_9_5.firmware: OUTDOOR_UNIT_SCHEMA_UT_3_7_8_9_5,
}


def supported_firmware() -> list[str]:
    """Firmware versions that have both a modem and an outdoor unit schema."""
    return sorted(set(MODEM_SCHEMAS) & set(OUTDOOR_UNIT_SCHEMAS))


__all__ = [
    "DEFAULT_FIRMWARE",
    "FIELD_DELIMITER",
    "FIELD_FILL",
    "MODEM_SCHEMAS",
    "MODEM_SCHEMA_UT_3_7_8_9_5",
    "OUTDOOR_UNIT_SCHEMAS",
    "OUTDOOR_UNIT_SCHEMA_UT_3_7_8_9_5",
    "FieldSpec",
    "Record",
    "RecordSchema",
    "as_counter",
    "as_decimal",
    "as_percent",
    "as_text",
    "as_unsigned32",
    "supported_firmware",
]
