"""
Data Models for SurfBeam Modem Status Client
============================================

This module contains the telemetry records, categorical enums and the
bookkeeping dataclasses used by the SurfBeam Modem Status Client.

Records are frozen: every successful decode builds a complete new record and
publishes it in one assignment, so a reader always sees a whole snapshot.

"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

V = TypeVar("V", bound=Enum)


class ModemState(Enum):
    """Acquisition state of the indoor modem, in the order it is reached."""

    UNKNOWN = "Unknown"
    SCANNING = "Scanning"
    RANGING = "Ranging"
    NETWORK_ENTRY = "Network Entry"
    DHCP = "DHCP"
    ONLINE = "Online"

    @property
    def step(self) -> int:
        """Acquisition step, 1 to 5 of 5 (0 when unknown)."""
        return list(ModemState).index(self)


class BeamColor(Enum):
    """Satellite beam color reported by the modem and the outdoor unit."""

    UNKNOWN = "Unknown"
    BLUE = "Blue"
    ORANGE = "Orange"
    PURPLE = "Purple"
    GREEN = "Green"


class Polarization(Enum):
    """Antenna polarization of the outdoor unit."""

    UNKNOWN = "Unknown"
    CIRCULAR_LEFT = "Circular Left"
    CIRCULAR_RIGHT = "Circular Right"
    HORIZONTAL = "Horizontal"
    VERTICAL = "Vertical"


class DecodeState(Enum):
    """Validity of the latest status document received from one endpoint."""

    UNVALIDATED = "unvalidated"
    DECODED = "decoded"
    REJECTED = "rejected"


class CategoryClassifier(Generic[V]):
    """
    Ordered substring rules mapping free text to an enum variant.

    Rules are evaluated top-down with a case-insensitive containment test;
    the first match wins and the default variant is returned on exhaustion.

    Examples:
        >>> MODEM_STATE_CLASSIFIER("Online - DHCP renewed")
        <ModemState.DHCP: 'DHCP'>
        >>> BEAM_COLOR_CLASSIFIER("n/a")
        <BeamColor.UNKNOWN: 'Unknown'>
    """

    def __init__(self, rules: tuple[tuple[str, V], ...], default: V) -> None:
        self.rules = tuple((needle.lower(), variant) for needle, variant in rules)
        self.default = default

    def __call__(self, text: str) -> V:
        haystack = text.lower()
        for needle, variant in self.rules:
            if needle in haystack:
                return variant
        return self.default


MODEM_STATE_CLASSIFIER: CategoryClassifier[ModemState] = CategoryClassifier(
    (
        ("scanning", ModemState.SCANNING),
        ("ranging", ModemState.RANGING),
        ("network", ModemState.NETWORK_ENTRY),
        ("dhcp", ModemState.DHCP),
        ("online", ModemState.ONLINE),
    ),
    default=ModemState.UNKNOWN,
)

BEAM_COLOR_CLASSIFIER: CategoryClassifier[BeamColor] = CategoryClassifier(
    (
        ("blue", BeamColor.BLUE),
        ("orange", BeamColor.ORANGE),
        ("purple", BeamColor.PURPLE),
        ("green", BeamColor.GREEN),
    ),
    default=BeamColor.UNKNOWN,
)

POLARIZATION_CLASSIFIER: CategoryClassifier[Polarization] = CategoryClassifier(
    (
        ("left", Polarization.CIRCULAR_LEFT),
        ("right", Polarization.CIRCULAR_RIGHT),
        ("horiz", Polarization.HORIZONTAL),
        ("vert", Polarization.VERTICAL),
    ),
    default=Polarization.UNKNOWN,
)


@dataclass(frozen=True)
class ModemRecord:
    """
    Decoded snapshot of the indoor modem status document.

    Attributes:
        ip_address: IPv4 address of the modem
        mac_address: MAC address
        sw_version: Software version
        hw_version: Hardware version
        status_label: Free-text status shown by the web interface
        rx_packets: Received packets (thousands separators stripped)
        rx_bytes: Received bytes
        tx_packets: Transmitted packets
        tx_bytes: Transmitted bytes
        online_time: Online time as reported, e.g. "2 days 03:14:07"
        loss_of_sync_count: Loss-of-sync events
        rx_snr_db: Downlink SNR in dB
        rx_snr_percent: Downlink SNR as reported by the modem, 0-255
        serial_number: Modem serial number
        rx_power_dbm: Downlink power in dBm
        rx_power_percent: Downlink power as reported by the modem
        cable_resistance_ohm: IFL cable resistance in Ohm
        cable_resistance_percent: IFL cable resistance as reported by the modem
        odu_telemetry_status: Outdoor unit telemetry status text
        cable_attenuation_db: IFL cable attenuation in dB
        cable_attenuation_percent: IFL cable attenuation as reported by the modem
        ifl_type: Inter-facility link type
        part_number: Modem part number
        modem_state: Acquisition state classified from the status text
        beam_color: Beam color classified from the satellite status text
        client_side_proxy_status: Client-side proxy status
        client_side_proxy_health: Client-side proxy health
        last_page_load_duration: Last page load duration text
        uplink_symbol_rate: Uplink symbol rate in Sym/s
        bdt_version: Beam data table version
        vendor: Vendor
        downlink_symbol_rate: Downlink symbol rate in Sym/s
        downlink_modulation: Downlink modulation type
    """

    ip_address: str = ""
    mac_address: str = ""
    sw_version: str = ""
    hw_version: str = ""
    status_label: str = ""
    rx_packets: int = 0
    rx_bytes: int = 0
    tx_packets: int = 0
    tx_bytes: int = 0
    online_time: str = ""
    loss_of_sync_count: int = 0
    rx_snr_db: float = 0.0
    rx_snr_percent: int = 0
    serial_number: str = ""
    rx_power_dbm: float = 0.0
    rx_power_percent: int = 0
    cable_resistance_ohm: float = 0.0
    cable_resistance_percent: int = 0
    odu_telemetry_status: str = ""
    cable_attenuation_db: float = 0.0
    cable_attenuation_percent: int = 0
    ifl_type: str = ""
    part_number: str = ""
    modem_state: ModemState = ModemState.UNKNOWN
    beam_color: BeamColor = BeamColor.UNKNOWN
    client_side_proxy_status: str = ""
    client_side_proxy_health: str = ""
    last_page_load_duration: str = ""
    uplink_symbol_rate: int = 0
    bdt_version: str = ""
    vendor: str = ""
    downlink_symbol_rate: int = 0
    downlink_modulation: str = ""


@dataclass(frozen=True)
class OutdoorUnitRecord:
    """
    Decoded snapshot of the outdoor unit (TRIA) status document.

    Attributes:
        power_mode: Power mode text
        polarization_type: Polarization as reported; see ``polarization``
        tx_if_power_dbm: Transmit IF power in dBm
        ifl_type: Inter-facility link type
        temperature_celsius: Outdoor unit temperature in Celsius
        serial_number: Outdoor unit serial number
        tx_rf_power_dbm: Transmit RF power in dBm
        fw_version: Outdoor unit firmware version
        tx_if_power_percent: Transmit IF power as reported by the modem
        tx_rf_power_percent: Transmit RF power as reported by the modem
        beam_color: Beam color classified from the satellite status text
        vendor: Vendor
    """

    power_mode: str = ""
    polarization_type: str = ""
    tx_if_power_dbm: float = 0.0
    ifl_type: str = ""
    temperature_celsius: float = 0.0
    serial_number: str = ""
    tx_rf_power_dbm: float = 0.0
    fw_version: str = ""
    tx_if_power_percent: int = 0
    tx_rf_power_percent: int = 0
    beam_color: BeamColor = BeamColor.UNKNOWN
    vendor: str = ""

    @property
    def polarization(self) -> Polarization:
        """Polarization classified from the free-text polarization type."""
        return POLARIZATION_CLASSIFIER(self.polarization_type)


@dataclass
class TimingMetrics:
    """Detailed timing metrics for performance analysis."""

    operation: str
    start_time: float
    end_time: float
    duration: float
    success: bool
    error_type: Optional[str] = None
    retry_count: int = 0
    http_status: Optional[int] = None
    response_size: int = 0

    @property
    def duration_ms(self) -> float:
        """Duration in milliseconds."""
        return self.duration * 1000


@dataclass
class ErrorCapture:
    """Captures details about a failed poll of one endpoint."""

    timestamp: float
    endpoint: str
    http_status: int
    error_type: str
    raw_error: str
    partial_content: str
    recovery_successful: bool
    structural: bool  # True if the document was received but rejected


__all__ = [
    "BEAM_COLOR_CLASSIFIER",
    "MODEM_STATE_CLASSIFIER",
    "POLARIZATION_CLASSIFIER",
    "BeamColor",
    "CategoryClassifier",
    "DecodeState",
    "ErrorCapture",
    "ModemRecord",
    "ModemState",
    "OutdoorUnitRecord",
    "Polarization",
    "TimingMetrics",
]
