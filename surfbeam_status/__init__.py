"""
SurfBeam Modem Status Library
=============================

Python library for reading the status pages of a ViaSat SurfBeam 2
satellite modem and its outdoor unit (TRIA).

The modem serves two ``##``-delimited telemetry documents from its LAN web
interface. This library fetches them, decodes them against firmware-pinned
field layouts into typed records and derives display values such as power
in Watts and gauge percentages.

Quick Start:
    >>> from surfbeam_status import SurfBeamStatusClient
    >>> with SurfBeamStatusClient(host="192.168.100.1") as client:
    ...     status = client.get_status()
    ...     print(f"State: {status['modem'].modem_state.value}")
    ...     print(f"Rx power: {status['modem_display']['rx_power']}")

Decoding without a modem:
    >>> from surfbeam_status import decode_modem
    >>> result = decode_modem(raw_document)
    >>> if result.ok:
    ...     print(result.record.rx_snr_db)

Error Handling:
    Transport errors raise subclasses of SurfBeamError. A document with the
    wrong number of fields is rejected without raising; the previous record
    for that endpoint stays in place.

This is an unofficial library not affiliated with ViaSat.

License: MIT
"""

from .client.decoder import DecodeResult, StatusDocumentDecoder, decode_modem, decode_outdoor_unit
from .client.main import SurfBeamStatusClient
from .exceptions import (
    SurfBeamConfigurationError,
    SurfBeamConnectionError,
    SurfBeamError,
    SurfBeamFieldCountError,
    SurfBeamHTTPError,
    SurfBeamOperationError,
    SurfBeamParsingError,
    SurfBeamTimeoutError,
)
from .models import BeamColor, DecodeState, ModemRecord, ModemState, OutdoorUnitRecord, Polarization

# Version information
__version__ = "1.0.0"
__license__ = "MIT"

# Public API
__all__ = [
    "BeamColor",
    "DecodeResult",
    "DecodeState",
    "ModemRecord",
    "ModemState",
    "OutdoorUnitRecord",
    "Polarization",
    "StatusDocumentDecoder",
    "SurfBeamConfigurationError",
    "SurfBeamConnectionError",
    "SurfBeamError",
    "SurfBeamFieldCountError",
    "SurfBeamHTTPError",
    "SurfBeamOperationError",
    "SurfBeamParsingError",
    "SurfBeamStatusClient",
    "SurfBeamTimeoutError",
    "__license__",
    "__version__",
    "decode_modem",
    "decode_outdoor_unit",
]
