"""
Client Package for SurfBeam Modem Status
========================================

- decoder.py: status document decoding against firmware-pinned schemas
- http.py: status page requests with retry logic
- error_handler.py: per-endpoint error capture and analysis
- main.py: SurfBeamStatusClient orchestration

License: MIT
"""

from .decoder import DecodeResult, StatusDocumentDecoder, decode_modem, decode_outdoor_unit
from .main import EndpointStatus, SurfBeamStatusClient

__all__ = [
    "DecodeResult",
    "EndpointStatus",
    "StatusDocumentDecoder",
    "SurfBeamStatusClient",
    "decode_modem",
    "decode_outdoor_unit",
]
