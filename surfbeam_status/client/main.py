"""
Main SurfBeam Modem Status Client
=================================

This module contains the client that polls the two SurfBeam status pages,
decodes them and keeps the latest good record for each endpoint.

The modem and outdoor unit pipelines are independent: a failed fetch or a
rejected document on one endpoint leaves the other endpoint untouched, and
leaves the failing endpoint's previous record in place.

"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Any, Optional

from surfbeam_status.client.decoder import DecodeResult, StatusDocumentDecoder
from surfbeam_status.client.error_handler import ErrorAnalyzer
from surfbeam_status.client.http import (
    MODEM_STATUS_PAGE,
    OUTDOOR_UNIT_STATUS_PAGE,
    StatusRequestHandler,
)
from surfbeam_status.derived import summarize_modem, summarize_outdoor_unit
from surfbeam_status.exceptions import (
    SurfBeamConfigurationError,
    SurfBeamError,
    SurfBeamOperationError,
)
from surfbeam_status.instrumentation import PerformanceInstrumentation
from surfbeam_status.models import DecodeState, ModemRecord, OutdoorUnitRecord
from surfbeam_status.schema import (
    DEFAULT_FIRMWARE,
    MODEM_SCHEMAS,
    OUTDOOR_UNIT_SCHEMAS,
    Record,
    RecordSchema,
    supported_firmware,
)
from surfbeam_status.session import create_surfbeam_session

logger = logging.getLogger("surfbeam-status")

MODEM = "modem"
OUTDOOR_UNIT = "outdoor_unit"


@dataclass
class EndpointStatus:
    """
    Polling state of one status page.

    ``record`` always holds the last successfully decoded record; it is
    replaced as a whole and never cleared by a failed poll.
    """

    name: str
    page: str
    schema: RecordSchema
    state: DecodeState = DecodeState.UNVALIDATED
    record: Optional[Record] = None
    last_error: Optional[str] = None
    last_decoded_at: Optional[float] = None
    decoded_count: int = 0
    rejected_count: int = 0
    failed_count: int = 0
    coercion_failures: tuple[str, ...] = ()

    @property
    def stale(self) -> bool:
        """True when the held record predates the latest poll."""
        return self.record is not None and self.state is not DecodeState.DECODED

    def as_dict(self) -> dict[str, Any]:
        return {
            "page": self.page,
            "firmware": self.schema.firmware,
            "state": self.state.value,
            "stale": self.stale,
            "last_error": self.last_error,
            "last_decoded_at": self.last_decoded_at,
            "decoded_count": self.decoded_count,
            "rejected_count": self.rejected_count,
            "failed_count": self.failed_count,
            "coercion_failures": list(self.coercion_failures),
        }


class SurfBeamStatusClient:
    """
    Status client for the ViaSat SurfBeam 2 satellite modem.

    Polls ``index.cgi?page=modemStatusData`` and ``index.cgi?page=triaStatusData``
    and exposes the decoded ModemRecord and OutdoorUnitRecord.

    Examples:
        >>> with SurfBeamStatusClient() as client:
        ...     status = client.get_status()
        ...     print(status["modem"].modem_state)
    """

    def __init__(
        self,
        host: str = "192.168.100.1",
        port: int = 80,
        concurrent: bool = True,
        max_retries: int = 1,
        base_backoff: float = 0.25,
        timeout: tuple = (2, 5),
        firmware: str = DEFAULT_FIRMWARE,
        capture_errors: bool = True,
        enable_instrumentation: bool = True,
    ):
        """
        Initialize the SurfBeam status client.

        Args:
            host: Modem IP address (default: "192.168.100.1")
            port: HTTP port of the web interface (default: 80)
            concurrent: Fetch both pages in parallel (default: True)
            max_retries: Retry attempts per page for network errors (default: 1)
            base_backoff: Base backoff time in seconds (default: 0.25)
            timeout: (connect_timeout, read_timeout) in seconds (default: (2, 5))
            firmware: Firmware version selecting the field layouts
            capture_errors: Keep error captures for analysis (default: True)
            enable_instrumentation: Record performance metrics (default: True)

        Raises:
            SurfBeamConfigurationError: Invalid parameter values
        """
        self._validate_config(port, max_retries, timeout, firmware)

        self.host = host
        self.port = port
        self.concurrent = concurrent
        self.max_retries = max_retries
        self.base_backoff = base_backoff
        self.timeout = timeout
        self.firmware = firmware
        self.capture_errors = capture_errors

        self.instrumentation = PerformanceInstrumentation() if enable_instrumentation else None
        self.error_analyzer = ErrorAnalyzer(capture_errors=capture_errors)
        self.decoder = StatusDocumentDecoder()

        self.session = create_surfbeam_session(self.instrumentation)
        self.request_handler = StatusRequestHandler(
            session=self.session,
            host=host,
            port=port,
            max_retries=max_retries,
            base_backoff=base_backoff,
            timeout=timeout,
            instrumentation=self.instrumentation,
        )

        self.endpoints: dict[str, EndpointStatus] = {
            MODEM: EndpointStatus(MODEM, MODEM_STATUS_PAGE, MODEM_SCHEMAS[firmware]),
            OUTDOOR_UNIT: EndpointStatus(OUTDOOR_UNIT, OUTDOOR_UNIT_STATUS_PAGE, OUTDOOR_UNIT_SCHEMAS[firmware]),
        }
        self.poll_count = 0

        mode_str = "concurrent" if concurrent else "serial"
        logger.info(f"🛰️ SurfBeamStatusClient initialized for {host}:{port} (firmware {firmware})")
        logger.info(f"🔧 Mode: {mode_str}, Retries: {max_retries}")

    @staticmethod
    def _validate_config(port: int, max_retries: int, timeout: tuple, firmware: str) -> None:
        if not 1 <= port <= 65535:
            raise SurfBeamConfigurationError(
                "Port must be between 1 and 65535", details={"parameter": "port", "value": port}
            )
        if max_retries < 0:
            raise SurfBeamConfigurationError(
                "Retries cannot be negative", details={"parameter": "max_retries", "value": max_retries}
            )
        if len(timeout) != 2 or any(t <= 0 for t in timeout):
            raise SurfBeamConfigurationError(
                "Timeout must be a (connect, read) pair of positive numbers",
                details={"parameter": "timeout", "value": timeout},
            )
        if firmware not in MODEM_SCHEMAS or firmware not in OUTDOOR_UNIT_SCHEMAS:
            raise SurfBeamConfigurationError(
                f"No field layout for firmware {firmware}",
                details={"parameter": "firmware", "value": firmware, "valid_values": supported_firmware()},
            )

    @property
    def modem(self) -> Optional[ModemRecord]:
        """Latest decoded ModemRecord, or None."""
        return self.endpoints[MODEM].record

    @property
    def outdoor_unit(self) -> Optional[OutdoorUnitRecord]:
        """Latest decoded OutdoorUnitRecord, or None."""
        return self.endpoints[OUTDOOR_UNIT].record

    def poll(self) -> dict[str, EndpointStatus]:
        """
        Fetch and decode both status pages once.

        Failures are recorded per endpoint and never raised.

        Returns:
            Endpoint status by endpoint name
        """
        start_time = self.instrumentation.start_timer("poll_complete") if self.instrumentation else time.time()
        self.poll_count += 1

        for endpoint in self.endpoints.values():
            endpoint.state = DecodeState.UNVALIDATED

        if self.concurrent:
            logger.debug("🚀 Polling endpoints concurrently")
            with ThreadPoolExecutor(max_workers=len(self.endpoints)) as executor:
                futures = [executor.submit(self._poll_endpoint, endpoint) for endpoint in self.endpoints.values()]
                for future in as_completed(futures):
                    future.result()
        else:
            logger.debug("🔄 Polling endpoints serially")
            for endpoint in self.endpoints.values():
                self._poll_endpoint(endpoint)

        decoded = [name for name, endpoint in self.endpoints.items() if endpoint.state is DecodeState.DECODED]

        if self.instrumentation:
            self.instrumentation.record_timing("poll_complete", start_time, success=len(decoded) == len(self.endpoints))

        logger.info(f"📊 Poll {self.poll_count}: {len(decoded)}/{len(self.endpoints)} endpoints decoded")
        return self.endpoints

    def _poll_endpoint(self, endpoint: EndpointStatus) -> None:
        """Fetch and decode one page, updating only that endpoint's status."""
        try:
            raw = self.request_handler.fetch(endpoint.page)
        except SurfBeamError as e:
            endpoint.state = DecodeState.UNVALIDATED
            endpoint.last_error = str(e)
            endpoint.failed_count += 1
            self.error_analyzer.analyze_error(e, endpoint.name)
            return

        result = self._decode(endpoint, raw)

        if not result.ok:
            endpoint.state = DecodeState.REJECTED
            endpoint.last_error = str(result.error)
            endpoint.rejected_count += 1
            self.error_analyzer.analyze_error(result.error, endpoint.name, partial_content=raw)
            return

        endpoint.record = result.record
        endpoint.state = DecodeState.DECODED
        endpoint.last_error = None
        endpoint.last_decoded_at = time.time()
        endpoint.decoded_count += 1
        endpoint.coercion_failures = result.coercion_failures
        self.error_analyzer.mark_recovered(endpoint.name)

        if result.coercion_failures:
            logger.info(f"🔧 {endpoint.name}: defaulted unparseable fields {', '.join(result.coercion_failures)}")

    def _decode(self, endpoint: EndpointStatus, raw: str) -> DecodeResult:
        operation = f"decode_{endpoint.name}"
        start_time = self.instrumentation.start_timer(operation) if self.instrumentation else time.time()

        result = self.decoder.decode(raw, endpoint.schema)

        if self.instrumentation:
            self.instrumentation.record_timing(
                operation,
                start_time,
                success=result.ok,
                error_type=None if result.ok else "field_count_mismatch",
                response_size=len(raw),
            )
        return result

    def get_status(self) -> dict[str, Any]:
        """
        Poll both endpoints and return the latest records with display values.

        Returns:
            Dictionary with "modem" and "outdoor_unit" records (None until
            first decoded), their display summaries, per-endpoint state and
            session metadata

        Raises:
            SurfBeamOperationError: Neither endpoint has ever been decoded
        """
        start_time = time.time()
        self.poll()

        modem = self.modem
        outdoor_unit = self.outdoor_unit

        if modem is None and outdoor_unit is None:
            last_errors = {name: endpoint.last_error for name, endpoint in self.endpoints.items()}
            raise SurfBeamOperationError(
                f"No status could be decoded from {self.host}:{self.port}",
                details={"endpoints": list(self.endpoints), "last_errors": last_errors},
            )

        status: dict[str, Any] = {
            "modem": modem,
            "outdoor_unit": outdoor_unit,
            "modem_display": summarize_modem(modem) if modem else None,
            "outdoor_unit_display": summarize_outdoor_unit(outdoor_unit) if outdoor_unit else None,
            "_endpoints": {name: endpoint.as_dict() for name, endpoint in self.endpoints.items()},
            "_request_mode": "concurrent" if self.concurrent else "serial",
            "_performance": {
                "total_time": time.time() - start_time,
                "poll_count": self.poll_count,
            },
        }

        if self.capture_errors and self.error_analyzer.error_captures:
            status["_error_analysis"] = self.error_analyzer.get_error_analysis()

        if self.instrumentation:
            status["_instrumentation"] = self.instrumentation.get_performance_summary()

        return status

    def get_performance_metrics(self) -> dict[str, Any]:
        """Get detailed performance metrics from instrumentation."""
        if not self.instrumentation:
            return {"error": "Performance instrumentation not enabled"}

        return self.instrumentation.get_performance_summary()

    def get_error_analysis(self) -> dict[str, Any]:
        """Get aggregate error analysis for this session."""
        return self.error_analyzer.get_error_analysis()

    def close(self) -> None:
        """Clean up resources."""
        if self.capture_errors and self.error_analyzer.error_captures:
            total_errors = len(self.error_analyzer.error_captures)
            logger.info(f"📊 Session captured {total_errors} errors over {self.poll_count} polls")

        if self.session:
            self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()


__all__ = ["EndpointStatus", "SurfBeamStatusClient"]
