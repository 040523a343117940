"""
Error Handler for SurfBeam Modem Status Client
==============================================

This module captures and classifies failed polls per endpoint: transport
errors raised while fetching a page and status documents rejected by the
decoder. Captures are marked recovered once the same endpoint decodes again.

"""

import logging
import time
from collections import Counter, deque
from typing import Any, Optional

from surfbeam_status.exceptions import (
    SurfBeamConnectionError,
    SurfBeamFieldCountError,
    SurfBeamHTTPError,
    SurfBeamTimeoutError,
)
from surfbeam_status.models import ErrorCapture

logger = logging.getLogger("surfbeam-status")

# Captures kept per session; older ones are dropped so --watch stays bounded
MAX_ERROR_CAPTURES = 1000


class ErrorAnalyzer:
    """Analyzes and captures errors for debugging and monitoring."""

    def __init__(self, capture_errors: bool = True, max_captures: int = MAX_ERROR_CAPTURES):
        """
        Initialize error analyzer.

        Args:
            capture_errors: Whether to keep error captures for the session report
            max_captures: Most recent captures to keep
        """
        self.capture_errors = capture_errors
        self.error_captures: deque[ErrorCapture] = deque(maxlen=max_captures)

    def analyze_error(
        self,
        error: Exception,
        endpoint: str,
        partial_content: Optional[str] = None,
    ) -> ErrorCapture:
        """
        Classify a failed poll of one endpoint.

        Args:
            error: Exception raised by the transport, or the decode rejection
            endpoint: Endpoint name, "modem" or "outdoor_unit"
            partial_content: Document text, when one was received

        Returns:
            ErrorCapture object with analysis
        """
        error_details = str(error)
        http_status = 0
        structural = False

        if isinstance(error, SurfBeamFieldCountError):
            error_type = "field_count_mismatch"
            structural = True
        elif isinstance(error, SurfBeamHTTPError):
            http_status = error.status_code or 0
            error_type = f"http_{http_status}" if http_status else "http"
        elif isinstance(error, SurfBeamTimeoutError):
            error_type = "timeout"
        elif isinstance(error, SurfBeamConnectionError):
            error_type = "connection"
        elif "timeout" in error_details.lower():
            error_type = "timeout"
        elif "connection" in error_details.lower():
            error_type = "connection"
        else:
            error_type = "unknown"

        capture = ErrorCapture(
            timestamp=time.time(),
            endpoint=endpoint,
            http_status=http_status,
            error_type=error_type,
            raw_error=error_details,
            partial_content=(partial_content or "")[:500],
            recovery_successful=False,
            structural=structural,
        )

        if self.capture_errors:
            self.error_captures.append(capture)

        logger.warning(f"🔍 {endpoint} poll failed: {error_type} - {error_details[:200]}")

        return capture

    def mark_recovered(self, endpoint: str) -> int:
        """
        Mark outstanding captures for an endpoint as recovered.

        Returns:
            Number of captures newly marked
        """
        recovered = 0
        # Everything before the endpoint's last recovered capture is already marked
        for capture in reversed(self.error_captures):
            if capture.endpoint != endpoint:
                continue
            if capture.recovery_successful:
                break
            capture.recovery_successful = True
            recovered += 1

        if recovered:
            logger.info(f"✅ {endpoint} recovered after {recovered} failed poll(s)")

        return recovered

    def get_error_analysis(self) -> dict[str, Any]:
        """
        Aggregate the captured errors of this session.

        Returns:
            Counts by error type and endpoint, structural rejections,
            recovery statistics, a timeline and pattern notes; or a message
            when nothing was captured
        """
        captures = self.error_captures
        if not captures:
            return {"message": "No errors captured yet"}

        structural = sum(1 for c in captures if c.structural)
        recoveries = sum(1 for c in captures if c.recovery_successful)
        transport = len(captures) - structural

        patterns = []
        if structural:
            patterns.append(
                f"Rejected documents: {structural} (field count mismatch - firmware layout may have changed)"
            )
        if transport:
            patterns.append(f"Transport errors: {transport} (network/timeout/HTTP issues)")

        return {
            "total_errors": len(captures),
            "error_types": dict(Counter(c.error_type for c in captures)),
            "errors_by_endpoint": dict(Counter(c.endpoint for c in captures)),
            "structural_rejections": structural,
            "recovery_stats": {
                "total_recoveries": recoveries,
                "recovery_rate": recoveries / len(captures),
            },
            "timeline": [
                {
                    "timestamp": c.timestamp,
                    "endpoint": c.endpoint,
                    "error_type": c.error_type,
                    "recovered": c.recovery_successful,
                    "http_status": c.http_status,
                }
                for c in captures
            ],
            "patterns": patterns,
        }

    def clear_captures(self) -> None:
        self.error_captures.clear()


__all__ = ["ErrorAnalyzer"]
