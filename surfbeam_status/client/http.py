"""
HTTP Request Handling for SurfBeam Modem Status Client
======================================================

This module fetches the CGI status pages from the modem's web interface,
with retry logic for network errors. A page is only handed on once its
body has been received completely.

"""

import logging
import random
import time
from typing import Any, Optional

import requests

from surfbeam_status.exceptions import (
    SurfBeamHTTPError,
    SurfBeamTimeoutError,
    wrap_connection_error,
)

logger = logging.getLogger("surfbeam-status")

MODEM_STATUS_PAGE = "modemStatusData"
OUTDOOR_UNIT_STATUS_PAGE = "triaStatusData"


class StatusRequestHandler:
    """Handles status page GET requests with retry logic."""

    def __init__(
        self,
        session: requests.Session,
        host: str,
        port: int = 80,
        max_retries: int = 1,
        base_backoff: float = 0.25,
        timeout: tuple = (2, 5),
        instrumentation: Optional[Any] = None,
    ):
        """
        Initialize status request handler.

        Args:
            session: HTTP session to use
            host: Modem hostname or IP address
            port: HTTP port of the web interface
            max_retries: Maximum retry attempts
            base_backoff: Base backoff time in seconds
            timeout: Request timeout (connect, read)
            instrumentation: Optional performance instrumentation
        """
        self.session = session
        self.host = host
        self.port = port
        self.base_url = f"http://{host}:{port}"
        self.max_retries = max_retries
        self.base_backoff = base_backoff
        self.timeout = timeout
        self.instrumentation = instrumentation

    def page_url(self, page: str) -> str:
        return f"{self.base_url}/index.cgi?page={page}"

    def fetch(self, page: str) -> str:
        """
        Fetch one status page, retrying connection errors and timeouts.

        Args:
            page: Value of the ``page`` query parameter

        Returns:
            Response body as received, possibly empty

        Raises:
            SurfBeamHTTPError: Non-200 answer (not retried)
            SurfBeamTimeoutError: Timed out on every attempt
            SurfBeamConnectionError: Could not connect on any attempt
        """
        attempt = 0
        while True:
            try:
                return self._get(page, attempt)

            except requests.exceptions.Timeout as e:
                logger.debug(f"🔧 Timeout fetching {page}, attempt {attempt + 1}")
                if attempt >= self.max_retries:
                    logger.error(f"💥 All retry attempts exhausted for {page}")
                    raise SurfBeamTimeoutError(
                        f"Request for {page} timed out",
                        details={"page": page, "attempt": attempt + 1, "timeout": self.timeout},
                    ) from e

            except requests.exceptions.ConnectionError as e:
                logger.debug(f"🔧 Connection error fetching {page}, attempt {attempt + 1}")
                if attempt >= self.max_retries:
                    logger.error(f"💥 All retry attempts exhausted for {page}")
                    raise wrap_connection_error(e, self.host, self.port) from e

            except requests.exceptions.RequestException as e:
                raise SurfBeamHTTPError(
                    f"Request for {page} failed: {e}",
                    details={"page": page, "error_type": type(e).__name__},
                ) from e

            attempt += 1
            backoff_time = self._exponential_backoff(attempt - 1)
            logger.info(f"🔄 Retry {attempt}/{self.max_retries} for {page} after {backoff_time:.2f}s")
            time.sleep(backoff_time)

    def _get(self, page: str, attempt: int) -> str:
        """Issue a single GET for a status page."""
        operation = f"fetch_{page}"
        start_time = self.instrumentation.start_timer(operation) if self.instrumentation else time.time()

        logger.debug(f"📤 GET {self.page_url(page)}")

        try:
            response = self.session.get(
                f"{self.base_url}/index.cgi",
                params={"page": page},
                timeout=self.timeout,
            )
        except Exception as e:
            if self.instrumentation:
                self.instrumentation.record_timing(
                    operation,
                    start_time,
                    success=False,
                    error_type=str(type(e).__name__),
                    retry_count=attempt,
                )
            raise

        if response.status_code != 200:
            if self.instrumentation:
                self.instrumentation.record_timing(
                    operation,
                    start_time,
                    success=False,
                    error_type=f"HTTP_{response.status_code}",
                    retry_count=attempt,
                    http_status=response.status_code,
                )
            raise SurfBeamHTTPError(
                f"HTTP {response.status_code} response for {page}",
                status_code=response.status_code,
                details={"page": page, "response_text": response.text[:500]},
            )

        body = response.content.decode("utf-8", errors="replace")
        logger.debug(f"📥 {page}: {len(body)} chars")

        if self.instrumentation:
            self.instrumentation.record_timing(
                operation,
                start_time,
                success=True,
                retry_count=attempt,
                http_status=response.status_code,
                response_size=len(body),
            )

        return body

    def _exponential_backoff(self, attempt: int, jitter: bool = True) -> float:
        """Calculate exponential backoff time with optional jitter."""
        backoff_time = self.base_backoff * (2**attempt)

        if jitter:
            backoff_time += random.uniform(0, backoff_time * 0.1)

        return float(min(backoff_time, 5.0))


__all__ = ["MODEM_STATUS_PAGE", "OUTDOOR_UNIT_STATUS_PAGE", "StatusRequestHandler"]
