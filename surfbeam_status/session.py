"""
HTTP Session Setup for SurfBeam Modem Status Client
===================================================

The SurfBeam web interface is plain HTTP on the LAN side of the modem. This
module builds the requests Session used for the two status pages, with an
instrumented adapter and a conservative urllib3 retry policy.

License: MIT
"""

import logging

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

# Reduce urllib3 logging noise for retries we already account for
logging.getLogger("urllib3.connectionpool").setLevel(logging.ERROR)

logger = logging.getLogger("surfbeam-status")


class InstrumentedHTTPAdapter(HTTPAdapter):
    """HTTPAdapter that records request timing in PerformanceInstrumentation."""

    def __init__(self, instrumentation=None, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.instrumentation = instrumentation
        logger.debug("🔧 Initialized InstrumentedHTTPAdapter")

    def send(
        self,
        request,
        stream=False,
        timeout=None,
        verify=True,
        cert=None,
        proxies=None,
    ):
        start_time = self.instrumentation.start_timer("http_request") if self.instrumentation else None

        try:
            response = super().send(request, stream=stream, timeout=timeout, verify=verify, cert=cert, proxies=proxies)
        except Exception as e:
            if self.instrumentation:
                self.instrumentation.record_timing(
                    "http_request",
                    start_time,
                    success=False,
                    error_type=str(type(e).__name__),
                )
            raise

        if self.instrumentation:
            self.instrumentation.record_timing(
                "http_request",
                start_time,
                success=response.status_code == 200,
                http_status=response.status_code,
                response_size=len(response.content) if not stream else 0,
            )

        return response


def create_surfbeam_session(instrumentation=None) -> requests.Session:
    """
    Create a requests Session for the SurfBeam status pages.

    Returns:
        requests.Session with an instrumented adapter mounted for http/https
    """
    session = requests.Session()

    # Retries failed connects only; the request handler owns timeouts and status codes
    retry_strategy = Retry(
        total=2,
        connect=2,
        read=0,
        status=0,
        allowed_methods=["GET"],
        backoff_factor=0.2,
        respect_retry_after_header=False,
        raise_on_status=False,
    )

    adapter = InstrumentedHTTPAdapter(
        instrumentation=instrumentation,
        pool_connections=1,
        pool_maxsize=2,
        max_retries=retry_strategy,
        pool_block=False,
    )

    session.mount("http://", adapter)
    session.mount("https://", adapter)

    session.headers.update(
        {
            "User-Agent": "SurfBeamStatusClient/1.0.0",
            "Accept": "text/html, text/plain, */*",
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
        }
    )

    logger.debug("🔧 Created SurfBeam session")
    return session


__all__ = ["InstrumentedHTTPAdapter", "create_surfbeam_session"]
