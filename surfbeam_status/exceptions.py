"""
Custom exceptions for the SurfBeam Modem Status Client.

This module defines all custom exceptions used throughout the
surfbeam-modem-status library. All exceptions inherit from SurfBeamError
for easy catching of library-specific errors.

Transport failures are raised. Decode failures are not: a rejected status
document is reported as a SurfBeamFieldCountError value inside a
DecodeResult, so one endpoint's bad document never unwinds through the
other endpoint's pipeline.

Example usage:
    try:
        with SurfBeamStatusClient(host="192.168.100.1") as client:
            status = client.get_status()
    except SurfBeamConnectionError as e:
        print(f"Modem unreachable: {e}")
    except SurfBeamError as e:
        print(f"SurfBeam error: {e}")

License: MIT
"""

import socket
from typing import Any, Optional


class SurfBeamError(Exception):
    """
    Base exception for all SurfBeam Modem Status Client errors.

    All exceptions include contextual details to help with debugging and
    monitoring integration.

    Attributes:
        message: Human-readable error message
        details: Optional dictionary with additional error context

    Examples:
        >>> try:
        ...     status = client.get_status()
        ... except SurfBeamTimeoutError:
        ...     print("Modem did not answer in time")
        ... except SurfBeamError as e:
        ...     print(f"Other modem error: {e}")
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        """
        Initialize SurfBeamError.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message


class SurfBeamConnectionError(SurfBeamError):
    """The modem web interface could not be reached. Details carry host and port."""


class SurfBeamTimeoutError(SurfBeamConnectionError):
    """A status page request timed out on every attempt."""


class SurfBeamHTTPError(SurfBeamError):
    """
    Raised when the modem web interface answers with a non-200 status.

    Attributes:
        status_code: HTTP status code of the answer, if one was received
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)
        self.status_code = status_code
        if status_code:
            self.details["status_code"] = status_code


class SurfBeamParsingError(SurfBeamError):
    """A status document could not be decoded. Returned inside a DecodeResult, not raised."""


class SurfBeamFieldCountError(SurfBeamParsingError):
    """
    A status document split into the wrong number of fields.

    Field meanings are positional, so a miscount invalidates every mapping
    and the whole document is rejected.

    Attributes:
        expected: Field count pinned by the schema's firmware version
        actual: Field count found in the document
    """

    def __init__(
        self,
        message: str,
        expected: int,
        actual: int,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)
        self.expected = expected
        self.actual = actual
        self.details.setdefault("expected", expected)
        self.details.setdefault("actual", actual)


class SurfBeamConfigurationError(SurfBeamError):
    """
    Invalid client settings: port, retries, timeout pair or firmware version.

    ``details["parameter"]`` names the offending argument.
    """


class SurfBeamOperationError(SurfBeamError):
    """Neither endpoint has a decoded record; ``details["last_errors"]`` holds the reasons."""


def wrap_connection_error(original_error: Exception, host: str, port: int) -> SurfBeamConnectionError:
    """
    Wrap a standard connection exception in SurfBeamConnectionError.

    Args:
        original_error: The original exception
        host: Host that failed to connect
        port: Port that failed to connect

    Returns:
        SurfBeamConnectionError (or SurfBeamTimeoutError) with context
    """
    message = f"Failed to connect to {host}:{port}"

    if isinstance(original_error, socket.timeout):
        return SurfBeamTimeoutError(
            f"Connection to {host}:{port} timed out",
            details={
                "host": host,
                "port": port,
                "timeout_type": "connection",
                "original_error": str(original_error),
            },
        )

    if isinstance(original_error, ConnectionRefusedError):
        message = f"Connection refused by {host}:{port} - modem may be offline or web interface disabled"

    return SurfBeamConnectionError(
        message,
        details={
            "host": host,
            "port": port,
            "error_type": type(original_error).__name__,
            "original_error": str(original_error),
        },
    )


__all__ = [
    "SurfBeamConfigurationError",
    "SurfBeamConnectionError",
    "SurfBeamError",
    "SurfBeamFieldCountError",
    "SurfBeamHTTPError",
    "SurfBeamOperationError",
    "SurfBeamParsingError",
    "SurfBeamTimeoutError",
    "wrap_connection_error",
]
