"""Exception classes for the dbx_api package.

Non-200 responses from Dropbox are never raised by this package; they are
returned as ``Failure`` results. The exceptions below cover the remaining
cases: bad arguments caught before a request is built, transport failures,
and the opt-in ``Failure.unwrap()``.
"""
import asyncio
from typing import Any, Optional

import aiohttp


class DbxApiException(Exception):
    """Base exception for all dbx_api errors.

    Catching this exception will catch all dbx_api-specific errors.
    """
    pass


class ArgumentError(DbxApiException, ValueError):
    """Raised when a request cannot be built from the given arguments.

    This can occur due to:
    - A required parameter passed as None
    - An enum parameter that is not one of the documented wire values
    - A payload of an unsupported type (e.g. int instead of bytes)
    """
    pass


class DbxTransportError(DbxApiException, aiohttp.ClientError):
    """Raised when the HTTP round-trip itself fails.

    This can occur due to:
    - DNS resolution or connection failures
    - TLS handshake / certificate errors
    - The configured timeout expiring

    Also an ``aiohttp.ClientError`` so callers catching the transport's own
    exceptions still see it.
    """
    pass


class DbxTimeoutError(DbxTransportError, asyncio.TimeoutError):
    """Raised when the configured timeout expires before a response arrives.

    Also an ``asyncio.TimeoutError``, like aiohttp's own ``ServerTimeoutError``.
    """
    pass


class DbxApiError(DbxApiException):
    """Raised by ``Failure.unwrap()`` for a non-200 Dropbox response."""

    def __init__(self, status: int, error: Any, route: Optional[str] = None):
        self.status = status
        self.error = error
        self.route = route
        summary = error.get("error_summary") if isinstance(error, dict) else error
        where = f" ({route})" if route else ""
        super().__init__(f"Dropbox API error {status}{where}: {summary}")
