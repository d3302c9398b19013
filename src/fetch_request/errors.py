"""
Errors raised by fetch_request.

Transport failures are not wrapped: they surface as the original
httpx.RequestError subclass (httpx.ConnectError, httpx.TimeoutException, ...).
"""
from typing import Optional

import httpx


class FetchRequestError(Exception):
    """Base class for fetch_request errors."""


class RequestConstructionError(FetchRequestError, ValueError):
    """Method or URL cannot be turned into a request."""


class HTTPStatusError(FetchRequestError):
    """Response arrived with a status code above 399.

    The response is kept open so callers can still inspect headers and read
    the body through ``exc.response``.
    """

    def __init__(self, response: httpx.Response):
        self.response = response
        self.status_code = response.status_code
        reason = response.reason_phrase or ""
        super().__init__(f"status is {response.status_code} {reason}".rstrip())


class NullBodyError(FetchRequestError):
    """Response carries no body stream."""

    def __init__(self, message: str = "null body", response: Optional[httpx.Response] = None):
        self.response = response
        super().__init__(message)


class DecodeError(FetchRequestError, ValueError):
    """Response body cannot be decoded into the requested shape."""
