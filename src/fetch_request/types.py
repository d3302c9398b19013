"""
Type definitions for fetch_request.
"""
from dataclasses import dataclass
from typing import (
    IO,
    Any,
    AsyncIterable,
    Iterable,
    Literal,
    Optional,
    Union,
)


# Common HTTP methods; any other RFC 9110 token is accepted as well
HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]

# Request content accepted by Request.body()
RequestBody = Union[bytes, str, IO[bytes], Iterable[bytes]]

# AsyncRequest.body() also accepts async byte iterators
AsyncRequestBody = Union[RequestBody, AsyncIterable[bytes]]


@dataclass(frozen=True)
class Cookie:
    """Cookie attached to an outgoing request."""

    name: str
    value: str


@dataclass
class StatusBody:
    """Result of status_and_body().

    status is 0 when no response was received at all.
    """

    status: int
    body: str
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        """True when a response arrived without any error."""
        return self.error is None and 0 < self.status < 400

    def __iter__(self):
        # Allows: status, body, error = req.status_and_body()
        return iter((self.status, self.body, self.error))
