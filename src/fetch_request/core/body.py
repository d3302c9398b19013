"""
Response body wrappers returned by the stream() terminal operations.
"""
from typing import AsyncIterator, Iterator, Optional

import httpx


def has_body(response: httpx.Response) -> bool:
    """True when the response carries a body stream, even an empty one."""
    return getattr(response, "stream", None) is not None


class ResponseBody:
    """Open, unread body of a response.

    The caller consumes it and closes it, either explicitly or with a
    ``with`` block. Reading it to the end also releases the connection.
    """

    def __init__(self, response: httpx.Response):
        self.response = response

    @property
    def status_code(self) -> int:
        return self.response.status_code

    @property
    def headers(self) -> httpx.Headers:
        return self.response.headers

    @property
    def closed(self) -> bool:
        return self.response.is_closed

    def read(self) -> bytes:
        """Read the whole body."""
        return self.response.read()

    def iter_bytes(self, chunk_size: Optional[int] = None) -> Iterator[bytes]:
        return self.response.iter_bytes(chunk_size)

    def __iter__(self) -> Iterator[bytes]:
        return self.iter_bytes()

    def close(self) -> None:
        self.response.close()

    def __enter__(self) -> "ResponseBody":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class AsyncResponseBody:
    """Open, unread body of a response received by an AsyncClient."""

    def __init__(self, response: httpx.Response):
        self.response = response

    @property
    def status_code(self) -> int:
        return self.response.status_code

    @property
    def headers(self) -> httpx.Headers:
        return self.response.headers

    @property
    def closed(self) -> bool:
        return self.response.is_closed

    async def read(self) -> bytes:
        """Read the whole body."""
        return await self.response.aread()

    def iter_bytes(self, chunk_size: Optional[int] = None) -> AsyncIterator[bytes]:
        return self.response.aiter_bytes(chunk_size)

    def __aiter__(self) -> AsyncIterator[bytes]:
        return self.iter_bytes()

    async def close(self) -> None:
        await self.response.aclose()

    async def __aenter__(self) -> "AsyncResponseBody":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
