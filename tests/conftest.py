"""
Shared fixtures for fetch_request tests.
"""
import asyncio
import logging
from typing import Dict, List, Optional
from unittest.mock import MagicMock

import httpx
import pytest


BASE_URL = "https://api.example.com"


class CannedStream(httpx.SyncByteStream, httpx.AsyncByteStream):
    """Response body left unread until the caller iterates it."""

    def __init__(self, content: bytes) -> None:
        self._content = content

    def __iter__(self):
        if self._content:
            yield self._content

    async def __aiter__(self):
        if self._content:
            yield self._content


class RecordingTransport(httpx.BaseTransport):
    """Sync transport returning a canned response and recording requests."""

    def __init__(
        self,
        status_code: int = 200,
        content: bytes = b'{"success": true}',
        headers: Optional[Dict[str, str]] = None,
        error: Optional[Exception] = None,
        stream: Optional[httpx.SyncByteStream] = None,
    ) -> None:
        self.status_code = status_code
        self.content = content
        self.headers = headers or {"content-type": "application/json"}
        self.error = error
        self.stream = stream
        self.requests: List[httpx.Request] = []
        self.bodies: List[bytes] = []

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        self.bodies.append(request.read())
        if self.error is not None:
            raise self.error
        if self.stream is not None:
            return httpx.Response(self.status_code, headers=self.headers, stream=self.stream)
        return httpx.Response(
            self.status_code, headers=self.headers, stream=CannedStream(self.content)
        )


class AsyncRecordingTransport(httpx.AsyncBaseTransport):
    """Async transport returning a canned response and recording requests."""

    def __init__(
        self,
        status_code: int = 200,
        content: bytes = b'{"success": true}',
        headers: Optional[Dict[str, str]] = None,
        error: Optional[Exception] = None,
        delay: Optional[float] = None,
        stream: Optional[httpx.AsyncByteStream] = None,
    ) -> None:
        self.status_code = status_code
        self.content = content
        self.headers = headers or {"content-type": "application/json"}
        self.error = error
        self.delay = delay
        self.stream = stream
        self.started = asyncio.Event()
        self.requests: List[httpx.Request] = []
        self.bodies: List[bytes] = []

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        self.bodies.append(await request.aread())
        self.started.set()
        if self.delay is not None:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if self.stream is not None:
            return httpx.Response(self.status_code, headers=self.headers, stream=self.stream)
        return httpx.Response(
            self.status_code, headers=self.headers, stream=CannedStream(self.content)
        )


class FailingStream(httpx.SyncByteStream, httpx.AsyncByteStream):
    """Body stream that breaks after the first chunk."""

    def __iter__(self):
        yield b"partial"
        raise httpx.ReadError("connection reset by peer")

    async def __aiter__(self):
        yield b"partial"
        raise httpx.ReadError("connection reset by peer")


@pytest.fixture
def mock_logger():
    """Logger double capturing outcome messages."""
    return MagicMock(spec=logging.Logger)


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def client(transport):
    with httpx.Client(transport=transport) as c:
        yield c
