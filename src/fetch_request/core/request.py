"""
Fluent single-request builders on top of httpx.

    body = (
        Request(client)
        .url("https://api.example.com/items")
        .token(api_token)
        .args({"page": "2"})
        .bytes()
    )

Request drives an httpx.Client, AsyncRequest an httpx.AsyncClient. The
client is shared and never closed by a builder. A builder is mutated in
place by its setters and belongs to a single thread or task; use copy() to
fork a configured template.
"""
import asyncio
import copy as _copy
import logging
from typing import Any, AsyncIterator, Dict, List, Mapping, Optional, TypeVar, Union

import httpx

from ..config import get_default_logger
from ..decoding import decode_json
from ..errors import (
    FetchRequestError,
    HTTPStatusError,
    NullBodyError,
    RequestConstructionError,
)
from ..types import AsyncRequestBody, Cookie, HttpMethod, RequestBody, StatusBody
from .body import AsyncResponseBody, ResponseBody, has_body
from .request_builder import (
    append_cookies,
    apply_headers,
    build_url,
    describe_error,
    ensure_absolute_url,
    mask_headers_for_logging,
    resolve_auth_header,
    validate_method,
)

logger = logging.getLogger("fetch_request.request")

R = TypeVar("R", bound="BaseRequest")

_READ_ERRORS = (httpx.RequestError, httpx.StreamError)


def _body_text(response: httpx.Response, chunks: List[bytes]) -> str:
    return b"".join(chunks).decode(response.encoding or "utf-8", errors="replace")


class BaseRequest:
    """Request configuration shared by the sync and async builders."""

    def __init__(self, client: Any, logger: Optional[logging.Logger] = None):
        self._client = client
        self._logger = logger if logger is not None else get_default_logger()
        self._url = ""
        self._method = "GET"
        self._token = ""
        self._login = ""
        self._password = ""
        self._body: Any = None
        self._body_offset: Optional[int] = None
        self._headers: Dict[str, str] = {}
        self._args: Dict[str, Any] = {}
        self._cookies: List[Cookie] = []

    def url(self: R, url: str) -> R:
        self._url = url
        return self

    def method(self: R, method: Union[HttpMethod, str]) -> R:
        self._method = method
        return self

    def post(self: R) -> R:
        self._method = "POST"
        return self

    def put(self: R) -> R:
        self._method = "PUT"
        return self

    def token(self: R, token: str) -> R:
        """Bearer token; takes priority over auth()."""
        self._token = token
        return self

    def auth(self: R, login: str, password: str) -> R:
        """Basic auth credentials, used only when no token is set."""
        self._login = login
        self._password = password
        return self

    def headers(self: R, headers: Mapping[str, str]) -> R:
        """Replace all configured headers."""
        self._headers = dict(headers)
        return self

    def add_header(self: R, key: str, value: str) -> R:
        self._headers[key] = value
        return self

    def add_cookie(self: R, cookie: Cookie) -> R:
        self._cookies.append(cookie)
        return self

    def args(self: R, args: Mapping[str, Any]) -> R:
        """Replace all query args."""
        self._args = dict(args)
        return self

    def body(self: R, body: Optional[RequestBody]) -> R:
        """Request content, sent as is.

        bytes and str can be sent any number of times. A seekable stream is
        rewound to its current position before every execution; any other
        stream or iterator is consumed by the first execution.
        """
        self._body = body
        self._body_offset = None
        seekable = getattr(body, "seekable", None)
        if callable(seekable) and seekable():
            self._body_offset = body.tell()
        return self

    def copy(self: R) -> R:
        """Independent builder with the same configuration and client."""
        clone = _copy.copy(self)
        clone._headers = dict(self._headers)
        clone._args = dict(self._args)
        clone._cookies = list(self._cookies)
        return clone

    def _content(self) -> Any:
        if self._body_offset is not None:
            self._body.seek(self._body_offset)
        return self._body

    def _build_request(self) -> httpx.Request:
        method = validate_method(self._method)
        url = build_url(self._url, self._args)

        try:
            request = self._client.build_request(method, url, content=self._content())
        except (httpx.InvalidURL, TypeError) as exc:
            raise RequestConstructionError(f"cannot build request: {exc}") from exc

        ensure_absolute_url(request.url)
        apply_headers(request.headers, self._headers)

        auth_header = resolve_auth_header(self._token, self._login, self._password)
        if auth_header:
            request.headers.update(auth_header)

        append_cookies(request.headers, self._cookies)

        logger.debug(
            f"_build_request: {request.method} {request.url} "
            f"headers={mask_headers_for_logging(request.headers)}"
        )
        return request

    def _send_auth(self, request: httpx.Request) -> Any:
        # An Authorization header set here is sent as is: no client auth, no URL credentials
        if "Authorization" in request.headers:
            return httpx.Auth()
        return httpx.USE_CLIENT_DEFAULT

    def _log_transport_error(self, request: httpx.Request, exc: BaseException) -> None:
        self._logger.info(f"{request.method} {request.url} - error {describe_error(exc)}")

    def _check_status(self, request: httpx.Request, response: httpx.Response) -> httpx.Response:
        if response.status_code > 399:
            self._logger.warning(f"{request.method} {request.url} - {response.status_code}")
            raise HTTPStatusError(response)

        self._logger.debug(f"{request.method} {request.url} - {response.status_code}")
        return response


class Request(BaseRequest):
    """Builder executing through a blocking httpx.Client."""

    def __init__(self, client: httpx.Client, logger: Optional[logging.Logger] = None):
        super().__init__(client, logger)

    def execute_raw(self) -> httpx.Response:
        """Send the request and return the response with its body unread.

        Raises RequestConstructionError before sending, the original
        httpx.RequestError on transport failure, and HTTPStatusError (holding
        the open response) for a status above 399.
        """
        request = self._build_request()
        try:
            response = self._client.send(request, stream=True, auth=self._send_auth(request))
        except httpx.RequestError as exc:
            self._log_transport_error(request, exc)
            raise
        return self._check_status(request, response)

    def stream(self) -> ResponseBody:
        """Open body of a successful response; the caller closes it."""
        response = self.execute_raw()
        if not has_body(response):
            raise NullBodyError(response=response)
        return ResponseBody(response)

    def bytes(self) -> bytes:
        """Whole body of a successful response.

        On HTTPStatusError the body is left unread and exc.response keeps its
        connection until the caller closes it.
        """
        with self.stream() as body:
            return body.read()

    def status_and_body(self) -> StatusBody:
        """Status code and body text, reading the body even on error status.

        Never raises for construction, transport or read failures: they come
        back in ``error`` with status 0 when no response arrived. A read
        failure takes the place of the status error, and the text read up to
        that point is returned.
        """
        error: Optional[BaseException] = None
        try:
            response = self.execute_raw()
        except HTTPStatusError as exc:
            response, error = exc.response, exc
        except (FetchRequestError, httpx.RequestError) as exc:
            return StatusBody(0, "", exc)

        if not has_body(response):
            return StatusBody(response.status_code, "", error)

        chunks = []
        try:
            for chunk in response.iter_bytes():
                chunks.append(chunk)
        except _READ_ERRORS as exc:
            error = exc
        finally:
            response.close()
        return StatusBody(response.status_code, _body_text(response, chunks), error)

    def decode_json(self, target: Optional[Any] = None) -> Any:
        """Decode the body of a successful response as JSON.

        See fetch_request.decoding.decode_json for accepted targets. As with
        bytes(), the response on an HTTPStatusError is still open and is
        closed by the caller.
        """
        with self.stream() as body:
            content = body.read()
        return decode_json(content, target)


async def _aiter_sync(content: Any, chunk_size: int = 65536) -> AsyncIterator[bytes]:
    if hasattr(content, "read"):
        while True:
            chunk = content.read(chunk_size)
            if not chunk:
                break
            yield chunk
    else:
        for chunk in content:
            yield chunk


class AsyncRequest(BaseRequest):
    """Builder executing through an httpx.AsyncClient.

    Cancelling the awaiting task aborts the request in flight.
    """

    def __init__(self, client: httpx.AsyncClient, logger: Optional[logging.Logger] = None):
        super().__init__(client, logger)

    def body(self, body: Optional[AsyncRequestBody]) -> "AsyncRequest":
        """Request content; async iterators are accepted as well.

        Blocking streams and iterators are read chunk by chunk from the
        event loop.
        """
        return super().body(body)

    def _content(self) -> Any:
        content = super()._content()
        if content is None or isinstance(content, (bytes, str)) or hasattr(content, "__aiter__"):
            return content
        return _aiter_sync(content)

    async def execute_raw(self) -> httpx.Response:
        """Send the request and return the response with its body unread.

        Same errors as Request.execute_raw; cancellation is logged like a
        transport failure and propagated.
        """
        request = self._build_request()
        try:
            response = await self._client.send(
                request, stream=True, auth=self._send_auth(request)
            )
        except (httpx.RequestError, asyncio.CancelledError) as exc:
            self._log_transport_error(request, exc)
            raise
        return self._check_status(request, response)

    async def stream(self) -> AsyncResponseBody:
        """Open body of a successful response; the caller closes it."""
        response = await self.execute_raw()
        if not has_body(response):
            raise NullBodyError(response=response)
        return AsyncResponseBody(response)

    async def bytes(self) -> bytes:
        """Whole body of a successful response.

        On HTTPStatusError exc.response stays open until the caller calls
        aclose() on it.
        """
        async with await self.stream() as body:
            return await body.read()

    async def status_and_body(self) -> StatusBody:
        """Status code and body text, reading the body even on error status.

        Errors come back in ``error`` as for Request.status_and_body;
        cancellation is always propagated.
        """
        error: Optional[BaseException] = None
        try:
            response = await self.execute_raw()
        except HTTPStatusError as exc:
            response, error = exc.response, exc
        except (FetchRequestError, httpx.RequestError) as exc:
            return StatusBody(0, "", exc)

        if not has_body(response):
            return StatusBody(response.status_code, "", error)

        chunks = []
        try:
            async for chunk in response.aiter_bytes():
                chunks.append(chunk)
        except _READ_ERRORS as exc:
            error = exc
        finally:
            await response.aclose()
        return StatusBody(response.status_code, _body_text(response, chunks), error)

    async def decode_json(self, target: Optional[Any] = None) -> Any:
        """Decode the body of a successful response as JSON.

        The response on an HTTPStatusError is still open; the caller closes it.
        """
        async with await self.stream() as body:
            content = await body.read()
        return decode_json(content, target)
