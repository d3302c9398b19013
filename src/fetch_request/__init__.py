"""
Fluent single-request HTTP builder for Python.

Configure one request with chained setters (URL, method, query args,
headers, cookies, bearer or basic auth, body), then execute it through a
shared httpx client and get the result as a raw response, an open body
stream, buffered bytes, status plus body text, or decoded JSON.
"""
from .types import (
    AsyncRequestBody,
    Cookie,
    HttpMethod,
    RequestBody,
    StatusBody,
)
from .errors import (
    DecodeError,
    FetchRequestError,
    HTTPStatusError,
    NullBodyError,
    RequestConstructionError,
)
from .config import (
    ClientConfig,
    TimeoutConfig,
    get_default_logger,
)
from .core.body import AsyncResponseBody, ResponseBody
from .core.request import AsyncRequest, BaseRequest, Request
from .decoding import decode_json
from .factory import create_async_client, create_client

__all__ = [
    # Types
    "AsyncRequestBody",
    "Cookie",
    "HttpMethod",
    "RequestBody",
    "StatusBody",
    # Errors
    "DecodeError",
    "FetchRequestError",
    "HTTPStatusError",
    "NullBodyError",
    "RequestConstructionError",
    # Config
    "ClientConfig",
    "TimeoutConfig",
    "get_default_logger",
    # Builders
    "AsyncRequest",
    "BaseRequest",
    "Request",
    "AsyncResponseBody",
    "ResponseBody",
    # Decoding
    "decode_json",
    # Factory
    "create_async_client",
    "create_client",
]

__version__ = "0.1.0"
