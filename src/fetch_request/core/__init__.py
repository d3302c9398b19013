"""
Core modules for fetch_request.
"""
from .body import AsyncResponseBody, ResponseBody
from .request import AsyncRequest, BaseRequest, Request
from .request_builder import (
    append_cookies,
    apply_headers,
    build_url,
    format_cookie,
    resolve_auth_header,
    validate_method,
)

__all__ = [
    "AsyncRequest",
    "BaseRequest",
    "Request",
    "AsyncResponseBody",
    "ResponseBody",
    "append_cookies",
    "apply_headers",
    "build_url",
    "format_cookie",
    "resolve_auth_header",
    "validate_method",
]
