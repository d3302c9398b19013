"""
Request assembly helpers for fetch_request.

Each helper performs one step of turning builder state into an
httpx.Request. They hold no state and are shared by the sync and async
builders.
"""
import base64
import logging
import re
from typing import Any, Dict, Iterable, Mapping, Optional

import httpx

from ..errors import RequestConstructionError
from ..types import Cookie

logger = logging.getLogger("fetch_request.request_builder")

# RFC 9110 token characters, used for methods and cookie names
_TOKEN_RE = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")

# Client default header dropped from every request
IDENTITY_HEADER = "User-Agent"

_COOKIE_VALUE_EXCLUDED = frozenset("\";\\")

SENSITIVE_HEADERS = ("authorization", "x-api-key", "cookie")


def _base64_encode(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("utf-8")


def mask_value(val: Optional[str], visible_chars: int = 10) -> str:
    """Mask sensitive value for logging, showing the first characters."""
    if not val:
        return "<empty>"
    if len(val) <= visible_chars:
        return "*" * len(val)
    return val[:visible_chars] + "*" * (len(val) - visible_chars)


def mask_headers_for_logging(headers: Mapping[str, str]) -> Dict[str, str]:
    """Copy of headers with credentials masked."""
    masked = dict(headers)
    for key in masked:
        if key.lower() in SENSITIVE_HEADERS:
            masked[key] = mask_value(masked[key])
    return masked


def validate_method(method: str) -> str:
    """Return the method if it is a valid HTTP token."""
    if not isinstance(method, str) or not _TOKEN_RE.fullmatch(method):
        raise RequestConstructionError(f"invalid method {method!r}")
    return method


def build_url(url: str, args: Optional[Mapping[str, Any]] = None) -> httpx.URL:
    """Parse url and add query args to whatever query string it already has.

    Existing parameters are kept, including ones sharing a name with an arg.
    """
    if not url:
        raise RequestConstructionError("url is required")

    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as exc:
        raise RequestConstructionError(f"invalid url {url!r}: {exc}") from exc

    if args:
        params = parsed.params
        for key, value in args.items():
            params = params.add(key, str(value))
        parsed = parsed.copy_with(params=params)

    return parsed


def ensure_absolute_url(url: httpx.URL) -> None:
    """The resolved URL needs a scheme and a host to be sent anywhere."""
    if not url.scheme or not url.host:
        raise RequestConstructionError(f"url {str(url)!r} has no scheme or host")


def apply_headers(target: httpx.Headers, headers: Optional[Mapping[str, str]]) -> None:
    """Drop the client identity header, then overlay configured headers."""
    target.pop(IDENTITY_HEADER, None)
    if headers:
        for key, value in headers.items():
            target[key] = value


def resolve_auth_header(token: str, login: str, password: str) -> Optional[Dict[str, str]]:
    """Authorization header for the configured credentials.

    A token always wins over login/password.
    """
    if token:
        return {"Authorization": f"Bearer {token}"}
    if login:
        return {"Authorization": f"Basic {_base64_encode(f'{login}:{password}')}"}
    return None


def _is_cookie_value_char(ch: str) -> bool:
    return " " <= ch < "\x7f" and ch not in _COOKIE_VALUE_EXCLUDED


def format_cookie(cookie: Cookie) -> str:
    """name=value pair for the Cookie header.

    The name must be a token. Characters not allowed in a cookie value are
    dropped; a value starting or ending with a space or comma is quoted.
    """
    if not isinstance(cookie.name, str) or not _TOKEN_RE.fullmatch(cookie.name):
        raise RequestConstructionError(f"invalid cookie name {cookie.name!r}")
    value = "".join(ch for ch in cookie.value if _is_cookie_value_char(ch))
    if value[:1] in (" ", ",") or value[-1:] in (" ", ","):
        value = f'"{value}"'
    return f"{cookie.name}={value}"


def append_cookies(target: httpx.Headers, cookies: Iterable[Cookie]) -> None:
    """Append cookies to the Cookie header in the given order."""
    parts = [format_cookie(cookie) for cookie in cookies]
    if not parts:
        return
    existing = target.get("Cookie")
    if existing:
        parts.insert(0, existing)
    target["Cookie"] = "; ".join(parts)


def describe_error(exc: BaseException) -> str:
    """Error text for logs; some httpx errors carry an empty message."""
    return str(exc) or type(exc).__name__
