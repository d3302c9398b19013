"""
Configuration for fetch_request.
"""
import logging
import os
from dataclasses import dataclass, field
from typing import Dict, Optional, Union
from urllib.parse import urlparse


DEFAULT_LOGGER_NAME = "fetch_request"


@dataclass
class TimeoutConfig:
    """Timeout configuration in seconds."""

    connect: float = 5.0
    read: float = 30.0
    write: float = 10.0


@dataclass
class ClientConfig:
    """Settings for the shared httpx client used as a transport.

    base_url may be empty, in which case every request needs an absolute URL.
    user_agent=None keeps the httpx default; it is stripped from each request
    by the builder anyway unless set again through a header.
    """

    base_url: str = ""
    headers: Dict[str, str] = field(default_factory=dict)
    timeout: Union[TimeoutConfig, float, None] = None
    verify: Optional[bool] = None
    user_agent: Optional[str] = None
    follow_redirects: bool = False


DEFAULT_TIMEOUT = TimeoutConfig()

_default_logger = logging.getLogger(DEFAULT_LOGGER_NAME)


def get_default_logger() -> logging.Logger:
    """Return the package logger used when a builder gets no logger."""
    return _default_logger


def is_ssl_verify_disabled_by_env() -> bool:
    """
    Check if SSL verification is disabled via environment variables.

    Returns True if any of these are set:
    - NODE_TLS_REJECT_UNAUTHORIZED=0
    - SSL_CERT_VERIFY=0
    """
    node_tls = os.environ.get("NODE_TLS_REJECT_UNAUTHORIZED", "")
    ssl_cert_verify = os.environ.get("SSL_CERT_VERIFY", "")
    return node_tls == "0" or ssl_cert_verify == "0"


def normalize_timeout(timeout: Union[TimeoutConfig, float, None]) -> TimeoutConfig:
    """Normalize timeout config."""
    if timeout is None:
        return DEFAULT_TIMEOUT
    if isinstance(timeout, (int, float)):
        return TimeoutConfig(connect=timeout, read=timeout, write=timeout)
    return timeout


def validate_config(config: ClientConfig) -> None:
    """Validate client configuration."""
    if config.base_url:
        parsed = urlparse(config.base_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"Invalid base_url: {config.base_url}")

    timeout = normalize_timeout(config.timeout)
    for name in ("connect", "read", "write"):
        if getattr(timeout, name) <= 0:
            raise ValueError(f"timeout.{name} must be positive")


def resolve_verify(config: ClientConfig) -> bool:
    """TLS verification flag: explicit config wins, then the environment."""
    if config.verify is not None:
        return config.verify
    return not is_ssl_verify_disabled_by_env()
