"""
Factory functions for the httpx clients used as transports.

Builders never own these clients: create one per process (or per service),
share it between builders and close it on shutdown.
"""
import logging
from typing import Optional

import httpx

from .config import ClientConfig, normalize_timeout, resolve_verify, validate_config

logger = logging.getLogger("fetch_request.factory")


def _client_kwargs(config: ClientConfig) -> dict:
    validate_config(config)
    timeout = normalize_timeout(config.timeout)

    headers = dict(config.headers)
    if config.user_agent:
        headers["User-Agent"] = config.user_agent

    verify = resolve_verify(config)
    if not verify:
        logger.warning("create_client: TLS certificate verification is disabled")

    return {
        "base_url": config.base_url,
        "headers": headers,
        "timeout": httpx.Timeout(
            connect=timeout.connect,
            read=timeout.read,
            write=timeout.write,
            pool=timeout.connect,
        ),
        "verify": verify,
        "follow_redirects": config.follow_redirects,
    }


def create_client(
    config: Optional[ClientConfig] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> httpx.Client:
    """Create a blocking httpx client for Request builders."""
    kwargs = _client_kwargs(config or ClientConfig())
    logger.debug(f"create_client: base_url={kwargs['base_url']!r}, verify={kwargs['verify']}")
    return httpx.Client(transport=transport, **kwargs)


def create_async_client(
    config: Optional[ClientConfig] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Create an async httpx client for AsyncRequest builders."""
    kwargs = _client_kwargs(config or ClientConfig())
    logger.debug(f"create_async_client: base_url={kwargs['base_url']!r}, verify={kwargs['verify']}")
    return httpx.AsyncClient(transport=transport, **kwargs)
