"""
Tests for config.py and factory.py
Logic testing: Decision/Branch, Boundary Value
"""
import logging

import httpx
import pytest

from fetch_request import Request
from fetch_request.config import (
    ClientConfig,
    TimeoutConfig,
    get_default_logger,
    is_ssl_verify_disabled_by_env,
    normalize_timeout,
    resolve_verify,
    validate_config,
)
from fetch_request.factory import create_async_client, create_client
from tests.conftest import RecordingTransport


class TestNormalizeTimeout:

    def test_none_uses_defaults(self):
        assert normalize_timeout(None) == TimeoutConfig(connect=5.0, read=30.0, write=10.0)

    def test_number_applies_to_all(self):
        assert normalize_timeout(3) == TimeoutConfig(connect=3, read=3, write=3)

    def test_config_passthrough(self):
        config = TimeoutConfig(connect=1.0)
        assert normalize_timeout(config) is config


class TestValidateConfig:

    def test_empty_base_url_allowed(self):
        validate_config(ClientConfig())

    @pytest.mark.parametrize("base_url", ["api.example.com", "ftp://example.com", "https://"])
    def test_invalid_base_url(self, base_url):
        with pytest.raises(ValueError, match="Invalid base_url"):
            validate_config(ClientConfig(base_url=base_url))

    # Boundary: zero timeout
    def test_non_positive_timeout(self):
        with pytest.raises(ValueError, match="timeout.read"):
            validate_config(ClientConfig(timeout=TimeoutConfig(read=0)))


class TestSslVerify:

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        monkeypatch.delenv("NODE_TLS_REJECT_UNAUTHORIZED", raising=False)
        monkeypatch.delenv("SSL_CERT_VERIFY", raising=False)

    def test_enabled_by_default(self):
        assert is_ssl_verify_disabled_by_env() is False
        assert resolve_verify(ClientConfig()) is True

    @pytest.mark.parametrize("var", ["NODE_TLS_REJECT_UNAUTHORIZED", "SSL_CERT_VERIFY"])
    def test_disabled_by_env(self, monkeypatch, var):
        monkeypatch.setenv(var, "0")
        assert is_ssl_verify_disabled_by_env() is True
        assert resolve_verify(ClientConfig()) is False

    def test_explicit_config_wins(self, monkeypatch):
        monkeypatch.setenv("SSL_CERT_VERIFY", "0")
        assert resolve_verify(ClientConfig(verify=True)) is True


class TestDefaultLogger:

    def test_package_logger(self):
        assert get_default_logger() is logging.getLogger("fetch_request")


class TestFactory:

    def test_create_client(self):
        config = ClientConfig(
            base_url="https://api.example.com",
            headers={"X-App": "svc"},
            timeout=TimeoutConfig(connect=2.0, read=20.0, write=4.0),
            user_agent="svc/1.0",
        )
        with create_client(config) as client:
            assert isinstance(client, httpx.Client)
            assert str(client.base_url).rstrip("/") == "https://api.example.com"
            assert client.headers["X-App"] == "svc"
            assert client.headers["User-Agent"] == "svc/1.0"
            assert client.timeout.connect == 2.0
            assert client.timeout.read == 20.0

    def test_create_client_defaults(self):
        with create_client() as client:
            assert client.timeout.read == 30.0
            assert client.follow_redirects is False

    def test_create_client_invalid(self):
        with pytest.raises(ValueError):
            create_client(ClientConfig(base_url="not a url"))

    @pytest.mark.asyncio
    async def test_create_async_client(self):
        async with create_async_client(ClientConfig(base_url="https://api.example.com")) as client:
            assert isinstance(client, httpx.AsyncClient)
            assert str(client.base_url).rstrip("/") == "https://api.example.com"

    def test_factory_client_as_transport(self):
        transport = RecordingTransport()
        config = ClientConfig(base_url="https://api.example.com", user_agent="svc/1.0")
        with create_client(config, transport=transport) as client:
            Request(client).url("/items").bytes()

        request = transport.requests[0]
        assert str(request.url) == "https://api.example.com/items"
        assert "User-Agent" not in request.headers
