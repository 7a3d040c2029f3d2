"""Tests for the HTTP registry client using httpx.MockTransport."""

from __future__ import annotations

import json

import httpx
import pytest

from conftest import REGISTRY_URL, RecordingHandler
from registry_gateway.adapters.registry import HttpRegistryClient, create_registry_client
from registry_gateway.core.config import settings
from registry_gateway.core.errors import (
    RegistryApiError,
    RegistryTransportError,
    ValidationAppError,
)


def _client(handler) -> HttpRegistryClient:
    return HttpRegistryClient(url=REGISTRY_URL, transport=httpx.MockTransport(handler))


class TestWireFormat:
    def test_posts_json_body_with_camel_case_fields(self, sample_document) -> None:
        handler = RecordingHandler(200, "ok")
        client = _client(handler)

        client.submit(sample_document, "someDigitalSignature")

        assert len(handler.requests) == 1
        request = handler.requests[0]
        assert request.method == "POST"
        assert str(request.url) == REGISTRY_URL
        assert request.headers["Content-Type"] == "application/json"

        body = json.loads(request.content)
        assert body == {
            "document": {
                "description": "Test document",
                "participantInn": "1234567890",
                "docId": "DOC-123",
                "docStatus": "NEW",
                "docType": "LP_INTRODUCE_GOODS",
                "importRequest": False,
                "productionDate": "2023-10-26",
                "productionType": "OWN_PRODUCTION",
            },
            "signature": "someDigitalSignature",
        }


class TestResponses:
    @pytest.mark.parametrize("status", [200, 201, 202, 204, 299])
    def test_any_2xx_returns_body_verbatim(self, sample_document, status: int) -> None:
        text = "" if status == 204 else '{"value": "abc"}\n'
        client = _client(RecordingHandler(status, text))

        assert client.submit(sample_document, "sig") == text

    @pytest.mark.parametrize("status", [301, 400, 401, 429, 500, 503])
    def test_non_2xx_raises_api_error(self, sample_document, status: int) -> None:
        client = _client(RecordingHandler(status, "upstream says no"))

        with pytest.raises(RegistryApiError) as exc_info:
            client.submit(sample_document, "sig")

        error = exc_info.value
        assert error.status_code == status
        assert error.body == "upstream says no"
        assert error.code == "registry_api_error"
        assert error.details["upstream_status"] == status
        assert str(status) in str(error)

    def test_connection_error_raises_transport_error(self, sample_document) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(RegistryTransportError) as exc_info:
            _client(handler).submit(sample_document, "sig")

        assert exc_info.value.code == "registry_unreachable"
        assert exc_info.value.details["error_type"] == "ConnectError"
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        assert not isinstance(exc_info.value, RegistryApiError)

    def test_timeout_raises_transport_error(self, sample_document) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(RegistryTransportError):
            _client(handler).submit(sample_document, "sig")


class TestFactory:
    def test_builds_http_client_from_settings(self) -> None:
        client = create_registry_client()
        try:
            assert isinstance(client, HttpRegistryClient)
            assert client.url == settings.registry.url
        finally:
            client.close()

    def test_rejects_non_http_url(self, monkeypatch) -> None:
        monkeypatch.setattr(settings.registry, "url", "ftp://registry.test/documents")

        with pytest.raises(ValidationAppError) as exc_info:
            create_registry_client()

        assert exc_info.value.code == "registry_invalid_url"
