from __future__ import annotations

import httpx
from fastapi.testclient import TestClient

from conftest import REGISTRY_URL, RecordingHandler
from registry_gateway.adapters.rate_limit.sliding_window import SlidingWindowRateLimiter
from registry_gateway.adapters.registry.http_client import HttpRegistryClient
from registry_gateway.core.app_factory import create_app
from registry_gateway.main import app
from registry_gateway.services.document_service import DocumentService


client = TestClient(app)


def test_preserves_incoming_request_id_header():
    incoming_id = "test-request-id-123"
    resp = client.get("/health", headers={"X-Request-ID": incoming_id})

    assert resp.status_code == 200
    assert resp.headers.get("X-Request-ID") == incoming_id


def test_generates_request_id_when_missing():
    resp = client.get("/health")

    assert resp.status_code == 200
    generated = resp.headers.get("X-Request-ID")
    assert generated

    duration = resp.headers.get("X-Request-Duration-ms")
    assert duration is not None
    assert float(duration) >= 0


def test_request_id_reaches_document_error_response(sample_document):
    handler = RecordingHandler(500, "registry down")

    def factory() -> DocumentService:
        return DocumentService(
            limiter=SlidingWindowRateLimiter(window_seconds=60.0, max_requests=5),
            client=HttpRegistryClient(url=REGISTRY_URL, transport=httpx.MockTransport(handler)),
        )

    payload = {
        "document": sample_document.model_dump(by_alias=True),
        "signature": "someDigitalSignature",
    }
    with TestClient(create_app(service_factory=factory)) as gateway:
        resp = gateway.post(
            "/v1/documents", json=payload, headers={"X-Request-ID": "submit-42"}
        )

    assert resp.status_code == 502
    assert resp.headers.get("X-Request-ID") == "submit-42"
    assert resp.json()["error"]["request_id"] == "submit-42"
    assert len(handler.requests) == 1
