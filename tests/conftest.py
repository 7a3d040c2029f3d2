"""Pytest configuration and fixtures shared across all test modules.

This file is automatically loaded by pytest before running any tests.
Environment variables are set before anything imports settings.
"""

import os
import threading

import httpx
import pytest

# CRITICAL: Set this before any imports that might load settings
os.environ["APP_ENV"] = "testing"

os.environ.setdefault("REGISTRY_URL", "https://registry.test/api/v3/lk/documents/create")
os.environ.setdefault("RATE_LIMIT_WINDOW_SECONDS", "1")
os.environ.setdefault("RATE_LIMIT_MAX_REQUESTS", "5")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from registry_gateway.schemas.document import Document  # noqa: E402

REGISTRY_URL = os.environ["REGISTRY_URL"]


class FakeClock:
    """Manually advanced, thread-safe clock for deterministic limiter tests."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.current = start
        self._lock = threading.Lock()

    def __call__(self) -> float:
        with self._lock:
            return self.current

    def advance(self, seconds: float) -> None:
        with self._lock:
            self.current += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sample_document() -> Document:
    return Document(
        description="Test document",
        participant_inn="1234567890",
        doc_id="DOC-123",
        doc_status="NEW",
        doc_type="LP_INTRODUCE_GOODS",
        import_request=False,
        production_date="2023-10-26",
        production_type="OWN_PRODUCTION",
    )


class RecordingHandler:
    """httpx.MockTransport handler that records requests and replays responses."""

    def __init__(self, status_code: int = 200, text: str = "ok") -> None:
        self.status_code = status_code
        self.text = text
        self.requests: list[httpx.Request] = []
        self._lock = threading.Lock()

    def __call__(self, request: httpx.Request) -> httpx.Response:
        with self._lock:
            self.requests.append(request)
        return httpx.Response(self.status_code, text=self.text)


@pytest.fixture
def registry_handler() -> RecordingHandler:
    return RecordingHandler()
