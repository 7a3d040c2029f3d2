"""FastAPI dependencies shared by the gateway routes.

Both are ``async def`` so resolving them never takes a worker thread; the
worker pool stays reserved for callers blocked in admission.
"""

from __future__ import annotations

import threading
from typing import AsyncIterator

from fastapi import Request

from registry_gateway.core.errors import AppError
from registry_gateway.services.document_service import DocumentService


async def get_document_service(request: Request) -> DocumentService:
    """Return the process-wide DocumentService created at app startup.

    Raises:
        AppError: If the app was started without its lifespan (no service).
    """

    service = getattr(request.app.state, "document_service", None)
    if service is None:
        raise AppError(
            code="service_unavailable",
            message="Document service is not initialized",
        )
    return service


async def get_admission_cancel_event(request: Request) -> AsyncIterator[threading.Event | None]:
    """Yield an event that is set once the admission timeout elapses.

    Yields None when no timeout is configured, so the caller waits for a
    slot indefinitely.
    """

    timeout = getattr(request.app.state, "admission_timeout_seconds", None)
    if timeout is None:
        yield None
        return

    cancel_event = threading.Event()
    timer = threading.Timer(timeout, cancel_event.set)
    timer.daemon = True
    timer.start()
    try:
        yield cancel_event
    finally:
        timer.cancel()
