"""Application factory for the FastAPI gateway.

Centralizes app construction (metadata, lifespan, middleware, handlers,
routers) so tests can build isolated instances.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable

from fastapi import FastAPI

from registry_gateway.api.routes import documents_router, health_router
from registry_gateway.core.config import settings
from registry_gateway.core.exception_handlers import setup_exception_handlers
from registry_gateway.core.logging import configure_logging
from registry_gateway.core.middleware import request_id_middleware
from registry_gateway.services.document_service import (
    DocumentService,
    create_document_service,
)

logger = logging.getLogger(__name__)


def _build_lifespan(
    service_factory: Callable[[], DocumentService],
    admission_timeout_seconds: float | None,
):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # One limiter per process: every request shares the same window.
        app.state.document_service = service_factory()
        app.state.admission_timeout_seconds = admission_timeout_seconds
        logger.info("app.startup")
        try:
            yield
        finally:
            app.state.document_service.close()
            app.state.document_service = None
            logger.info("app.shutdown")

    return lifespan


def create_app(
    service_factory: Callable[[], DocumentService] = create_document_service,
    admission_timeout_seconds: float | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application instance.

    Args:
        service_factory: Builds the DocumentService on startup; it is closed
            on shutdown.
        admission_timeout_seconds: How long a request may wait for a rate
            limit slot before failing with 503. Defaults to
            ``settings.rate_limit.admission_timeout_seconds``; None there
            means wait indefinitely.

    Returns:
        Configured FastAPI app with lifespan, middleware, handlers and routers.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    app = FastAPI(
        title="Registry Gateway",
        description=(
            "Submits signed documents to the remote registry while keeping "
            "the request rate under a sliding-window ceiling shared by all "
            "callers of this process."
        ),
        version="0.1.0",
        lifespan=_build_lifespan(
            service_factory,
            admission_timeout_seconds or settings.rate_limit.admission_timeout_seconds,
        ),
    )

    app.middleware("http")(request_id_middleware)

    setup_exception_handlers(app)

    app.include_router(documents_router, prefix="/v1")
    app.include_router(health_router)

    return app
