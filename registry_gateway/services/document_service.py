"""Rate-limited submission of signed documents to the registry."""

from __future__ import annotations

import logging
import threading

from registry_gateway.adapters.rate_limit.base import AbstractRateLimiter, RateLimitStats
from registry_gateway.adapters.rate_limit.sliding_window import SlidingWindowRateLimiter
from registry_gateway.adapters.registry.base import AbstractRegistryClient
from registry_gateway.adapters.registry.factory import create_registry_client
from registry_gateway.core.config import RateLimitSettings, settings
from registry_gateway.schemas.document import Document

logger = logging.getLogger(__name__)


class DocumentService:
    """Submit documents through a shared admission limiter.

    Each ``create_document`` call takes exactly one admission and makes
    exactly one submission attempt. The slot is consumed whether or not the
    submission succeeds; it frees through normal eviction.
    """

    def __init__(self, limiter: AbstractRateLimiter, client: AbstractRegistryClient) -> None:
        self._limiter = limiter
        self._client = client

    def __enter__(self) -> "DocumentService":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def limiter(self) -> AbstractRateLimiter:
        return self._limiter

    def create_document(
        self,
        document: Document,
        signature: str,
        *,
        cancel_event: threading.Event | None = None,
    ) -> str:
        """Wait for a rate limit slot, then submit the signed document.

        Args:
            document: Document metadata to register.
            signature: Caller-supplied signature of the document.
            cancel_event: Optional event that aborts the wait for a slot.

        Returns:
            str: Registry response body.

        Raises:
            AdmissionCancelledError: If the wait for a slot was cancelled.
            RegistryApiError: If the registry answered with a non-2xx status.
            RegistryTransportError: If the registry could not be reached.
        """

        self._limiter.admit(cancel_event)
        # The limiter lock is released here; the HTTP call runs outside it.
        return self._client.submit(document, signature)

    def rate_limit_stats(self) -> RateLimitStats:
        return self._limiter.stats()

    def close(self) -> None:
        """Stop the limiter's background eviction and close the client."""

        try:
            self._limiter.close()
        finally:
            self._client.close()
        logger.info("document_service.closed")


def create_rate_limiter(rate_limit: RateLimitSettings | None = None) -> SlidingWindowRateLimiter:
    """Build the sliding-window limiter from settings."""

    cfg = rate_limit or settings.rate_limit
    return SlidingWindowRateLimiter(
        window_seconds=cfg.window_seconds,
        max_requests=cfg.max_requests,
        tick_seconds=cfg.tick_seconds,
        poll_interval_seconds=cfg.poll_interval_seconds,
    )


def create_document_service() -> DocumentService:
    """Wire a DocumentService from global settings.

    The client is built first so a bad registry URL fails before a limiter
    thread is started.
    """

    client = create_registry_client()
    limiter = create_rate_limiter()
    logger.info(
        "document_service.created",
        extra={
            "window_s": limiter.config.window_seconds,
            "limit": limiter.config.max_requests,
        },
    )
    return DocumentService(limiter=limiter, client=client)
