"""HTTP registry client adapter."""

from __future__ import annotations

import logging
import time

import httpx

from registry_gateway.adapters.registry.base import AbstractRegistryClient
from registry_gateway.core.errors import RegistryApiError, RegistryTransportError
from registry_gateway.schemas.document import Document, SignedSubmission

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


class HttpRegistryClient(AbstractRegistryClient):
    """Client POSTing signed documents to a fixed registry endpoint.

    Uses a single synchronous ``httpx.Client`` so connections are reused
    across submissions. Every call is exactly one HTTP attempt.
    """

    def __init__(
        self,
        url: str,
        timeout_seconds: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            url: Registry endpoint receiving the POST.
            timeout_seconds: Timeout for a single submission in seconds.
            transport: Optional httpx transport (e.g. ``httpx.MockTransport``).
        """
        self.url = url
        self.client = httpx.Client(timeout=timeout_seconds, transport=transport)

    def submit(self, document: Document, signature: str) -> str:
        """POST the signed document and return the response body.

        Args:
            document: Document metadata to register.
            signature: Caller-supplied signature of the document.

        Returns:
            str: Response body of a 2xx answer, verbatim.

        Raises:
            RegistryApiError: On any non-2xx status.
            RegistryTransportError: On connection errors, timeouts or other
                failures before a response was received.
        """
        body = SignedSubmission(document=document, signature=signature).to_json()
        started = time.perf_counter()

        try:
            response = self.client.post(self.url, content=body, headers=JSON_HEADERS)
        except httpx.TransportError as exc:
            logger.warning(
                "registry.transport_error",
                extra={
                    "doc_id": document.doc_id,
                    "error_type": type(exc).__name__,
                    "error_msg": str(exc),
                },
            )
            raise RegistryTransportError(
                code="registry_unreachable",
                message=f"Registry request failed: {exc}",
                details={"url": self.url, "error_type": type(exc).__name__},
            ) from exc

        duration_ms = round((time.perf_counter() - started) * 1000, 2)

        if not response.is_success:
            logger.warning(
                "registry.submit_failed",
                extra={
                    "doc_id": document.doc_id,
                    "status_code": response.status_code,
                    "duration_ms": duration_ms,
                },
            )
            raise RegistryApiError(
                code="registry_api_error",
                message=(
                    f"API call failed with status code: {response.status_code}, "
                    f"body: {response.text}"
                ),
                details={
                    "upstream_status": response.status_code,
                    "upstream_body": response.text,
                },
                status_code=response.status_code,
                body=response.text,
            )

        logger.info(
            "registry.submitted",
            extra={
                "doc_id": document.doc_id,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )
        return response.text

    def close(self) -> None:
        self.client.close()
