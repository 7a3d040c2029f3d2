"""Application-level exception types.

This module defines domain errors used across the limiter, the registry
client and the HTTP layer, enabling consistent error handling, logging, and
API responses.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability and clients.

    Fields are optional; each error kind fills the ones that apply.
    """

    code: str
    message: str
    hint: str
    http_status: int
    upstream_status: int
    upstream_body: str
    url: str
    error_type: str
    request_id: str
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Raised when input/config validation fails."""


class AdmissionCancelledError(AppError):
    """Raised when a caller blocked on the rate limiter is cancelled."""


@dataclass
class RegistryApiError(AppError):
    """Raised when the registry answers with a non-2xx status.

    Attributes:
        status_code: HTTP status returned by the registry.
        body: Raw response body, unmodified.
    """

    status_code: int = 0
    body: str = ""


class RegistryTransportError(AppError):
    """Raised when no response could be obtained from the registry."""
