import threading
from typing import Annotated

from fastapi import APIRouter, Depends

from registry_gateway.api.dependencies import (
    get_admission_cancel_event,
    get_document_service,
)
from registry_gateway.schemas.document import (
    CreateDocumentResponse,
    RateLimitStatsResponse,
    SignedSubmission,
)
from registry_gateway.services.document_service import DocumentService

router = APIRouter(tags=["Documents"])

ServiceDep = Annotated[DocumentService, Depends(get_document_service)]
CancelEventDep = Annotated[threading.Event | None, Depends(get_admission_cancel_event)]


# Sync endpoint: FastAPI runs it in its thread pool, so a caller blocked in
# admit() never stalls the event loop.
@router.post("/documents", response_model=CreateDocumentResponse)
def create_document(
    submission: SignedSubmission,
    service: ServiceDep,
    cancel_event: CancelEventDep,
) -> CreateDocumentResponse:
    """Submit a signed document to the registry.

    Waits for a slot in the shared sliding window, then forwards the
    document and signature in a single POST.

    Args:
        submission: Document metadata plus its signature.
        service: Shared document service.
        cancel_event: Set when the configured admission timeout elapses.

    Returns:
        CreateDocumentResponse: Registry response body, verbatim.

    Raises:
        RegistryApiError: Registry answered non-2xx (mapped to 502, or 429).
        RegistryTransportError: Registry unreachable (mapped to 504).
        AdmissionCancelledError: Admission timed out or the service is
            shutting down (mapped to 503).
    """
    result = service.create_document(
        submission.document, submission.signature, cancel_event=cancel_event
    )
    return CreateDocumentResponse(result=result)


# Async: answers on the event loop even when every worker thread is blocked.
@router.get("/rate-limit", response_model=RateLimitStatsResponse)
async def rate_limit_stats(service: ServiceDep) -> RateLimitStatsResponse:
    """Snapshot of the shared limiter's accounting."""
    stats = service.rate_limit_stats()
    return RateLimitStatsResponse(
        limit=stats.limit,
        window_seconds=stats.window_seconds,
        in_window=stats.in_window,
        available=stats.available,
        admitted_total=stats.admitted_total,
        evicted_total=stats.evicted_total,
        waiting=stats.waiting,
        closed=stats.closed,
    )
