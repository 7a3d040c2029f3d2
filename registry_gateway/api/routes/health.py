from __future__ import annotations

from fastapi import APIRouter

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> dict:
    """Liveness check.

    Does not touch the registry or the rate limiter, and runs on the event
    loop so it answers even when every worker thread is blocked in admission.
    """

    return {"status": "ok"}
