from __future__ import annotations

from registry_gateway.api.routes.documents import router as documents_router
from registry_gateway.api.routes.health import router as health_router

__all__ = ["documents_router", "health_router"]
