from __future__ import annotations

from fastapi import APIRouter

from dashboard.app.core.config import settings

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
def health():
    # No upstream check here: the orders endpoint is only read by a mounted dashboard.
    return {
        "service": settings.service_name,
        "version": settings.version,
        "environment": settings.environment,
        "upstream": {
            "orders_api_url": settings.orders_api_url,
            "timeout_seconds": settings.orders_timeout_seconds,
        },
        "features": {
            "default_theme": settings.default_theme,
        },
        "status": "ok",
    }
