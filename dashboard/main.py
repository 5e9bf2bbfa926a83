# dashboard/main.py
from __future__ import annotations

import logging
import traceback
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from dashboard.app.core.logging import setup_logging
from dashboard.app.core.config import settings

from dashboard.app.api.routes_dashboard import router as dashboard_router
from dashboard.app.api.routes_health import router as health_router
from dashboard.app.api.routes_metrics import router as metrics_router

log = logging.getLogger("dashboard")


def create_app() -> FastAPI:
    # Initialize logging early so all imports use correct handlers/levels
    setup_logging(settings.log_level, settings.log_format)

    app = FastAPI(
        title=settings.service_name or "Order Dashboard",
        version=settings.version or "0.1.0",
        docs_url="/docs",
        redoc_url=None,
        openapi_url="/openapi.json",
    )

    # --- Global JSON error handler: convert unexpected 500s to JSON so clients/jq can parse ---
    @app.exception_handler(Exception)
    async def _unhandled_exc_to_json(request: Request, exc: Exception):
        tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        log.error("unhandled exception %s %s\n%s", request.method, request.url.path, tb)
        return JSONResponse(
            status_code=500,
            content={
                "status": "error",
                "detail": str(exc),
                "path": str(request.url),
                "method": request.method,
            },
        )

    app.add_middleware(GZipMiddleware, minimum_size=1024)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins or ["*"],
        allow_credentials=False,
        allow_methods=settings.cors_allow_methods or ["GET"],
        allow_headers=settings.cors_allow_headers or ["*"],
    )

    # Routes
    app.include_router(dashboard_router)
    app.include_router(health_router)
    app.include_router(metrics_router)

    # Minimal runtime /meta for quick diagnostics (safe flags only)
    @app.get("/meta")
    def meta():
        return {
            "service": settings.service_name,
            "version": settings.version,
            "environment": settings.environment,
            "docs": "/docs",
            "tips": {
                "dashboard": "/?theme=light|dark",
                "state": "/api/dashboard",
                "health": "/api/health",
                "metrics": "/api/metrics",
            },
        }

    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run("dashboard.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
