from __future__ import annotations

import time
from functools import lru_cache

from fastapi import FastAPI, Request

from signalgen.api import router as api_router
from signalgen.config import settings
from signalgen.container import get_cycle_scheduler, get_export_service
from signalgen.logging_utils import get_logger


logger = get_logger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(title="signalgen", version="0.1.0")

    @app.middleware("http")
    async def log_http_requests(request: Request, call_next):
        """Centralized logging for all HTTP requests."""
        start = time.monotonic()
        response = None
        try:
            response = await call_next(request)
            return response
        finally:
            duration = time.monotonic() - start
            client_host = request.client.host if request.client else "unknown"
            status_code = response.status_code if response is not None else 500
            logger.info(
                "HTTP %s %s from %s -> %d in %.3fs",
                request.method,
                request.url.path,
                client_host,
                status_code,
                duration,
            )

    app.include_router(api_router)

    @app.on_event("startup")
    async def on_startup() -> None:
        # Force-init singletons so that failures surface at startup.
        scheduler = get_cycle_scheduler()
        export_service = get_export_service()
        logger.info(
            "Services initialized (scheduler=%s, export=%s, sample_rate=%dHz)",
            type(scheduler).__name__,
            type(export_service).__name__,
            settings.sample_rate_hz,
        )

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        get_cycle_scheduler().stop()

    return app


@lru_cache(maxsize=1)
def get_app() -> FastAPI:
    return create_app()


app = get_app()
