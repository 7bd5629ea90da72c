from __future__ import annotations

import contextlib
import logging
import time

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from flightracker.api import api_router
from flightracker.config import settings
from flightracker.providers import TokenManager

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger("flightracker")


def create_app(*, transport: httpx.AsyncBaseTransport | None = None) -> FastAPI:
    """Build the service; ``transport`` replaces the upstream network in tests."""

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI):
        """Own the shared upstream client and the process-wide token cache."""

        app.state.http_client = httpx.AsyncClient(
            timeout=settings.opensky_timeout,
            transport=transport,
        )
        app.state.token_manager = TokenManager(http_client=app.state.http_client)
        logger.info("Upstream HTTP client initialized")

        try:
            yield
        finally:
            await app.state.http_client.aclose()
            logger.info("Upstream HTTP client closed")

    app = FastAPI(title="Flightracker", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log basic request information for observability."""

        start_time = time.time()
        response = await call_next(request)
        if settings.log_requests:
            duration_ms = (time.time() - start_time) * 1000
            logger.info(
                "HTTP %s %s -> %s (%.2f ms)",
                request.method,
                request.url.path,
                response.status_code,
                duration_ms,
            )
        return response

    app.include_router(api_router)

    @app.get("/", summary="Root")
    def read_root() -> dict[str, str]:
        """Basic root endpoint for quick verification."""

        return {"message": "Flightracker backend is running"}

    return app


app = create_app()
