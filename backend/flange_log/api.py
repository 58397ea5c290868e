"""Flange log HTTP API.

Serves generated flange records at ``GET /api/flange-log?limit=N`` in the
``{success, data, count}`` envelope the dashboard pages consume.
"""

import asyncio
import time
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from shared.config.settings import settings
from shared.logging.config import configure_logging, get_logger, log_performance
from shared.logging.middleware import LoggingMiddleware

from .generator import generate_mock_flange_data

logger = get_logger(__name__)

FETCH_ERROR_MESSAGE = "Failed to fetch flange data"


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str
    timestamp: str
    version: str


def create_app(
    query_delay: Optional[float] = None,
    generator: Callable[[int], list[dict[str, Any]]] = generate_mock_flange_data,
) -> FastAPI:
    """Create the flange log API application.

    Args:
        query_delay: Simulated query delay in seconds (settings value if omitted)
        generator: Produces ``limit`` flange records

    Returns:
        Configured FastAPI app
    """
    delay = settings.simulated_query_delay_seconds if query_delay is None else query_delay

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Flange log records for the flange dashboard",
        version=settings.app_version,
    )
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.backend_cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.get("/health", response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(
            status="healthy",
            timestamp=datetime.now(timezone.utc).isoformat(),
            version=settings.app_version,
        )

    @app.get(settings.flange_log_path)
    async def get_flange_log(
        limit: int = Query(default=settings.flange_log_limit, ge=0),
    ) -> JSONResponse:
        """Return ``limit`` flange records."""
        if delay > 0:
            await asyncio.sleep(delay)

        start = time.perf_counter()
        try:
            data = generator(limit)
        except Exception as e:
            logger.error("Flange log query failed", limit=limit, error=str(e), exc_info=True)
            log_performance("flange_log_query", time.perf_counter() - start, success=False)
            return JSONResponse(
                status_code=500, content={"success": False, "error": FETCH_ERROR_MESSAGE}
            )

        log_performance(
            "flange_log_query", time.perf_counter() - start, limit=limit, count=len(data)
        )
        return JSONResponse(content={"success": True, "data": data, "count": len(data)})

    return app


def run() -> None:
    """Serve the API with uvicorn."""
    import uvicorn

    configure_logging()
    uvicorn.run(
        create_app(), host="0.0.0.0", port=8000, log_level="debug" if settings.debug else "info"
    )


if __name__ == "__main__":
    run()
