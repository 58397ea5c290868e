"""Request logging middleware for the flange log API."""

import time
import uuid
from collections.abc import Callable
from typing import Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from .config import get_logger

REQUEST_ID_HEADER = "X-Request-ID"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log every API request with a request id and its duration."""

    def __init__(self, app: Any, logger_name: str = "http") -> None:
        super().__init__(app)
        self.logger = get_logger(logger_name)

    async def dispatch(self, request: Request, call_next: Callable[[Request], Any]) -> Response:
        """Process HTTP request and log details."""
        # Reuse a caller supplied id so dashboard and API logs can be joined
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        log = self.logger.bind(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            query=dict(request.query_params),
        )
        start_time = time.perf_counter()
        log.info("HTTP request started")

        try:
            response = await call_next(request)
        except Exception as exc:
            log.error(
                "HTTP request failed",
                duration_seconds=time.perf_counter() - start_time,
                error=str(exc),
                exc_info=True,
            )
            raise

        log.info(
            "HTTP request completed",
            status_code=response.status_code,
            duration_seconds=time.perf_counter() - start_time,
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
