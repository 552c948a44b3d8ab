"""HTTP middleware."""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request

logger = logging.getLogger("app.access")


def register_access_log(app: FastAPI) -> None:
    """Log one line per request with method, path, status and duration."""

    @app.middleware("http")
    async def access_log(request: Request, call_next):
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration_ms = (time.perf_counter() - started) * 1000
            client = request.client.host if request.client else "-"
            logger.info(
                "%s %s - Status: %d - Duration: %.2fms - User-Agent: %s - Remote: %s",
                request.method,
                request.url.path,
                status_code,
                duration_ms,
                request.headers.get("user-agent", "-"),
                client,
            )
