"""Request logging middleware and the storage fault handler.

Every request is logged with method, path, status and duration. A
StorageError escaping a route becomes a 503 instead of a bare 500, so a
broken data directory is never reported as "family not found".
"""

from __future__ import annotations

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from .store import StorageError

log = logging.getLogger(__name__)


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            log.exception("%s %s failed", request.method, request.url.path)
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000.0
        log.info(
            "%s %s -> %s (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response


async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    log.error("storage error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse({"detail": "storage unavailable"}, status_code=503)
