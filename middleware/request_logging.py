"""
Request logging middleware. One line per request: method, path, status,
duration. Bodies are never logged; window moves and ledger amounts can be
reconstructed from the service loggers when LOG_LEVEL=DEBUG.
"""
import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)

# Position/size updates fire continuously while dragging; keep them at DEBUG.
_CHATTY_SUFFIXES = ("/position", "/size")


def _level_for(status: int, path: str) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    if path.endswith(_CHATTY_SUFFIXES):
        return logging.DEBUG
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        method = request.method
        path = request.scope.get("path", "")
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        status = response.status_code
        logger.log(
            _level_for(status, path),
            "request_finished method=%s path=%s status=%s duration_ms=%.1f",
            method, path, status, duration_ms,
        )
        return response
