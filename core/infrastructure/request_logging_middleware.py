"""Per-request access logging for the attribution API.

Each request gets a request id (taken from ``X-Request-ID`` when the caller
sends one) bound into structlog's context, so oracle and session log lines
emitted while serving it carry the same id. The id is echoed back on the
response.
"""

import time
import uuid

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger("request")

REQUEST_ID_HEADER = "X-Request-ID"
QUIET_PATHS = frozenset({"/health"})


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 1)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:12]
        client_host = request.client.host if request.client else None

        with structlog.contextvars.bound_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        ):
            started = time.perf_counter()
            try:
                response = await call_next(request)
            except Exception:
                logger.exception(
                    "request_failed",
                    client=client_host,
                    duration_ms=_elapsed_ms(started),
                )
                raise

            response.headers[REQUEST_ID_HEADER] = request_id
            log = logger.warning if response.status_code >= 500 else logger.info
            log(
                "request_completed",
                status_code=response.status_code,
                client=client_host,
                duration_ms=_elapsed_ms(started),
            )
            return response
