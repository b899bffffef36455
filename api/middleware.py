"""Request logging middleware.

Every request gets a request id (taken from the X-Request-ID header or
generated) that is bound into the loguru context, so any log line written
while the request runs, controller entries included, carries it. The
middleware logs request start/end with status and duration, and turns
anything that escapes the routes into the generic 500 response.
"""

import time
import uuid

from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response

from patterns.controller import GENERIC_ERROR_MESSAGE


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one start and one end line per request."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        context = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "client_ip": request.client.host if request.client else "unknown",
        }

        start = time.perf_counter()
        with logger.contextualize(**context):
            logger.info("request.start {} {}", request.method, request.url.path)
            try:
                response = await call_next(request)
            except Exception as exc:
                duration_ms = round((time.perf_counter() - start) * 1000, 1)
                logger.bind(
                    status_code=500,
                    duration_ms=duration_ms,
                    error_type=type(exc).__name__,
                ).exception("request.error")
                return PlainTextResponse(
                    GENERIC_ERROR_MESSAGE,
                    status_code=500,
                    headers={"X-Request-ID": request_id},
                )

            duration_ms = round((time.perf_counter() - start) * 1000, 1)
            logger.bind(
                status_code=response.status_code,
                duration_ms=duration_ms,
            ).info("request.end {} ({} ms)", response.status_code, duration_ms)
            response.headers.setdefault("X-Request-ID", request_id)
            return response
