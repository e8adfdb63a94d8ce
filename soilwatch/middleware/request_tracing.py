"""
Request tracing middleware

Assigns every request an ID, binds it into the structlog context so it
shows up on every log line emitted while handling the request, and records
request count and latency in Prometheus.
"""
import uuid
import time
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
import structlog

from ..metrics import track_api_request

logger = structlog.get_logger()


def _endpoint_label(request: Request) -> str:
    """Route template (/sensors/{sensor_id}) rather than the raw path, to bound label cardinality"""
    route = request.scope.get("route")
    path = getattr(route, "path", None)
    return path or "unmatched"


class RequestTracingMiddleware(BaseHTTPMiddleware):
    """
    - Generates or extracts X-Request-ID
    - Binds request_id, method and path to structlog contextvars
    - Adds X-Request-ID and X-Response-Time response headers
    - Records api_requests_total / api_request_duration_seconds
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        request.state.request_id = request_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path
        )

        start_time = time.perf_counter()

        logger.info("request_started",
            client_host=request.client.host if request.client else None,
            user_agent=request.headers.get("user-agent", "unknown")
        )

        try:
            response = await call_next(request)
        except Exception as e:
            duration = time.perf_counter() - start_time
            logger.error("request_failed",
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=round(duration * 1000, 2)
            )
            track_api_request(request.method, _endpoint_label(request), 500, duration)
            raise

        duration = time.perf_counter() - start_time

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{duration * 1000:.2f}ms"

        track_api_request(request.method, _endpoint_label(request), response.status_code, duration)

        logger.info("request_completed",
            status_code=response.status_code,
            duration_ms=round(duration * 1000, 2)
        )

        structlog.contextvars.clear_contextvars()

        return response
