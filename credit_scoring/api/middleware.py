"""FastAPI middleware for request tracing, access logging and metrics"""

import uuid
import time
import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from credit_scoring.infrastructure.observability.metrics import request_duration_histogram

REQUEST_ID_HEADER = "X-Request-ID"
UNMATCHED_ENDPOINT = "unmatched"

access_logger = logging.getLogger("credit_scoring.access")


def route_template(request: Request) -> str:
    """Route path template, or a fixed label when no route matched"""
    route = request.scope.get("route")
    return getattr(route, "path", UNMATCHED_ENDPOINT)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Propagate or assign a request ID for distributed tracing"""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class AccessLogMiddleware(BaseHTTPMiddleware):
    """One structured log line per request"""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()

        response = await call_next(request)

        access_logger.info(
            "HTTP request",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status": response.status_code,
                "duration_ms": round((time.time() - start_time) * 1000, 2),
                "client_ip": request.client.host if request.client else None,
                "request_id": getattr(request.state, "request_id", None),
            },
        )
        return response


class MetricsMiddleware(BaseHTTPMiddleware):
    """Record HTTP request metrics"""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()

        response = await call_next(request)

        duration = time.time() - start_time
        # Route template keeps user ids and scanned paths out of label values
        request_duration_histogram.labels(
            method=request.method,
            endpoint=route_template(request),
            status=response.status_code,
        ).observe(duration)

        return response
