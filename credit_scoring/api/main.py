"""FastAPI application factory"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.responses import Response

from credit_scoring.api.dependencies import close_event_publisher
from credit_scoring.api.middleware import AccessLogMiddleware, MetricsMiddleware, RequestIDMiddleware
from credit_scoring.api.rate_limit import limiter
from credit_scoring.api.v1 import scores
from credit_scoring.api.v1.schemas import APIError
from credit_scoring.infrastructure.observability.logging import setup_logging
from credit_scoring.config import settings

# Setup structured logging
setup_logging(settings.log_level, settings.service_name)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Flush queued scoring events before exit
    close_event_publisher()


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Turn any uncaught error into a generic 500 without leaking internals"""
    logger.error(
        f"Unhandled error: {exc!r}",
        exc_info=exc,
        extra={
            "request_id": getattr(request.state, "request_id", None),
            "method": request.method,
            "path": request.url.path,
        },
    )
    error = APIError(code="INTERNAL_ERROR", message="An unexpected error occurred")
    return JSONResponse(status_code=500, content={"detail": error.model_dump()})


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Credit Scoring Service",
        description="Credit score calculation, history and cache-backed retrieval",
        version=settings.service_version,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Rate limiting state
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
    )

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name, "version": settings.service_version}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(scores.router, prefix="/api/v1", tags=["credit"])

    return app


app = create_app()
