"""Request logging middleware using structlog."""

import logging
import time
import uuid

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

logger = structlog.get_logger()

# Query filters bound to every log line of a request
SCOPE_PARAMS = {"clinicId": "clinic_id", "assistantId": "assistant_id"}

# Path params naming the call or evaluation a request touches
RESOURCE_PARAMS = ("call_id", "evaluation_id")


def review_scope(request: Request) -> dict:
    """Clinic and assistant filters present on the query string."""
    return {
        key: request.query_params[param]
        for param, key in SCOPE_PARAMS.items()
        if request.query_params.get(param)
    }


def review_target(request: Request) -> dict:
    """Call or evaluation id matched by the router, empty before routing."""
    return {
        key: request.path_params[key]
        for key in RESOURCE_PARAMS
        if key in request.path_params
    }


def configure_logging(level: str = "INFO") -> None:
    """Configure structlog for structured JSON logging."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware that logs all requests and responses."""

    async def dispatch(self, request: Request, call_next) -> Response:
        """Log request and response details."""
        request_id = str(uuid.uuid4())[:8]
        request.state.request_id = request_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id, **review_scope(request))

        start_time = time.perf_counter()

        logger.info(
            "Request started",
            method=request.method,
            path=request.url.path,
            query=str(request.query_params),
            client=request.client.host if request.client else None,
        )

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000

        log_method = logger.info if response.status_code < 400 else logger.warning
        log_method(
            "Request completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round(duration_ms, 2),
            **review_target(request),
        )

        response.headers["X-Request-ID"] = request_id

        return response
