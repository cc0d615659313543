"""
Shared API Middleware
======================

Common middleware and exception handlers for the FastAPI application.

Error responses never contain driver messages or stack details; those go
to the server log only.
"""

import time
import uuid
from typing import Callable, Dict

from fastapi import Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from bookshelf.core import RepositoryException
from bookshelf.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
INVALID_PAYLOAD = "invalid request payload"
INTERNAL_ERROR = "internal server error"


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    """
    Adds correlation ID to requests for tracing.

    Reuses the caller's X-Correlation-ID when present.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())

        # Store in request state for access in endpoints
        request.state.correlation_id = correlation_id

        response = await call_next(request)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs every request before it reaches the router, whatever its outcome.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = getattr(request.state, "correlation_id", "unknown")
        start_time = time.perf_counter()

        logger.info(
            f"{request.method} {request.url.path}",
            extra={
                "correlation_id": correlation_id,
                "method": request.method,
                "path": request.url.path,
                "client": request.client.host if request.client else None
            }
        )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Request failed",
                extra={
                    "correlation_id": correlation_id,
                    "method": request.method,
                    "path": request.url.path,
                    "error": str(e),
                    "response_time_ms": int((time.perf_counter() - start_time) * 1000)
                }
            )
            raise

        logger.info(
            "Request completed",
            extra={
                "correlation_id": correlation_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "response_time_ms": int((time.perf_counter() - start_time) * 1000)
            }
        )
        return response


def _correlation_id(request: Request) -> str:
    return getattr(request.state, "correlation_id", "unknown")


def cors_headers_for(request: Request) -> Dict[str, str]:
    """
    CORS headers for responses built outside the CORS middleware.

    Starlette renders unhandled-exception responses in its outermost
    middleware, so those never pass back through CORSMiddleware.
    """
    origin = request.headers.get("origin")
    settings = getattr(request.app.state, "settings", None)
    if not origin or settings is None:
        return {}

    if "*" in settings.cors_origins:
        allow_origin = "*"
    elif origin in settings.cors_origins:
        allow_origin = origin
    else:
        return {}
    return {"Access-Control-Allow-Origin": allow_origin}


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Decode failures are client errors; details stay in the log."""
    logger.warning(
        "Error decoding request payload",
        extra={
            "correlation_id": _correlation_id(request),
            "path": request.url.path,
            "errors": [error.get("msg") for error in exc.errors()]
        }
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": INVALID_PAYLOAD}
    )


async def repository_exception_handler(
    request: Request, exc: RepositoryException
) -> JSONResponse:
    """Persistence failures map to a generic 500."""
    logger.error(
        "Persistence operation failed",
        extra={
            "correlation_id": _correlation_id(request),
            "path": request.url.path,
            "method": request.method,
            "operation": exc.operation,
            "error_message": exc.message,
            "cause": repr(exc.__cause__) if exc.__cause__ else None
        }
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": INTERNAL_ERROR}
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler for unhandled exceptions.

    Returns consistent error responses for all exceptions.
    """
    logger.error(
        "Unhandled exception",
        extra={
            "correlation_id": _correlation_id(request),
            "path": request.url.path,
            "method": request.method,
            "error_type": type(exc).__name__,
            "error_message": str(exc)
        }
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": INTERNAL_ERROR},
        headers=cors_headers_for(request)
    )
