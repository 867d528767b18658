"""
Shared API Middleware
=====================

Request tracing, timing and access logging, plus the exception handlers
that give every error response the same shape.

Client errors (missing, blank or wrongly-typed fields):
    400 {"error": "Missing required fields", "fields": [...], "correlation_id": ...}

Server errors (including bodies that are not a JSON object):
    500 {"detail": "Internal server error", "correlation_id": ..., "timestamp": ...}
"""

import time
import uuid
from datetime import datetime, timezone
from typing import Callable, List

from fastapi import Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from incidentdesk.core import ValidationException
from incidentdesk.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


def _correlation_id(request: Request) -> str:
    return getattr(request.state, "correlation_id", "unknown")


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    """
    Tags each request with a correlation id.

    A client-supplied ``X-Correlation-ID`` is reused; otherwise a UUID is
    generated. The id is echoed back on the response.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.state.correlation_id = correlation_id

        response = await call_next(request)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response


class TimingMiddleware(BaseHTTPMiddleware):
    """Adds ``X-Response-Time`` and a running ``X-Request-Count``."""

    def __init__(self, app: ASGIApp):
        super().__init__(app)
        self.request_count = 0

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        self.request_count += 1
        start = time.perf_counter()

        response = await call_next(request)

        response.headers["X-Response-Time"] = f"{time.perf_counter() - start:.3f}s"
        response.headers["X-Request-Count"] = str(self.request_count)
        return response


class AccessLogMiddleware(BaseHTTPMiddleware):
    """One log line per request, with status and duration."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start = time.perf_counter()
        context = {
            "correlation_id": _correlation_id(request),
            "method": request.method,
            "path": request.url.path,
        }

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error("Request failed", extra={
                **context,
                "error": str(e),
                "response_time_ms": int((time.perf_counter() - start) * 1000)
            })
            raise

        logger.info("Request completed", extra={
            **context,
            "status_code": response.status_code,
            "response_time_ms": int((time.perf_counter() - start) * 1000)
        })
        return response


# ========== Exception Handlers ==========

def _missing_fields_response(request: Request, fields: List[str]) -> JSONResponse:
    correlation_id = _correlation_id(request)
    logger.info("Rejected request with missing fields", extra={
        "correlation_id": correlation_id,
        "path": request.url.path,
        "fields": fields
    })
    return JSONResponse(
        status_code=400,
        content={
            "error": "Missing required fields",
            "fields": fields,
            "correlation_id": correlation_id
        }
    )


def _is_malformed_body(error: dict) -> bool:
    # Unparseable JSON, or a body that is not an object
    return error.get("type") == "json_invalid" or tuple(error.get("loc", ())) == ("body",)


async def validation_exception_handler(
    request: Request,
    exc: ValidationException
) -> JSONResponse:
    """400 for blank fields caught by a service."""
    return _missing_fields_response(request, exc.fields)


async def request_validation_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    400 for request fields FastAPI could not validate.

    Missing, blank and wrongly-typed fields are reported alike, by their
    wire name. A body that is not a JSON object at all is a 500.
    """
    errors = exc.errors()
    if any(_is_malformed_body(error) for error in errors):
        return await global_exception_handler(request, exc)

    fields: List[str] = []
    for error in errors:
        name = ".".join(str(part) for part in error.get("loc", ()) if part != "body") or "body"
        if name not in fields:
            fields.append(name)
    return _missing_fields_response(request, fields)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """500 for anything else; the message is only exposed in development or debug mode."""
    correlation_id = _correlation_id(request)

    logger.error("Unhandled exception", extra={
        "correlation_id": correlation_id,
        "path": request.url.path,
        "method": request.method,
        "error_type": type(exc).__name__,
        "error_message": str(exc)
    })

    config = getattr(request.app.state, "settings", None)
    is_dev = getattr(config, "environment", None) == "development" or getattr(config, "debug", False)

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "correlation_id": correlation_id,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "debug_info": str(exc) if is_dev else None
        }
    )
