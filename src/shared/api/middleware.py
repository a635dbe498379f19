"""
Shared API Middleware
======================

Correlation IDs and the catch-all exception handler. Both tag their output
with the service name and environment from ``app.state.settings``.
"""

import uuid
from datetime import datetime, timezone
from typing import Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from src.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
SERVICE_HEADER = "X-Service"


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.state.correlation_id = correlation_id

        response = await call_next(request)
        response.headers[CORRELATION_HEADER] = correlation_id
        settings = getattr(request.app.state, "settings", None)
        if settings is not None:
            response.headers[SERVICE_HEADER] = f"{settings.app_name}/{settings.app_version}"
        return response


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log the crash and answer 500; the error text is only shown in development."""
    correlation_id = getattr(request.state, "correlation_id", "unknown")
    settings = getattr(request.app.state, "settings", None)
    environment = getattr(settings, "environment", "unknown")

    logger.error(
        "Unhandled exception",
        extra={
            "correlation_id": correlation_id,
            "service": getattr(settings, "app_name", None),
            "environment": environment,
            "path": request.url.path,
            "error_type": type(exc).__name__,
            "error_message": str(exc),
        }
    )

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "correlation_id": correlation_id,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "debug_info": str(exc) if environment == "development" else None,
        }
    )
