"""FastAPI middleware that captures unhandled exceptions and logs them.

Error responses are logged with method, path and timing; anything that
escapes the route handlers becomes a 500 with the standard error envelope.
"""

from __future__ import annotations

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import JSONResponse

logger = logging.getLogger("risk.middleware")


class ErrorCaptureMiddleware(BaseHTTPMiddleware):
    """Catches unhandled exceptions, returns 500, and logs the error."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start = time.time()

        try:
            response = await call_next(request)
        except Exception:
            elapsed_ms = round((time.time() - start) * 1000, 2)
            logger.exception(
                "Unhandled exception on %s %s after %sms",
                request.method, request.url.path, elapsed_ms,
            )
            return JSONResponse(
                status_code=500,
                content={"success": False, "error": "Internal Server Error"},
            )

        elapsed_ms = round((time.time() - start) * 1000, 2)
        if response.status_code >= 500:
            logger.error(
                "HTTP %s on %s %s (%sms)",
                response.status_code, request.method, request.url.path, elapsed_ms,
            )
        elif response.status_code >= 400:
            logger.warning(
                "HTTP %s on %s %s (%sms)",
                response.status_code, request.method, request.url.path, elapsed_ms,
            )
        return response
