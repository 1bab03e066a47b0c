# backend/goldfolio/middleware/correlation.py
"""
Correlation ID middleware for request tracing.

Correlation ID Sources (in order of precedence):
1. X-Correlation-ID header (from client or upstream service)
2. X-Request-ID header (alternative header name)
3. Generated UUID if neither header is present

The ID is stored in context for the duration of the request (so every log
line carries it) and echoed back in the X-Correlation-ID response header.

Client Usage:
    curl -X POST -H "X-Correlation-ID: my-trace-123" \\
         -d @payload.json http://localhost:8000/curve/overview
"""

import logging
import uuid
from typing import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from goldfolio.utils.context import clear_correlation_id, set_correlation_id

logger = logging.getLogger(__name__)

# Header names for correlation ID
CORRELATION_ID_HEADER = "X-Correlation-ID"
REQUEST_ID_HEADER = "X-Request-ID"


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Middleware that manages correlation IDs for request tracing."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        correlation_id = self._get_correlation_id(request)
        set_correlation_id(correlation_id)

        try:
            response = await call_next(request)
            response.headers[CORRELATION_ID_HEADER] = correlation_id
            return response
        finally:
            clear_correlation_id()

    @staticmethod
    def _get_correlation_id(request: Request) -> str:
        """Extract correlation ID from request headers or generate a new one."""
        for header in (CORRELATION_ID_HEADER, REQUEST_ID_HEADER):
            correlation_id = request.headers.get(header)
            if correlation_id:
                return correlation_id
        return str(uuid.uuid4())
