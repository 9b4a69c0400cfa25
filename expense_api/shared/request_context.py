"""
Request context middleware.

Assigns every request an id, exposes it to log records through
`request_id_ctx`, writes one access log line per request and echoes the
id back in the X-Request-ID response header. Unexpected exceptions from
the application are logged and answered with a 500 here, so those
responses carry the id and an access line too.

No business logic. Pure cross-cutting concern.
"""

import logging
import re
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from expense_api.shared.errors.handlers import internal_error_response
from expense_api.shared.logging import request_id_ctx

REQUEST_ID_HEADER = "X-Request-ID"

# Inbound ids are reused only when they are short and log-safe.
_REQUEST_ID_PATTERN = re.compile(r"[A-Za-z0-9._-]{1,64}")

logger = logging.getLogger("expense_api.access")


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Middleware that tags each request with an id and logs its outcome."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Process request inside its id context and add the id header."""
        inbound = request.headers.get(REQUEST_ID_HEADER, "")
        request_id = (
            inbound if _REQUEST_ID_PATTERN.fullmatch(inbound) else uuid.uuid4().hex
        )
        token = request_id_ctx.set(request_id)
        started = time.perf_counter()
        try:
            response = await self._call_app(request, call_next)
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(
                "%s %s -> %d (%.1f ms)",
                request.method,
                request.url.path,
                response.status_code,
                elapsed_ms,
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            request_id_ctx.reset(token)

    async def _call_app(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            logger.exception(
                "Unhandled %s on %s %s",
                type(exc).__name__,
                request.method,
                request.url.path,
            )
            return internal_error_response()
