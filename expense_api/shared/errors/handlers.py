"""
Centralized error handlers for FastAPI.

Maps errors raised outside the expense handler (authentication,
routing, rate limiting, unexpected failures) to HTTP responses.
No stack traces or internal details are exposed to clients.
Every body goes through the error mapper.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from expense_api.shared.errors.mapper import GenericError, error_payload
from expense_api.shared.security.auth import AuthenticationError

logger = logging.getLogger(__name__)

HTTP_401 = 401
HTTP_500 = 500

ERR_INTERNAL = GenericError("internal server error")


def internal_error_response() -> JSONResponse:
    """The 500 response sent for any unexpected failure."""
    return JSONResponse(status_code=HTTP_500, content=error_payload(ERR_INTERNAL))


def register_error_handlers(app: FastAPI) -> None:
    """Register all error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(AuthenticationError)
    async def handle_authentication(
        _request: Request, exc: AuthenticationError
    ) -> JSONResponse:
        """Handle missing or invalid tokens."""
        return JSONResponse(
            status_code=HTTP_401, content=error_payload(GenericError(exc.message))
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        _request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Handle unknown routes, unsupported methods, rate limits and similar."""
        return JSONResponse(
            status_code=exc.status_code,
            content=error_payload(GenericError(str(exc.detail))),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception) -> JSONResponse:
        """Last resort for failures raised outside RequestContextMiddleware."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return internal_error_response()
