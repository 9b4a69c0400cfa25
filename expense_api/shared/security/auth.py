"""
Static shared-secret authentication.

Every expense route depends on `require_token`. The Authorization header
must carry exactly the configured secret, with no scheme prefix.
Rejections are raised as AuthenticationError and turned into 401
responses by the centralized error handlers.
"""

import logging
import secrets
from typing import Optional

from fastapi import Header, Request

logger = logging.getLogger(__name__)

ERR_UNAUTHORIZED = "unauthorized"
ERR_INVALID_TOKEN = "invalid token"


class AuthenticationError(Exception):
    """Raised when a request carries no token or the wrong one."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


def token_matches(presented: str, expected: str) -> bool:
    """Compare a presented header value against the secret in constant time."""
    return secrets.compare_digest(presented.encode(), expected.encode())


def require_token(
    request: Request, authorization: Optional[str] = Header(default=None)
) -> None:
    """FastAPI dependency guarding a route with the shared secret.

    Raises:
        AuthenticationError: If the header is missing, empty, or wrong.
    """
    if not authorization:
        logger.warning("Rejected %s %s: missing token", request.method, request.url.path)
        raise AuthenticationError(ERR_UNAUTHORIZED)

    expected = request.app.state.settings.auth_token
    if not token_matches(authorization, expected):
        logger.warning("Rejected %s %s: invalid token", request.method, request.url.path)
        raise AuthenticationError(ERR_INVALID_TOKEN)
