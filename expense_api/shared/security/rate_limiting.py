"""
Rate limiting configuration and setup.

Uses slowapi to enforce a per-client default limit on every route.
Protects against denial-of-service and resource abuse.

The limit is checked by `enforce_rate_limit`, an application-wide
dependency, so it applies to every registered route without relying on
middleware-side route lookup.
"""

import logging

from fastapi import HTTPException, Request
from limits import RateLimitItem, parse
from slowapi import Limiter
from slowapi.util import get_remote_address

from expense_api.core.config import Settings
from expense_api.shared.errors.mapper import GenericError

logger = logging.getLogger(__name__)

HTTP_429 = 429

ERR_RATE_LIMITED = GenericError("rate limit exceeded")

DEFAULT_SCOPE = "default"


def build_limiter(app_settings: Settings) -> Limiter:
    """Create a limiter applying the configured default limit.

    Args:
        app_settings: Settings providing the limit and the on/off toggle.

    Returns:
        A Limiter meant for `app.state.limiter`.
    """
    return Limiter(
        key_func=get_remote_address,
        default_limits=[app_settings.rate_limit_default],
        enabled=app_settings.rate_limit_enabled,
    )


def build_rate_limit(app_settings: Settings) -> RateLimitItem:
    """Parse the configured default limit, e.g. "60/minute".

    Raises:
        ValueError: If the limit string is not understood.
    """
    return parse(app_settings.rate_limit_default)


def enforce_rate_limit(request: Request) -> None:
    """FastAPI dependency counting one hit for the calling client.

    Raises:
        HTTPException: 429 once the client has used up its limit.
    """
    limiter: Limiter = request.app.state.limiter
    if not limiter.enabled:
        return

    key = get_remote_address(request)
    if not limiter.limiter.hit(request.app.state.rate_limit, key, DEFAULT_SCOPE):
        logger.warning("Rate limit exceeded for %s on %s", key, request.url.path)
        raise HTTPException(status_code=HTTP_429, detail=ERR_RATE_LIMITED.message)
