"""
Rate limiting configuration.

Uses slowapi to cap requests per client address. The default limit is
enforced by an application-wide dependency, so it applies to every
matched route however the routers are nested.
"""

import logging

from fastapi import HTTPException, Request
from limits import parse_many
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import Settings

logger = logging.getLogger(__name__)

HTTP_429 = 429
RATE_LIMIT_MESSAGE = "Demasiadas solicitudes, intente de nuevo más tarde"


def build_limiter(app_settings: Settings) -> Limiter:
    """Create the limiter for one application instance.

    Args:
        app_settings: Settings providing the default limit and on/off switch.

    Returns:
        A limiter keyed by client address.
    """
    return Limiter(
        key_func=get_remote_address,
        default_limits=[app_settings.rate_limit_default],
        enabled=app_settings.rate_limit_enabled,
    )


class DefaultRateLimit:
    """FastAPI dependency charging each request against the default limit.

    Buckets are kept per client address and path, in the limiter's
    storage. Exceeding any bucket raises a 429 that the error handlers
    turn into the uniform envelope.
    """

    def __init__(self, limiter: Limiter, limit: str) -> None:
        self._limiter = limiter
        self._items = parse_many(limit)

    def __call__(self, request: Request) -> None:
        if not self._limiter.enabled:
            return
        client = get_remote_address(request)
        for item in self._items:
            if not self._limiter.limiter.hit(item, client, request.url.path):
                logger.warning("Rate limit %s exceeded on %s", item, request.url.path)
                raise HTTPException(status_code=HTTP_429, detail=RATE_LIMIT_MESSAGE)
