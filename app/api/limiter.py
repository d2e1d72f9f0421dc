"""Login throttling backed by a slowapi Limiter owned by each app instance."""

import logging
import math
import time

from fastapi import HTTPException, Request, status
from limits import parse
from slowapi import Limiter
from slowapi.util import get_remote_address

logger = logging.getLogger(__name__)

LOGIN_SCOPE = "auth.login"


def build_limiter() -> Limiter:
    """One limiter per app; every throttled route counts against its in-memory store."""
    return Limiter(key_func=get_remote_address, storage_uri="memory://")


def throttle_login(request: Request) -> None:
    """
    Dependency: count one login attempt for the client address.

    The limit comes from the app's own LOGIN_RATE_LIMIT. Raises 429 with a
    Retry-After header once the window is used up.
    """
    limiter: Limiter = request.app.state.limiter
    item = parse(request.app.state.settings.LOGIN_RATE_LIMIT)
    client = get_remote_address(request)
    if limiter.limiter.hit(item, LOGIN_SCOPE, client):
        return

    reset_at = limiter.limiter.get_window_stats(item, LOGIN_SCOPE, client).reset_time
    logger.warning("Login rate limit exceeded for %s (%s)", client, item)
    raise HTTPException(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        detail=f"Rate limit exceeded: {item}",
        headers={"Retry-After": str(max(1, math.ceil(reset_at - time.time())))},
    )
