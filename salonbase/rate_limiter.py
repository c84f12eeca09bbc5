from fastapi import Request, status
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from salonbase.config import (
    RATE_LIMIT_ENABLED,
    RATE_LIMIT_MAX_REQUESTS,
    RATE_LIMIT_STORAGE_URI,
    RATE_LIMIT_WINDOW_MS,
)
from salonbase.logger import get_logger

logger = get_logger(__name__)

DEFAULT_LIMIT = f"{RATE_LIMIT_MAX_REQUESTS} per {max(RATE_LIMIT_WINDOW_MS // 1000, 1)} second"


def build_limiter(limit: str = DEFAULT_LIMIT, enabled: bool = RATE_LIMIT_ENABLED) -> Limiter:
    """Per client IP limiter applied to every route through SlowAPIMiddleware"""
    return Limiter(
        key_func=get_remote_address,
        default_limits=[limit],
        storage_uri=RATE_LIMIT_STORAGE_URI,
        enabled=enabled,
    )


limiter = build_limiter()


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    # SlowAPIMiddleware calls this without awaiting it
    logger.warning(f"Rate limit hit by {get_remote_address(request)} on {request.url.path}: {exc.detail}")
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={"success": False, "message": "Too many requests from this IP, please try again later."},
    )
