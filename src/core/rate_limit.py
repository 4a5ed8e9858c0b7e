"""Rate limiting with slowapi.

Limits are keyed by client address. Reads, writes and URL fetches each
have their own budget, configurable through settings.
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import Response

from core.config import settings
from core.exceptions import ErrorCode

READ_LIMIT = settings.rate_limit_read
WRITE_LIMIT = settings.rate_limit_write
FETCH_LIMIT = settings.rate_limit_fetch

limiter = Limiter(
    key_func=get_remote_address,
    enabled=settings.rate_limit_enabled,
)


def rate_limit_exceeded_handler(request: Request, exc: Exception) -> Response:
    """Render a 429 in the standard error format with a Retry-After hint."""
    headers: dict[str, str] = {}
    if isinstance(exc, RateLimitExceeded):
        detail = exc.detail
        headers["Retry-After"] = str(exc.limit.limit.get_expiry())
    else:
        detail = str(exc)

    return JSONResponse(
        status_code=429,
        content={
            "error_code": ErrorCode.RATE_LIMIT_EXCEEDED.value,
            "message": f"Rate limit exceeded: {detail}",
            "details": None,
        },
        headers=headers,
    )
