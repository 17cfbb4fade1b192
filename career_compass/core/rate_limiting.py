"""Per-user request limits for endpoints that call the model.

Assessment submission and the chat relay each cost one completion, so
both share ``settings.rate_limit_llm``. Hosted mode keys on the session
subject; local mode and anonymous callers key on the client address.
"""

from fastapi import Request
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import JSONResponse

from career_compass.core.auth import decode_session_subject
from career_compass.core.config import settings
from career_compass.core.errors import RateLimitedError
from career_compass.core.responses import ErrorDetail, ErrorResponse

_DEFAULT_RETRY_AFTER_SECONDS = 60


def limit_key(request: Request) -> str:
    """Bucket a request for rate limiting.

    Returns:
        ``"user:<uuid>"`` for a verified session, ``"anon:<address>"`` for
        a hosted-mode request without one, else the bare client address.
    """
    address = get_remote_address(request)
    if not settings.auth_enabled:
        return address

    token = request.cookies.get(settings.auth_cookie_name)
    user_id = decode_session_subject(token) if token else None
    if user_id is None:
        return f"anon:{address}"
    return f"user:{user_id}"


# In-memory storage; one bucket table per process
limiter = Limiter(key_func=limit_key, enabled=settings.rate_limit_enabled)


def _retry_after_seconds(exc: RateLimitExceeded) -> int:
    """Length of the exceeded limit's window, e.g. 60 for "10/minute"."""
    try:
        return int(exc.limit.limit.get_expiry())
    except (AttributeError, TypeError, ValueError):
        return _DEFAULT_RETRY_AFTER_SECONDS


def rate_limit_exceeded_handler(
    _request: Request, exc: RateLimitExceeded
) -> JSONResponse:
    """Render a 429 in the standard error envelope with Retry-After."""
    error = RateLimitedError(str(exc.detail))
    return JSONResponse(
        status_code=error.status_code,
        content=ErrorResponse(
            error=ErrorDetail(code=error.code, message=error.message)
        ).model_dump(),
        headers={"Retry-After": str(_retry_after_seconds(exc))},
    )
