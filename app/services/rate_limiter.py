"""Per-client rate limiting for the /api/v1 data routes (slowapi, in-memory)."""

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from app.config import settings


def get_client_ip(request: Request) -> str:
    """Get client IP, handling proxies via X-Forwarded-For."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # Take the first IP (original client)
        return forwarded.split(",")[0].strip()
    return get_remote_address(request)


limiter = Limiter(
    key_func=get_client_ip,
    storage_uri="memory://",
    enabled=settings.rate_limit_enabled,
)

# One budget per client across every data route, read from settings per request.
api_limit = limiter.shared_limit(lambda: settings.rate_limit_api, scope="api")
