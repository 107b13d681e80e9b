"""
api/limiter.py -- Shared slowapi rate limiter instance.

Import this in api/main.py (to mount as middleware) and in routers that
apply per-route limits with @limiter.limit().

Using a single shared instance ensures all routes share the same in-memory
counter store. If this were instantiated in each module separately, each
module would get its own isolated counter and rate limits would never trigger.

Keys: authenticated requests are counted per user, anonymous ones per client
address. Page renderers call the API in-process with the visitor's cookie
and client address (web/client.py), so every page load is counted against
the visitor who caused it.
"""

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from auth.dependencies import extract_token
from auth.tokens import decode_access_token
from core.config import get_settings

_settings = get_settings()


def rate_limit_key(request: Request) -> str:
    token = extract_token(request)
    payload = decode_access_token(token) if token else None
    if payload is not None:
        return f"user:{payload['user_id']}"
    return get_remote_address(request)


limiter = Limiter(
    key_func=rate_limit_key,
    default_limits=[_settings.api_rate_limit],
    storage_uri="memory://",
    enabled=_settings.rate_limit_enabled,
)
