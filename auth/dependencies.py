"""
auth/dependencies.py -- Request authentication helpers.

Two credentials are checked in priority order:
  1. JWT cookie ("access_token") -- set by the login flow (web and API).
  2. Authorization: Bearer <token> header -- API clients using JWTs.

try_get_current_user() never raises. The API layer (api/deps.py) turns a
None into its Unauthenticated error so the response uses the API's error
envelope; the web layer turns it into a redirect to /login.

Layer rule: no imports from api/, web/, or companies/.
"""

from __future__ import annotations

from fastapi import Request

from auth.models import User
from auth.tokens import ACCESS_COOKIE, decode_access_token


def extract_token(request: Request) -> str | None:
    token: str | None = request.cookies.get(ACCESS_COOKIE)
    if not token:
        auth_header = request.headers.get("Authorization", "")
        if auth_header.startswith("Bearer "):
            token = auth_header[7:]
    return token or None


def try_get_current_user(request: Request) -> User | None:
    """Attempt to authenticate the request via cookie or Bearer token.

    Returns the authenticated, active User on success, None on any failure.
    """
    token = extract_token(request)
    if not token:
        return None
    payload = decode_access_token(token)
    if payload is None:
        return None
    user = request.app.state.user_store.get_by_id(payload["user_id"])
    if user is None or not user.is_active:
        return None
    return user
