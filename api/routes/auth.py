"""
api/routes/auth.py -- Authentication REST endpoints.

Routes:
  POST /api/auth/login     -- email/password login; sets JWT cookie
  POST /api/auth/logout    -- clears cookie
  POST /api/auth/register  -- self-registration (when enabled); logs the new user in
  GET  /api/auth/me        -- current user info (requires auth)

Security:
  POST /login and /register are rate-limited per client (LOGIN_RATE_LIMIT).
  authenticate_user() provides timing equalization -- use it, never inline.
  Cache-Control: no-store on responses that carry a token.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from api.deps import require_user, translator, user_store
from api.errors import BadRequest, Conflict, Unauthenticated
from api.limiter import limiter
from api.models import LoginRequest, LoginResponse, MeResponse, MessageResponse, RegisterRequest
from auth.models import User
from auth.tokens import authenticate_user, clear_auth_cookie, create_access_token, hash_password, set_auth_cookie
from core.config import get_settings

logger = logging.getLogger("companyhub.auth")

_settings = get_settings()

router = APIRouter()


def _token_response(user: User, status_code: int = 200) -> JSONResponse:
    token = create_access_token(user.id, user.username)
    resp = JSONResponse(
        status_code=status_code,
        content=LoginResponse(
            access_token=token,
            token_type="bearer",  # noqa: S106 # nosec B106 -- OAuth token type, not a password
            expires_in=_settings.token_expire_seconds,
            username=user.username,
        ).model_dump(by_alias=True),
    )
    set_auth_cookie(resp, token)
    resp.headers["Cache-Control"] = "no-store"
    return resp


@limiter.limit(_settings.login_rate_limit)  # must be ABOVE @router to preserve FastAPI introspection
@router.post("/auth/login", response_model=LoginResponse)
def login(request: Request, body: LoginRequest) -> JSONResponse:
    """Authenticate with email and password; set JWT cookie.

    Returns the same error for an unknown email and a wrong password.
    """
    store = user_store(request)
    user = authenticate_user(store, body.username, body.password)
    if user is None:
        raise Unauthenticated("invalidCredentials")
    store.update_last_login(user.id)
    logger.info("User %d logged in", user.id)
    return _token_response(user)


@router.post("/auth/logout", response_model=MessageResponse)
async def logout(request: Request) -> JSONResponse:
    """Clear the JWT cookie and end the session."""
    t = translator(request)
    resp = JSONResponse(content=MessageResponse(message=t("loggedOut")).model_dump(by_alias=True))
    clear_auth_cookie(resp)
    return resp


@limiter.limit(_settings.login_rate_limit)
@router.post("/auth/register", response_model=LoginResponse, status_code=201)
def register(request: Request, body: RegisterRequest) -> JSONResponse:
    """Create an account and log it in. 409 if the email is already registered."""
    if not _settings.self_registration_enabled:
        raise BadRequest("registrationDisabled")
    store = user_store(request)
    new_user = User(
        username=str(body.username),
        hashed_password=hash_password(body.password),
        display_name=body.display_name or None,
    )
    try:
        user_id = store.create_user(new_user)
    except IntegrityError:
        raise Conflict("userAlreadyExists") from None
    logger.info("User %d registered", user_id)
    return _token_response(store.get_by_id(user_id), status_code=201)


@router.get("/auth/me", response_model=MeResponse)
def me(request: Request) -> MeResponse:
    """Return identity information for the currently authenticated user."""
    current_user = require_user(request)
    return MeResponse(
        user_id=current_user.id,
        username=current_user.username,
        display_name=current_user.display_name,
    )
