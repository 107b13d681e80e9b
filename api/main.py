"""
api/main.py -- FastAPI application entry point for CompanyHub.

Exposes the tenant domain (companies, stocks, price types, roles, members,
invitations) and authentication as a JSON API under /api. The server-rendered
pages in web/ consume the same API in-process.

Run with:  uvicorn asgi:app --reload

Middleware stack (outermost to innermost):
  1. TrustedHostMiddleware -- rejects requests with unexpected Host headers
  2. CORSMiddleware        -- adds CORS headers for allowed browser origins
  3. SlowAPIMiddleware     -- enforces rate limits from api.limiter

Lifespan opens the user and company stores on startup and disposes their
engines on shutdown. Stores live on app.state, never in module globals.
"""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.deps import company_store, translator
from api.errors import ApiError, InvalidBody, UnknownStoreError
from api.limiter import limiter
from api.models import ErrorDetail, ErrorResponse, HealthResponse, IssueDetail, ValidationErrorResponse
from api.routes.auth import router as auth_router
from api.routes.companies import router as companies_router
from api.routes.invitations import router as invitations_router
from api.routes.members import router as members_router
from api.routes.price_types import router as price_types_router
from api.routes.roles import router as roles_router
from api.routes.stocks import router as stocks_router
from auth.store import UserStore
from companies.store import CompanyStore
from core.config import get_settings

APP_VERSION = "0.1.0"

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)-5s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("companyhub.api")

_settings = get_settings()

# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the stores on startup and close them on shutdown.

    Both repositories point at the same DATABASE_URL; each creates its own
    tables if they are missing.
    """
    logger.info("CompanyHub API starting up")
    app.state.user_store = UserStore(_settings.database_url)
    app.state.company_store = CompanyStore(_settings.database_url)
    logger.info("Stores initialized")

    yield

    app.state.company_store.close()
    app.state.user_store.close()
    logger.info("CompanyHub API shutdown complete")


# ---------------------------------------------------------------------------
# App instantiation
# ---------------------------------------------------------------------------

app = FastAPI(
    title="CompanyHub API",
    description="Multi-tenant company management: stocks, price types, roles, members and invitations.",
    version=APP_VERSION,
    lifespan=lifespan,
    docs_url="/api/docs" if _settings.debug else None,
    redoc_url=None,
    openapi_url="/api/openapi.json" if _settings.debug else None,
)

# ---------------------------------------------------------------------------
# Middleware stack
#
# Register in the order you want the request to encounter them:
# TrustedHost -> CORS -> SlowAPI.
# ---------------------------------------------------------------------------

app.add_middleware(
    TrustedHostMiddleware,
    allowed_hosts=_settings.allowed_hosts,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization", "Accept-Language"],
    max_age=3600,
)

app.add_middleware(SlowAPIMiddleware)

# SlowAPI looks for app.state.limiter by convention.
app.state.limiter = limiter

# ---------------------------------------------------------------------------
# Request logging middleware
# ---------------------------------------------------------------------------


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    ms = (time.perf_counter() - start) * 1000
    logger.info(
        "%s %s %d %.1fms %s",
        request.method,
        request.url.path,
        response.status_code,
        ms,
        request.client.host if request.client else "unknown",
    )
    return response


# ---------------------------------------------------------------------------
# Router registration
# ---------------------------------------------------------------------------

app.include_router(auth_router, prefix="/api", tags=["Auth"])
app.include_router(companies_router, prefix="/api", tags=["Companies"])
app.include_router(stocks_router, prefix="/api", tags=["Stocks"])
app.include_router(price_types_router, prefix="/api", tags=["Price types"])
app.include_router(members_router, prefix="/api", tags=["Members"])
app.include_router(roles_router, prefix="/api", tags=["Roles"])
app.include_router(invitations_router, prefix="/api", tags=["Invitations"])
# Web UI router is mounted by asgi.py, not here.


# ---------------------------------------------------------------------------
# Exception handlers
#
# All handlers return the same envelope, {"errors": [{"code", "message"}]},
# with the message translated into the request's locale.
# ---------------------------------------------------------------------------


def _error_response(request: Request, status_code: int, code: str, message_id: str) -> JSONResponse:
    t = translator(request)
    body = ErrorResponse(errors=[ErrorDetail(code=code, message=t(message_id))])
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True))


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    if isinstance(exc, InvalidBody):
        t = translator(request)
        body = ValidationErrorResponse(
            message=t(exc.message_id),
            errors=[IssueDetail(**issue.as_dict()) for issue in exc.issues],
        )
        return JSONResponse(status_code=exc.status_code, content=body.model_dump(by_alias=True))
    return _error_response(request, exc.status_code, exc.code, exc.message_id)


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Return 429 when a rate limit is exceeded; Retry-After tells clients how long to wait."""
    retry_after = int(getattr(exc, "retry_after", 60))
    response = _error_response(request, 429, "rate_limited", "tooManyRequests")
    response.headers["Retry-After"] = str(retry_after)
    return response


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed JSON or query/form data FastAPI itself could not parse."""
    logger.debug("Request validation failed: %s", exc.errors())
    return _error_response(request, 400, "invalid_request", "invalidRequest")


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message_id = "recordNotFound" if exc.status_code == 404 else "invalidRequest"
    return _error_response(request, exc.status_code, f"http_{exc.status_code}", message_id)


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Store failures: the driver error is logged, the client gets a generic message."""
    logger.exception("Store error on %s %s", request.method, request.url.path)
    error = UnknownStoreError()
    return _error_response(request, error.status_code, error.code, error.message_id)


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler for unexpected server errors. The traceback goes to the log only."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return _error_response(request, 500, "server_error", "serverError")


# ---------------------------------------------------------------------------
# Health endpoint
#
# Defined directly in main.py (not in a router) so it is always reachable
# regardless of router registration state. Exempt from rate limiting.
# ---------------------------------------------------------------------------


@limiter.exempt
@app.get("/api/health", response_model=HealthResponse, tags=["Health"])
async def health(request: Request) -> HealthResponse:
    """Return API liveness, version and whether the database answers."""
    try:
        database = company_store(request).ping()
    except SQLAlchemyError:
        logger.exception("Health check could not reach the database")
        database = False
    return HealthResponse(status="ok" if database else "degraded", version=APP_VERSION, database=database)
