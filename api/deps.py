"""
api/deps.py -- Per-request building blocks shared by the resource routers.

Handlers call these in the order of the request state machine:

    parse_page_params()  (list endpoints)  -> MissingParams
    require_user()                          -> Unauthenticated
    member_access()      (reads)            -> UnknownCompany / NotAMember
    allowed_company()    (writes)           -> UnknownCompany
    validate_body()      (writes)           -> InvalidBody

Calling them explicitly (rather than as Depends() parameters) keeps the
check order visible in each handler: page/limit are rejected before
authentication is even attempted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, TypeVar

from fastapi import Request
from pydantic import BaseModel

from api.errors import InvalidBody, MissingParams, NotAMember, Unauthenticated, UnknownCompany
from auth.dependencies import try_get_current_user
from auth.models import User
from auth.store import UserStore
from companies import access
from companies.models import Company
from companies.store import CompanyStore
from core.config import get_settings
from core.i18n import Translator, negotiate_locale, parse_accept_language
from core.pagination import MAX_LIMIT, MAX_PAGE, start_index
from core.validation import SchemaValidator

ModelT = TypeVar("ModelT", bound=BaseModel)


# ---------------------------------------------------------------------------
# Stores
# ---------------------------------------------------------------------------


def company_store(request: Request) -> CompanyStore:
    return request.app.state.company_store


def user_store(request: Request) -> UserStore:
    return request.app.state.user_store


# ---------------------------------------------------------------------------
# Locale
# ---------------------------------------------------------------------------


def request_locale(request: Request) -> str:
    """Negotiate the response locale from the Accept-Language header."""
    settings = get_settings()
    preferred = parse_accept_language(request.headers.get("accept-language"))
    return negotiate_locale(preferred, settings.supported_locales, settings.default_locale)


def translator(request: Request, namespace: str = "API") -> Translator:
    return Translator(request_locale(request), namespace, fallback_locale=get_settings().default_locale)


# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PageParams:
    page: int
    limit: int
    start_index: int


def _bounded_int(value: Optional[str], maximum: int) -> Optional[int]:
    if value is None:
        return None
    try:
        number = int(value.strip())
    except ValueError:
        return None
    return number if 0 < number <= maximum else None


def parse_page_params(page: Optional[str], limit: Optional[str]) -> PageParams:
    """Parse the page/limit query parameters.

    Raises MissingParams unless both are positive integers no larger than
    MAX_PAGE and MAX_LIMIT.
    """
    page_number = _bounded_int(page, MAX_PAGE)
    page_size = _bounded_int(limit, MAX_LIMIT)
    if page_number is None or page_size is None:
        raise MissingParams()
    return PageParams(page=page_number, limit=page_size, start_index=start_index(page_number, page_size))


# ---------------------------------------------------------------------------
# Identity and company access
# ---------------------------------------------------------------------------


def require_user(request: Request) -> User:
    user = try_get_current_user(request)
    if user is None:
        raise Unauthenticated()
    return user


def member_access(request: Request, company_id: str, user: User) -> access.Access:
    try:
        return access.resolve_access(company_store(request), company_id, user.id)
    except access.CompanyNotFound:
        raise UnknownCompany() from None
    except access.NotAMember:
        raise NotAMember() from None


def allowed_company(request: Request, company_id: str) -> Company:
    """Return the company if the caller owns it; anonymous callers and non-owners get UnknownCompany."""
    user = try_get_current_user(request)
    company = access.get_allowed_company(company_store(request), company_id, user.id if user else None)
    if company is None:
        raise UnknownCompany()
    return company


# ---------------------------------------------------------------------------
# Body validation
# ---------------------------------------------------------------------------


def validate_body(validator: SchemaValidator[ModelT], payload: Any) -> ModelT:
    result = validator.validate(payload)
    if not result.success:
        raise InvalidBody(result.issues)
    return result.data
