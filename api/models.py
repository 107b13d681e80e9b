"""
API request and response models for CompanyHub REST endpoints.

These Pydantic v2 models define the HTTP transport contract for the API layer.
They are intentionally separate from the dataclasses in companies/models.py
and auth/models.py, which own the internal domain representation. Route
handlers map between the two (from_attributes=True does the copying).

Every field is camelCase on the wire (alias_generator=to_camel); FastAPI
serializes response_model instances by alias.

Write payloads of the tenant resources are NOT here: they live in
companies/schemas.py because their error messages are localized.
"""

from __future__ import annotations

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class _ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True, frozen=True)


# ---------------------------------------------------------------------------
# Envelopes
# ---------------------------------------------------------------------------


class PaginationModel(_ApiModel):
    """Serialized core.pagination.Pagination: {page, limit, totalPages, hasNext, hasPrev}."""

    page: int
    limit: int
    total_pages: int
    has_next: bool
    has_prev: bool


class Page(_ApiModel, Generic[T]):
    """Response of every list endpoint."""

    result: list[T]
    pagination: PaginationModel


class MessageResponse(_ApiModel):
    message: str


class ErrorDetail(_ApiModel):
    code: str
    message: str


class ErrorResponse(_ApiModel):
    errors: list[ErrorDetail]


class IssueDetail(_ApiModel):
    path: list[str | int]
    message: str
    code: str


class ValidationErrorResponse(_ApiModel):
    message: str
    errors: list[IssueDetail]


class HealthResponse(_ApiModel):
    status: str = "ok"
    version: str
    database: bool = True


# ---------------------------------------------------------------------------
# Tenant resources
# ---------------------------------------------------------------------------


class StockResponse(_ApiModel):
    id: str
    name: str
    company_id: str


class PriceTypeResponse(_ApiModel):
    id: str
    name: str
    currency: str
    company_id: str


class AvailableDataResponse(_ApiModel):
    id: str
    role_id: str
    stock_id: Optional[str] = None
    price_type_id: str


class RoleResponse(_ApiModel):
    id: str
    name: str
    company_id: str
    default: bool
    available_data: list[AvailableDataResponse] = Field(default_factory=list)


class CompanyResponse(_ApiModel):
    id: str
    name: str
    tin: str
    description: str
    description_ru: Optional[str] = None
    slogan: Optional[str] = None
    slogan_ru: Optional[str] = None
    image_id: Optional[str] = None
    owner_id: int
    created_at: str


class CompanyDetailResponse(CompanyResponse):
    """GET /company/{id}: the company plus what the caller may do in it."""

    role: RoleResponse
    is_owner: bool


class UserSummary(_ApiModel):
    id: int
    username: str
    display_name: Optional[str] = None


class MemberResponse(_ApiModel):
    company_id: str
    user_id: int
    role_id: str
    created_at: str
    role: Optional[RoleResponse] = None
    user: Optional[UserSummary] = None


class InvitationResponse(_ApiModel):
    id: str
    company_id: str
    company_name: Optional[str] = None
    email: str
    role_id: str
    role: Optional[RoleResponse] = None
    created_at: str


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------


class LoginRequest(_ApiModel):
    """Request body for POST /api/auth/login."""

    model_config = ConfigDict(str_strip_whitespace=True)

    username: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=72)


class RegisterRequest(_ApiModel):
    """Request body for POST /api/auth/register. The username is an email address."""

    model_config = ConfigDict(str_strip_whitespace=True)

    username: EmailStr
    password: str = Field(min_length=8, max_length=72)
    display_name: Optional[str] = Field(default=None, max_length=255)


class LoginResponse(_ApiModel):
    access_token: str
    token_type: str
    expires_in: int
    username: str


class MeResponse(_ApiModel):
    user_id: int
    username: str
    display_name: Optional[str] = None
