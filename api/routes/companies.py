"""
api/routes/companies.py -- Company REST endpoints.

Routes:
  GET    /api/company?page&limit   -- companies the caller belongs to
  POST   /api/company              -- create; caller becomes owner (default "Owner" role)
  GET    /api/company/{id}         -- detail plus the caller's role (members only)
  PUT    /api/company/{id}         -- update (owner only)
  DELETE /api/company/{id}         -- delete with everything it owns (owner only)

The company id is chosen by the creator and is immutable: PUT validates the
full payload (id included) but never changes the id.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Request
from sqlalchemy.exc import IntegrityError

from api.deps import (
    allowed_company,
    company_store,
    member_access,
    parse_page_params,
    require_user,
    translator,
    validate_body,
)
from api.errors import Conflict, UnknownCompany
from api.models import CompanyDetailResponse, CompanyResponse, MessageResponse, Page, PaginationModel, RoleResponse
from companies.models import Company
from companies.schemas import get_company_schema
from core.pagination import paginate

logger = logging.getLogger("companyhub.api")

router = APIRouter()


@router.get("/company", response_model=Page[CompanyResponse])
def list_companies(request: Request, page: Optional[str] = None, limit: Optional[str] = None):
    params = parse_page_params(page, limit)
    user = require_user(request)
    total, companies = company_store(request).list_companies_for_user(user.id, params.start_index, params.limit)
    return Page[CompanyResponse](
        result=[CompanyResponse.model_validate(c) for c in companies],
        pagination=PaginationModel.model_validate(paginate(params.start_index, params.page, params.limit, total)),
    )


@router.post("/company", response_model=CompanyResponse)
def create_company(request: Request, payload: Any = Body(default=None)):
    """Create a company owned by the caller. 409 if the id is taken."""
    user = require_user(request)
    data = validate_body(get_company_schema(translator(request, "Schemas")), payload)
    company = Company(
        id=data.id,
        name=data.name,
        tin=data.tin,
        description=data.description,
        description_ru=data.description_ru,
        slogan=data.slogan,
        slogan_ru=data.slogan_ru,
        image_id=data.image_id,
        owner_id=user.id,
    )
    try:
        created = company_store(request).create_company(company)
    except IntegrityError:
        raise Conflict("companyAlreadyExists") from None
    return CompanyResponse.model_validate(created)


@router.get("/company/{company_id}", response_model=CompanyDetailResponse)
def get_company(request: Request, company_id: str):
    user = require_user(request)
    access = member_access(request, company_id, user)
    return CompanyDetailResponse(
        **CompanyResponse.model_validate(access.company).model_dump(),
        role=RoleResponse.model_validate(access.role),
        is_owner=access.company.owner_id == user.id,
    )


@router.put("/company/{company_id}", response_model=CompanyResponse)
def update_company(request: Request, company_id: str, payload: Any = Body(default=None)):
    company = allowed_company(request, company_id)
    data = validate_body(get_company_schema(translator(request, "Schemas")), payload)
    updated = company_store(request).update_company(
        company.id,
        name=data.name,
        tin=data.tin,
        description=data.description,
        description_ru=data.description_ru,
        slogan=data.slogan,
        slogan_ru=data.slogan_ru,
        image_id=data.image_id,
    )
    if updated is None:
        raise UnknownCompany()
    return CompanyResponse.model_validate(updated)


@router.delete("/company/{company_id}", response_model=MessageResponse)
def delete_company(request: Request, company_id: str):
    company = allowed_company(request, company_id)
    if not company_store(request).delete_company(company.id):
        raise UnknownCompany()
    logger.info("Company %s deleted", company.id)
    return MessageResponse(message=translator(request)("companyDeleted"))
