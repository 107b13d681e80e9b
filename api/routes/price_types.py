"""
api/routes/price_types.py -- Price type REST endpoints.

Routes:
  GET    /api/company/{id}/price-type?page&limit          -- members; scoped by role
  POST   /api/company/{id}/price-type                     -- owner only
  PUT    /api/company/{id}/price-type/{priceTypeId}       -- owner only
  DELETE /api/company/{id}/price-type/{priceTypeId}       -- owner only

The list is the one place the permission model shows: a member whose role is
not the company's default role only receives the price types named in the
role's available data. The total in the pagination block counts the same
filtered set.
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, Request

from api.deps import (
    allowed_company,
    company_store,
    member_access,
    parse_page_params,
    require_user,
    translator,
    validate_body,
)
from api.errors import UnknownRecord
from api.models import MessageResponse, Page, PaginationModel, PriceTypeResponse
from companies.models import PriceType
from companies.schemas import get_price_type_schema
from core.pagination import paginate

router = APIRouter()


@router.get("/company/{company_id}/price-type", response_model=Page[PriceTypeResponse])
def list_price_types(request: Request, company_id: str, page: Optional[str] = None, limit: Optional[str] = None):
    params = parse_page_params(page, limit)
    user = require_user(request)
    access = member_access(request, company_id, user)
    total, price_types = company_store(request).list_price_types(
        access.company.id, params.start_index, params.limit, ids=access.price_type_ids
    )
    return Page[PriceTypeResponse](
        result=[PriceTypeResponse.model_validate(p) for p in price_types],
        pagination=PaginationModel.model_validate(paginate(params.start_index, params.page, params.limit, total)),
    )


@router.post("/company/{company_id}/price-type", response_model=PriceTypeResponse)
def create_price_type(request: Request, company_id: str, payload: Any = Body(default=None)):
    company = allowed_company(request, company_id)
    data = validate_body(get_price_type_schema(translator(request, "Schemas")), payload)
    price_type = company_store(request).create_price_type(
        PriceType(name=data.name, currency=data.currency, company_id=company.id)
    )
    return PriceTypeResponse.model_validate(price_type)


@router.put("/company/{company_id}/price-type/{price_type_id}", response_model=PriceTypeResponse)
def update_price_type(request: Request, company_id: str, price_type_id: str, payload: Any = Body(default=None)):
    company = allowed_company(request, company_id)
    data = validate_body(get_price_type_schema(translator(request, "Schemas")), payload)
    price_type = company_store(request).update_price_type(company.id, price_type_id, data.name, data.currency)
    if price_type is None:
        raise UnknownRecord()
    return PriceTypeResponse.model_validate(price_type)


@router.delete("/company/{company_id}/price-type/{price_type_id}", response_model=MessageResponse)
def delete_price_type(request: Request, company_id: str, price_type_id: str):
    company = allowed_company(request, company_id)
    if not company_store(request).delete_price_type(company.id, price_type_id):
        raise UnknownRecord()
    return MessageResponse(message=translator(request)("priceTypeDeleted"))
