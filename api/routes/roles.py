"""
api/routes/roles.py -- Role REST endpoints.

Routes:
  GET    /api/company/{id}/role?page&limit    -- members only
  GET    /api/company/{id}/role/{roleId}      -- members only
  POST   /api/company/{id}/role               -- owner only
  PUT    /api/company/{id}/role/{roleId}      -- owner only; replaces available data
  DELETE /api/company/{id}/role/{roleId}      -- owner only

A role payload grants price types per stock:

    {"name": "Sales", "availableData": [{"stockId": "...", "priceTypes": [{"priceTypeId": "..."}]}]}

Every stock and price type id must belong to the company. The default role
cannot be deleted, and a role still held by members cannot be deleted either
(409). Deleting the role of a pending invitation removes the invitation.
"""

from __future__ import annotations

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
from api.errors import BadRequest, Conflict, UnknownRecord
from api.models import MessageResponse, Page, PaginationModel, RoleResponse
from companies.models import AvailableData, Role
from companies.schemas import RolePayload, get_role_schema
from companies.store import CompanyStore
from core.pagination import paginate

router = APIRouter()


def _available_data(store: CompanyStore, company_id: str, payload: RolePayload) -> list[AvailableData]:
    """Flatten the per-stock grants and check every id belongs to the company."""
    stock_ids = store.stock_ids(company_id)
    price_type_ids = store.price_type_ids(company_id)
    grants: dict[tuple[str, str], AvailableData] = {}
    for entry in payload.available_data:
        if entry.stock_id not in stock_ids:
            raise BadRequest("unknownAvailableData")
        for ref in entry.price_types:
            if ref.price_type_id not in price_type_ids:
                raise BadRequest("unknownAvailableData")
            key = (entry.stock_id, ref.price_type_id)
            grants[key] = AvailableData(price_type_id=ref.price_type_id, stock_id=entry.stock_id)
    return list(grants.values())


@router.get("/company/{company_id}/role", response_model=Page[RoleResponse])
def list_roles(request: Request, company_id: str, page: Optional[str] = None, limit: Optional[str] = None):
    params = parse_page_params(page, limit)
    user = require_user(request)
    access = member_access(request, company_id, user)
    total, roles = company_store(request).list_roles(access.company.id, params.start_index, params.limit)
    return Page[RoleResponse](
        result=[RoleResponse.model_validate(r) for r in roles],
        pagination=PaginationModel.model_validate(paginate(params.start_index, params.page, params.limit, total)),
    )


@router.get("/company/{company_id}/role/{role_id}", response_model=RoleResponse)
def get_role(request: Request, company_id: str, role_id: str):
    user = require_user(request)
    access = member_access(request, company_id, user)
    role = company_store(request).get_role(access.company.id, role_id)
    if role is None:
        raise UnknownRecord()
    return RoleResponse.model_validate(role)


@router.post("/company/{company_id}/role", response_model=RoleResponse)
def create_role(request: Request, company_id: str, payload: Any = Body(default=None)):
    company = allowed_company(request, company_id)
    data = validate_body(get_role_schema(translator(request, "Schemas")), payload)
    store = company_store(request)
    role = Role(name=data.name, company_id=company.id, available_data=_available_data(store, company.id, data))
    return RoleResponse.model_validate(store.create_role(role))


@router.put("/company/{company_id}/role/{role_id}", response_model=RoleResponse)
def update_role(request: Request, company_id: str, role_id: str, payload: Any = Body(default=None)):
    company = allowed_company(request, company_id)
    data = validate_body(get_role_schema(translator(request, "Schemas")), payload)
    store = company_store(request)
    role = store.update_role(company.id, role_id, data.name, _available_data(store, company.id, data))
    if role is None:
        raise UnknownRecord()
    return RoleResponse.model_validate(role)


@router.delete("/company/{company_id}/role/{role_id}", response_model=MessageResponse)
def delete_role(request: Request, company_id: str, role_id: str):
    company = allowed_company(request, company_id)
    store = company_store(request)
    role = store.get_role(company.id, role_id)
    if role is None:
        raise UnknownRecord()
    if role.default:
        raise BadRequest("cannotDeleteDefaultRole")
    try:
        store.delete_role(company.id, role_id)
    except IntegrityError:
        raise Conflict("roleInUse") from None
    return MessageResponse(message=translator(request)("roleDeleted"))
