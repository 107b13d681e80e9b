"""
api/routes/members.py -- Company membership REST endpoints.

Routes:
  GET    /api/company/{id}/member?page&limit   -- members only; user details attached
  PUT    /api/company/{id}/member/{userId}     -- change role (owner only)
  DELETE /api/company/{id}/member/{userId}     -- remove (owner only; never the owner)

Members are added by accepting an invitation (api/routes/invitations.py).
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
    user_store,
    validate_body,
)
from api.errors import BadRequest, UnknownRecord
from api.models import MemberResponse, MessageResponse, Page, PaginationModel, UserSummary
from companies.models import Member
from companies.schemas import get_member_schema
from core.pagination import paginate

router = APIRouter()


def _member_response(member: Member, user=None) -> MemberResponse:
    response = MemberResponse.model_validate(member)
    if user is None:
        return response
    return response.model_copy(update={"user": UserSummary.model_validate(user)})


@router.get("/company/{company_id}/member", response_model=Page[MemberResponse])
def list_members(request: Request, company_id: str, page: Optional[str] = None, limit: Optional[str] = None):
    params = parse_page_params(page, limit)
    user = require_user(request)
    access = member_access(request, company_id, user)
    total, members = company_store(request).list_members(access.company.id, params.start_index, params.limit)
    users = user_store(request).get_by_ids(m.user_id for m in members)
    return Page[MemberResponse](
        result=[_member_response(m, users.get(m.user_id)) for m in members],
        pagination=PaginationModel.model_validate(paginate(params.start_index, params.page, params.limit, total)),
    )


@router.put("/company/{company_id}/member/{user_id}", response_model=MemberResponse)
def update_member(request: Request, company_id: str, user_id: int, payload: Any = Body(default=None)):
    company = allowed_company(request, company_id)
    data = validate_body(get_member_schema(translator(request, "Schemas")), payload)
    store = company_store(request)
    if store.get_role(company.id, data.role_id) is None:
        raise BadRequest("unknownRole")
    member = store.update_member_role(company.id, user_id, data.role_id)
    if member is None:
        raise UnknownRecord()
    return _member_response(member, user_store(request).get_by_id(user_id))


@router.delete("/company/{company_id}/member/{user_id}", response_model=MessageResponse)
def delete_member(request: Request, company_id: str, user_id: int):
    company = allowed_company(request, company_id)
    if user_id == company.owner_id:
        raise BadRequest("cannotRemoveOwner")
    if not company_store(request).delete_member(company.id, user_id):
        raise UnknownRecord()
    return MessageResponse(message=translator(request)("memberDeleted"))
