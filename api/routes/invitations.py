"""
api/routes/invitations.py -- Invitation REST endpoints.

Company side (owner manages, members read):
  GET    /api/company/{id}/invitation?page&limit
  POST   /api/company/{id}/invitation                    -- {email, roleId}
  DELETE /api/company/{id}/invitation/{invitationId}

Invitee side (the authenticated user whose email was invited):
  GET    /api/invitation?page&limit
  POST   /api/invitation/{invitationId}/accept           -- becomes a member
  DELETE /api/invitation/{invitationId}                  -- decline

An invitation addressed to someone else is reported as unknown (404) rather
than forbidden, so invitation ids cannot be probed.
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
from api.errors import BadRequest, Conflict, UnknownRecord
from api.models import InvitationResponse, MemberResponse, MessageResponse, Page, PaginationModel
from auth.models import User
from companies.models import Invitation
from companies.schemas import get_invitation_schema
from core.pagination import paginate

logger = logging.getLogger("companyhub.api")

router = APIRouter()


def _own_invitation(request: Request, invitation_id: str, user: User) -> Invitation:
    invitation = company_store(request).get_invitation(invitation_id)
    if invitation is None or invitation.email.lower() != user.username.lower():
        raise UnknownRecord()
    return invitation


# ---------------------------------------------------------------------------
# Company side
# ---------------------------------------------------------------------------


@router.get("/company/{company_id}/invitation", response_model=Page[InvitationResponse])
def list_company_invitations(
    request: Request, company_id: str, page: Optional[str] = None, limit: Optional[str] = None
):
    params = parse_page_params(page, limit)
    user = require_user(request)
    access = member_access(request, company_id, user)
    total, invitations = company_store(request).list_invitations(access.company.id, params.start_index, params.limit)
    return Page[InvitationResponse](
        result=[InvitationResponse.model_validate(i) for i in invitations],
        pagination=PaginationModel.model_validate(paginate(params.start_index, params.page, params.limit, total)),
    )


@router.post("/company/{company_id}/invitation", response_model=InvitationResponse)
def create_invitation(request: Request, company_id: str, payload: Any = Body(default=None)):
    company = allowed_company(request, company_id)
    data = validate_body(get_invitation_schema(translator(request, "Schemas")), payload)
    store = company_store(request)
    if store.get_role(company.id, data.role_id) is None:
        raise BadRequest("unknownRole")
    try:
        invitation = store.create_invitation(
            Invitation(company_id=company.id, email=str(data.email), role_id=data.role_id)
        )
    except IntegrityError:
        raise Conflict("invitationAlreadyExists") from None
    logger.info("Invitation %s created for company %s", invitation.id, company.id)
    return InvitationResponse.model_validate(invitation)


@router.delete("/company/{company_id}/invitation/{invitation_id}", response_model=MessageResponse)
def delete_company_invitation(request: Request, company_id: str, invitation_id: str):
    company = allowed_company(request, company_id)
    if not company_store(request).delete_invitation(invitation_id, company_id=company.id):
        raise UnknownRecord()
    return MessageResponse(message=translator(request)("invitationDeleted"))


# ---------------------------------------------------------------------------
# Invitee side
# ---------------------------------------------------------------------------


@router.get("/invitation", response_model=Page[InvitationResponse])
def list_my_invitations(request: Request, page: Optional[str] = None, limit: Optional[str] = None):
    params = parse_page_params(page, limit)
    user = require_user(request)
    total, invitations = company_store(request).list_invitations_for_email(
        user.username, params.start_index, params.limit
    )
    return Page[InvitationResponse](
        result=[InvitationResponse.model_validate(i) for i in invitations],
        pagination=PaginationModel.model_validate(paginate(params.start_index, params.page, params.limit, total)),
    )


@router.post("/invitation/{invitation_id}/accept", response_model=MemberResponse)
def accept_invitation(request: Request, invitation_id: str):
    user = require_user(request)
    invitation = _own_invitation(request, invitation_id, user)
    try:
        member = company_store(request).accept_invitation(invitation, user.id)
    except IntegrityError:
        raise Conflict("alreadyMember") from None
    logger.info("User %d joined company %s", user.id, invitation.company_id)
    return MemberResponse.model_validate(member)


@router.delete("/invitation/{invitation_id}", response_model=MessageResponse)
def decline_invitation(request: Request, invitation_id: str):
    user = require_user(request)
    invitation = _own_invitation(request, invitation_id, user)
    company_store(request).delete_invitation(invitation.id)
    return MessageResponse(message=translator(request)("invitationDeclined"))
