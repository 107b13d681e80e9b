"""
companies/access.py -- Who may see what inside a company.

Two rules:

  resolve_access()       read rule. The caller must be a member; a member
                         whose role is not the company's default role only
                         sees the stocks and price types named in the role's
                         available data.
  get_allowed_company()  write rule. Only the company owner may modify the
                         company or anything it owns.

Both take the store as an argument; nothing here holds state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from companies.models import Company, Member, Role
from companies.store import CompanyStore


class CompanyNotFound(Exception):
    def __init__(self, company_id: str) -> None:
        super().__init__(f"Company not found: {company_id}")
        self.company_id = company_id


class NotAMember(Exception):
    def __init__(self, company_id: str, user_id: int) -> None:
        super().__init__(f"User {user_id} is not a member of {company_id}")
        self.company_id = company_id
        self.user_id = user_id


@dataclass(frozen=True)
class Access:
    """Resolved read permissions of one user in one company.

    price_type_ids / stock_ids are None when every row is visible (default
    role), otherwise the exact ids the role grants -- possibly empty.
    """

    company: Company
    member: Member
    role: Role
    price_type_ids: Optional[frozenset[str]]
    stock_ids: Optional[frozenset[str]]


def visible_ids(role: Role) -> tuple[Optional[frozenset[str]], Optional[frozenset[str]]]:
    """Return (price_type_ids, stock_ids) a role may see; (None, None) for the default role."""
    if role.default:
        return None, None
    price_type_ids = frozenset(d.price_type_id for d in role.available_data)
    stock_ids = frozenset(d.stock_id for d in role.available_data if d.stock_id)
    return price_type_ids, stock_ids


def resolve_access(store: CompanyStore, company_id: str, user_id: int) -> Access:
    """Raises CompanyNotFound or NotAMember; otherwise returns the caller's Access."""
    company = store.get_company(company_id)
    if company is None:
        raise CompanyNotFound(company_id)
    member = store.get_member(company_id, user_id)
    if member is None or member.role is None:
        raise NotAMember(company_id, user_id)
    price_type_ids, stock_ids = visible_ids(member.role)
    return Access(
        company=company,
        member=member,
        role=member.role,
        price_type_ids=price_type_ids,
        stock_ids=stock_ids,
    )


def get_allowed_company(store: CompanyStore, company_id: str, user_id: Optional[int]) -> Optional[Company]:
    """Return the company if `user_id` owns it. Anonymous callers (None) never do."""
    if user_id is None:
        return None
    company = store.get_company(company_id)
    if company is None or company.owner_id != user_id:
        return None
    return company
