"""
companies/models.py -- Domain dataclasses for tenants and their data.

These are pure data containers with zero logic. Permission rules live in
companies/access.py; persistence lives in companies/store.py.

Ids are strings: a Company id is chosen by its creator (a short handle);
every other id is generated by the store on insert. user_id values refer to
auth.users rows, which live behind a different repository -- the two stores
share no foreign keys.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Company:
    """A tenant. owner_id is the user who created it (the "allowed" user for writes)."""

    id: str
    name: str
    tin: str  # 10-digit taxpayer identification number
    description: str
    owner_id: int
    description_ru: Optional[str] = None
    slogan: Optional[str] = None
    slogan_ru: Optional[str] = None
    image_id: Optional[str] = None
    created_at: str = ""  # ISO 8601, set by store on insert


@dataclass
class Stock:
    name: str
    company_id: str
    id: str = ""


@dataclass
class PriceType:
    name: str
    currency: str
    company_id: str
    id: str = ""


@dataclass
class AvailableData:
    """One permission grant of a role: a price type, optionally within a stock."""

    price_type_id: str
    stock_id: Optional[str] = None
    role_id: str = ""
    id: str = ""


@dataclass
class Role:
    """A named permission set inside a company.

    default=True roles see every stock and price type of the company and
    ignore available_data. Each company has exactly one default role, created
    together with the company and held by its owner.
    """

    name: str
    company_id: str
    default: bool = False
    available_data: list[AvailableData] = field(default_factory=list)
    id: str = ""


@dataclass
class Member:
    company_id: str
    user_id: int
    role_id: str
    role: Optional[Role] = None
    created_at: str = ""


@dataclass
class Invitation:
    """A pending offer of a role to whoever registers/logs in with `email`."""

    company_id: str
    email: str
    role_id: str
    id: str = ""
    role: Optional[Role] = None
    company_name: Optional[str] = None
    created_at: str = ""
