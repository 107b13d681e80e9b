"""
tests/test_access.py -- Unit tests for companies/access.py.

The read rule (resolve_access) and the write rule (get_allowed_company)
are tested against a real in-memory CompanyStore.
"""

from __future__ import annotations

import pytest

from companies.access import CompanyNotFound, NotAMember, get_allowed_company, resolve_access, visible_ids
from companies.models import AvailableData, Company, PriceType, Role, Stock
from companies.store import CompanyStore

OWNER = 1
CLERK = 2
STRANGER = 3


@pytest.fixture
def seeded(company_store: CompanyStore):
    """acme, owned by OWNER, with two stocks, two price types and a clerk role granting one pair."""
    company_store.create_company(
        Company(id="acme", name="Acme", tin="1234567890", description="d" * 60, owner_id=OWNER)
    )
    main = company_store.create_stock(Stock(name="Main", company_id="acme"))
    company_store.create_stock(Stock(name="Reserve", company_id="acme"))
    retail = company_store.create_price_type(PriceType(name="Retail", currency="USD", company_id="acme"))
    company_store.create_price_type(PriceType(name="Dealer", currency="USD", company_id="acme"))
    role = company_store.create_role(
        Role(name="Clerk", company_id="acme", available_data=[AvailableData(price_type_id=retail.id, stock_id=main.id)])
    )
    company_store.add_member("acme", CLERK, role.id)
    return company_store, main, retail


class TestVisibleIds:
    def test_default_role_sees_everything(self) -> None:
        assert visible_ids(Role(name="Owner", company_id="acme", default=True)) == (None, None)

    def test_role_without_data_sees_nothing(self) -> None:
        assert visible_ids(Role(name="Empty", company_id="acme")) == (frozenset(), frozenset())

    def test_grant_without_stock_adds_price_type_only(self) -> None:
        role = Role(name="R", company_id="acme", available_data=[AvailableData(price_type_id="p1")])
        assert visible_ids(role) == (frozenset({"p1"}), frozenset())


class TestResolveAccess:
    def test_owner_has_unrestricted_access(self, seeded) -> None:
        store, _main, _retail = seeded
        access = resolve_access(store, "acme", OWNER)
        assert access.role.default is True
        assert access.price_type_ids is None
        assert access.stock_ids is None

    def test_clerk_is_limited_to_granted_ids(self, seeded) -> None:
        store, main, retail = seeded
        access = resolve_access(store, "acme", CLERK)
        assert access.price_type_ids == frozenset({retail.id})
        assert access.stock_ids == frozenset({main.id})

    def test_unknown_company(self, seeded) -> None:
        store, _main, _retail = seeded
        with pytest.raises(CompanyNotFound):
            resolve_access(store, "ghost", OWNER)

    def test_non_member(self, seeded) -> None:
        store, _main, _retail = seeded
        with pytest.raises(NotAMember):
            resolve_access(store, "acme", STRANGER)


class TestAllowedCompany:
    def test_owner_gets_company(self, seeded) -> None:
        store, _main, _retail = seeded
        assert get_allowed_company(store, "acme", OWNER).id == "acme"

    def test_member_who_is_not_owner_gets_none(self, seeded) -> None:
        store, _main, _retail = seeded
        assert get_allowed_company(store, "acme", CLERK) is None

    def test_anonymous_gets_none(self, seeded) -> None:
        store, _main, _retail = seeded
        assert get_allowed_company(store, "acme", None) is None

    def test_unknown_company_gets_none(self, seeded) -> None:
        store, _main, _retail = seeded
        assert get_allowed_company(store, "ghost", OWNER) is None
