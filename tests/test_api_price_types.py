"""
tests/test_api_price_types.py -- Integration tests for /api/company/{id}/price-type.

The price type list is where role permissions show: the owner (default
role) sees every price type, a member with a restricted role only the ones
granted through the role's available data, with the pagination total
counting the same filtered set.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from conftest import Account, Env


def _url(company_id: str, suffix: str = "") -> str:
    return f"/api/company/{company_id}/price-type{suffix}"


@pytest.fixture(scope="module")
def company(api_env: Env, company_payload):
    """pt-co with three price types, an owner and a clerk limited to "Retail"."""
    client = api_env.client
    owner = api_env.account("owner.pt@example.com")
    clerk = api_env.account("clerk.pt@example.com")
    client.post("/api/company", json=company_payload("pt-co"), headers=owner.headers)

    ids = {}
    for name, currency in (("Retail", "USD"), ("Dealer", "EUR"), ("Wholesale", "USD")):
        resp = client.post(_url("pt-co"), json={"name": name, "currency": currency}, headers=owner.headers)
        ids[name] = resp.json()["id"]
    stock_id = client.post("/api/company/pt-co/stock", json={"name": "Main"}, headers=owner.headers).json()["id"]

    role = client.post(
        "/api/company/pt-co/role",
        json={"name": "Clerk", "availableData": [{"stockId": stock_id, "priceTypes": [{"priceTypeId": ids["Retail"]}]}]},
        headers=owner.headers,
    ).json()
    invitation = client.post(
        "/api/company/pt-co/invitation", json={"email": clerk.username, "roleId": role["id"]}, headers=owner.headers
    ).json()
    client.post(f"/api/invitation/{invitation['id']}/accept", headers=clerk.headers)
    return owner, clerk, ids


class TestListPriceTypes:
    def test_owner_sees_all_name_descending(self, api_env: Env, company) -> None:
        owner, _clerk, _ids = company
        resp = api_env.client.get(_url("pt-co", "?page=1&limit=10"), headers=owner.headers)
        assert resp.status_code == 200
        body = resp.json()
        assert [p["name"] for p in body["result"]] == ["Wholesale", "Retail", "Dealer"]
        assert body["pagination"]["totalPages"] == 1

    def test_clerk_sees_only_granted(self, api_env: Env, company) -> None:
        _owner, clerk, ids = company
        resp = api_env.client.get(_url("pt-co", "?page=1&limit=1"), headers=clerk.headers)
        assert resp.status_code == 200
        body = resp.json()
        assert [p["id"] for p in body["result"]] == [ids["Retail"]]
        assert body["pagination"] == {"page": 1, "limit": 1, "totalPages": 1, "hasNext": False, "hasPrev": False}

    def test_non_member_gets_401(self, api_env: Env, company) -> None:
        outsider = api_env.account("outsider.pt@example.com")
        resp = api_env.client.get(_url("pt-co", "?page=1&limit=10"), headers=outsider.headers)
        assert resp.status_code == 401
        assert resp.json()["errors"][0]["code"] == "not_a_member"

    def test_page_params_checked_first(self, api_env: Env, company) -> None:
        resp = api_env.client.get(_url("pt-co", "?page=0&limit=10"))
        assert resp.status_code == 400

    def test_messages_follow_accept_language(self, api_env: Env, company) -> None:
        resp = api_env.client.get(_url("pt-co"), headers={"Accept-Language": "ru"})
        assert resp.status_code == 400
        assert resp.json()["errors"][0]["message"].startswith("Параметры page и limit")


class TestWritePriceTypes:
    def test_empty_name_rejected_with_issue(self, api_env: Env, company) -> None:
        owner, _clerk, _ids = company
        resp = api_env.client.post(_url("pt-co"), json={"name": "", "currency": "USD"}, headers=owner.headers)
        assert resp.status_code == 400
        body = resp.json()
        assert body["message"] == "Invalid request."
        assert body["errors"][0]["path"] == ["name"]

    def test_clerk_cannot_create(self, api_env: Env, company) -> None:
        _owner, clerk, _ids = company
        resp = api_env.client.post(_url("pt-co"), json={"name": "Sneaky", "currency": "USD"}, headers=clerk.headers)
        assert resp.status_code == 404

    def test_update_and_delete(self, api_env: Env, company) -> None:
        owner, _clerk, _ids = company
        client: TestClient = api_env.client
        created = client.post(_url("pt-co"), json={"name": "Temp", "currency": "USD"}, headers=owner.headers).json()

        resp = client.put(_url("pt-co", f"/{created['id']}"), json={"name": "Temp2", "currency": "GBP"}, headers=owner.headers)
        assert resp.status_code == 200
        assert resp.json()["currency"] == "GBP"

        resp = client.delete(_url("pt-co", f"/{created['id']}"), headers=owner.headers)
        assert resp.json() == {"message": "Price type deleted."}
        assert client.delete(_url("pt-co", f"/{created['id']}"), headers=owner.headers).status_code == 404

    def test_other_company_id_is_unknown(self, api_env: Env, company, company_payload) -> None:
        _owner, _clerk, ids = company
        other: Account = api_env.account("owner.other-pt@example.com")
        api_env.client.post("/api/company", json=company_payload("other-pt-co"), headers=other.headers)
        resp = api_env.client.put(
            _url("other-pt-co", f"/{ids['Retail']}"), json={"name": "Stolen", "currency": "USD"}, headers=other.headers
        )
        assert resp.status_code == 404


class TestCompanyIsolation:
    def test_each_owner_lists_only_own_price_types(self, api_env: Env, company, company_payload) -> None:
        owner, _clerk, ids = company
        client = api_env.client
        neighbour = api_env.account("owner.neighbour-pt@example.com")
        client.post("/api/company", json=company_payload("neighbour-pt-co"), headers=neighbour.headers)
        for name in ("Export", "Import", "Transit", "Bulk"):
            client.post(_url("neighbour-pt-co"), json={"name": name, "currency": "EUR"}, headers=neighbour.headers)

        body = client.get(_url("neighbour-pt-co", "?page=1&limit=2"), headers=neighbour.headers).json()
        assert body["pagination"]["totalPages"] == 2
        assert {p["companyId"] for p in body["result"]} == {"neighbour-pt-co"}
        assert not {p["id"] for p in body["result"]} & set(ids.values())

        body = client.get(_url("pt-co", "?page=1&limit=3"), headers=owner.headers).json()
        assert body["pagination"]["hasNext"] is False
        assert {p["id"] for p in body["result"]} <= set(ids.values())
        assert {p["companyId"] for p in body["result"]} == {"pt-co"}


class TestPageBounds:
    def test_oversized_page_params_are_bad_requests(self, api_env: Env, company) -> None:
        owner, _clerk, _ids = company
        for query in ("?page=99999999999999999999&limit=10", "?page=1&limit=1001"):
            resp = api_env.client.get(_url("pt-co", query), headers=owner.headers)
            assert resp.status_code == 400, query
            assert resp.json()["errors"][0]["code"] == "missing_params"
