"""
tests/test_api_stocks.py -- Integration tests for /api/company/{id}/stock.

Stocks follow the same access rules as price types: members read (limited to
granted stocks for restricted roles), the owner writes.
"""

from __future__ import annotations

from conftest import Env


class TestStocks:
    def test_crud_round(self, api_env: Env, company_payload) -> None:
        owner = api_env.account("owner.stock@example.com")
        client = api_env.client
        client.post("/api/company", json=company_payload("stock-co"), headers=owner.headers)

        created = client.post("/api/company/stock-co/stock", json={"name": "Main"}, headers=owner.headers)
        assert created.status_code == 200
        stock_id = created.json()["id"]
        assert created.json()["companyId"] == "stock-co"

        renamed = client.put(f"/api/company/stock-co/stock/{stock_id}", json={"name": "Central"}, headers=owner.headers)
        assert renamed.json()["name"] == "Central"

        listed = client.get("/api/company/stock-co/stock?page=1&limit=10", headers=owner.headers).json()
        assert [s["name"] for s in listed["result"]] == ["Central"]

        deleted = client.delete(f"/api/company/stock-co/stock/{stock_id}", headers=owner.headers)
        assert deleted.json() == {"message": "Stock deleted."}

    def test_missing_name(self, api_env: Env, company_payload) -> None:
        owner = api_env.account("owner.stock-invalid@example.com")
        api_env.client.post("/api/company", json=company_payload("stock-invalid-co"), headers=owner.headers)
        resp = api_env.client.post("/api/company/stock-invalid-co/stock", json={}, headers=owner.headers)
        assert resp.status_code == 400
        assert resp.json()["errors"][0]["path"] == ["name"]

    def test_unknown_stock(self, api_env: Env, company_payload) -> None:
        owner = api_env.account("owner.stock-404@example.com")
        api_env.client.post("/api/company", json=company_payload("stock-404-co"), headers=owner.headers)
        resp = api_env.client.put("/api/company/stock-404-co/stock/nope", json={"name": "X"}, headers=owner.headers)
        assert resp.status_code == 404
        assert resp.json()["errors"][0]["code"] == "unknown_record"

    def test_restricted_role_sees_granted_stocks_only(self, api_env: Env, company_payload) -> None:
        client = api_env.client
        owner = api_env.account("owner.stock-scope@example.com")
        clerk = api_env.account("clerk.stock-scope@example.com")
        client.post("/api/company", json=company_payload("stock-scope-co"), headers=owner.headers)
        main = client.post("/api/company/stock-scope-co/stock", json={"name": "Main"}, headers=owner.headers).json()
        client.post("/api/company/stock-scope-co/stock", json={"name": "Reserve"}, headers=owner.headers)
        pt = client.post(
            "/api/company/stock-scope-co/price-type", json={"name": "Retail", "currency": "USD"}, headers=owner.headers
        ).json()
        role = client.post(
            "/api/company/stock-scope-co/role",
            json={"name": "Clerk", "availableData": [{"stockId": main["id"], "priceTypes": [{"priceTypeId": pt["id"]}]}]},
            headers=owner.headers,
        ).json()
        api_env.companies.add_member("stock-scope-co", clerk.id, role["id"])

        listed = client.get("/api/company/stock-scope-co/stock?page=1&limit=10", headers=clerk.headers).json()
        assert [s["name"] for s in listed["result"]] == ["Main"]

    def test_lists_contain_only_own_company_stocks(self, api_env: Env, company_payload) -> None:
        client = api_env.client
        first = api_env.account("owner.stock-first@example.com")
        second = api_env.account("owner.stock-second@example.com")
        for account, company_id, names in (
            (first, "stock-first-co", ("North", "South")),
            (second, "stock-second-co", ("East",)),
        ):
            client.post("/api/company", json=company_payload(company_id), headers=account.headers)
            for name in names:
                client.post(f"/api/company/{company_id}/stock", json={"name": name}, headers=account.headers)

        body = client.get("/api/company/stock-first-co/stock?page=1&limit=10", headers=first.headers).json()
        assert sorted(s["name"] for s in body["result"]) == ["North", "South"]
        assert {s["companyId"] for s in body["result"]} == {"stock-first-co"}
        assert body["pagination"]["totalPages"] == 1

        body = client.get("/api/company/stock-second-co/stock?page=1&limit=1", headers=second.headers).json()
        assert [s["name"] for s in body["result"]] == ["East"]
        assert body["pagination"]["hasNext"] is False
