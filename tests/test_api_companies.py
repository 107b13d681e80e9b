"""
tests/test_api_companies.py -- Integration tests for /api/company.

These tests exercise the full stack: FastAPI routing -> request checks in
api/deps.py -> CompanyStore -> response model serialization -> error
envelope. Every test creates its own users and companies inside the module
database (api_env fixture).

Coverage:
  - page/limit are checked before authentication
  - create: owner membership, 409 on a taken id, translated validation issues
  - detail: role and isOwner for members, 401 for non-members, 404 unknown id
  - update/delete: owner only, id immutable, cascade on delete
"""

from __future__ import annotations

from conftest import Env


class TestListCompanies:
    def test_missing_page_params_rejected_before_auth(self, api_env: Env) -> None:
        resp = api_env.client.get("/api/company")
        assert resp.status_code == 400
        assert resp.json()["errors"][0]["code"] == "missing_params"

    def test_non_numeric_limit_rejected(self, api_env: Env) -> None:
        resp = api_env.client.get("/api/company?page=1&limit=ten")
        assert resp.status_code == 400

    def test_unauthenticated(self, api_env: Env) -> None:
        resp = api_env.client.get("/api/company?page=1&limit=10")
        assert resp.status_code == 401
        assert resp.json() == {"errors": [{"code": "unauthenticated", "message": "You are not authorized."}]}

    def test_lists_only_member_companies(self, api_env: Env, company_payload) -> None:
        alice = api_env.account("alice.list@example.com")
        bob = api_env.account("bob.list@example.com")
        api_env.client.post("/api/company", json=company_payload("alice-one"), headers=alice.headers)
        api_env.client.post("/api/company", json=company_payload("alice-two"), headers=alice.headers)
        api_env.client.post("/api/company", json=company_payload("bob-one"), headers=bob.headers)

        resp = api_env.client.get("/api/company?page=1&limit=1", headers=alice.headers)
        assert resp.status_code == 200
        body = resp.json()
        assert len(body["result"]) == 1
        assert body["pagination"] == {"page": 1, "limit": 1, "totalPages": 2, "hasNext": True, "hasPrev": False}


class TestCreateCompany:
    def test_create_returns_company(self, api_env: Env, company_payload) -> None:
        owner = api_env.account("owner.create@example.com")
        resp = api_env.client.post(
            "/api/company", json=company_payload("created-co", sloganRu="Лозунг"), headers=owner.headers
        )
        assert resp.status_code == 200, resp.text
        data = resp.json()
        assert data["id"] == "created-co"
        assert data["ownerId"] == owner.id
        assert data["sloganRu"] == "Лозунг"

    def test_duplicate_id_conflicts(self, api_env: Env, company_payload) -> None:
        owner = api_env.account("owner.dup@example.com")
        api_env.client.post("/api/company", json=company_payload("dup-co"), headers=owner.headers)
        resp = api_env.client.post("/api/company", json=company_payload("dup-co"), headers=owner.headers)
        assert resp.status_code == 409

    def test_id_with_slash_rejected(self, api_env: Env, company_payload) -> None:
        owner = api_env.account("owner.slash@example.com")
        resp = api_env.client.post("/api/company", json=company_payload("a/b"), headers=owner.headers)
        assert resp.status_code == 400
        assert [e["path"] for e in resp.json()["errors"]] == [["id"]]
        assert api_env.companies.get_company("a/b") is None

    def test_unauthenticated_create(self, api_env: Env, company_payload) -> None:
        resp = api_env.client.post("/api/company", json=company_payload("anon-co"))
        assert resp.status_code == 401

    def test_validation_issues_are_translated(self, api_env: Env, company_payload) -> None:
        owner = api_env.account("owner.invalid@example.com")
        headers = {**owner.headers, "Accept-Language": "ru-RU,ru;q=0.9"}
        resp = api_env.client.post("/api/company", json=company_payload("bad-tin", tin="12345abcde"), headers=headers)
        assert resp.status_code == 400
        body = resp.json()
        assert body["message"] == "Некорректный запрос."
        assert body["errors"] == [
            {"path": ["tin"], "message": "ИНН должен содержать только цифры.", "code": "string_pattern_mismatch"}
        ]


class TestCompanyDetail:
    def test_owner_sees_role_and_owner_flag(self, api_env: Env, company_payload) -> None:
        owner = api_env.account("owner.detail@example.com")
        api_env.client.post("/api/company", json=company_payload("detail-co"), headers=owner.headers)
        resp = api_env.client.get("/api/company/detail-co", headers=owner.headers)
        assert resp.status_code == 200
        data = resp.json()
        assert data["isOwner"] is True
        assert data["role"]["default"] is True

    def test_non_member_is_rejected(self, api_env: Env, company_payload) -> None:
        owner = api_env.account("owner.private@example.com")
        outsider = api_env.account("outsider.private@example.com")
        api_env.client.post("/api/company", json=company_payload("private-co"), headers=owner.headers)
        resp = api_env.client.get("/api/company/private-co", headers=outsider.headers)
        assert resp.status_code == 401
        assert resp.json()["errors"][0]["message"] == "You are not a member of this company."

    def test_unknown_company(self, api_env: Env) -> None:
        user = api_env.account("user.unknown@example.com")
        resp = api_env.client.get("/api/company/does-not-exist", headers=user.headers)
        assert resp.status_code == 404


class TestUpdateAndDelete:
    def test_owner_updates_but_id_stays(self, api_env: Env, company_payload) -> None:
        owner = api_env.account("owner.update@example.com")
        api_env.client.post("/api/company", json=company_payload("update-co"), headers=owner.headers)
        resp = api_env.client.put(
            "/api/company/update-co",
            json=company_payload("renamed-co", name="Updated Name"),
            headers=owner.headers,
        )
        assert resp.status_code == 200, resp.text
        assert resp.json()["id"] == "update-co"
        assert resp.json()["name"] == "Updated Name"
        assert api_env.client.get("/api/company/renamed-co", headers=owner.headers).status_code == 404

    def test_stranger_cannot_update(self, api_env: Env, company_payload) -> None:
        owner = api_env.account("owner.guard@example.com")
        stranger = api_env.account("stranger.guard@example.com")
        api_env.client.post("/api/company", json=company_payload("guarded-co"), headers=owner.headers)
        resp = api_env.client.put("/api/company/guarded-co", json=company_payload("guarded-co"), headers=stranger.headers)
        assert resp.status_code == 404

    def test_owner_check_precedes_body_validation(self, api_env: Env, company_payload) -> None:
        owner = api_env.account("owner.order@example.com")
        stranger = api_env.account("stranger.order@example.com")
        api_env.client.post("/api/company", json=company_payload("order-co"), headers=owner.headers)
        resp = api_env.client.put("/api/company/order-co", json={}, headers=stranger.headers)
        assert resp.status_code == 404

    def test_delete_removes_company_and_children(self, api_env: Env, company_payload) -> None:
        owner = api_env.account("owner.delete@example.com")
        api_env.client.post("/api/company", json=company_payload("delete-co"), headers=owner.headers)
        api_env.client.post("/api/company/delete-co/stock", json={"name": "Main"}, headers=owner.headers)
        resp = api_env.client.delete("/api/company/delete-co", headers=owner.headers)
        assert resp.status_code == 200
        assert resp.json() == {"message": "Company deleted."}
        assert api_env.companies.stock_ids("delete-co") == set()
        assert api_env.client.get("/api/company/delete-co", headers=owner.headers).status_code == 404
