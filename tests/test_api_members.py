"""
tests/test_api_members.py -- Integration tests for /api/company/{id}/member.
"""

from __future__ import annotations

import pytest

from conftest import Env


@pytest.fixture(scope="module")
def team(api_env: Env, company_payload):
    """member-co with its owner, a member holding the "Staff" role, and the role ids."""
    client = api_env.client
    owner = api_env.account("owner.members@example.com", display_name="Olga Owner")
    staff = api_env.account("staff.members@example.com", display_name="Sam Staff")
    client.post("/api/company", json=company_payload("member-co"), headers=owner.headers)
    staff_role = client.post(
        "/api/company/member-co/role", json={"name": "Staff", "availableData": []}, headers=owner.headers
    ).json()
    manager_role = client.post(
        "/api/company/member-co/role", json={"name": "Manager", "availableData": []}, headers=owner.headers
    ).json()
    api_env.companies.add_member("member-co", staff.id, staff_role["id"])
    return owner, staff, staff_role, manager_role


class TestListMembers:
    def test_members_carry_user_and_role(self, api_env: Env, team) -> None:
        owner, staff, staff_role, _manager = team
        resp = api_env.client.get("/api/company/member-co/member?page=1&limit=10", headers=staff.headers)
        assert resp.status_code == 200
        result = resp.json()["result"]
        assert [m["userId"] for m in result] == [staff.id, owner.id]
        assert result[0]["user"] == {"id": staff.id, "username": staff.username, "displayName": "Sam Staff"}
        assert result[0]["role"]["name"] == staff_role["name"]


class TestChangeRole:
    def test_owner_changes_member_role(self, api_env: Env, team) -> None:
        owner, staff, _staff_role, manager_role = team
        resp = api_env.client.put(
            f"/api/company/member-co/member/{staff.id}", json={"roleId": manager_role["id"]}, headers=owner.headers
        )
        assert resp.status_code == 200, resp.text
        assert resp.json()["roleId"] == manager_role["id"]
        assert resp.json()["user"]["username"] == staff.username

    def test_role_of_another_company_rejected(self, api_env: Env, team, company_payload) -> None:
        owner, staff, _staff_role, _manager = team
        other = api_env.account("owner.members-other@example.com")
        foreign = api_env.client.post("/api/company", json=company_payload("member-other-co"), headers=other.headers)
        assert foreign.status_code == 200
        foreign_role = api_env.client.get("/api/company/member-other-co", headers=other.headers).json()["role"]
        resp = api_env.client.put(
            f"/api/company/member-co/member/{staff.id}", json={"roleId": foreign_role["id"]}, headers=owner.headers
        )
        assert resp.status_code == 400
        assert resp.json()["errors"][0]["code"] == "bad_request"

    def test_member_cannot_change_roles(self, api_env: Env, team) -> None:
        _owner, staff, staff_role, _manager = team
        resp = api_env.client.put(
            f"/api/company/member-co/member/{staff.id}", json={"roleId": staff_role["id"]}, headers=staff.headers
        )
        assert resp.status_code == 404

    def test_missing_role_id(self, api_env: Env, team) -> None:
        owner, staff, _staff_role, _manager = team
        resp = api_env.client.put(f"/api/company/member-co/member/{staff.id}", json={}, headers=owner.headers)
        assert resp.status_code == 400
        assert resp.json()["errors"][0]["path"] == ["roleId"]


class TestRemoveMember:
    def test_owner_cannot_be_removed(self, api_env: Env, team) -> None:
        owner, _staff, _staff_role, _manager = team
        resp = api_env.client.delete(f"/api/company/member-co/member/{owner.id}", headers=owner.headers)
        assert resp.status_code == 400

    def test_unknown_member(self, api_env: Env, team) -> None:
        owner, _staff, _staff_role, _manager = team
        resp = api_env.client.delete("/api/company/member-co/member/99999", headers=owner.headers)
        assert resp.status_code == 404

    def test_remove_member_revokes_access(self, api_env: Env, team) -> None:
        owner, staff, _staff_role, _manager = team
        resp = api_env.client.delete(f"/api/company/member-co/member/{staff.id}", headers=owner.headers)
        assert resp.json() == {"message": "Member removed."}
        assert api_env.client.get("/api/company/member-co", headers=staff.headers).status_code == 401
