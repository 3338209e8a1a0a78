from sqlalchemy.exc import OperationalError

from stack_assist.models.client import Client
from stack_assist.models.team_member import MemberStatus, TeamMember
from stack_assist.repositories.team_member_repository import TeamMemberRepository
from stack_assist.repositories.user_repository import UserRepository
from tests.conftest import add_team_member, full_permissions


def member_id_for(client, owner_headers, email):
    members = client.get("/api/team/members", headers=owner_headers).json()
    return next(m["id"] for m in members if m["email"] == email)


def test_owner_acts_on_own_tenant(client, owner_a_headers):
    me = client.get("/api/auth/me", headers=owner_a_headers).json()
    assert me["is_owner"] is True
    assert me["tenant_id"] == me["user_id"]


def test_active_member_acts_on_owner_tenant(client, db_session, owner_a_headers):
    owner_id = client.get("/api/auth/me", headers=owner_a_headers).json()["user_id"]
    member_headers = add_team_member(
        client, owner_a_headers, "dev@example.com", full_permissions()
    )

    me = client.get("/api/auth/me", headers=member_headers).json()
    assert me["is_owner"] is False
    assert me["tenant_id"] == owner_id
    assert me["user_id"] != owner_id

    response = client.post(
        "/api/clients",
        json={"name": "Jane", "email": "jane@example.com", "phone": "555"},
        headers=member_headers,
    )
    assert response.status_code == 201
    assert db_session.query(Client).one().user_id == owner_id
    assert client.get("/api/clients", headers=owner_a_headers).json()["total"] == 1


def test_member_without_module_denied(client, owner_a_headers):
    permissions = full_permissions()
    permissions["modules"]["clients"] = False
    member_headers = add_team_member(client, owner_a_headers, "dev@example.com", permissions)

    response = client.get("/api/clients", headers=member_headers)
    assert response.status_code == 403
    assert response.json()["detail"] == "No permission to access clients"

    assert client.get("/api/sites", headers=member_headers).status_code == 200


def test_member_write_flags_enforced(client, owner_a_headers):
    permissions = full_permissions()
    permissions["can_edit"] = False
    permissions["can_delete"] = False
    member_headers = add_team_member(client, owner_a_headers, "dev@example.com", permissions)

    site = client.post("/api/sites", json={"name": "a.com"}, headers=member_headers)
    assert site.status_code == 201
    url = f"/api/sites/{site.json()['id']}"

    response = client.patch(url, json={"name": "b.com"}, headers=member_headers)
    assert response.status_code == 403
    assert response.json()["detail"] == "No permission to edit sites"
    assert client.delete(url, headers=member_headers).status_code == 403


def test_default_invite_permissions_grant_no_modules(client, owner_a_headers):
    member_headers = add_team_member(client, owner_a_headers, "dev@example.com")

    for path in ("/api/clients", "/api/sites", "/api/hosting-accounts", "/api/tasks"):
        assert client.get(path, headers=member_headers).status_code == 403


def test_permission_change_applies_on_next_request(client, owner_a_headers):
    member_headers = add_team_member(client, owner_a_headers, "dev@example.com")
    member_id = member_id_for(client, owner_a_headers, "dev@example.com")
    assert client.get("/api/tasks", headers=member_headers).status_code == 403

    client.patch(
        f"/api/team/members/{member_id}",
        json={"permissions": full_permissions()},
        headers=owner_a_headers,
    )

    assert client.get("/api/tasks", headers=member_headers).status_code == 200


def test_inactive_member_denied(client, owner_a_headers):
    member_headers = add_team_member(
        client, owner_a_headers, "dev@example.com", full_permissions()
    )
    member_id = member_id_for(client, owner_a_headers, "dev@example.com")

    response = client.patch(
        f"/api/team/members/{member_id}", json={"status": "inactive"}, headers=owner_a_headers
    )
    assert response.status_code == 200

    response = client.get("/api/clients", headers=member_headers)
    assert response.status_code == 403
    assert response.json()["detail"] == "Access denied"


def test_pending_member_denied(client, owner_a_headers):
    member_headers = add_team_member(
        client, owner_a_headers, "dev@example.com", full_permissions()
    )
    member_id = member_id_for(client, owner_a_headers, "dev@example.com")
    client.patch(
        f"/api/team/members/{member_id}", json={"status": "pending"}, headers=owner_a_headers
    )

    assert client.get("/api/auth/me", headers=member_headers).status_code == 403


def test_removed_member_denied(client, owner_a_headers):
    member_headers = add_team_member(
        client, owner_a_headers, "dev@example.com", full_permissions()
    )
    member_id = member_id_for(client, owner_a_headers, "dev@example.com")

    response = client.delete(f"/api/team/members/{member_id}", headers=owner_a_headers)
    assert response.status_code == 200

    assert client.get("/api/clients", headers=member_headers).status_code == 403


def broken_lookup(self, record_id):
    raise OperationalError("SELECT", {}, Exception("database is locked"))


def test_membership_lookup_error_fails_closed(client, owner_a_headers, monkeypatch):
    member_headers = add_team_member(
        client, owner_a_headers, "dev@example.com", full_permissions()
    )
    monkeypatch.setattr(TeamMemberRepository, "get_for_identity", broken_lookup)

    response = client.get("/api/clients", headers=member_headers)
    assert response.status_code == 403
    assert response.json()["detail"] == "Access denied"


def test_tenant_lookup_error_fails_closed(client, owner_a_headers, monkeypatch):
    monkeypatch.setattr(UserRepository, "get_by_id", broken_lookup)

    response = client.get("/api/clients", headers=owner_a_headers)
    assert response.status_code == 403
    assert response.json()["detail"] == "Access denied"


def test_owner_keeps_own_tenant_despite_membership_elsewhere(
    client, db_session, owner_a_headers, owner_b_headers
):
    owner_a_id = client.get("/api/auth/me", headers=owner_a_headers).json()["user_id"]
    owner_b_id = client.get("/api/auth/me", headers=owner_b_headers).json()["user_id"]
    db_session.add(
        TeamMember(
            owner_id=owner_a_id,
            member_user_id=owner_b_id,
            email="owner-b@example.com",
            name="Owner B",
            permissions=full_permissions(),
            status=MemberStatus.ACTIVE,
        )
    )
    db_session.commit()
    client.post("/api/sites", json={"name": "b.com"}, headers=owner_b_headers)

    me = client.get("/api/auth/me", headers=owner_b_headers).json()
    assert me["is_owner"] is True
    assert me["tenant_id"] == owner_b_id
    assert me["company_name"] == "Agency B"
    assert client.get("/api/team/members", headers=owner_b_headers).status_code == 200
    assert client.get("/api/sites", headers=owner_b_headers).json()["total"] == 1


def test_member_cannot_manage_team(client, owner_a_headers):
    member_headers = add_team_member(
        client, owner_a_headers, "dev@example.com", full_permissions()
    )

    assert client.get("/api/team/members", headers=member_headers).status_code == 403
    response = client.post(
        "/api/team/members",
        json={"email": "other@example.com", "name": "Other"},
        headers=member_headers,
    )
    assert response.status_code == 403
    assert client.get("/api/notifications/settings", headers=member_headers).status_code == 403
    assert client.post("/api/notifications/scan", headers=member_headers).status_code == 403


def test_member_does_not_see_other_tenants(client, owner_a_headers, owner_b_headers):
    client.post("/api/sites", json={"name": "b.com"}, headers=owner_b_headers)
    member_headers = add_team_member(
        client, owner_a_headers, "dev@example.com", full_permissions()
    )

    assert client.get("/api/sites", headers=member_headers).json()["total"] == 0
