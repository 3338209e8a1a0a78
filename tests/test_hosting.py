from datetime import timedelta

from stack_assist.core.clock import today


def test_create_hosting_account(client, owner_a_headers):
    response = client.post(
        "/api/hosting-accounts",
        json={
            "provider": "SiteGround",
            "host_type": "vps",
            "username": "agency",
            "password_hint": "usual one",
            "status": "needs renewal",
        },
        headers=owner_a_headers,
    )

    assert response.status_code == 201
    data = response.json()
    assert data["provider"] == "SiteGround"
    assert data["host_type"] == "vps"
    assert data["status"] == "needs renewal"
    assert "password" not in data


def test_invalid_host_type_rejected(client, owner_a_headers):
    response = client.post(
        "/api/hosting-accounts",
        json={"provider": "X", "host_type": "cloud"},
        headers=owner_a_headers,
    )
    assert response.status_code == 422


def test_expiring_soon_flag(client, owner_a_headers):
    """Accounts expiring within 30 days (or already expired) are flagged"""
    now = today()
    for provider, days in [("soon", 30), ("later", 31), ("past", -2)]:
        client.post(
            "/api/hosting-accounts",
            json={"provider": provider, "expiration_date": str(now + timedelta(days=days))},
            headers=owner_a_headers,
        )
    client.post("/api/hosting-accounts", json={"provider": "undated"}, headers=owner_a_headers)

    data = client.get("/api/hosting-accounts", headers=owner_a_headers).json()

    flags = {a["provider"]: a["expiring_soon"] for a in data["hosting_accounts"]}
    assert flags == {"soon": True, "later": False, "past": True, "undated": False}


def test_update_hosting_account(client, owner_a_headers):
    account = client.post(
        "/api/hosting-accounts", json={"provider": "HostGator"}, headers=owner_a_headers
    ).json()

    response = client.patch(
        f"/api/hosting-accounts/{account['id']}",
        json={"status": "suspended"},
        headers=owner_a_headers,
    )

    assert response.status_code == 200
    assert response.json()["status"] == "suspended"
    assert response.json()["provider"] == "HostGator"


def test_hosting_isolated_between_tenants(client, owner_a_headers, owner_b_headers):
    account = client.post(
        "/api/hosting-accounts", json={"provider": "HostGator"}, headers=owner_a_headers
    ).json()
    url = f"/api/hosting-accounts/{account['id']}"

    assert client.get("/api/hosting-accounts", headers=owner_b_headers).json()["total"] == 0
    assert client.get(url, headers=owner_b_headers).status_code == 404
    assert client.patch(url, json={"provider": "x"}, headers=owner_b_headers).status_code == 404
    assert client.delete(url, headers=owner_b_headers).status_code == 404
    assert client.delete(url, headers=owner_a_headers).status_code == 204
