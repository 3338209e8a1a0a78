from tests.test_mobile_apps import make_developer_account
from tests.test_sites import make_client


def add_app(client, headers, client_id, **accounts):
    response = client.post(
        "/api/mobile-apps",
        json={"app_name": "App", "client_id": client_id, **accounts},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["id"]


def test_new_account_has_no_apps(client, owner_a_headers):
    response = client.post(
        "/api/developer-accounts",
        json={"account_type": "apple", "email": "dev@example.com", "company_name": "Agency"},
        headers=owner_a_headers,
    )

    assert response.status_code == 201
    assert response.json()["mobile_apps_count"] == 0


def test_app_count_is_derived_from_linked_apps(client, owner_a_headers):
    client_id = make_client(client, owner_a_headers)
    apple_id = make_developer_account(client, owner_a_headers, "apple")
    google_id = make_developer_account(client, owner_a_headers, "google")

    add_app(client, owner_a_headers, client_id, ios_developer_account_id=apple_id)
    both = add_app(
        client,
        owner_a_headers,
        client_id,
        ios_developer_account_id=apple_id,
        google_developer_account_id=google_id,
    )

    counts = {
        a["account_type"]: a["mobile_apps_count"]
        for a in client.get("/api/developer-accounts", headers=owner_a_headers).json()[
            "developer_accounts"
        ]
    }
    assert counts == {"apple": 2, "google": 1}

    # Deleting an app lowers the count without touching the account
    client.delete(f"/api/mobile-apps/{both}", headers=owner_a_headers)
    data = client.get(f"/api/developer-accounts/{apple_id}", headers=owner_a_headers).json()
    assert data["mobile_apps_count"] == 1


def test_update_developer_account(client, owner_a_headers):
    account_id = make_developer_account(client, owner_a_headers)

    response = client.patch(
        f"/api/developer-accounts/{account_id}",
        json={"duns": "123456789", "status": "active"},
        headers=owner_a_headers,
    )

    assert response.status_code == 200
    assert response.json()["duns"] == "123456789"
    assert response.json()["company_name"] == "Agency LLC"


def test_developer_accounts_isolated_between_tenants(client, owner_a_headers, owner_b_headers):
    account_id = make_developer_account(client, owner_a_headers)
    url = f"/api/developer-accounts/{account_id}"

    assert client.get("/api/developer-accounts", headers=owner_b_headers).json()["total"] == 0
    assert client.get(url, headers=owner_b_headers).status_code == 404
    assert client.delete(url, headers=owner_b_headers).status_code == 404
    assert client.delete(url, headers=owner_a_headers).status_code == 204


def test_foreign_developer_account_cannot_be_linked(client, owner_a_headers, owner_b_headers):
    client_id = make_client(client, owner_a_headers)
    foreign_account = make_developer_account(client, owner_b_headers)

    response = client.post(
        "/api/mobile-apps",
        json={"app_name": "x", "client_id": client_id, "ios_developer_account_id": foreign_account},
        headers=owner_a_headers,
    )
    assert response.status_code == 404
