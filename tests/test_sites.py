from stack_assist.models.site import Site


def make_client(client, headers, name="Jane Doe", email="jane@example.com", phone="555-0100"):
    response = client.post(
        "/api/clients", json={"name": name, "email": email, "phone": phone}, headers=headers
    )
    return response.json()["id"]


def make_host(client, headers, provider="HostGator"):
    response = client.post("/api/hosting-accounts", json={"provider": provider}, headers=headers)
    return response.json()["id"]


def test_create_site_snapshots_names(client, owner_a_headers):
    client_id = make_client(client, owner_a_headers)
    host_id = make_host(client, owner_a_headers)

    response = client.post(
        "/api/sites",
        json={
            "name": "janedoe.com",
            "url": "https://janedoe.com",
            "client_id": client_id,
            "host_id": host_id,
            "expiration_date": "2030-05-01",
            "amount_paid": 120.50,
        },
        headers=owner_a_headers,
    )

    assert response.status_code == 201
    data = response.json()
    assert data["client_name"] == "Jane Doe"
    assert data["host_name"] == "HostGator"
    assert data["expiration_date"] == "2030-05-01"
    assert float(data["amount_paid"]) == 120.50


def test_renaming_client_leaves_site_snapshot(client, owner_a_headers):
    """client_name is copied at write time and not refreshed later"""
    client_id = make_client(client, owner_a_headers)
    site = client.post(
        "/api/sites", json={"name": "janedoe.com", "client_id": client_id}, headers=owner_a_headers
    ).json()

    client.patch(f"/api/clients/{client_id}", json={"name": "Jane Smith"}, headers=owner_a_headers)

    data = client.get(f"/api/sites/{site['id']}", headers=owner_a_headers).json()
    assert data["client_name"] == "Jane Doe"


def test_site_with_other_tenant_client_rejected(client, db_session, owner_a_headers, owner_b_headers):
    foreign_client = make_client(client, owner_b_headers)

    response = client.post(
        "/api/sites", json={"name": "x.com", "client_id": foreign_client}, headers=owner_a_headers
    )

    assert response.status_code == 404
    assert db_session.query(Site).count() == 0


def test_site_with_other_tenant_host_rejected(client, owner_a_headers, owner_b_headers):
    foreign_host = make_host(client, owner_b_headers)

    response = client.post(
        "/api/sites", json={"name": "x.com", "host_id": foreign_host}, headers=owner_a_headers
    )
    assert response.status_code == 404


def test_update_site_partial(client, owner_a_headers):
    site = client.post("/api/sites", json={"name": "old.com"}, headers=owner_a_headers).json()

    response = client.patch(
        f"/api/sites/{site['id']}",
        json={"name": "new.com", "name_changed": True, "old_domain_name": "old.com"},
        headers=owner_a_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "new.com"
    assert data["name_changed"] is True
    assert data["old_domain_name"] == "old.com"


def test_sites_isolated_between_tenants(client, owner_a_headers, owner_b_headers):
    site = client.post("/api/sites", json={"name": "a.com"}, headers=owner_a_headers).json()

    assert client.get("/api/sites", headers=owner_b_headers).json()["total"] == 0
    assert client.get(f"/api/sites/{site['id']}", headers=owner_b_headers).status_code == 404
    assert client.delete(f"/api/sites/{site['id']}", headers=owner_b_headers).status_code == 404
    assert client.get("/api/sites", headers=owner_a_headers).json()["total"] == 1


def test_delete_site(client, owner_a_headers):
    site = client.post("/api/sites", json={"name": "a.com"}, headers=owner_a_headers).json()

    assert client.delete(f"/api/sites/{site['id']}", headers=owner_a_headers).status_code == 204
    assert client.get("/api/sites", headers=owner_a_headers).json()["total"] == 0
