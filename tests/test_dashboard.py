from datetime import timedelta

from stack_assist.core.clock import today
from tests.test_sites import make_client


def in_days(days: int) -> str:
    return str(today() + timedelta(days=days))


def add_site(client, headers, name, days):
    client.post("/api/sites", json={"name": name, "expiration_date": in_days(days)}, headers=headers)


def add_hosting(client, headers, provider, days):
    client.post(
        "/api/hosting-accounts",
        json={"provider": provider, "expiration_date": in_days(days)},
        headers=headers,
    )


def test_site_expiring_in_two_days(client, owner_a_headers):
    """One site expiring in two days shows up in every dashboard view"""
    add_site(client, owner_a_headers, "soon.com", 2)

    stats = client.get("/api/dashboard/stats", headers=owner_a_headers).json()
    assert stats["total_sites"] == 1
    assert stats["expiring_sites"] == 1
    assert stats["expiring_in_three_days"] == 1
    assert stats["expiring_in_one_week"] == 0
    assert stats["expiring_in_one_month"] == 0

    chart = client.get("/api/dashboard/chart", headers=owner_a_headers).json()
    assert chart["labels"] == ["1 Month", "2 Weeks", "1 Week", "3 Days", "Expiring"]
    assert chart["sites"] == [0, 0, 0, 1, 0]
    assert chart["hosting"] == [0, 0, 0, 0, 0]

    alerts = client.get("/api/dashboard/critical-alerts", headers=owner_a_headers).json()
    assert alerts["total"] == 1
    assert alerts["items"][0]["name"] == "soon.com"
    assert alerts["items"][0]["days_until_expiry"] == 2


def test_stats_buckets(client, owner_a_headers):
    client_id = make_client(client, owner_a_headers)
    add_site(client, owner_a_headers, "three.com", 3)
    add_site(client, owner_a_headers, "week.com", 7)
    add_site(client, owner_a_headers, "month.com", 30)
    add_site(client, owner_a_headers, "later.com", 31)
    add_site(client, owner_a_headers, "gone.com", -5)
    add_hosting(client, owner_a_headers, "HostGator", 10)
    client.post(
        "/api/mobile-apps",
        json={"app_name": "App", "client_id": client_id, "renewal_date": in_days(1)},
        headers=owner_a_headers,
    )

    stats = client.get("/api/dashboard/stats", headers=owner_a_headers).json()

    assert stats["total_clients"] == 1
    # The mobile app also registered a site
    assert stats["total_sites"] == 6
    assert stats["total_hosting_accounts"] == 1
    assert stats["total_mobile_apps"] == 1
    assert stats["expiring_sites"] == 4
    assert stats["expiring_hosting"] == 1
    assert stats["expiring_mobile_apps"] == 1
    assert stats["expiring_in_three_days"] == 2
    assert stats["expiring_in_one_week"] == 1
    assert stats["expiring_in_one_month"] == 2


def test_chart_buckets(client, owner_a_headers):
    for name, days in [("a", 0), ("b", -3), ("c", 3), ("d", 5), ("e", 14), ("f", 20), ("g", 45)]:
        add_site(client, owner_a_headers, f"{name}.com", days)

    chart = client.get("/api/dashboard/chart", headers=owner_a_headers).json()

    assert chart["sites"] == [1, 1, 1, 1, 2]


def test_critical_alerts_include_expired_sorted(client, owner_a_headers):
    add_site(client, owner_a_headers, "three.com", 3)
    add_site(client, owner_a_headers, "four.com", 4)
    add_hosting(client, owner_a_headers, "OldHost", -10)

    alerts = client.get("/api/dashboard/critical-alerts", headers=owner_a_headers).json()

    assert [i["name"] for i in alerts["items"]] == ["OldHost", "three.com"]
    assert alerts["items"][0]["label"] == "Expired"


def test_dashboard_isolated_between_tenants(client, owner_a_headers, owner_b_headers):
    add_site(client, owner_a_headers, "soon.com", 2)

    stats = client.get("/api/dashboard/stats", headers=owner_b_headers).json()
    assert stats["total_sites"] == 0
    assert stats["expiring_in_three_days"] == 0
    assert client.get("/api/dashboard/critical-alerts", headers=owner_b_headers).json()["total"] == 0
