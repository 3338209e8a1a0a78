from datetime import date, timedelta

import pytest

from stack_assist.core.clock import today
from stack_assist.models.notification import Notification, NotificationStatus, NotificationType
from stack_assist.services.notification_service import NotificationService
from tests.conftest import register_owner
from tests.test_sites import make_client


def in_days(days: int) -> str:
    return str(today() + timedelta(days=days))


@pytest.fixture
def expiring_items(client, owner_a_headers):
    """
    Tenant A with:
    - site linked to a client, expiring in 2 days
    - hosting account expiring in 20 days
    - site without client, expired yesterday
    - mobile app renewing in 60 days
    """
    client_id = make_client(client, owner_a_headers, email="client@example.com")
    client.post(
        "/api/sites",
        json={"name": "client.com", "client_id": client_id, "expiration_date": in_days(2)},
        headers=owner_a_headers,
    )
    client.post(
        "/api/hosting-accounts",
        json={"provider": "HostGator", "expiration_date": in_days(20)},
        headers=owner_a_headers,
    )
    client.post(
        "/api/sites",
        json={"name": "lapsed.com", "expiration_date": in_days(-1)},
        headers=owner_a_headers,
    )
    client.post(
        "/api/mobile-apps",
        json={"app_name": "Far App", "client_id": client_id, "renewal_date": in_days(60)},
        headers=owner_a_headers,
    )
    return client.get("/api/auth/me", headers=owner_a_headers).json()["tenant_id"]


def test_expiring_view_default_window(client, owner_a_headers, expiring_items):
    data = client.get("/api/notifications/expiring", headers=owner_a_headers).json()

    assert [(i["name"], i["label"]) for i in data["items"]] == [
        ("lapsed.com", "Expired"),
        ("client.com", "3 days or less"),
        ("HostGator", "1 month or less"),
    ]
    assert [i["days_until_expiry"] for i in data["items"]] == [-1, 2, 20]


def test_expiring_view_wider_window_and_type_filter(client, owner_a_headers, expiring_items):
    data = client.get(
        "/api/notifications/expiring", params={"days": 90}, headers=owner_a_headers
    ).json()
    assert data["total"] == 4

    data = client.get(
        "/api/notifications/expiring",
        params={"days": 90, "item_type": "app"},
        headers=owner_a_headers,
    ).json()
    assert [i["name"] for i in data["items"]] == ["Far App"]


def test_expiring_view_window_capped_at_90_days(client, owner_a_headers):
    client.post(
        "/api/sites", json={"name": "edge.com", "expiration_date": in_days(90)}, headers=owner_a_headers
    )
    client.post(
        "/api/sites", json={"name": "far.com", "expiration_date": in_days(120)}, headers=owner_a_headers
    )

    data = client.get(
        "/api/notifications/expiring", params={"days": 365}, headers=owner_a_headers
    ).json()
    assert [i["name"] for i in data["items"]] == ["edge.com"]


def test_expiring_view_isolated(client, owner_b_headers, expiring_items):
    data = client.get(
        "/api/notifications/expiring", params={"days": 90}, headers=owner_b_headers
    ).json()
    assert data["total"] == 0


def test_settings_default_all_enabled(client, owner_a_headers):
    data = client.get("/api/notifications/settings", headers=owner_a_headers).json()
    assert data == {
        "enable_email_notifications": True,
        "notify_one_month": True,
        "notify_two_weeks": True,
        "notify_three_days": True,
        "notify_on_expiry_day": True,
    }


def test_settings_partial_update(client, owner_a_headers):
    response = client.put(
        "/api/notifications/settings", json={"notify_one_month": False}, headers=owner_a_headers
    )

    assert response.status_code == 200
    data = client.get("/api/notifications/settings", headers=owner_a_headers).json()
    assert data["notify_one_month"] is False
    assert data["notify_two_weeks"] is True


@pytest.mark.asyncio
async def test_scan_writes_notifications_and_emails(db_session, mail_sender, expiring_items):
    result = await NotificationService(db_session).scan_tenant(
        expiring_items, mail_sender, today=today()
    )

    assert result.scanned == 3
    assert result.notifications_created == 3
    assert result.emails_sent == 4
    assert result.emails_failed == 0

    kinds = {n.item_name: n.notification_type for n in db_session.query(Notification).all()}
    assert kinds == {
        "client.com": NotificationType.THREE_DAYS,
        "HostGator": NotificationType.ONE_MONTH,
        "lapsed.com": NotificationType.EXPIRY_DAY,
    }
    assert all(n.status == NotificationStatus.SENT for n in db_session.query(Notification).all())

    assert len(mail_sender.to("owner-a@example.com")) == 3
    [client_mail] = mail_sender.to("client@example.com")
    assert client_mail["subject"] == "Expiration Notice: client.com"
    assert "in three days" in client_mail["text"]


@pytest.mark.asyncio
async def test_scan_skips_disabled_thresholds(client, db_session, mail_sender, owner_a_headers, expiring_items):
    client.put(
        "/api/notifications/settings",
        json={"notify_three_days": False, "notify_on_expiry_day": False},
        headers=owner_a_headers,
    )

    result = await NotificationService(db_session).scan_tenant(
        expiring_items, mail_sender, today=today()
    )

    assert result.notifications_created == 1
    assert db_session.query(Notification).one().item_name == "HostGator"


@pytest.mark.asyncio
async def test_scan_without_email_keeps_notifications_pending(
    client, db_session, mail_sender, owner_a_headers, expiring_items
):
    client.put(
        "/api/notifications/settings",
        json={"enable_email_notifications": False},
        headers=owner_a_headers,
    )

    result = await NotificationService(db_session).scan_tenant(
        expiring_items, mail_sender, today=today()
    )

    assert result.notifications_created == 3
    assert result.emails_sent == 0
    assert mail_sender.sent == []
    assert all(
        n.status == NotificationStatus.PENDING for n in db_session.query(Notification).all()
    )


@pytest.mark.asyncio
async def test_scan_continues_after_send_failure(db_session, mail_sender, expiring_items):
    mail_sender.fail_for.add("client@example.com")

    result = await NotificationService(db_session).scan_tenant(
        expiring_items, mail_sender, today=today()
    )

    assert result.notifications_created == 3
    assert result.emails_failed == 1
    assert result.emails_sent == 3
    statuses = {n.item_name: n.status for n in db_session.query(Notification).all()}
    assert statuses == {
        "client.com": NotificationStatus.FAILED,
        "HostGator": NotificationStatus.SENT,
        "lapsed.com": NotificationStatus.SENT,
    }


@pytest.mark.asyncio
async def test_scan_all_covers_every_tenant(client, db_session, mail_sender, expiring_items):
    other_headers = register_owner(client, "owner-b@example.com", "Agency B")
    client.post(
        "/api/sites", json={"name": "b.com", "expiration_date": in_days(14)}, headers=other_headers
    )

    result = await NotificationService(db_session).scan_all(mail_sender, today=today())

    assert result.notifications_created == 4
    [b_mail] = mail_sender.to("owner-b@example.com")
    assert "in two weeks" in b_mail["text"]


def test_scan_route_and_notification_list(client, owner_a_headers, mail_sender, expiring_items):
    response = client.post("/api/notifications/scan", headers=owner_a_headers)

    assert response.status_code == 200
    assert response.json()["notifications_created"] == 3

    data = client.get("/api/notifications", headers=owner_a_headers).json()
    assert data["total"] == 3
    assert {n["status"] for n in data["notifications"]} == {"sent"}


def test_notification_list_isolated(client, owner_a_headers, owner_b_headers, expiring_items):
    client.post("/api/notifications/scan", headers=owner_a_headers)

    assert client.get("/api/notifications", headers=owner_b_headers).json()["total"] == 0


@pytest.mark.asyncio
async def test_scan_window_is_one_calendar_month(client, db_session, mail_sender, owner_a_headers):
    """From Feb 1 the window ends Mar 1; an item one day further out is picked up the next day"""
    for name, expiration in [("edge.com", "2026-03-01"), ("beyond.com", "2026-03-02")]:
        client.post(
            "/api/sites", json={"name": name, "expiration_date": expiration}, headers=owner_a_headers
        )
    tenant_id = client.get("/api/auth/me", headers=owner_a_headers).json()["tenant_id"]

    result = await NotificationService(db_session).scan_tenant(
        tenant_id, mail_sender, today=date(2026, 2, 1)
    )
    assert result.scanned == 1
    assert db_session.query(Notification).one().item_name == "edge.com"

    result = await NotificationService(db_session).scan_tenant(
        tenant_id, mail_sender, today=date(2026, 2, 2)
    )
    assert result.scanned == 2
    assert result.notifications_created == 2
