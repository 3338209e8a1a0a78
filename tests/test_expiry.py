from datetime import date

import pytest

from stack_assist.models.notification import ItemType, NotificationType
from stack_assist.services import expiry


@pytest.mark.parametrize(
    "days, expected",
    [
        (-4, NotificationType.EXPIRY_DAY),
        (0, NotificationType.EXPIRY_DAY),
        (1, NotificationType.THREE_DAYS),
        (3, NotificationType.THREE_DAYS),
        (4, NotificationType.TWO_WEEKS),
        (14, NotificationType.TWO_WEEKS),
        (15, NotificationType.ONE_MONTH),
        (30, NotificationType.ONE_MONTH),
        (31, None),
    ],
)
def test_classify_for_scan(days, expected):
    assert expiry.classify_for_scan(days) == expected


@pytest.mark.parametrize(
    "days, label",
    [(0, "Expired"), (-1, "Expired"), (3, "3 days or less"), (14, "2 weeks or less"), (15, "1 month or less"), (80, "1 month or less")],
)
def test_expiration_label(days, label):
    assert expiry.expiration_label(days) == label


def test_chart_has_one_week_bucket_that_scan_lacks():
    """Views keep their own thresholds: 6 days is '1 Week' on the chart, two_weeks in the scan"""
    assert expiry.CHART_LABELS[expiry.chart_bucket(6)] == "1 Week"
    assert expiry.classify_for_scan(6) == NotificationType.TWO_WEEKS
    assert expiry.expiration_label(6) == "2 weeks or less"


@pytest.mark.parametrize(
    "today, expected",
    [
        (date(2026, 1, 15), date(2026, 2, 15)),
        (date(2026, 1, 31), date(2026, 2, 28)),
        (date(2028, 1, 31), date(2028, 2, 29)),
        (date(2026, 12, 10), date(2027, 1, 10)),
    ],
)
def test_add_one_month(today, expected):
    assert expiry.add_one_month(today) == expected


def test_hosting_expiring_soon():
    today = date(2026, 3, 1)
    assert expiry.is_hosting_expiring_soon(date(2026, 3, 31), today)
    assert not expiry.is_hosting_expiring_soon(date(2026, 4, 1), today)
    assert not expiry.is_hosting_expiring_soon(None, today)


def test_notification_message_mentions_item_and_date():
    item = expiry.ExpiringItem(
        item_type=ItemType.HOSTING,
        item_id=1,
        name="HostGator",
        expiry_date=date(2026, 5, 1),
        tenant_id=1,
    )

    message = expiry.notification_message(item, NotificationType.EXPIRY_DAY)

    assert message.startswith('Your hosting "HostGator" is expiring today on 2026-05-01.')


def test_to_response_labels_item():
    item = expiry.ExpiringItem(
        item_type=ItemType.SITE,
        item_id=7,
        name="a.com",
        expiry_date=date(2026, 5, 3),
        tenant_id=1,
        client_id=2,
    )

    response = expiry.to_response(item, date(2026, 5, 1))

    assert response.days_until_expiry == 2
    assert response.label == "3 days or less"
    assert response.client_id == 2
