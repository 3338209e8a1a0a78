"""Expiry classification shared by the dashboard, notifications and hosting views.

Each view keeps its own day thresholds. They do not agree with one another
(the dashboard chart has a one-week bucket, the notification labels and the
scan do not, and the hosting list uses a flat 30 days), so the thresholds are
kept per view below instead of being merged into one table.
"""

import calendar
from dataclasses import dataclass
from datetime import date, timedelta

from stack_assist.models.hosting_account import HostingAccount
from stack_assist.models.mobile_app import MobileApp
from stack_assist.models.notification import ItemType, NotificationType
from stack_assist.models.site import Site
from stack_assist.schemas.notification_schemas import ExpiringItemResponse

# Hosting list "expiring soon" flag
HOSTING_EXPIRING_SOON_DAYS = 30

# Expiration scan thresholds, checked in order
SCAN_THRESHOLDS: list[tuple[int, NotificationType]] = [
    (0, NotificationType.EXPIRY_DAY),
    (3, NotificationType.THREE_DAYS),
    (14, NotificationType.TWO_WEEKS),
    (30, NotificationType.ONE_MONTH),
]

# Notifications page labels, checked in order; anything later is "1 month or less"
LABEL_THRESHOLDS: list[tuple[int, str]] = [
    (0, "Expired"),
    (3, "3 days or less"),
    (14, "2 weeks or less"),
]
DEFAULT_LABEL = "1 month or less"

# Notifications page look-ahead
NOTIFICATION_WINDOW_DAYS = 90

# Dashboard chart buckets, in chart label order
CHART_LABELS = ["1 Month", "2 Weeks", "1 Week", "3 Days", "Expiring"]
CRITICAL_DAYS = 3


@dataclass
class ExpiringItem:
    """A site, hosting account or app reduced to what expiry views need"""

    item_type: ItemType
    item_id: int
    name: str
    expiry_date: date
    tenant_id: int
    client_id: int | None = None

    def days_until(self, today: date) -> int:
        return days_until(self.expiry_date, today)


def days_until(expiry_date: date, today: date) -> int:
    """Whole days from today to the expiry date (negative once past)."""
    return (expiry_date - today).days


def add_one_month(today: date) -> date:
    """Same day next month, clamped to the last day of a shorter month."""
    year = today.year + today.month // 12
    month = today.month % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(today.day, last_day))


def from_site(site: Site) -> ExpiringItem:
    return ExpiringItem(
        item_type=ItemType.SITE,
        item_id=site.id,
        name=site.name,
        expiry_date=site.expiration_date,
        tenant_id=site.user_id,
        client_id=site.client_id,
    )


def from_hosting(account: HostingAccount) -> ExpiringItem:
    # Hosting accounts are not tied to a client
    return ExpiringItem(
        item_type=ItemType.HOSTING,
        item_id=account.id,
        name=account.provider,
        expiry_date=account.expiration_date,
        tenant_id=account.user_id,
    )


def from_app(app: MobileApp) -> ExpiringItem:
    return ExpiringItem(
        item_type=ItemType.APP,
        item_id=app.id,
        name=app.app_name,
        expiry_date=app.renewal_date,
        tenant_id=app.user_id,
        client_id=app.client_id,
    )


def classify_for_scan(days: int) -> NotificationType | None:
    """
    Notification threshold for an item, or None when more than 30 days out.

    Example:
        >>> classify_for_scan(2)
        <NotificationType.THREE_DAYS: 'three_days'>
    """
    for limit, notification_type in SCAN_THRESHOLDS:
        if days <= limit:
            return notification_type
    return None


def expiration_label(days: int) -> str:
    """Label shown on the notifications page."""
    for limit, label in LABEL_THRESHOLDS:
        if days <= limit:
            return label
    return DEFAULT_LABEL


def chart_bucket(days: int) -> int:
    """Index into CHART_LABELS for the dashboard expiry chart."""
    if days <= 0:
        return 4
    if days <= 3:
        return 3
    if days <= 7:
        return 2
    if days <= 14:
        return 1
    return 0


def is_hosting_expiring_soon(expiration_date: date | None, today: date) -> bool:
    if expiration_date is None:
        return False
    return days_until(expiration_date, today) <= HOSTING_EXPIRING_SOON_DAYS


def is_critical(days: int) -> bool:
    """Dashboard critical alert: three days or less, including expired."""
    return days <= CRITICAL_DAYS


def notification_message(item: ExpiringItem, notification_type: NotificationType) -> str:
    """Body of the expiry email sent to the tenant and the client."""
    time_frames = {
        NotificationType.ONE_MONTH: "in one month",
        NotificationType.TWO_WEEKS: "in two weeks",
        NotificationType.THREE_DAYS: "in three days",
        NotificationType.EXPIRY_DAY: "today",
    }
    return (
        f'Your {item.item_type.value} "{item.name}" is expiring '
        f"{time_frames[notification_type]} on {item.expiry_date.isoformat()}.\n"
        "Please take necessary action to renew or update it.\n"
        "If you have any questions, please contact support."
    )


def window_end(today: date, days: int) -> date:
    return today + timedelta(days=days)


def to_response(item: ExpiringItem, today: date) -> ExpiringItemResponse:
    days = item.days_until(today)
    return ExpiringItemResponse(
        item_type=item.item_type,
        item_id=item.item_id,
        name=item.name,
        expiry_date=item.expiry_date,
        days_until_expiry=days,
        label=expiration_label(days),
        client_id=item.client_id,
    )
