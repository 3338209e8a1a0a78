from datetime import date, datetime
from pydantic import BaseModel
from stack_assist.models.notification import ItemType, NotificationType, NotificationStatus


class ExpiringItemResponse(BaseModel):
    """One site, hosting account or app with its expiry classification"""

    item_type: ItemType
    item_id: int
    name: str
    expiry_date: date
    days_until_expiry: int
    label: str
    client_id: int | None = None


class ExpiringItemListResponse(BaseModel):
    items: list[ExpiringItemResponse]
    total: int


class NotificationSettingsResponse(BaseModel):
    model_config = {"from_attributes": True}

    enable_email_notifications: bool
    notify_one_month: bool
    notify_two_weeks: bool
    notify_three_days: bool
    notify_on_expiry_day: bool


class NotificationSettingsUpdate(BaseModel):
    """Partial update of the tenant's toggles"""

    enable_email_notifications: bool | None = None
    notify_one_month: bool | None = None
    notify_two_weeks: bool | None = None
    notify_three_days: bool | None = None
    notify_on_expiry_day: bool | None = None


class NotificationResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    item_type: ItemType
    item_id: int
    item_name: str
    expiry_date: date
    notification_type: NotificationType
    status: NotificationStatus
    created_at: datetime


class NotificationListResponse(BaseModel):
    notifications: list[NotificationResponse]
    total: int


class ScanResultResponse(BaseModel):
    """Outcome of an expiration scan"""

    scanned: int
    notifications_created: int
    emails_sent: int
    emails_failed: int
