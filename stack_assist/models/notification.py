from datetime import date
from enum import Enum as PyEnum
from sqlalchemy import String, Integer, Boolean, Date, ForeignKey, Enum
from sqlalchemy.orm import Mapped, mapped_column

from stack_assist.models.base import Base, TimestampMixin


class ItemType(str, PyEnum):
    """Kinds of expiring items"""

    SITE = "site"
    HOSTING = "hosting"
    APP = "app"


class NotificationType(str, PyEnum):
    """Expiry threshold that triggered a notification"""

    ONE_MONTH = "one_month"
    TWO_WEEKS = "two_weeks"
    THREE_DAYS = "three_days"
    EXPIRY_DAY = "expiry_day"


class NotificationStatus(str, PyEnum):
    PENDING = "pending"
    SENT = "sent"
    FAILED = "failed"


class Notification(Base, TimestampMixin):
    """Record of one expiry notice written by the expiration scan."""

    __tablename__ = "notifications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    item_type: Mapped[ItemType] = mapped_column(
        Enum(ItemType, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
    )
    item_id: Mapped[int] = mapped_column(Integer, nullable=False)
    item_name: Mapped[str] = mapped_column(String(255), nullable=False)
    expiry_date: Mapped[date] = mapped_column(Date, nullable=False)
    notification_type: Mapped[NotificationType] = mapped_column(
        Enum(NotificationType, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
    )
    status: Mapped[NotificationStatus] = mapped_column(
        Enum(NotificationStatus, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=NotificationStatus.PENDING,
    )


class NotificationSetting(Base, TimestampMixin):
    """
    Per-tenant toggles for the expiration scan.

    Created with every toggle on the first time a tenant's settings are read.
    """

    __tablename__ = "notification_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    enable_email_notifications: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    notify_one_month: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    notify_two_weeks: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    notify_three_days: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    notify_on_expiry_day: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    def allows(self, notification_type: NotificationType) -> bool:
        """Whether this tenant wants notices for the given threshold"""
        toggles = {
            NotificationType.ONE_MONTH: self.notify_one_month,
            NotificationType.TWO_WEEKS: self.notify_two_weeks,
            NotificationType.THREE_DAYS: self.notify_three_days,
            NotificationType.EXPIRY_DAY: self.notify_on_expiry_day,
        }
        return toggles[notification_type]
