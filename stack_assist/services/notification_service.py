"""Expiring-items view, notification settings and the expiration scan."""

import logging
from datetime import date
from sqlalchemy.orm import Session

from stack_assist.core.clock import today as current_date
from stack_assist.core.exceptions import EmailDeliveryException
from stack_assist.core.mailer import MailSender
from stack_assist.models.access_context import AccessContext, ensure_owner
from stack_assist.models.notification import (
    ItemType,
    Notification,
    NotificationSetting,
    NotificationStatus,
)
from stack_assist.repositories.client_repository import ClientRepository
from stack_assist.repositories.hosting_account_repository import HostingAccountRepository
from stack_assist.repositories.mobile_app_repository import MobileAppRepository
from stack_assist.repositories.notification_repository import (
    NotificationRepository,
    NotificationSettingRepository,
)
from stack_assist.repositories.site_repository import SiteRepository
from stack_assist.repositories.user_repository import UserRepository
from stack_assist.schemas.notification_schemas import (
    ExpiringItemResponse,
    NotificationSettingsUpdate,
    ScanResultResponse,
)
from stack_assist.services import expiry

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_DAYS = 30


class NotificationService:
    """Service for expiry notifications of one tenant or of every tenant"""

    def __init__(self, db: Session):
        self.db = db
        self.site_repo = SiteRepository(db)
        self.hosting_repo = HostingAccountRepository(db)
        self.app_repo = MobileAppRepository(db)
        self.client_repo = ClientRepository(db)
        self.user_repo = UserRepository(db)
        self.notification_repo = NotificationRepository(db)
        self.setting_repo = NotificationSettingRepository(db)

    def _collect(self, tenant_id: int, cutoff: date) -> list[expiry.ExpiringItem]:
        items = [expiry.from_site(s) for s in self.site_repo.get_expiring(tenant_id, cutoff)]
        items += [expiry.from_hosting(h) for h in self.hosting_repo.get_expiring(tenant_id, cutoff)]
        items += [expiry.from_app(a) for a in self.app_repo.get_expiring(tenant_id, cutoff)]
        return items

    def get_expiring(
        self,
        context: AccessContext,
        days: int = DEFAULT_WINDOW_DAYS,
        item_type: ItemType | None = None,
        today: date | None = None,
    ) -> list[ExpiringItemResponse]:
        """
        Items expiring within `days`, expired ones included, soonest first.

        The window is capped at 90 days.
        """
        today = today or current_date()
        window = min(days, expiry.NOTIFICATION_WINDOW_DAYS)
        items = self._collect(context.tenant_id, expiry.window_end(today, window))
        if item_type is not None:
            items = [item for item in items if item.item_type == item_type]
        items.sort(key=lambda item: item.expiry_date)
        return [expiry.to_response(item, today) for item in items]

    def get_settings(self, context: AccessContext) -> NotificationSetting:
        ensure_owner(context)
        return self.setting_repo.get_or_create(context.tenant_id)

    def update_settings(
        self, data: NotificationSettingsUpdate, context: AccessContext
    ) -> NotificationSetting:
        """Partial update of the tenant's toggles"""
        ensure_owner(context)
        setting = self.setting_repo.get_or_create(context.tenant_id)
        for field, value in data.model_dump(exclude_none=True).items():
            setattr(setting, field, value)
        return self.setting_repo.update(setting)

    def get_notifications(self, context: AccessContext) -> list[Notification]:
        """Notifications written by past scans, newest first"""
        ensure_owner(context)
        return self.notification_repo.get_recent(context.tenant_id)

    async def scan_tenant(
        self, tenant_id: int, mail_sender: MailSender, today: date | None = None
    ) -> ScanResultResponse:
        """
        Run the expiration scan for one tenant.

        Every item expiring within one month gets a Notification for its
        threshold unless the tenant disabled that threshold. The notice is
        emailed to the tenant and, when the item has a client, to the client.
        A failed send marks the notification failed and the scan moves on.
        """
        today = today or current_date()
        setting = self.setting_repo.get_or_create(tenant_id)
        profile = self.user_repo.get_by_id(tenant_id)
        items = self._collect(tenant_id, expiry.add_one_month(today))

        created = sent = failed = 0
        for item in items:
            notification_type = expiry.classify_for_scan(item.days_until(today))
            if notification_type is None or not setting.allows(notification_type):
                continue

            notification = self.notification_repo.create(
                Notification(
                    user_id=tenant_id,
                    item_type=item.item_type,
                    item_id=item.item_id,
                    item_name=item.name,
                    expiry_date=item.expiry_date,
                    notification_type=notification_type,
                    status=NotificationStatus.PENDING,
                )
            )
            created += 1

            if not setting.enable_email_notifications:
                continue

            recipients = [profile.email] if profile else []
            if item.client_id is not None:
                client = self.client_repo.get_by_id_and_tenant(item.client_id, tenant_id)
                if client:
                    recipients.append(client.email)

            subject = f"Expiration Notice: {item.name}"
            body = expiry.notification_message(item, notification_type)
            delivered = True
            for recipient in recipients:
                try:
                    await mail_sender.send(recipient, subject, body)
                    sent += 1
                except EmailDeliveryException as e:
                    logger.error(
                        "Expiry notice %s to %s failed: %s", notification.id, recipient, e
                    )
                    failed += 1
                    delivered = False

            notification.status = NotificationStatus.SENT if delivered else NotificationStatus.FAILED
            self.notification_repo.update(notification)

        logger.info(
            "Expiration scan for tenant %s: %d items, %d notifications, %d sent, %d failed",
            tenant_id,
            len(items),
            created,
            sent,
            failed,
        )
        return ScanResultResponse(
            scanned=len(items),
            notifications_created=created,
            emails_sent=sent,
            emails_failed=failed,
        )

    async def scan_all(self, mail_sender: MailSender, today: date | None = None) -> ScanResultResponse:
        """Run the scan for every tenant and sum the results"""
        totals = ScanResultResponse(scanned=0, notifications_created=0, emails_sent=0, emails_failed=0)
        for user in self.user_repo.get_all():
            result = await self.scan_tenant(user.id, mail_sender, today)
            totals.scanned += result.scanned
            totals.notifications_created += result.notifications_created
            totals.emails_sent += result.emails_sent
            totals.emails_failed += result.emails_failed
        return totals

    async def scan_for_context(
        self, context: AccessContext, mail_sender: MailSender
    ) -> ScanResultResponse:
        """Owner-triggered scan of the caller's tenant"""
        ensure_owner(context)
        return await self.scan_tenant(context.tenant_id, mail_sender)
