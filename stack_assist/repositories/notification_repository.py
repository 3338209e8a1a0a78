from stack_assist.models.notification import Notification, NotificationSetting
from stack_assist.repositories.base_repository import TenantScopedRepository


class NotificationRepository(TenantScopedRepository[Notification]):
    """Repository for Notification records written by the expiration scan"""

    model = Notification

    def get_recent(self, tenant_id: int, limit: int = 100) -> list[Notification]:
        """Latest notifications for a tenant, newest first"""
        return (
            self.db.query(Notification)
            .filter(Notification.user_id == tenant_id)
            .order_by(Notification.created_at.desc(), Notification.id.desc())
            .limit(limit)
            .all()
        )


class NotificationSettingRepository(TenantScopedRepository[NotificationSetting]):
    """Repository for the one-per-tenant NotificationSetting"""

    model = NotificationSetting

    def get_or_create(self, tenant_id: int) -> NotificationSetting:
        """
        Get a tenant's settings, creating defaults (all enabled) if missing.

        Args:
            tenant_id: Tenant ID

        Returns:
            NotificationSetting object (either existing or newly created)
        """
        setting = (
            self.db.query(NotificationSetting)
            .filter(NotificationSetting.user_id == tenant_id)
            .first()
        )

        if not setting:
            setting = NotificationSetting(user_id=tenant_id)
            self.db.add(setting)
            self.db.commit()
            self.db.refresh(setting)

        return setting
