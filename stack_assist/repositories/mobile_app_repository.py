from datetime import date
from stack_assist.models.mobile_app import MobileApp
from stack_assist.repositories.base_repository import TenantScopedRepository


class MobileAppRepository(TenantScopedRepository[MobileApp]):
    """Repository for MobileApp model operations with multi-tenant support"""

    model = MobileApp

    def get_expiring(self, tenant_id: int, cutoff: date) -> list[MobileApp]:
        """Apps of a tenant whose renewal date is on or before cutoff"""
        return (
            self.db.query(MobileApp)
            .filter(
                MobileApp.user_id == tenant_id,
                MobileApp.renewal_date.is_not(None),
                MobileApp.renewal_date <= cutoff,
            )
            .order_by(MobileApp.renewal_date)
            .all()
        )
