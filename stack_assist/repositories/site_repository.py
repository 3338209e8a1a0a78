from datetime import date
from stack_assist.models.site import Site
from stack_assist.repositories.base_repository import TenantScopedRepository


class SiteRepository(TenantScopedRepository[Site]):
    """Repository for Site model operations with multi-tenant support"""

    model = Site

    def get_expiring(self, tenant_id: int, cutoff: date) -> list[Site]:
        """Sites of a tenant whose expiration date is on or before cutoff"""
        return (
            self.db.query(Site)
            .filter(
                Site.user_id == tenant_id,
                Site.expiration_date.is_not(None),
                Site.expiration_date <= cutoff,
            )
            .order_by(Site.expiration_date)
            .all()
        )
