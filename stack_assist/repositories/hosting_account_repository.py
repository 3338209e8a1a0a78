from datetime import date
from stack_assist.models.hosting_account import HostingAccount
from stack_assist.repositories.base_repository import TenantScopedRepository


class HostingAccountRepository(TenantScopedRepository[HostingAccount]):
    """Repository for HostingAccount model operations with multi-tenant support"""

    model = HostingAccount

    def get_expiring(self, tenant_id: int, cutoff: date) -> list[HostingAccount]:
        """Hosting accounts of a tenant expiring on or before cutoff"""
        return (
            self.db.query(HostingAccount)
            .filter(
                HostingAccount.user_id == tenant_id,
                HostingAccount.expiration_date.is_not(None),
                HostingAccount.expiration_date <= cutoff,
            )
            .order_by(HostingAccount.expiration_date)
            .all()
        )
