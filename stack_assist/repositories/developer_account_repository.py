from stack_assist.models.developer_account import DeveloperAccount
from stack_assist.repositories.base_repository import TenantScopedRepository


class DeveloperAccountRepository(TenantScopedRepository[DeveloperAccount]):
    """Repository for DeveloperAccount model operations with multi-tenant support"""

    model = DeveloperAccount
