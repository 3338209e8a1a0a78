from sqlalchemy.orm import Session

from stack_assist.core.exceptions import NotFoundException
from stack_assist.models.access_context import AccessContext, ensure_permission
from stack_assist.models.hosting_account import HostingAccount
from stack_assist.models.permission import Action, Module
from stack_assist.repositories.hosting_account_repository import HostingAccountRepository
from stack_assist.schemas.hosting_schemas import HostingAccountCreate, HostingAccountUpdate


class HostingService:
    """Service for hosting account business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = HostingAccountRepository(db)

    def create_account(self, data: HostingAccountCreate, context: AccessContext) -> HostingAccount:
        """Create new hosting account for the tenant"""
        ensure_permission(context, Module.HOSTING, Action.CREATE)
        account = HostingAccount(user_id=context.tenant_id, **data.model_dump())
        return self.repo.create(account)

    def get_accounts(self, context: AccessContext) -> list[HostingAccount]:
        """Get all hosting accounts of the tenant"""
        ensure_permission(context, Module.HOSTING)
        return self.repo.get_by_tenant(context.tenant_id)

    def get_account(self, account_id: int, context: AccessContext) -> HostingAccount:
        """
        Get specific hosting account ensuring tenant ownership.

        Raises:
            NotFoundException: If account not found or belongs to another tenant
        """
        ensure_permission(context, Module.HOSTING)
        account = self.repo.get_by_id_and_tenant(account_id, context.tenant_id)
        if not account:
            raise NotFoundException("Hosting account not found")
        return account

    def update_account(
        self, account_id: int, data: HostingAccountUpdate, context: AccessContext
    ) -> HostingAccount:
        """
        Update hosting account details.

        Sites keep the host_name they were saved with.
        """
        ensure_permission(context, Module.HOSTING, Action.EDIT)
        account = self.get_account(account_id, context)

        for field, value in data.model_dump(exclude_none=True).items():
            setattr(account, field, value)

        return self.repo.update(account)

    def delete_account(self, account_id: int, context: AccessContext) -> None:
        """Delete hosting account"""
        ensure_permission(context, Module.HOSTING, Action.DELETE)
        account = self.get_account(account_id, context)
        self.repo.delete(account)
