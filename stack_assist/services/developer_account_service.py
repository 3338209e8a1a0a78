from sqlalchemy.orm import Session

from stack_assist.core.exceptions import NotFoundException
from stack_assist.models.access_context import AccessContext, ensure_permission
from stack_assist.models.developer_account import DeveloperAccount, DeveloperAccountType
from stack_assist.models.mobile_app import MobileApp
from stack_assist.models.permission import Action, Module
from stack_assist.repositories.developer_account_repository import DeveloperAccountRepository
from stack_assist.repositories.mobile_app_repository import MobileAppRepository
from stack_assist.schemas.developer_account_schemas import (
    DeveloperAccountCreate,
    DeveloperAccountUpdate,
    DeveloperAccountResponse,
)


def count_linked_apps(account: DeveloperAccount, apps: list[MobileApp]) -> int:
    """
    Apps published through a developer account.

    Apple accounts are matched on ios_developer_account_id, Google accounts
    on google_developer_account_id.
    """
    if account.account_type == DeveloperAccountType.APPLE:
        return sum(1 for app in apps if app.ios_developer_account_id == account.id)
    return sum(1 for app in apps if app.google_developer_account_id == account.id)


class DeveloperAccountService:
    """
    Service for developer account business logic.

    mobile_apps_count is recomputed from the tenant's apps on every read.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = DeveloperAccountRepository(db)
        self.app_repo = MobileAppRepository(db)

    def create_account(
        self, data: DeveloperAccountCreate, context: AccessContext
    ) -> DeveloperAccountResponse:
        """Create new developer account for the tenant"""
        ensure_permission(context, Module.DEVELOPER_ACCOUNTS, Action.CREATE)
        account = DeveloperAccount(user_id=context.tenant_id, **data.model_dump())
        account = self.repo.create(account)
        return self._with_count(account, self.app_repo.get_by_tenant(context.tenant_id))

    def get_accounts(self, context: AccessContext) -> list[DeveloperAccountResponse]:
        """Get all developer accounts of the tenant with app counts"""
        ensure_permission(context, Module.DEVELOPER_ACCOUNTS)
        accounts = self.repo.get_by_tenant(context.tenant_id)
        apps = self.app_repo.get_by_tenant(context.tenant_id)
        return [self._with_count(account, apps) for account in accounts]

    def get_account(self, account_id: int, context: AccessContext) -> DeveloperAccountResponse:
        """
        Get specific developer account with its app count.

        Raises:
            NotFoundException: If account not found or belongs to another tenant
        """
        ensure_permission(context, Module.DEVELOPER_ACCOUNTS)
        account = self._get_owned(account_id, context.tenant_id)
        return self._with_count(account, self.app_repo.get_by_tenant(context.tenant_id))

    def update_account(
        self, account_id: int, data: DeveloperAccountUpdate, context: AccessContext
    ) -> DeveloperAccountResponse:
        """Update developer account details"""
        ensure_permission(context, Module.DEVELOPER_ACCOUNTS, Action.EDIT)
        account = self._get_owned(account_id, context.tenant_id)

        for field, value in data.model_dump(exclude_none=True).items():
            setattr(account, field, value)

        account = self.repo.update(account)
        return self._with_count(account, self.app_repo.get_by_tenant(context.tenant_id))

    def delete_account(self, account_id: int, context: AccessContext) -> None:
        """Delete developer account"""
        ensure_permission(context, Module.DEVELOPER_ACCOUNTS, Action.DELETE)
        account = self._get_owned(account_id, context.tenant_id)
        self.repo.delete(account)

    def _get_owned(self, account_id: int, tenant_id: int) -> DeveloperAccount:
        account = self.repo.get_by_id_and_tenant(account_id, tenant_id)
        if not account:
            raise NotFoundException("Developer account not found")
        return account

    @staticmethod
    def _with_count(account: DeveloperAccount, apps: list[MobileApp]) -> DeveloperAccountResponse:
        response = DeveloperAccountResponse.model_validate(account)
        response.mobile_apps_count = count_linked_apps(account, apps)
        return response
