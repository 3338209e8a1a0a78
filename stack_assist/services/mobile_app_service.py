import logging
from sqlalchemy.orm import Session

from stack_assist.core.exceptions import NotFoundException, ValidationException
from stack_assist.models.access_context import AccessContext, ensure_permission
from stack_assist.models.developer_account import DeveloperAccountType
from stack_assist.models.mobile_app import MobileApp
from stack_assist.models.permission import Action, Module
from stack_assist.models.site import Site
from stack_assist.repositories.client_repository import ClientRepository
from stack_assist.repositories.developer_account_repository import DeveloperAccountRepository
from stack_assist.repositories.mobile_app_repository import MobileAppRepository
from stack_assist.repositories.site_repository import SiteRepository
from stack_assist.schemas.mobile_app_schemas import MobileAppCreate, MobileAppUpdate

logger = logging.getLogger(__name__)

MOBILE_APP_SITE_TYPE = "Mobile App"


class MobileAppService:
    """Service layer for mobile app business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = MobileAppRepository(db)
        self.site_repo = SiteRepository(db)
        self.client_repo = ClientRepository(db)
        self.developer_repo = DeveloperAccountRepository(db)

    def create_app(self, data: MobileAppCreate, context: AccessContext) -> MobileApp:
        """
        Create a mobile app and register its domain as a site.

        App and site are committed together.

        Raises:
            NotFoundException: If the client or a developer account is not the tenant's
            ValidationException: If a developer account has the wrong store type
        """
        ensure_permission(context, Module.MOBILE_APPS, Action.CREATE)

        client = self.client_repo.get_by_id_and_tenant(data.client_id, context.tenant_id)
        if not client:
            raise NotFoundException(f"Client {data.client_id} not found")

        self._check_developer_accounts(
            data.ios_developer_account_id, data.google_developer_account_id, context.tenant_id
        )

        app = MobileApp(
            user_id=context.tenant_id,
            client_name=client.name,
            **data.model_dump(),
        )
        site = Site(
            user_id=context.tenant_id,
            name=data.app_name,
            url=data.app_domain,
            type=MOBILE_APP_SITE_TYPE,
            client_id=client.id,
            client_name=client.name,
        )

        self.repo.create_no_commit(app)
        self.site_repo.create_no_commit(site)
        self.db.commit()
        self.db.refresh(app)

        logger.info("Mobile app %s created with site %s", app.id, site.id)
        return app

    def get_apps(self, context: AccessContext) -> list[MobileApp]:
        """Get all mobile apps of the tenant"""
        ensure_permission(context, Module.MOBILE_APPS)
        return self.repo.get_by_tenant(context.tenant_id)

    def get_app(self, app_id: int, context: AccessContext) -> MobileApp:
        """
        Get mobile app by ID with ownership verification.

        Raises:
            NotFoundException: If app doesn't exist or doesn't belong to tenant
        """
        ensure_permission(context, Module.MOBILE_APPS)
        app = self.repo.get_by_id_and_tenant(app_id, context.tenant_id)
        if not app:
            raise NotFoundException(f"Mobile app {app_id} not found")
        return app

    def update_app(self, app_id: int, data: MobileAppUpdate, context: AccessContext) -> MobileApp:
        """Update only the provided fields; a new client refreshes client_name"""
        ensure_permission(context, Module.MOBILE_APPS, Action.EDIT)
        app = self.get_app(app_id, context)

        changes = data.model_dump(exclude_none=True)
        if "client_id" in changes:
            client = self.client_repo.get_by_id_and_tenant(changes["client_id"], context.tenant_id)
            if not client:
                raise NotFoundException(f"Client {changes['client_id']} not found")
            app.client_name = client.name

        self._check_developer_accounts(
            changes.get("ios_developer_account_id"),
            changes.get("google_developer_account_id"),
            context.tenant_id,
        )

        for field, value in changes.items():
            setattr(app, field, value)

        return self.repo.update(app)

    def delete_app(self, app_id: int, context: AccessContext) -> None:
        """Delete mobile app (its site stays, like any other site)"""
        ensure_permission(context, Module.MOBILE_APPS, Action.DELETE)
        app = self.get_app(app_id, context)
        self.repo.delete(app)

    def _check_developer_accounts(
        self, ios_account_id: int | None, google_account_id: int | None, tenant_id: int
    ) -> None:
        expected = [
            (ios_account_id, DeveloperAccountType.APPLE),
            (google_account_id, DeveloperAccountType.GOOGLE),
        ]
        for account_id, account_type in expected:
            if account_id is None:
                continue
            account = self.developer_repo.get_by_id_and_tenant(account_id, tenant_id)
            if not account:
                raise NotFoundException(f"Developer account {account_id} not found")
            if account.account_type != account_type:
                raise ValidationException(
                    f"Developer account {account_id} is not a {account_type.value} account"
                )
