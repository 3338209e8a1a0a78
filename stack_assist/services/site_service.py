from sqlalchemy.orm import Session

from stack_assist.core.exceptions import NotFoundException
from stack_assist.models.access_context import AccessContext, ensure_permission
from stack_assist.models.permission import Action, Module
from stack_assist.models.site import Site
from stack_assist.repositories.client_repository import ClientRepository
from stack_assist.repositories.hosting_account_repository import HostingAccountRepository
from stack_assist.repositories.site_repository import SiteRepository
from stack_assist.schemas.site_schemas import SiteCreate, SiteUpdate


class SiteService:
    """Service for site business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = SiteRepository(db)
        self.client_repo = ClientRepository(db)
        self.hosting_repo = HostingAccountRepository(db)

    def create_site(self, data: SiteCreate, context: AccessContext) -> Site:
        """
        Create a site, snapshotting the client and host names.

        Raises:
            NotFoundException: If client_id or host_id is not the tenant's
        """
        ensure_permission(context, Module.SITES, Action.CREATE)

        fields = data.model_dump(exclude={"client_id", "host_id"})
        site = Site(user_id=context.tenant_id, **fields)
        self._link_client(site, data.client_id, context.tenant_id)
        self._link_host(site, data.host_id, context.tenant_id)

        return self.repo.create(site)

    def get_sites(self, context: AccessContext) -> list[Site]:
        """Get all sites of the tenant"""
        ensure_permission(context, Module.SITES)
        return self.repo.get_by_tenant(context.tenant_id)

    def get_site(self, site_id: int, context: AccessContext) -> Site:
        """
        Get specific site ensuring tenant ownership.

        Raises:
            NotFoundException: If site not found or belongs to another tenant
        """
        ensure_permission(context, Module.SITES)
        site = self.repo.get_by_id_and_tenant(site_id, context.tenant_id)
        if not site:
            raise NotFoundException("Site not found")
        return site

    def update_site(self, site_id: int, data: SiteUpdate, context: AccessContext) -> Site:
        """Update only the provided (non-null) fields; relinking refreshes the name snapshot"""
        ensure_permission(context, Module.SITES, Action.EDIT)
        site = self.get_site(site_id, context)

        changes = data.model_dump(exclude_none=True)
        if "client_id" in changes:
            self._link_client(site, changes.pop("client_id"), context.tenant_id)
        if "host_id" in changes:
            self._link_host(site, changes.pop("host_id"), context.tenant_id)

        for field, value in changes.items():
            setattr(site, field, value)

        return self.repo.update(site)

    def delete_site(self, site_id: int, context: AccessContext) -> None:
        """Delete site"""
        ensure_permission(context, Module.SITES, Action.DELETE)
        site = self.get_site(site_id, context)
        self.repo.delete(site)

    def _link_client(self, site: Site, client_id: int | None, tenant_id: int) -> None:
        if client_id is None:
            site.client_id = None
            site.client_name = None
            return
        client = self.client_repo.get_by_id_and_tenant(client_id, tenant_id)
        if not client:
            raise NotFoundException(f"Client {client_id} not found")
        site.client_id = client.id
        site.client_name = client.name

    def _link_host(self, site: Site, host_id: int | None, tenant_id: int) -> None:
        if host_id is None:
            site.host_id = None
            site.host_name = None
            return
        host = self.hosting_repo.get_by_id_and_tenant(host_id, tenant_id)
        if not host:
            raise NotFoundException(f"Hosting account {host_id} not found")
        site.host_id = host.id
        site.host_name = host.provider
