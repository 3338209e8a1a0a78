import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from stack_assist.core.clock import utcnow
from stack_assist.core.exceptions import NotFoundException, ValidationException
from stack_assist.models.access_context import AccessContext, ensure_permission
from stack_assist.models.client import Client, ClientStatus
from stack_assist.models.permission import Action, Module
from stack_assist.repositories.client_repository import ClientRepository
from stack_assist.repositories.user_repository import UserRepository
from stack_assist.schemas.client_schemas import ClientCreate, ClientUpdate

logger = logging.getLogger(__name__)


class ClientService:
    """Service for client business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ClientRepository(db)
        self.user_repo = UserRepository(db)

    def create_client(self, data: ClientCreate, context: AccessContext) -> Client:
        """
        Create a client for the tenant.

        Raises:
            ValidationException: If the tenant already has a client with this
                email or phone (checked before any write)
        """
        ensure_permission(context, Module.CLIENTS, Action.CREATE)
        return self._insert(
            Client(
                user_id=context.tenant_id,
                name=data.name,
                email=data.email.lower(),
                phone=data.phone,
            )
        )

    def onboard_client(self, tenant_id: int, data: ClientCreate) -> Client:
        """
        Public self-onboarding through a tenant's onboarding link.

        The client starts as pending_approval until the tenant reviews it.

        Raises:
            NotFoundException: If the tenant does not exist
            ValidationException: On duplicate email or phone
        """
        if self.user_repo.get_by_id(tenant_id) is None:
            raise NotFoundException("Onboarding link is not valid")

        client = self._insert(
            Client(
                user_id=tenant_id,
                name=data.name,
                email=data.email.lower(),
                phone=data.phone,
                self_onboarded=True,
                onboarded_at=utcnow(),
                status=ClientStatus.PENDING_APPROVAL,
            )
        )
        logger.info("Client %s self-onboarded for tenant %s", client.id, tenant_id)
        return client

    def get_clients(self, context: AccessContext) -> list[Client]:
        """Get all clients of the tenant"""
        ensure_permission(context, Module.CLIENTS)
        return self.repo.get_by_tenant(context.tenant_id)

    def get_client(self, client_id: int, context: AccessContext) -> Client:
        """
        Get specific client ensuring tenant ownership.

        Raises:
            NotFoundException: If client not found or belongs to another tenant
        """
        ensure_permission(context, Module.CLIENTS)
        return self._get_owned(client_id, context.tenant_id)

    def update_client(self, client_id: int, data: ClientUpdate, context: AccessContext) -> Client:
        """
        Update client details.

        Duplicate checks ignore the client being edited.
        """
        ensure_permission(context, Module.CLIENTS, Action.EDIT)
        client = self._get_owned(client_id, context.tenant_id)

        email = data.email.lower() if data.email is not None else None
        self._check_duplicates(context.tenant_id, email, data.phone, exclude_id=client.id)

        if data.name is not None:
            client.name = data.name
        if email is not None:
            client.email = email
        if data.phone is not None:
            client.phone = data.phone

        try:
            return self.repo.update(client)
        except IntegrityError:
            self.db.rollback()
            raise ValidationException("Another client with this email or phone number already exists")

    def set_review_status(
        self, client_id: int, new_status: ClientStatus, context: AccessContext
    ) -> Client:
        """Approve or reject a self-onboarded client"""
        ensure_permission(context, Module.CLIENTS, Action.EDIT)
        client = self._get_owned(client_id, context.tenant_id)

        if not client.self_onboarded:
            raise ValidationException("Only self-onboarded clients can be reviewed")

        client.status = new_status
        return self.repo.update(client)

    def delete_client(self, client_id: int, context: AccessContext) -> None:
        """Delete client (sites and apps keep their client_name snapshot)"""
        ensure_permission(context, Module.CLIENTS, Action.DELETE)
        client = self._get_owned(client_id, context.tenant_id)
        self.repo.delete(client)

    def _get_owned(self, client_id: int, tenant_id: int) -> Client:
        client = self.repo.get_by_id_and_tenant(client_id, tenant_id)
        if not client:
            raise NotFoundException("Client not found")
        return client

    def _insert(self, client: Client) -> Client:
        self._check_duplicates(client.user_id, client.email, client.phone)
        try:
            return self.repo.create(client)
        except IntegrityError:
            # A concurrent insert won the race after our check passed
            self.db.rollback()
            raise ValidationException("A client with this email or phone number already exists")

    def _check_duplicates(
        self,
        tenant_id: int,
        email: str | None,
        phone: str | None,
        exclude_id: int | None = None,
    ) -> None:
        """
        Raises:
            ValidationException: If another client of the tenant uses the
                email or phone
        """
        editing = exclude_id is not None
        if email is not None:
            if any(c.id != exclude_id for c in self.repo.find_by_email(tenant_id, email)):
                raise ValidationException(
                    "Another client with this email already exists"
                    if editing
                    else "A client with this email already exists"
                )
        if phone is not None:
            if any(c.id != exclude_id for c in self.repo.find_by_phone(tenant_id, phone)):
                raise ValidationException(
                    "Another client with this phone number already exists"
                    if editing
                    else "A client with this phone number already exists"
                )
