from stack_assist.models.client import Client
from stack_assist.repositories.base_repository import TenantScopedRepository


class ClientRepository(TenantScopedRepository[Client]):
    """Repository for Client model operations with multi-tenant support"""

    model = Client

    def find_by_email(self, tenant_id: int, email: str) -> list[Client]:
        """Clients of a tenant with this email (expects lower-cased input)"""
        return (
            self.db.query(Client)
            .filter(Client.user_id == tenant_id, Client.email == email)
            .all()
        )

    def find_by_phone(self, tenant_id: int, phone: str) -> list[Client]:
        """Clients of a tenant with this phone number"""
        return (
            self.db.query(Client)
            .filter(Client.user_id == tenant_id, Client.phone == phone)
            .all()
        )
