from stack_assist.models.message import Message
from stack_assist.repositories.base_repository import TenantScopedRepository


class MessageRepository(TenantScopedRepository[Message]):
    """Repository for team chat messages"""

    model = Message

    def get_recent(self, tenant_id: int, limit: int = 100) -> list[Message]:
        """Latest messages of a tenant, returned oldest first"""
        newest_first = (
            self.db.query(Message)
            .filter(Message.user_id == tenant_id)
            .order_by(Message.created_at.desc(), Message.id.desc())
            .limit(limit)
            .all()
        )
        return list(reversed(newest_first))
