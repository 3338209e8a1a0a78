from sqlalchemy.orm import Session

from stack_assist.models.access_context import AccessContext
from stack_assist.models.message import Message
from stack_assist.repositories.message_repository import MessageRepository

RECENT_LIMIT = 100


class MessageService:
    """Team chat shared by the owner and the active members of a tenant"""

    def __init__(self, db: Session):
        self.repo = MessageRepository(db)

    def post_message(self, text: str, context: AccessContext) -> Message:
        identity = context.identity
        message = Message(
            user_id=context.tenant_id,
            sender_id=identity.id,
            sender_name=identity.email.split("@")[0],
            text=text,
        )
        return self.repo.create(message)

    def get_messages(self, context: AccessContext) -> list[Message]:
        """Latest messages, oldest first"""
        return self.repo.get_recent(context.tenant_id, limit=RECENT_LIMIT)
