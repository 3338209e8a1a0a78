from datetime import datetime
from enum import Enum as PyEnum
from sqlalchemy import String, Integer, Boolean, DateTime, ForeignKey, Enum, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from stack_assist.models.base import Base, TimestampMixin


class ClientStatus(str, PyEnum):
    """Review state of a self-onboarded client"""

    PENDING_APPROVAL = "pending_approval"
    APPROVED = "approved"
    REJECTED = "rejected"


class Client(Base, TimestampMixin):
    """
    Agency client.

    Email is stored lower-cased. (user_id, email) and (user_id, phone) are
    unique per tenant; the same email may exist under another tenant.
    """

    __tablename__ = "clients"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,  # Critical for multi-tenant queries
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)

    # Set only for clients who used the public onboarding link
    self_onboarded: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    onboarded_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    status: Mapped[ClientStatus | None] = mapped_column(
        Enum(ClientStatus, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        nullable=True,
    )

    __table_args__ = (
        UniqueConstraint("user_id", "email", name="uq_client_tenant_email"),
        UniqueConstraint("user_id", "phone", name="uq_client_tenant_phone"),
    )

    def __repr__(self) -> str:
        return f"<Client(id={self.id}, user_id={self.user_id}, email='{self.email}')>"
