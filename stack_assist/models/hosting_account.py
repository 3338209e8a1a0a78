from datetime import date
from enum import Enum as PyEnum
from sqlalchemy import String, Integer, Date, ForeignKey, Enum
from sqlalchemy.orm import Mapped, mapped_column

from stack_assist.models.base import Base, TimestampMixin


class HostType(str, PyEnum):
    SHARED = "shared"
    RESELLER = "reseller"
    VPS = "vps"
    DEDICATED = "dedicated"


class HostingStatus(str, PyEnum):
    ACTIVE = "active"
    SUSPENDED = "suspended"
    REPORTED = "reported"
    EXPIRED = "expired"
    NEEDS_RENEWAL = "needs renewal"
    OTHER = "other"


class HostingAccount(Base, TimestampMixin):
    """
    Hosting provider account.

    Only a password hint is kept, never the password itself.
    """

    __tablename__ = "hosting_accounts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    provider: Mapped[str] = mapped_column(String(255), nullable=False)
    server_login_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    host_type: Mapped[HostType] = mapped_column(
        Enum(HostType, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=HostType.SHARED,
    )
    username: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    password_hint: Mapped[str | None] = mapped_column(String(255), nullable=True)
    expiration_date: Mapped[date | None] = mapped_column(Date, nullable=True, index=True)
    status: Mapped[HostingStatus] = mapped_column(
        Enum(HostingStatus, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=HostingStatus.ACTIVE,
    )

    def __repr__(self) -> str:
        return f"<HostingAccount(id={self.id}, provider='{self.provider}')>"
