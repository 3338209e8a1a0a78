from enum import Enum as PyEnum
from sqlalchemy import String, Integer, ForeignKey, Enum, JSON
from sqlalchemy.orm import Mapped, mapped_column

from stack_assist.models.base import Base, TimestampMixin


class InviteStatus(str, PyEnum):
    PENDING = "pending"
    ACCEPTED = "accepted"


class TeamInvite(Base, TimestampMixin):
    """
    Invitation record pairing an email with an owner.

    Marked accepted when the invited user first logs in.
    """

    __tablename__ = "team_invites"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    owner_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    owner_email: Mapped[str] = mapped_column(String(255), nullable=False)
    company_name: Mapped[str] = mapped_column(String(255), nullable=False)
    permissions: Mapped[dict] = mapped_column(JSON, nullable=False)
    status: Mapped[InviteStatus] = mapped_column(
        Enum(InviteStatus, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=InviteStatus.PENDING,
    )
