"""Team member model granting delegated access to a tenant."""

from enum import Enum as PyEnum
from sqlalchemy import String, Integer, ForeignKey, Enum, JSON, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from stack_assist.models.base import Base, TimestampMixin
from stack_assist.models.permission import default_permissions


class MemberStatus(str, PyEnum):
    """
    Membership lifecycle.

    PENDING on invite, ACTIVE once the invited user logs in, INACTIVE when
    the owner suspends access. Only ACTIVE members pass the access guard.
    """

    ACTIVE = "active"
    PENDING = "pending"
    INACTIVE = "inactive"


class TeamMember(Base, TimestampMixin):
    """
    Delegated user of a tenant.

    owner_id is the tenant granting access. member_user_id is the invited
    person's identity, linked on their first login.

    Constraints:
    - Unique(owner_id, email) - one membership per email per team
    """

    __tablename__ = "team_members"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    owner_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    member_user_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("identities.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(100), nullable=False, default="developer")
    permissions: Mapped[dict] = mapped_column(JSON, nullable=False, default=default_permissions)
    status: Mapped[MemberStatus] = mapped_column(
        Enum(MemberStatus, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=MemberStatus.PENDING,
    )
    invited_by: Mapped[str | None] = mapped_column(String(255), nullable=True)

    __table_args__ = (
        UniqueConstraint("owner_id", "email", name="uq_team_owner_email"),
    )

    def __repr__(self) -> str:
        return f"<TeamMember(owner_id={self.owner_id}, email='{self.email}', status={self.status.value})>"
