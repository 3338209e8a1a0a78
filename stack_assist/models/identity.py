"""Identity and session models for the built-in identity provider."""

from datetime import datetime
from enum import Enum as PyEnum
from sqlalchemy import String, Integer, ForeignKey, DateTime, Enum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stack_assist.core.clock import utcnow
from stack_assist.models.base import Base, TimestampMixin


class SessionEndReason(str, PyEnum):
    """Why a session stopped authenticating"""

    LOGOUT = "logout"
    INACTIVITY = "inactivity"
    PASSWORD_RESET = "reset"


class Identity(Base, TimestampMixin):
    """
    Login credentials.

    Owners get an identity at registration; invited team members get one when
    they first choose a password. The tenant profile (User) shares the id.
    """

    __tablename__ = "identities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    # Always stored lower-cased
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    sessions: Mapped[list["AuthSession"]] = relationship(
        "AuthSession",
        back_populates="identity",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Identity(id={self.id}, email='{self.email}')>"


class AuthSession(Base):
    """
    Server-side session behind an access token.

    A session authenticates while ended_at is NULL. Each authenticated request
    resets last_activity_at; a gap longer than the idle timeout ends it.
    """

    __tablename__ = "auth_sessions"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    identity_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("identities.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    last_activity_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    ended_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    end_reason: Mapped[SessionEndReason | None] = mapped_column(
        Enum(SessionEndReason, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        nullable=True,
    )

    identity: Mapped["Identity"] = relationship("Identity", back_populates="sessions")

    @property
    def is_active(self) -> bool:
        return self.ended_at is None

    def __repr__(self) -> str:
        return f"<AuthSession(id='{self.id}', identity_id={self.identity_id}, active={self.is_active})>"
