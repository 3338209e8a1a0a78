from datetime import date
from sqlalchemy import String, Integer, Numeric, Date, Boolean, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from stack_assist.models.base import Base, TimestampMixin


class Site(Base, TimestampMixin):
    """
    Website or domain managed for a client.

    client_name and host_name are snapshots copied at write time; renaming
    the client or hosting account does not update them.
    """

    __tablename__ = "sites"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    client_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("clients.id", ondelete="SET NULL"), nullable=True
    )
    client_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    host_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("hosting_accounts.id", ondelete="SET NULL"), nullable=True
    )
    host_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    domain_purchased_from: Mapped[str | None] = mapped_column(String(255), nullable=True)
    expiration_date: Mapped[date | None] = mapped_column(Date, nullable=True, index=True)
    name_changed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    old_domain_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    old_domain_expiration_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    amount_paid: Mapped[float] = mapped_column(
        Numeric(precision=15, scale=2), nullable=False, default=0.00
    )
    amount_used_for_creation: Mapped[float] = mapped_column(
        Numeric(precision=15, scale=2), nullable=False, default=0.00
    )

    def __repr__(self) -> str:
        return f"<Site(id={self.id}, name='{self.name}')>"
