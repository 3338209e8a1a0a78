from datetime import date
from enum import Enum as PyEnum
from sqlalchemy import String, Integer, Numeric, Date, ForeignKey, Enum
from sqlalchemy.orm import Mapped, mapped_column

from stack_assist.models.base import Base, TimestampMixin


class Platform(str, PyEnum):
    IOS = "iOS"
    ANDROID = "Android"
    BOTH = "Both"


class MobileApp(Base, TimestampMixin):
    """
    Mobile app built for a client.

    client_name is a snapshot taken at write time. The developer account ids
    feed the derived DeveloperAccount.mobile_apps_count.
    """

    __tablename__ = "mobile_apps"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    app_name: Mapped[str] = mapped_column(String(255), nullable=False)
    platform: Mapped[Platform] = mapped_column(
        Enum(Platform, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=Platform.BOTH,
    )
    client_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("clients.id", ondelete="SET NULL"), nullable=True
    )
    client_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    app_domain: Mapped[str | None] = mapped_column(String(500), nullable=True)
    date_created: Mapped[date | None] = mapped_column(Date, nullable=True)
    renewal_date: Mapped[date | None] = mapped_column(Date, nullable=True, index=True)

    ios_developer_account_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("developer_accounts.id", ondelete="SET NULL"), nullable=True
    )
    google_developer_account_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("developer_accounts.id", ondelete="SET NULL"), nullable=True
    )
    apple_live_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    google_live_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    app_cost: Mapped[float] = mapped_column(Numeric(precision=15, scale=2), nullable=False, default=0.00)
    amount_spent: Mapped[float] = mapped_column(
        Numeric(precision=15, scale=2), nullable=False, default=0.00
    )
    status: Mapped[str | None] = mapped_column(String(50), nullable=True)
    version: Mapped[str | None] = mapped_column(String(50), nullable=True)

    def __repr__(self) -> str:
        return f"<MobileApp(id={self.id}, app_name='{self.app_name}')>"
