from datetime import date
from enum import Enum as PyEnum
from sqlalchemy import String, Integer, Date, ForeignKey, Enum
from sqlalchemy.orm import Mapped, mapped_column

from stack_assist.models.base import Base, TimestampMixin


class DeveloperAccountType(str, PyEnum):
    APPLE = "apple"
    GOOGLE = "google"


class DeveloperAccount(Base, TimestampMixin):
    """
    Apple or Google developer program account.

    mobile_apps_count is not a column; the service computes it on every read.
    """

    __tablename__ = "developer_accounts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    account_type: Mapped[DeveloperAccountType] = mapped_column(
        Enum(DeveloperAccountType, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
    )
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    mobile_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    expiry_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    duns: Mapped[str | None] = mapped_column(String(50), nullable=True)
    company_name: Mapped[str] = mapped_column(String(255), nullable=False)
    date_created: Mapped[date | None] = mapped_column(Date, nullable=True)
    status: Mapped[str | None] = mapped_column(String(50), nullable=True)

    def __repr__(self) -> str:
        return f"<DeveloperAccount(id={self.id}, account_type={self.account_type.value})>"
