from sqlalchemy import String, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from stack_assist.models.base import Base, TimestampMixin


class User(Base, TimestampMixin):
    """
    Tenant profile: a registered agency owner account.

    The tenant is the unit of data isolation. Every client, site, hosting
    account, app, developer account, task, notification and message carries
    the owning tenant's id in its user_id column.

    The id is the owner's identity id, so it is known as soon as the
    identity row is flushed.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        Integer, ForeignKey("identities.id", ondelete="CASCADE"), primary_key=True
    )
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    company_name: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, company_name='{self.company_name}')>"
