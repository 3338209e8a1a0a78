from datetime import datetime
from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from stack_assist.core.clock import utcnow


class Base(DeclarativeBase):
    """Declarative base for all Stack Assist tables"""

    pass


class TimestampMixin:
    """Adds created_at / updated_at columns maintained on write"""

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )
