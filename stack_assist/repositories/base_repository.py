"""Tenant-scoped repository contract shared by every entity repository."""

from typing import Generic, TypeVar
from sqlalchemy.orm import Session

from stack_assist.models.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class TenantScopedRepository(Generic[ModelT]):
    """
    CRUD for a model owned by one tenant.

    Subclasses set `model` and, when the owner column is not user_id,
    `tenant_column`. Reads always filter on the tenant column, and lookups
    by id re-validate ownership so foreign ids behave as missing.
    """

    model: type[ModelT]
    tenant_column: str = "user_id"

    def __init__(self, db: Session):
        self.db = db

    def _tenant_filter(self, tenant_id: int):
        return getattr(self.model, self.tenant_column) == tenant_id

    def get_by_tenant(self, tenant_id: int) -> list[ModelT]:
        """Get all records owned by a tenant"""
        return (
            self.db.query(self.model)
            .filter(self._tenant_filter(tenant_id))
            .order_by(self.model.id)
            .all()
        )

    def get_by_id_and_tenant(self, record_id: int, tenant_id: int) -> ModelT | None:
        """
        Get record ensuring it belongs to the tenant (multi-tenant safety).

        Returns None if record doesn't exist or belongs to another tenant.
        """
        return (
            self.db.query(self.model)
            .filter(self.model.id == record_id, self._tenant_filter(tenant_id))
            .first()
        )

    def count_by_tenant(self, tenant_id: int) -> int:
        return self.db.query(self.model).filter(self._tenant_filter(tenant_id)).count()

    def create(self, record: ModelT) -> ModelT:
        """Create new record"""
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        return record

    def create_no_commit(self, record: ModelT) -> ModelT:
        """Add record without committing (for atomic multi-record writes)"""
        self.db.add(record)
        self.db.flush()
        return record

    def update(self, record: ModelT) -> ModelT:
        """Update existing record"""
        self.db.commit()
        self.db.refresh(record)
        return record

    def delete(self, record: ModelT) -> None:
        """Delete record"""
        self.db.delete(record)
        self.db.commit()
