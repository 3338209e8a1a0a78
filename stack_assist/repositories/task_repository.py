from typing import Optional
from stack_assist.models.task import Task, TaskStatus
from stack_assist.repositories.base_repository import TenantScopedRepository


class TaskRepository(TenantScopedRepository[Task]):
    """Repository for Task data access"""

    model = Task

    def get_with_filters(
        self,
        tenant_id: int,
        status: Optional[TaskStatus] = None,
    ) -> list[Task]:
        """Tasks of a tenant, optionally by status, soonest due first"""
        query = self.db.query(Task).filter(Task.user_id == tenant_id)

        if status is not None:
            query = query.filter(Task.status == status)

        return query.order_by(Task.due_date.is_(None), Task.due_date, Task.id).all()
