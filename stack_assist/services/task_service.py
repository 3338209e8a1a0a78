from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session

from stack_assist.core.clock import utcnow
from stack_assist.core.exceptions import NotFoundException
from stack_assist.models.access_context import AccessContext, ensure_permission
from stack_assist.models.permission import Action, Module
from stack_assist.models.task import Task, TaskStatus, TaskPriority
from stack_assist.repositories.task_repository import TaskRepository
from stack_assist.schemas.task_schemas import TaskCreate, TaskUpdate, TaskReportResponse


def history_entry(status: TaskStatus, at: datetime) -> dict:
    return {"status": status.value, "timestamp": at.isoformat()}


class TaskService:
    """Service layer for task business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = TaskRepository(db)

    def create_task(self, data: TaskCreate, context: AccessContext) -> Task:
        """
        Create a new task in the todo column.

        The initial status is recorded as the first history entry.
        """
        ensure_permission(context, Module.TASKS, Action.CREATE)
        task = Task(
            user_id=context.tenant_id,
            title=data.title,
            description=data.description,
            priority=data.priority,
            due_date=data.due_date,
            status=TaskStatus.TODO,
            status_history=[history_entry(TaskStatus.TODO, utcnow())],
        )
        return self.repo.create(task)

    def get_tasks(
        self, context: AccessContext, status: Optional[TaskStatus] = None
    ) -> list[Task]:
        """Get tasks of the tenant, optionally filtered by status"""
        ensure_permission(context, Module.TASKS)
        return self.repo.get_with_filters(context.tenant_id, status=status)

    def get_task(self, task_id: int, context: AccessContext) -> Task:
        """
        Get task by ID with ownership verification.

        Raises:
            NotFoundException: If task doesn't exist or doesn't belong to tenant
        """
        ensure_permission(context, Module.TASKS)
        task = self.repo.get_by_id_and_tenant(task_id, context.tenant_id)
        if not task:
            raise NotFoundException(f"Task {task_id} not found")
        return task

    def update_task(self, task_id: int, data: TaskUpdate, context: AccessContext) -> Task:
        """
        Update a task.

        - Only provided fields are updated (partial update)
        - Moving to a different status appends to status_history
        """
        ensure_permission(context, Module.TASKS, Action.EDIT)
        task = self.get_task(task_id, context)

        if data.title is not None:
            task.title = data.title
        if data.description is not None:
            task.description = data.description
        if data.priority is not None:
            task.priority = data.priority
        if data.due_date is not None:
            task.due_date = data.due_date

        if data.status is not None and data.status != task.status:
            task.status = data.status
            # Reassign so the JSON column registers the change
            task.status_history = [*task.status_history, history_entry(data.status, utcnow())]

        return self.repo.update(task)

    def delete_task(self, task_id: int, context: AccessContext) -> None:
        """Delete a task"""
        ensure_permission(context, Module.TASKS, Action.DELETE)
        task = self.get_task(task_id, context)
        self.repo.delete(task)

    def get_report(self, context: AccessContext) -> TaskReportResponse:
        """
        Task statistics for the reports page.

        average_completion_days uses the first "completed" history entry;
        status_changes counts consecutive history entries that differ.
        """
        tasks = self.get_tasks(context)

        by_status = {status.value: 0 for status in TaskStatus}
        by_priority = {priority.value: 0 for priority in TaskPriority}
        completion_days = []
        status_changes = 0

        for task in tasks:
            by_status[task.status.value] += 1
            by_priority[task.priority.value] += 1

            history = task.status_history or []
            status_changes += sum(
                1 for prev, cur in zip(history, history[1:]) if prev["status"] != cur["status"]
            )

            if task.status == TaskStatus.COMPLETED:
                completed_at = next(
                    (h["timestamp"] for h in history if h["status"] == TaskStatus.COMPLETED.value),
                    None,
                )
                if completed_at is not None:
                    elapsed = datetime.fromisoformat(completed_at) - task.created_at
                    completion_days.append(elapsed.days)

        average = round(sum(completion_days) / len(completion_days)) if completion_days else 0

        return TaskReportResponse(
            total=len(tasks),
            by_status=by_status,
            by_priority=by_priority,
            completed=by_status[TaskStatus.COMPLETED.value],
            average_completion_days=average,
            status_changes=status_changes,
        )
