from datetime import date, datetime
from pydantic import BaseModel, Field
from typing import Optional
from stack_assist.models.task import TaskStatus, TaskPriority


class TaskCreate(BaseModel):
    """Schema for creating a task (always starts as todo)"""

    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: Optional[date] = None


class TaskUpdate(BaseModel):
    """Schema for updating a task"""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[date] = None


class StatusHistoryEntry(BaseModel):
    status: TaskStatus
    timestamp: datetime


class TaskResponse(BaseModel):
    """Schema for task response"""

    model_config = {"from_attributes": True}

    id: int
    user_id: int
    title: str
    description: Optional[str]
    status: TaskStatus
    priority: TaskPriority
    due_date: Optional[date]
    status_history: list[StatusHistoryEntry]
    created_at: datetime
    updated_at: datetime


class TaskListResponse(BaseModel):
    """Schema for list of tasks"""

    tasks: list[TaskResponse]
    total: int


class TaskReportResponse(BaseModel):
    """Task statistics for the reports page"""

    total: int
    by_status: dict[str, int]
    by_priority: dict[str, int]
    completed: int
    average_completion_days: int
    status_changes: int
