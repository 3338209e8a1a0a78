from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from stack_assist.database import get_db
from stack_assist.dependencies import get_access_context
from stack_assist.models.access_context import AccessContext
from stack_assist.models.task import TaskStatus
from stack_assist.services.task_service import TaskService
from stack_assist.schemas.task_schemas import (
    TaskCreate,
    TaskUpdate,
    TaskResponse,
    TaskListResponse,
    TaskReportResponse,
)

router = APIRouter()


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    data: TaskCreate,
    context: AccessContext = Depends(get_access_context),
    db: Session = Depends(get_db),
):
    service = TaskService(db)
    return service.create_task(data, context)


@router.get("", response_model=TaskListResponse)
async def list_tasks(
    status: Optional[TaskStatus] = Query(None, description="Filter by status"),
    context: AccessContext = Depends(get_access_context),
    db: Session = Depends(get_db),
):
    """Get tasks with optional status filter"""
    service = TaskService(db)
    tasks = service.get_tasks(context, status=status)
    return TaskListResponse(tasks=tasks, total=len(tasks))


@router.get("/report", response_model=TaskReportResponse)
async def task_report(
    context: AccessContext = Depends(get_access_context), db: Session = Depends(get_db)
):
    service = TaskService(db)
    return service.get_report(context)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: int,
    context: AccessContext = Depends(get_access_context),
    db: Session = Depends(get_db),
):
    service = TaskService(db)
    return service.get_task(task_id, context)


@router.patch("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: int,
    data: TaskUpdate,
    context: AccessContext = Depends(get_access_context),
    db: Session = Depends(get_db),
):
    """Update task; a status change is appended to its history"""
    service = TaskService(db)
    return service.update_task(task_id, data, context)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: int,
    context: AccessContext = Depends(get_access_context),
    db: Session = Depends(get_db),
):
    service = TaskService(db)
    service.delete_task(task_id, context)
    return None
