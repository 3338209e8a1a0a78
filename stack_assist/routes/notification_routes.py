from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from stack_assist.core.mailer import MailSender, get_mail_sender
from stack_assist.database import get_db
from stack_assist.dependencies import get_access_context
from stack_assist.models.access_context import AccessContext
from stack_assist.models.notification import ItemType
from stack_assist.services.notification_service import NotificationService
from stack_assist.schemas.notification_schemas import (
    ExpiringItemListResponse,
    NotificationSettingsResponse,
    NotificationSettingsUpdate,
    NotificationListResponse,
    ScanResultResponse,
)

router = APIRouter()


@router.get("/expiring", response_model=ExpiringItemListResponse)
async def list_expiring(
    days: int = Query(30, ge=1, description="Look-ahead window in days, capped at 90"),
    item_type: Optional[ItemType] = Query(None, description="Filter by item type"),
    context: AccessContext = Depends(get_access_context),
    db: Session = Depends(get_db),
):
    """Sites, hosting accounts and apps expiring within the window, soonest first"""
    service = NotificationService(db)
    items = service.get_expiring(context, days=days, item_type=item_type)
    return ExpiringItemListResponse(items=items, total=len(items))


@router.get("/settings", response_model=NotificationSettingsResponse)
async def get_settings(
    context: AccessContext = Depends(get_access_context), db: Session = Depends(get_db)
):
    service = NotificationService(db)
    return service.get_settings(context)


@router.put("/settings", response_model=NotificationSettingsResponse)
async def update_settings(
    data: NotificationSettingsUpdate,
    context: AccessContext = Depends(get_access_context),
    db: Session = Depends(get_db),
):
    """
    Update notification toggles.

    - **Requires the account owner**
    - Omitted fields keep their current value
    """
    service = NotificationService(db)
    return service.update_settings(data, context)


@router.get("", response_model=NotificationListResponse)
async def list_notifications(
    context: AccessContext = Depends(get_access_context), db: Session = Depends(get_db)
):
    service = NotificationService(db)
    notifications = service.get_notifications(context)
    return NotificationListResponse(notifications=notifications, total=len(notifications))


@router.post("/scan", response_model=ScanResultResponse)
async def run_scan(
    context: AccessContext = Depends(get_access_context),
    db: Session = Depends(get_db),
    mail_sender: MailSender = Depends(get_mail_sender),
):
    """
    Run the expiration scan for the caller's tenant now.

    - **Requires the account owner**
    """
    service = NotificationService(db)
    return await service.scan_for_context(context, mail_sender)
