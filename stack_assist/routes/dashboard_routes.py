from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from stack_assist.database import get_db
from stack_assist.dependencies import get_access_context
from stack_assist.models.access_context import AccessContext
from stack_assist.services.dashboard_service import DashboardService
from stack_assist.schemas.dashboard_schemas import (
    DashboardStatsResponse,
    ExpiryChartResponse,
    CriticalAlertsResponse,
)

router = APIRouter()


@router.get("/stats", response_model=DashboardStatsResponse)
async def get_stats(
    context: AccessContext = Depends(get_access_context), db: Session = Depends(get_db)
):
    """Totals and expiry counts for the dashboard cards"""
    service = DashboardService(db)
    return service.get_stats(context)


@router.get("/chart", response_model=ExpiryChartResponse)
async def get_chart(
    context: AccessContext = Depends(get_access_context), db: Session = Depends(get_db)
):
    service = DashboardService(db)
    return service.get_chart(context)


@router.get("/critical-alerts", response_model=CriticalAlertsResponse)
async def get_critical_alerts(
    context: AccessContext = Depends(get_access_context), db: Session = Depends(get_db)
):
    service = DashboardService(db)
    return service.get_critical_alerts(context)
