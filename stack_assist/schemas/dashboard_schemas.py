from pydantic import BaseModel
from stack_assist.schemas.notification_schemas import ExpiringItemResponse


class DashboardStatsResponse(BaseModel):
    """Quick stats cards"""

    total_clients: int
    total_sites: int
    total_hosting_accounts: int
    total_mobile_apps: int
    expiring_sites: int
    expiring_hosting: int
    expiring_mobile_apps: int
    expiring_in_three_days: int
    expiring_in_one_week: int
    expiring_in_one_month: int


class ExpiryChartResponse(BaseModel):
    """
    Expiry chart series.

    Each series has one count per label, in label order.
    """

    labels: list[str]
    sites: list[int]
    hosting: list[int]
    apps: list[int]


class CriticalAlertsResponse(BaseModel):
    items: list[ExpiringItemResponse]
    total: int
