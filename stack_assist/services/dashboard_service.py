from datetime import date
from sqlalchemy.orm import Session

from stack_assist.core.clock import today as current_date
from stack_assist.models.access_context import AccessContext
from stack_assist.models.notification import ItemType
from stack_assist.repositories.client_repository import ClientRepository
from stack_assist.repositories.hosting_account_repository import HostingAccountRepository
from stack_assist.repositories.mobile_app_repository import MobileAppRepository
from stack_assist.repositories.site_repository import SiteRepository
from stack_assist.schemas.dashboard_schemas import (
    DashboardStatsResponse,
    ExpiryChartResponse,
    CriticalAlertsResponse,
)
from stack_assist.services import expiry

# Dashboard counts items up to this many days out
ONE_MONTH_DAYS = 30


class DashboardService:
    """
    Read-only aggregation over a tenant's sites, hosting accounts and apps.

    Nothing is cached; every call reads the current rows.
    """

    def __init__(self, db: Session):
        self.db = db
        self.client_repo = ClientRepository(db)
        self.site_repo = SiteRepository(db)
        self.hosting_repo = HostingAccountRepository(db)
        self.app_repo = MobileAppRepository(db)

    def _expiring_items(self, tenant_id: int, today: date) -> list[expiry.ExpiringItem]:
        cutoff = expiry.window_end(today, ONE_MONTH_DAYS)
        items = [expiry.from_site(s) for s in self.site_repo.get_expiring(tenant_id, cutoff)]
        items += [expiry.from_hosting(h) for h in self.hosting_repo.get_expiring(tenant_id, cutoff)]
        items += [expiry.from_app(a) for a in self.app_repo.get_expiring(tenant_id, cutoff)]
        return items

    def get_stats(self, context: AccessContext, today: date | None = None) -> DashboardStatsResponse:
        """
        Quick stats cards.

        Per-type expiring counts include anything already expired. The
        three time-frame counts only cover items that have not expired:
        (0, 3], (3, 7] and (7, 30] days.
        """
        today = today or current_date()
        tenant_id = context.tenant_id
        items = self._expiring_items(tenant_id, today)

        per_type = {item_type: 0 for item_type in ItemType}
        in_three_days = in_one_week = in_one_month = 0
        for item in items:
            per_type[item.item_type] += 1
            days = item.days_until(today)
            if 0 < days <= 3:
                in_three_days += 1
            elif 3 < days <= 7:
                in_one_week += 1
            elif 7 < days <= ONE_MONTH_DAYS:
                in_one_month += 1

        return DashboardStatsResponse(
            total_clients=self.client_repo.count_by_tenant(tenant_id),
            total_sites=self.site_repo.count_by_tenant(tenant_id),
            total_hosting_accounts=self.hosting_repo.count_by_tenant(tenant_id),
            total_mobile_apps=self.app_repo.count_by_tenant(tenant_id),
            expiring_sites=per_type[ItemType.SITE],
            expiring_hosting=per_type[ItemType.HOSTING],
            expiring_mobile_apps=per_type[ItemType.APP],
            expiring_in_three_days=in_three_days,
            expiring_in_one_week=in_one_week,
            expiring_in_one_month=in_one_month,
        )

    def get_chart(self, context: AccessContext, today: date | None = None) -> ExpiryChartResponse:
        """Expiry chart: one bucketed series per item type"""
        today = today or current_date()
        series = {item_type: [0] * len(expiry.CHART_LABELS) for item_type in ItemType}

        for item in self._expiring_items(context.tenant_id, today):
            series[item.item_type][expiry.chart_bucket(item.days_until(today))] += 1

        return ExpiryChartResponse(
            labels=list(expiry.CHART_LABELS),
            sites=series[ItemType.SITE],
            hosting=series[ItemType.HOSTING],
            apps=series[ItemType.APP],
        )

    def get_critical_alerts(
        self, context: AccessContext, today: date | None = None
    ) -> CriticalAlertsResponse:
        """Items expiring within three days, expired ones included, soonest first"""
        today = today or current_date()
        critical = [
            item
            for item in self._expiring_items(context.tenant_id, today)
            if expiry.is_critical(item.days_until(today))
        ]
        critical.sort(key=lambda item: item.expiry_date)

        return CriticalAlertsResponse(
            items=[expiry.to_response(item, today) for item in critical],
            total=len(critical),
        )
