"""KPI derivation over the asset, alert and work-order collections.

Overview KPIs:
- fleetReadiness: share of assets still operational (warning included)
- criticalAlerts: active alerts in the critical tier
- budgetStatus: this calendar month's work-order cost against a fixed budget
- fieldTeamUptime: configured placeholder, no telemetry source yet

Demo metrics extend the overview with efficiency, response time, asset
value and predicted savings.
"""

from dataclasses import dataclass, field
from datetime import datetime

from src.models.alert import PredictiveAlert
from src.models.asset import Asset
from src.models.common import AlertStatus, WorkOrderStatus, utc_now
from src.models.work_order import WorkOrder
from src.performance.categories import CategoryPerformance, category_performance
from src.performance.common import is_operational, percentage, round_half_up


@dataclass
class OverviewKPIs:
    fleet_readiness: int
    critical_alerts: int
    field_team_uptime: int
    budget_status: int

    def to_dict(self) -> dict:
        return {
            "fleetReadiness": self.fleet_readiness,
            "criticalAlerts": self.critical_alerts,
            "fieldTeamUptime": self.field_team_uptime,
            "budgetStatus": self.budget_status,
        }


@dataclass
class FleetTotals:
    total_assets: int
    operational_assets: int
    total_alerts: int
    total_work_orders: int
    active_alerts: int | None = None

    def to_dict(self) -> dict:
        out = {
            "totalAssets": self.total_assets,
            "operationalAssets": self.operational_assets,
            "totalAlerts": self.total_alerts,
            "totalWorkOrders": self.total_work_orders,
        }
        if self.active_alerts is not None:
            out["activeAlerts"] = self.active_alerts
        return out


@dataclass
class PerformanceOverview:
    kpis: OverviewKPIs
    totals: FleetTotals

    def to_dict(self) -> dict:
        return {"kpis": self.kpis.to_dict(), "totals": self.totals.to_dict()}


@dataclass
class DemoKPIs:
    fleet_readiness: int
    critical_alerts: int
    avg_efficiency: int
    avg_response_time: int
    total_asset_value: int
    potential_savings: int
    completion_rate: int

    def to_dict(self) -> dict:
        return {
            "fleetReadiness": self.fleet_readiness,
            "criticalAlerts": self.critical_alerts,
            "avgEfficiency": self.avg_efficiency,
            "avgResponseTime": self.avg_response_time,
            "totalAssetValue": self.total_asset_value,
            "potentialSavings": self.potential_savings,
            "completionRate": self.completion_rate,
        }


@dataclass
class DemoMetrics:
    kpis: DemoKPIs
    totals: FleetTotals
    category_performance: list[CategoryPerformance] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "kpis": self.kpis.to_dict(),
            "totals": self.totals.to_dict(),
            "categoryPerformance": [c.to_dict() for c in self.category_performance],
        }


# ---------------------------------------------------------------------------
# Individual KPIs
# ---------------------------------------------------------------------------


def fleet_readiness(assets: list[Asset]) -> int:
    """Percentage of operational assets; 0 for an empty fleet."""
    return percentage(sum(1 for a in assets if is_operational(a)), len(assets))


def critical_alert_count(alerts: list[PredictiveAlert]) -> int:
    return sum(1 for a in alerts if a.is_active_critical)


def monthly_work_order_cost(work_orders: list[WorkOrder], now: datetime) -> float:
    """Sum of ``cost`` over work orders raised in now's calendar month."""
    total = 0.0
    for wo in work_orders:
        created = wo.created_on()
        if created is not None and created.year == now.year and created.month == now.month:
            total += wo.cost or 0.0
    return total


def budget_status(work_orders: list[WorkOrder], monthly_budget: float, now: datetime) -> int:
    return percentage(monthly_work_order_cost(work_orders, now), monthly_budget)


def average_efficiency(assets: list[Asset]) -> int:
    if not assets:
        return 0
    return round_half_up(sum(a.efficiency or 0.0 for a in assets) / len(assets))


def average_response_days(work_orders: list[WorkOrder]) -> int:
    """Mean days from createdDate to completedDate over completed orders.

    Orders completed without both dates still count in the denominator.
    """
    completed = [wo for wo in work_orders if wo.status == WorkOrderStatus.COMPLETED]
    elapsed = sum(
        (wo.completed_date - wo.created_date).days
        for wo in completed
        if wo.completed_date is not None and wo.created_date is not None
    )
    if elapsed <= 0:
        return 0
    return round_half_up(elapsed / len(completed))


# ---------------------------------------------------------------------------
# Aggregate views
# ---------------------------------------------------------------------------


def _totals(assets: list[Asset], alerts: list[PredictiveAlert],
            work_orders: list[WorkOrder], *, with_active: bool = False) -> FleetTotals:
    return FleetTotals(
        total_assets=len(assets),
        operational_assets=sum(1 for a in assets if is_operational(a)),
        total_alerts=len(alerts),
        total_work_orders=len(work_orders),
        active_alerts=(
            sum(1 for a in alerts if a.status == AlertStatus.ACTIVE) if with_active else None
        ),
    )


def compute_overview(
    assets: list[Asset],
    alerts: list[PredictiveAlert],
    work_orders: list[WorkOrder],
    *,
    monthly_budget: float,
    field_team_uptime: int,
    now: datetime | None = None,
) -> PerformanceOverview:
    now = now or utc_now()
    return PerformanceOverview(
        kpis=OverviewKPIs(
            fleet_readiness=fleet_readiness(assets),
            critical_alerts=critical_alert_count(alerts),
            field_team_uptime=field_team_uptime,
            budget_status=budget_status(work_orders, monthly_budget, now),
        ),
        totals=_totals(assets, alerts, work_orders),
    )


def compute_demo_metrics(
    assets: list[Asset],
    alerts: list[PredictiveAlert],
    work_orders: list[WorkOrder],
) -> DemoMetrics:
    return DemoMetrics(
        kpis=DemoKPIs(
            fleet_readiness=fleet_readiness(assets),
            critical_alerts=critical_alert_count(alerts),
            avg_efficiency=average_efficiency(assets),
            avg_response_time=average_response_days(work_orders),
            total_asset_value=round_half_up(sum(a.value or 0.0 for a in assets)),
            potential_savings=round_half_up(sum(a.potential_cost_impact or 0.0 for a in alerts)),
            completion_rate=sum(1 for wo in work_orders if wo.status == WorkOrderStatus.COMPLETED),
        ),
        totals=_totals(assets, alerts, work_orders, with_active=True),
        category_performance=category_performance(assets),
    )
