"""Fleet performance endpoints.

GET /performance/overview : fleet readiness, critical alerts, budget use
GET /performance/categories : uptime per asset category
"""

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from src.api.dependencies import (
    get_alert_repo,
    get_asset_repo,
    get_work_order_repo,
    require_user,
)
from src.api.errors import store_errors
from src.auth.identity import IdentityUser
from src.config.settings import Settings, get_settings
from src.performance.categories import category_performance
from src.performance.kpis import compute_overview
from src.repositories.alerts import AlertRepository
from src.repositories.assets import AssetRepository
from src.repositories.work_orders import WorkOrderRepository

router = APIRouter(prefix="/performance", tags=["performance"])


class OverviewResponse(BaseModel):
    kpis: dict[str, int]
    totals: dict[str, int]


class CategoryPerformanceResponse(BaseModel):
    model_config = {"populate_by_name": True}

    category_performance: list[dict[str, Any]] = Field(alias="categoryPerformance")


@router.get("/overview", response_model=OverviewResponse)
async def overview(
    user: IdentityUser = Depends(require_user),
    settings: Settings = Depends(get_settings),
    assets: AssetRepository = Depends(get_asset_repo),
    alerts: AlertRepository = Depends(get_alert_repo),
    work_orders: WorkOrderRepository = Depends(get_work_order_repo),
) -> OverviewResponse:
    with store_errors("fetching performance data"):
        result = compute_overview(
            await assets.list_all(),
            await alerts.list_all(),
            await work_orders.list_all(),
            monthly_budget=settings.MONTHLY_BUDGET,
            field_team_uptime=settings.FIELD_TEAM_UPTIME,
        )
    return OverviewResponse(**result.to_dict())


@router.get("/categories", response_model=CategoryPerformanceResponse)
async def categories(
    user: IdentityUser = Depends(require_user),
    assets: AssetRepository = Depends(get_asset_repo),
) -> CategoryPerformanceResponse:
    with store_errors("fetching category performance"):
        stats = category_performance(await assets.list_all())
    return CategoryPerformanceResponse(category_performance=[s.to_dict() for s in stats])
