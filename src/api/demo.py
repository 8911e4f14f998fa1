"""Demo endpoints.

GET  /demo/performance-metrics : extended KPIs, category uptime and trends
GET  /demo/realtime-updates : simulated feed for the polling dashboard
POST /demo/init : replace all records with a supplied dataset
POST /demo/init-sample : replace all records with the sample fleet

The two POST routes exist only while DEMO_ENDPOINTS_ENABLED is set.
"""

from typing import Any

import numpy as np
import structlog
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from src.api.dependencies import (
    get_alert_repo,
    get_asset_repo,
    get_kv_store,
    get_work_order_repo,
    require_demo_mode,
    require_user,
)
from src.api.errors import store_errors
from src.auth.identity import IdentityUser
from src.demo.dataset import load_dataset, sample_dataset
from src.models.alert import PredictiveAlert
from src.models.asset import Asset
from src.models.work_order import WorkOrder
from src.performance.kpis import compute_demo_metrics
from src.performance.realtime import simulate_updates
from src.performance.trends import synthesize_trends
from src.repositories.alerts import AlertRepository
from src.repositories.assets import AssetRepository
from src.repositories.kv_store import KVStore
from src.repositories.work_orders import WorkOrderRepository

router = APIRouter(prefix="/demo", tags=["demo"])

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def get_rng() -> np.random.Generator:
    """Fresh unseeded generator per request; tests override with a seeded one."""
    return np.random.default_rng()


# ---------------------------------------------------------------------------
# Request / Response schemas
# ---------------------------------------------------------------------------


class DemoDatasetRequest(BaseModel):
    model_config = {"populate_by_name": True}

    assets: list[Asset] = Field(default_factory=list)
    alerts: list[PredictiveAlert] = Field(default_factory=list)
    work_orders: list[WorkOrder] = Field(default_factory=list, alias="workOrders")


class DemoInitResponse(BaseModel):
    message: str
    stats: dict[str, int]


class PerformanceMetricsResponse(BaseModel):
    model_config = {"populate_by_name": True}

    kpis: dict[str, int]
    totals: dict[str, int]
    category_performance: list[dict[str, Any]] = Field(alias="categoryPerformance")
    trends: dict[str, list[dict[str, Any]]]


class RealtimeUpdatesResponse(BaseModel):
    model_config = {"populate_by_name": True}

    updates: list[dict[str, Any]]
    timestamp: str
    system_status: str = Field(alias="systemStatus")
    data_freshness: str = Field(alias="dataFreshness")


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.get("/performance-metrics", response_model=PerformanceMetricsResponse)
async def performance_metrics(
    user: IdentityUser = Depends(require_user),
    rng: np.random.Generator = Depends(get_rng),
    assets: AssetRepository = Depends(get_asset_repo),
    alerts: AlertRepository = Depends(get_alert_repo),
    work_orders: WorkOrderRepository = Depends(get_work_order_repo),
) -> PerformanceMetricsResponse:
    with store_errors("fetching performance metrics"):
        metrics = compute_demo_metrics(
            await assets.list_all(),
            await alerts.list_all(),
            await work_orders.list_all(),
        )
    return PerformanceMetricsResponse(
        **metrics.to_dict(),
        trends=synthesize_trends(rng).to_dict(),
    )


@router.get("/realtime-updates", response_model=RealtimeUpdatesResponse)
async def realtime_updates(
    user: IdentityUser = Depends(require_user),
    rng: np.random.Generator = Depends(get_rng),
    assets: AssetRepository = Depends(get_asset_repo),
    alerts: AlertRepository = Depends(get_alert_repo),
) -> RealtimeUpdatesResponse:
    with store_errors("fetching realtime updates"):
        payload = simulate_updates(await assets.list_all(), await alerts.list_all(), rng=rng)
    return RealtimeUpdatesResponse(**payload)


@router.post("/init", response_model=DemoInitResponse, dependencies=[Depends(require_demo_mode)])
async def init_demo(
    body: DemoDatasetRequest,
    store: KVStore = Depends(get_kv_store),
) -> DemoInitResponse:
    with store_errors("initializing demo data"):
        stats = await load_dataset(
            store, assets=body.assets, alerts=body.alerts, work_orders=body.work_orders,
        )
    logger.info("demo_data_loaded", **stats.to_dict())
    return DemoInitResponse(message="Demo data initialized successfully", stats=stats.to_dict())


@router.post("/init-sample", response_model=DemoInitResponse,
             dependencies=[Depends(require_demo_mode)])
async def init_sample(store: KVStore = Depends(get_kv_store)) -> DemoInitResponse:
    assets, alerts, work_orders = sample_dataset()
    with store_errors("initializing sample data"):
        stats = await load_dataset(store, assets=assets, alerts=alerts, work_orders=work_orders)
    return DemoInitResponse(message="Sample data initialized successfully", stats=stats.to_dict())
