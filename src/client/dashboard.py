"""Dashboard data loading with degrade-to-demo-data fallback.

load_dashboard() tries, in order:
1. GET /demo/performance-metrics (+ GET /alerts)
2. GET /performance/overview (+ GET /alerts)
3. locally generated fallback data (is_fallback=True)

API errors and transport errors are logged, never raised.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import httpx
import numpy as np

from src.client.api import ElixAPIError, ElixClient
from src.client.fallback import fallback_alerts, fallback_metrics, fallback_updates
from src.client.poller import RealtimePoller
from src.config.settings import get_settings

logger = logging.getLogger(__name__)


@dataclass
class DashboardSnapshot:
    kpis: dict[str, Any]
    totals: dict[str, Any] = field(default_factory=dict)
    category_performance: list[dict[str, Any]] = field(default_factory=list)
    trends: dict[str, list[dict[str, Any]]] = field(default_factory=dict)
    alerts: list[dict[str, Any]] = field(default_factory=list)
    is_fallback: bool = False


@dataclass
class RealtimeSnapshot:
    updates: list[dict[str, Any]]
    timestamp: str
    system_status: str
    is_fallback: bool = False


class DashboardDataService:
    def __init__(self, client: ElixClient, *, rng: np.random.Generator | None = None) -> None:
        self._client = client
        self._rng = rng

    async def load_dashboard(self) -> DashboardSnapshot:
        try:
            metrics = await self._client.demo_performance_metrics()
            alerts = await self._client.list_alerts()
            return DashboardSnapshot(
                kpis=metrics["kpis"],
                totals=metrics.get("totals", {}),
                category_performance=metrics.get("categoryPerformance", []),
                trends=metrics.get("trends", {}),
                alerts=alerts,
            )
        except (ElixAPIError, httpx.HTTPError) as exc:
            logger.warning("Performance metrics unavailable, trying overview: %s", exc)

        try:
            overview = await self._client.performance_overview()
            alerts = await self._client.list_alerts()
            return DashboardSnapshot(
                kpis=overview["kpis"], totals=overview.get("totals", {}), alerts=alerts,
            )
        except (ElixAPIError, httpx.HTTPError) as exc:
            logger.warning("Dashboard API unavailable, using fallback data: %s", exc)

        metrics = fallback_metrics(self._rng)
        return DashboardSnapshot(
            kpis=metrics["kpis"],
            totals=metrics["totals"],
            category_performance=metrics["categoryPerformance"],
            trends=metrics["trends"],
            alerts=fallback_alerts(),
            is_fallback=True,
        )

    async def load_realtime_updates(self) -> RealtimeSnapshot:
        try:
            payload = await self._client.realtime_updates()
            is_fallback = False
        except (ElixAPIError, httpx.HTTPError) as exc:
            logger.warning("Realtime updates unavailable, using fallback data: %s", exc)
            payload = fallback_updates()
            is_fallback = True
        return RealtimeSnapshot(
            updates=payload.get("updates", []),
            timestamp=payload["timestamp"],
            system_status=payload.get("systemStatus", ""),
            is_fallback=is_fallback,
        )

    def realtime_poller(
        self,
        on_result: Callable[[RealtimeSnapshot], None],
        interval: float | None = None,
    ) -> RealtimePoller[RealtimeSnapshot]:
        """Poll realtime updates every POLL_INTERVAL_SECONDS unless overridden."""
        if interval is None:
            interval = get_settings().POLL_INTERVAL_SECONDS
        return RealtimePoller(self.load_realtime_updates, on_result, interval)
