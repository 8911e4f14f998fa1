"""Locally generated dashboard data for when the API cannot be reached.

Everything is derived from the fixed sample fleet, so the offline
dashboard shows the same three assets and two alerts a freshly seeded
store would.
"""

from datetime import datetime

import numpy as np

from src.demo.dataset import sample_dataset
from src.models.common import utc_now
from src.performance.kpis import compute_demo_metrics
from src.performance.ranking import rank_alerts
from src.performance.trends import synthesize_trends


def fallback_metrics(rng: np.random.Generator | None = None,
                     now: datetime | None = None) -> dict:
    """Same shape as GET /demo/performance-metrics."""
    assets, alerts, work_orders = sample_dataset()
    payload = compute_demo_metrics(assets, alerts, work_orders).to_dict()
    payload["trends"] = synthesize_trends(rng, now).to_dict()
    return payload


def fallback_alerts() -> list[dict]:
    _, alerts, _ = sample_dataset()
    return [a.to_record() for a in rank_alerts(alerts)]


def fallback_updates(now: datetime | None = None) -> dict:
    """Same shape as GET /demo/realtime-updates, with two canned events."""
    stamp = (now or utc_now()).isoformat()
    return {
        "updates": [
            {
                "type": "asset_status",
                "assetId": "HM-001",
                "assetName": "Excavator CAT 320",
                "change": "efficiency_increase",
                "value": "+3.2%",
                "timestamp": stamp,
            },
            {
                "type": "maintenance_completed",
                "workOrderId": "WO-12345",
                "assetName": "Crane Liebherr LTM",
                "completion": "ahead_of_schedule",
                "timestamp": stamp,
            },
        ],
        "timestamp": stamp,
        "systemStatus": "offline",
        "dataFreshness": "cached",
    }
