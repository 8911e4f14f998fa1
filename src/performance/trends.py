"""Synthesized trend series for the dashboard charts.

Illustrative only: each point is a bounded random offset around a fixed
baseline, regenerated per request and never persisted. Pass a seeded
``numpy.random.Generator`` for reproducible output.

- alert trends: 30 daily points, critical count boosted in the last 7 days
- performance trends: 30 daily points (efficiency 85±5 clamped to 70–95,
  uptime 95±4, utilization 78±7.5)
- cost trends: 12 calendar-month points (preventive, corrective, emergency spend)
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

import numpy as np

from src.models.common import utc_now
from src.performance.common import round_half_up

DAILY_POINTS = 30
MONTHLY_POINTS = 12
RECENT_DAYS = 7

EFFICIENCY_BASELINE = 85.0
UPTIME_BASELINE = 95.0
UTILIZATION_BASELINE = 78.0
PREDICTIVE_SAVINGS_RATIO = 0.7


@dataclass
class TrendBundle:
    alert_trends: list[dict]
    performance_trends: list[dict]
    cost_trends: list[dict]

    def to_dict(self) -> dict:
        return {
            "alertTrends": self.alert_trends,
            "performanceTrends": self.performance_trends,
            "costTrends": self.cost_trends,
        }


def _jitter(rng: np.random.Generator, spread: float) -> float:
    """Uniform offset in [-spread/2, spread/2)."""
    return (rng.random() - 0.5) * spread


def _months_back(now: datetime, months_ago: int) -> tuple[int, int]:
    """Calendar (year, month) ``months_ago`` months before ``now``."""
    index = now.year * 12 + (now.month - 1) - months_ago
    return index // 12, index % 12 + 1


def alert_trends(rng: np.random.Generator, now: datetime) -> list[dict]:
    trends = []
    for days_ago in range(DAILY_POINTS - 1, -1, -1):
        day = (now - timedelta(days=days_ago)).date()
        critical = int(rng.integers(0, 3)) + (2 if days_ago < RECENT_DAYS else 0)
        high = int(rng.integers(0, 5)) + 2
        medium = int(rng.integers(0, 8)) + 3
        trends.append({
            "date": day.isoformat(),
            "critical": critical,
            "high": high,
            "medium": medium,
            "total": critical + high + medium,
        })
    return trends


def performance_trends(rng: np.random.Generator, now: datetime) -> list[dict]:
    trends = []
    for days_ago in range(DAILY_POINTS - 1, -1, -1):
        day = (now - timedelta(days=days_ago)).date()
        efficiency = min(95.0, max(70.0, EFFICIENCY_BASELINE + _jitter(rng, 10)))
        trends.append({
            "date": day.isoformat(),
            "avgEfficiency": round_half_up(efficiency),
            "uptime": round_half_up(UPTIME_BASELINE + _jitter(rng, 8)),
            "utilization": round_half_up(UTILIZATION_BASELINE + _jitter(rng, 15)),
        })
    return trends


def cost_trends(rng: np.random.Generator, now: datetime) -> list[dict]:
    trends = []
    for months_ago in range(MONTHLY_POINTS - 1, -1, -1):
        year, month = _months_back(now, months_ago)
        preventive = round_half_up(15_000 + rng.random() * 10_000)
        corrective = round_half_up(25_000 + rng.random() * 15_000)
        emergency = round_half_up(5_000 + rng.random() * 8_000)
        trends.append({
            "month": f"{year:04d}-{month:02d}",
            "preventive": preventive,
            "corrective": corrective,
            "emergency": emergency,
            "total": preventive + corrective + emergency,
            "savings": round_half_up(preventive * PREDICTIVE_SAVINGS_RATIO),
        })
    return trends


def synthesize_trends(
    rng: np.random.Generator | None = None,
    now: datetime | None = None,
) -> TrendBundle:
    rng = rng if rng is not None else np.random.default_rng()
    now = now or utc_now()
    return TrendBundle(
        alert_trends=alert_trends(rng, now),
        performance_trends=performance_trends(rng, now),
        cost_trends=cost_trends(rng, now),
    )
