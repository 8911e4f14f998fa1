"""Ordering of predictive alerts for display.

Highest priority tier first; within a tier, highest risk first. Equal
priority and risk fall back to creation time (oldest first, undated last)
and then id, so the order never depends on store scan order.
"""

from datetime import datetime

from src.models.alert import PredictiveAlert


def _sort_key(alert: PredictiveAlert) -> tuple[int, float, int, float, str]:
    created: datetime | None = alert.created_at
    return (
        -alert.priority_ordinal,
        -alert.risk_percentage,
        0 if created is not None else 1,
        created.timestamp() if created is not None else 0.0,
        alert.id,
    )


def rank_alerts(alerts: list[PredictiveAlert]) -> list[PredictiveAlert]:
    return sorted(alerts, key=_sort_key)
