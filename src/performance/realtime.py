"""Simulated realtime feed served to the polling dashboard.

Each poll returns fresh sensor readings for the first few online assets,
occasionally a risk drift on an active alert, and occasionally an AI
maintenance-window insight. Nothing is written back to the store.
"""

from datetime import datetime

import numpy as np

from src.models.alert import PredictiveAlert
from src.models.asset import Asset
from src.models.common import AlertStatus, AssetStatus, utc_now
from src.performance.common import round_half_up

SENSOR_ASSET_LIMIT = 5
ALERT_UPDATE_PROBABILITY = 0.3
INSIGHT_PROBABILITY = 0.2

# Baselines used when an asset carries no reading of its own.
DEFAULT_TEMPERATURE = 25.0
DEFAULT_PRESSURE = 5.0
DEFAULT_VIBRATION = 2.0
DEFAULT_EFFICIENCY = 85.0

INSIGHT_TEXT = (
    "AI detected subtle pattern changes in operational data suggesting "
    "optimal maintenance window in 14-21 days."
)


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def _reading(asset: Asset, name: str, default: float) -> float:
    value = (asset.model_extra or {}).get(name)
    return float(value) if isinstance(value, (int, float)) else default


def _sensor_update(asset: Asset, rng: np.random.Generator, stamp: str) -> dict:
    efficiency = asset.efficiency if asset.efficiency is not None else DEFAULT_EFFICIENCY
    return {
        "type": "sensor_reading",
        "assetId": asset.id,
        "assetName": asset.name,
        "timestamp": stamp,
        "data": {
            "temperature": round_half_up(
                _reading(asset, "temperature", DEFAULT_TEMPERATURE) + (rng.random() - 0.5) * 5
            ),
            "pressure": round_half_up(
                _reading(asset, "pressure", DEFAULT_PRESSURE) + (rng.random() - 0.5) * 2
            ),
            "vibration": round_half_up(
                _reading(asset, "vibration", DEFAULT_VIBRATION) + (rng.random() - 0.5)
            ),
            "efficiency": int(_clamp(round_half_up(efficiency + (rng.random() - 0.5) * 10))),
        },
    }


def simulate_updates(
    assets: list[Asset],
    alerts: list[PredictiveAlert],
    *,
    rng: np.random.Generator | None = None,
    now: datetime | None = None,
) -> dict:
    rng = rng if rng is not None else np.random.default_rng()
    stamp = (now or utc_now()).isoformat()
    updates: list[dict] = []

    for asset in assets[:SENSOR_ASSET_LIMIT]:
        if asset.status != AssetStatus.OFFLINE:
            updates.append(_sensor_update(asset, rng, stamp))

    if rng.random() < ALERT_UPDATE_PROBABILITY:
        active = [a for a in alerts if a.status == AlertStatus.ACTIVE]
        if active:
            alert = active[int(rng.integers(0, len(active)))]
            updates.append({
                "type": "alert_update",
                "alertId": alert.id,
                "assetName": alert.asset_name,
                "timestamp": stamp,
                "change": "risk_increased" if rng.random() > 0.5 else "risk_decreased",
                "newRiskPercentage": _clamp(alert.risk_percentage + (rng.random() - 0.5) * 10),
            })

    if assets and rng.random() < INSIGHT_PROBABILITY:
        asset = assets[int(rng.integers(0, len(assets)))]
        updates.append({
            "type": "ai_insight",
            "assetId": asset.id,
            "assetName": asset.name,
            "timestamp": stamp,
            "insight": INSIGHT_TEXT,
            "confidence": round_half_up(75 + rng.random() * 20),
        })

    return {
        "updates": updates,
        "timestamp": stamp,
        "systemStatus": "optimal",
        "dataFreshness": "real-time",
    }
