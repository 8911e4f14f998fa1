"""Helpers shared by the aggregation routines.

``is_operational`` is the single definition of "still in service" used by
both category uptime and fleet readiness. Warning-status assets count as
operational; change it here or nowhere.
"""

import math

from src.models.asset import Asset
from src.models.common import AssetStatus

OPERATIONAL_STATUSES = frozenset({
    AssetStatus.OPERATIONAL,
    AssetStatus.HEALTHY,
    AssetStatus.WARNING,
})


def is_operational(asset: Asset) -> bool:
    return asset.status in OPERATIONAL_STATUSES


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative values (12.5 -> 13)."""
    return int(math.floor(value + 0.5))


def percentage(part: float, whole: float) -> int:
    """``part / whole`` as a rounded percentage, 0 when ``whole`` is 0."""
    if not whole:
        return 0
    return round_half_up(part / whole * 100)
