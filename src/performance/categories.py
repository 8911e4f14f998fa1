"""Per-category uptime for the asset fleet.

Assets group by category, falling back to type and then "Unknown". A
category exists only once an asset lands in it, so no group ever has a
zero total. Groups keep the order in which they are first seen.
"""

from dataclasses import dataclass

from src.models.asset import Asset
from src.performance.common import is_operational, percentage


@dataclass
class CategoryPerformance:
    """Operational counts for one asset category."""

    category: str
    total: int = 0
    operational: int = 0

    @property
    def uptime(self) -> int:
        return percentage(self.operational, self.total)

    def to_dict(self) -> dict:
        return {
            "category": self.category,
            "total": self.total,
            "operational": self.operational,
            "uptime": self.uptime,
        }


def category_performance(assets: list[Asset]) -> list[CategoryPerformance]:
    groups: dict[str, CategoryPerformance] = {}
    for asset in assets:
        key = asset.grouping_category
        stat = groups.setdefault(key, CategoryPerformance(category=key))
        stat.total += 1
        if is_operational(asset):
            stat.operational += 1
    return list(groups.values())
