"""Fixed sample fleet and bulk dataset loading.

The sample set is small and deterministic: two heavy-machinery units at
UAE sites and one failing chiller in Riyadh, with predictive alerts on the
two units that need attention.
"""

import logging
from dataclasses import dataclass

from src.models.alert import PredictiveAlert
from src.models.asset import Asset
from src.models.work_order import WorkOrder
from src.repositories.alerts import AlertRepository
from src.repositories.assets import AssetRepository
from src.repositories.kv_store import KVStore
from src.repositories.work_orders import WorkOrderRepository

logger = logging.getLogger(__name__)

SAMPLE_ASSETS: list[dict] = [
    {
        "id": "HM-001",
        "name": "Excavator CAT 320",
        "type": "Heavy Machinery",
        "category": "Heavy Machinery",
        "status": "healthy",
        "location": {"site": "Dubai Industrial Zone",
                     "coordinates": {"lat": 25.1972, "lng": 55.2744}},
        "model": "CAT 320GC",
        "supplier": "Caterpillar Inc.",
        "purchaseDate": "2022-03-15",
        "serialNumber": "CAT320-2024-001",
        "efficiency": 89,
        "criticality": "medium",
    },
    {
        "id": "HM-002",
        "name": "Crane Liebherr LTM",
        "type": "Heavy Machinery",
        "category": "Heavy Machinery",
        "status": "warning",
        "location": {"site": "Abu Dhabi Complex",
                     "coordinates": {"lat": 24.4539, "lng": 54.3773}},
        "model": "LTM 1070-4.2",
        "supplier": "Liebherr Group",
        "purchaseDate": "2021-08-20",
        "serialNumber": "LIE-2024-002",
        "efficiency": 74,
        "criticality": "high",
    },
    {
        "id": "HVAC-001",
        "name": "Chiller Unit 1",
        "type": "HVAC",
        "category": "HVAC Systems",
        "status": "critical",
        "location": {"site": "Riyadh Operations",
                     "coordinates": {"lat": 24.7136, "lng": 46.6753}},
        "model": "Carrier AquaEdge 19DV",
        "supplier": "Carrier Corporation",
        "purchaseDate": "2023-01-10",
        "serialNumber": "CAR-HVAC-003",
        "efficiency": 45,
        "criticality": "critical",
    },
]

SAMPLE_ALERTS: list[dict] = [
    {
        "id": "PA-001",
        "assetId": "HM-002",
        "assetName": "Crane Liebherr LTM",
        "riskPercentage": 85,
        "timeframe": "7 days",
        "recommendation": "Schedule hydraulic system inspection",
        "category": "Heavy Machinery",
        "priority": "high",
        "status": "active",
        "aiInsight": ("Machine learning detected irregular hydraulic pressure patterns "
                      "indicating potential pump failure."),
    },
    {
        "id": "PA-002",
        "assetId": "HVAC-001",
        "assetName": "Chiller Unit 1",
        "riskPercentage": 91,
        "timeframe": "3 days",
        "recommendation": "Immediate maintenance required",
        "category": "HVAC",
        "priority": "critical",
        "status": "active",
        "aiInsight": ("AI models predict critical compressor failure within 72 hours "
                      "based on vibration and temperature analysis."),
    },
]


@dataclass
class DatasetStats:
    assets: int
    alerts: int
    work_orders: int

    def to_dict(self) -> dict:
        return {"assets": self.assets, "alerts": self.alerts, "workOrders": self.work_orders}


def sample_dataset() -> tuple[list[Asset], list[PredictiveAlert], list[WorkOrder]]:
    return (
        [Asset.model_validate(a) for a in SAMPLE_ASSETS],
        [PredictiveAlert.model_validate(a) for a in SAMPLE_ALERTS],
        [],
    )


async def load_dataset(
    store: KVStore,
    *,
    assets: list[Asset],
    alerts: list[PredictiveAlert],
    work_orders: list[WorkOrder],
    replace: bool = True,
) -> DatasetStats:
    """Write a dataset to the store, optionally clearing existing records first."""
    asset_repo = AssetRepository(store)
    alert_repo = AlertRepository(store)
    work_order_repo = WorkOrderRepository(store)

    if replace:
        cleared = (await asset_repo.clear() + await alert_repo.clear()
                   + await work_order_repo.clear())
        logger.info("Cleared %d existing demo records", cleared)

    logger.info("Storing %d assets, %d alerts, %d work orders",
                len(assets), len(alerts), len(work_orders))
    await asset_repo.save_many(assets)
    await alert_repo.save_many(alerts)
    await work_order_repo.save_many(work_orders)
    return DatasetStats(assets=len(assets), alerts=len(alerts), work_orders=len(work_orders))
