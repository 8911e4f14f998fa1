"""Work-order repository."""

from src.models.work_order import WorkOrder
from src.repositories.base import RecordRepository


def _created_key(order: WorkOrder) -> float:
    if order.created_at is None:
        return float("-inf")
    return order.created_at.timestamp()


class WorkOrderRepository(RecordRepository[WorkOrder]):
    prefix = "work_order:"
    model = WorkOrder

    async def list_for_asset(self, asset_id: str) -> list[WorkOrder]:
        """Work orders for one asset, newest created_at first."""
        orders = [wo for wo in await self.list_all() if wo.asset_id == asset_id]
        return sorted(orders, key=_created_key, reverse=True)
