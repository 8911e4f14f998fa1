"""Predictive alert repository."""

from src.models.alert import PredictiveAlert
from src.models.common import AlertStatus, utc_now
from src.repositories.base import RecordRepository


class AlertRepository(RecordRepository[PredictiveAlert]):
    prefix = "alert:"
    model = PredictiveAlert

    async def mark_addressed(self, alert_id: str, work_order_id: str) -> PredictiveAlert | None:
        """Flag an alert as addressed by a work order.

        Read-modify-write with no compare-and-swap: concurrent callers race
        and the last write wins. Returns None when the alert does not exist.
        """
        alert = await self.get(alert_id)
        if alert is None:
            return None
        alert.status = AlertStatus.ADDRESSED
        alert.work_order_id = work_order_id
        alert.updated_at = utc_now()
        return await self.save(alert)
