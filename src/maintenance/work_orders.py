"""Work-order lifecycle.

    pending -> in_progress -> completed
    pending | in_progress  -> cancelled

Transitions are caller-directed and may skip ahead (pending -> completed).
completed and cancelled are terminal. Entering completed stamps the
completion fields.

Creating an order that references an alert marks that alert addressed.
The alert update is best-effort: a missing alert is skipped, and two
orders racing on the same alert leave whichever write landed last.
"""

import logging
from datetime import datetime

from src.models.common import WorkOrderStatus, epoch_millis, utc_now
from src.models.work_order import WorkOrder, WorkOrderCreate, WorkOrderStatusUpdate
from src.repositories.alerts import AlertRepository
from src.repositories.work_orders import WorkOrderRepository

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS: dict[WorkOrderStatus, frozenset[WorkOrderStatus]] = {
    WorkOrderStatus.PENDING: frozenset({
        WorkOrderStatus.PENDING,
        WorkOrderStatus.IN_PROGRESS,
        WorkOrderStatus.COMPLETED,
        WorkOrderStatus.CANCELLED,
    }),
    WorkOrderStatus.IN_PROGRESS: frozenset({
        WorkOrderStatus.IN_PROGRESS,
        WorkOrderStatus.COMPLETED,
        WorkOrderStatus.CANCELLED,
    }),
    WorkOrderStatus.COMPLETED: frozenset(),
    WorkOrderStatus.CANCELLED: frozenset(),
}


class WorkOrderTransitionError(ValueError):
    """Raised for a status change the lifecycle does not allow."""

    def __init__(self, current: WorkOrderStatus, target: WorkOrderStatus) -> None:
        self.current = current
        self.target = target
        super().__init__(f"Cannot move work order from {current.value} to {target.value}")


def make_work_order_id(millis: int | None = None) -> str:
    return f"WO-{millis if millis is not None else epoch_millis()}"


def build_work_order(body: WorkOrderCreate, *, created_by: str | None,
                     now: datetime | None = None) -> WorkOrder:
    now = now or utc_now()
    record = body.to_record()
    record.update({
        "id": make_work_order_id(epoch_millis(now)),
        "created_by": created_by,
        "created_at": now.isoformat(),
        "createdDate": now.date().isoformat(),
    })
    return WorkOrder.model_validate(record)


async def create_work_order(
    body: WorkOrderCreate,
    *,
    created_by: str | None,
    work_orders: WorkOrderRepository,
    alerts: AlertRepository,
    now: datetime | None = None,
) -> WorkOrder:
    order = await work_orders.save(build_work_order(body, created_by=created_by, now=now))

    if order.alert_id:
        alert = await alerts.mark_addressed(order.alert_id, order.id)
        if alert is None:
            logger.info("Work order %s references missing alert %s; skipped",
                        order.id, order.alert_id)
    return order


def apply_status_update(order: WorkOrder, update: WorkOrderStatusUpdate,
                        now: datetime | None = None) -> WorkOrder:
    """Return a copy of ``order`` moved to ``update.status``."""
    if update.status not in ALLOWED_TRANSITIONS[order.status]:
        raise WorkOrderTransitionError(order.status, update.status)

    now = now or utc_now()
    changed = order.model_copy(deep=True)
    changed.status = update.status
    changed.updated_at = now
    if update.notes is not None:
        changed.notes = update.notes
    if update.actual_hours is not None:
        changed.actual_hours = update.actual_hours

    if update.status == WorkOrderStatus.COMPLETED:
        changed.completed_at = now
        changed.completed_date = now.date()
        if update.actual_cost is not None:
            changed.actual_cost = update.actual_cost
        elif changed.actual_cost is None:
            changed.actual_cost = (
                changed.cost if changed.cost is not None else changed.estimated_cost
            )
    return changed


async def update_work_order_status(
    work_order_id: str,
    update: WorkOrderStatusUpdate,
    *,
    work_orders: WorkOrderRepository,
    now: datetime | None = None,
) -> WorkOrder | None:
    """Apply a status change. Returns None when the order does not exist."""
    order = await work_orders.get(work_order_id)
    if order is None:
        return None
    return await work_orders.save(apply_status_update(order, update, now))
