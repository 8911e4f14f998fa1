"""Tests for work-order creation and status transitions."""

import warnings
from datetime import date, datetime, timezone
from pathlib import Path

import pytest

import src.maintenance.work_orders as lifecycle_module
from src.maintenance.work_orders import (
    ALLOWED_TRANSITIONS,
    WorkOrderTransitionError,
    apply_status_update,
    build_work_order,
    create_work_order,
    make_work_order_id,
    update_work_order_status,
)
from src.models.alert import PredictiveAlert
from src.models.common import AlertStatus, WorkOrderStatus
from src.models.work_order import WorkOrder, WorkOrderCreate, WorkOrderStatusUpdate
from src.repositories.alerts import AlertRepository
from src.repositories.kv_store import KVStore
from src.repositories.work_orders import WorkOrderRepository

NOW = datetime(2024, 6, 15, 9, 30, tzinfo=timezone.utc)


def _update(status: str, **fields) -> WorkOrderStatusUpdate:
    return WorkOrderStatusUpdate.model_validate({"status": status, **fields})


class TestBuild:
    def test_id_from_epoch_millis(self) -> None:
        assert make_work_order_id(1718443800000) == "WO-1718443800000"

    def test_build_stamps_creation_fields(self) -> None:
        body = WorkOrderCreate.model_validate({"assetId": "HM-002", "title": "Inspect pump"})
        order = build_work_order(body, created_by="user-1", now=NOW)
        assert order.id == f"WO-{int(NOW.timestamp() * 1000)}"
        assert order.status == WorkOrderStatus.PENDING
        assert order.created_by == "user-1"
        assert order.created_at == NOW
        assert order.created_date == date(2024, 6, 15)


class TestTransitions:
    def test_terminal_states_allow_nothing(self) -> None:
        assert ALLOWED_TRANSITIONS[WorkOrderStatus.COMPLETED] == frozenset()
        assert ALLOWED_TRANSITIONS[WorkOrderStatus.CANCELLED] == frozenset()

    def test_pending_to_in_progress(self) -> None:
        order = WorkOrder(id="WO-1")
        changed = apply_status_update(order, _update("in_progress"), NOW)
        assert changed.status == WorkOrderStatus.IN_PROGRESS
        assert changed.completed_at is None
        assert order.status == WorkOrderStatus.PENDING

    def test_skip_to_completed_stamps_completion(self) -> None:
        order = WorkOrder(id="WO-1", cost=1_200)
        changed = apply_status_update(order, _update("completed", actualHours=3), NOW)
        assert changed.completed_at == NOW
        assert changed.completed_date == date(2024, 6, 15)
        assert changed.actual_cost == 1_200
        assert changed.actual_hours == 3

    def test_actual_cost_falls_back_to_estimate(self) -> None:
        order = WorkOrder(id="WO-1", estimated_cost=800)
        assert apply_status_update(order, _update("completed"), NOW).actual_cost == 800

    def test_supplied_actual_cost_wins(self) -> None:
        order = WorkOrder(id="WO-1", cost=1_200)
        changed = apply_status_update(order, _update("completed", actualCost=950), NOW)
        assert changed.actual_cost == 950

    def test_cancel_from_in_progress(self) -> None:
        order = WorkOrder(id="WO-1", status="in_progress")
        changed = apply_status_update(order, _update("cancelled", notes="Asset retired"), NOW)
        assert changed.status == WorkOrderStatus.CANCELLED
        assert changed.notes == "Asset retired"

    @pytest.mark.parametrize("terminal", ["completed", "cancelled"])
    @pytest.mark.parametrize("target", ["pending", "in_progress", "completed", "cancelled"])
    def test_no_transition_out_of_terminal(self, terminal: str, target: str) -> None:
        with pytest.raises(WorkOrderTransitionError):
            apply_status_update(WorkOrder(id="WO-1", status=terminal), _update(target), NOW)

    def test_in_progress_cannot_return_to_pending(self) -> None:
        with pytest.raises(WorkOrderTransitionError):
            apply_status_update(WorkOrder(id="WO-1", status="in_progress"), _update("pending"), NOW)


class TestCreateWorkOrder:
    @pytest.mark.anyio
    async def test_marks_referenced_alert_addressed(self, store: KVStore) -> None:
        alerts = AlertRepository(store)
        work_orders = WorkOrderRepository(store)
        await alerts.save(PredictiveAlert(id="PA-001", priority="high", risk_percentage=85))

        body = WorkOrderCreate.model_validate({"assetId": "HM-002", "alertId": "PA-001"})
        order = await create_work_order(body, created_by="user-1", work_orders=work_orders,
                                        alerts=alerts, now=NOW)

        assert await work_orders.get(order.id) is not None
        alert = await alerts.get("PA-001")
        assert alert.status == AlertStatus.ADDRESSED
        assert alert.work_order_id == order.id

    @pytest.mark.anyio
    async def test_missing_alert_is_skipped(self, store: KVStore) -> None:
        alerts = AlertRepository(store)
        work_orders = WorkOrderRepository(store)
        body = WorkOrderCreate.model_validate({"assetId": "HM-002", "alertId": "PA-404"})

        order = await create_work_order(body, created_by=None, work_orders=work_orders,
                                        alerts=alerts, now=NOW)

        assert await work_orders.get(order.id) is not None
        assert await alerts.get("PA-404") is None

    @pytest.mark.anyio
    async def test_without_alert_leaves_alerts_untouched(self, store: KVStore) -> None:
        alerts = AlertRepository(store)
        await alerts.save(PredictiveAlert(id="PA-001"))
        body = WorkOrderCreate.model_validate({"assetId": "HM-002"})
        await create_work_order(body, created_by=None, work_orders=WorkOrderRepository(store),
                                alerts=alerts, now=NOW)
        assert (await alerts.get("PA-001")).status == AlertStatus.ACTIVE


class TestUpdateStatus:
    @pytest.mark.anyio
    async def test_missing_order_returns_none(self, store: KVStore) -> None:
        result = await update_work_order_status(
            "WO-404", _update("completed"), work_orders=WorkOrderRepository(store), now=NOW,
        )
        assert result is None

    @pytest.mark.anyio
    async def test_persists_transition(self, store: KVStore) -> None:
        repo = WorkOrderRepository(store)
        await repo.save(WorkOrder(id="WO-1", asset_id="A"))
        await update_work_order_status("WO-1", _update("in_progress"), work_orders=repo, now=NOW)
        assert (await repo.get("WO-1")).status == WorkOrderStatus.IN_PROGRESS


class TestModuleSource:
    def test_compiles_without_warnings(self) -> None:
        source = Path(lifecycle_module.__file__).read_text(encoding="utf-8")
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            compile(source, lifecycle_module.__file__, "exec")
