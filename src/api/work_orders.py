"""Work-order endpoints.

POST /work-orders : create; marks a referenced alert addressed
GET  /work-orders/asset/{asset_id} : orders for one asset, newest first
PUT  /work-orders/{work_order_id}/status : lifecycle transition
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from src.api.dependencies import get_alert_repo, get_work_order_repo, require_user
from src.api.errors import record_errors, store_errors
from src.auth.identity import IdentityUser
from src.maintenance.work_orders import (
    WorkOrderTransitionError,
    create_work_order,
    update_work_order_status,
)
from src.models.work_order import WorkOrderCreate, WorkOrderStatusUpdate
from src.repositories.alerts import AlertRepository
from src.repositories.work_orders import WorkOrderRepository

router = APIRouter(prefix="/work-orders", tags=["work-orders"])


class WorkOrderResponse(BaseModel):
    model_config = {"populate_by_name": True}

    work_order: dict[str, Any] = Field(alias="workOrder")
    message: str


class WorkOrderListResponse(BaseModel):
    model_config = {"populate_by_name": True}

    work_orders: list[dict[str, Any]] = Field(alias="workOrders")


@router.post("", status_code=201, response_model=WorkOrderResponse)
async def create(
    body: WorkOrderCreate,
    user: IdentityUser = Depends(require_user),
    work_orders: WorkOrderRepository = Depends(get_work_order_repo),
    alerts: AlertRepository = Depends(get_alert_repo),
) -> WorkOrderResponse:
    with record_errors(), store_errors("creating work order"):
        order = await create_work_order(
            body, created_by=user.id, work_orders=work_orders, alerts=alerts,
        )
    return WorkOrderResponse(work_order=order.to_record(),
                             message="Work order created successfully")


@router.get("/asset/{asset_id}", response_model=WorkOrderListResponse)
async def list_for_asset(
    asset_id: str,
    user: IdentityUser = Depends(require_user),
    work_orders: WorkOrderRepository = Depends(get_work_order_repo),
) -> WorkOrderListResponse:
    with store_errors("fetching work orders"):
        orders = await work_orders.list_for_asset(asset_id)
    return WorkOrderListResponse(work_orders=[wo.to_record() for wo in orders])


@router.put("/{work_order_id}/status", response_model=WorkOrderResponse)
async def update_status(
    work_order_id: str,
    body: WorkOrderStatusUpdate,
    user: IdentityUser = Depends(require_user),
    work_orders: WorkOrderRepository = Depends(get_work_order_repo),
) -> WorkOrderResponse:
    try:
        with store_errors("updating work order status"):
            order = await update_work_order_status(work_order_id, body, work_orders=work_orders)
    except WorkOrderTransitionError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    if order is None:
        raise HTTPException(status_code=404, detail="Work order not found")
    return WorkOrderResponse(work_order=order.to_record(),
                             message=f"Work order moved to {order.status.value}")
