"""Work-order records and their status state machine."""

from datetime import date

from pydantic import Field

from src.models.common import ElixRecord, UTCTimestamp, WorkOrderStatus

TERMINAL_STATUSES = frozenset({WorkOrderStatus.COMPLETED, WorkOrderStatus.CANCELLED})


class WorkOrder(ElixRecord):
    """A scheduled or completed maintenance action on an asset."""

    id: str
    asset_id: str | None = Field(default=None, alias="assetId")
    asset_name: str | None = Field(default=None, alias="assetName")
    title: str | None = None
    description: str | None = None
    type: str | None = None
    priority: str | None = None
    status: WorkOrderStatus = WorkOrderStatus.PENDING
    alert_id: str | None = Field(default=None, alias="alertId")
    assigned_to: str | None = Field(default=None, alias="assignedTo")
    cost: float | None = Field(default=None, ge=0.0)
    estimated_cost: float | None = Field(default=None, ge=0.0, alias="estimatedCost")
    actual_cost: float | None = Field(default=None, ge=0.0, alias="actualCost")
    estimated_hours: float | None = Field(default=None, ge=0.0, alias="estimatedHours")
    actual_hours: float | None = Field(default=None, ge=0.0, alias="actualHours")
    created_date: date | None = Field(default=None, alias="createdDate")
    due_date: date | None = Field(default=None, alias="dueDate")
    completed_date: date | None = Field(default=None, alias="completedDate")
    completed_at: UTCTimestamp | None = None
    notes: str | None = None
    created_by: str | None = None
    created_at: UTCTimestamp | None = None
    updated_at: UTCTimestamp | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def created_on(self) -> date | None:
        """Day the order was raised: created_at, falling back to createdDate."""
        if self.created_at is not None:
            return self.created_at.date()
        return self.created_date


class WorkOrderCreate(ElixRecord):
    """Body of POST /work-orders."""

    asset_id: str = Field(..., min_length=1, alias="assetId")
    asset_name: str | None = Field(default=None, alias="assetName")
    title: str | None = None
    description: str | None = None
    type: str | None = None
    priority: str | None = None
    status: WorkOrderStatus = WorkOrderStatus.PENDING
    alert_id: str | None = Field(default=None, alias="alertId")
    assigned_to: str | None = Field(default=None, alias="assignedTo")
    cost: float | None = Field(default=None, ge=0.0)
    estimated_cost: float | None = Field(default=None, ge=0.0, alias="estimatedCost")
    estimated_hours: float | None = Field(default=None, ge=0.0, alias="estimatedHours")
    due_date: date | None = Field(default=None, alias="dueDate")


class WorkOrderStatusUpdate(ElixRecord):
    """Body of PUT /work-orders/{id}/status."""

    status: WorkOrderStatus
    notes: str | None = None
    actual_cost: float | None = Field(default=None, ge=0.0, alias="actualCost")
    actual_hours: float | None = Field(default=None, ge=0.0, alias="actualHours")
