"""Predictive alert records: forecasted equipment issues."""

from pydantic import Field

from src.models.common import (
    PRIORITY_ORDINAL,
    AlertPriority,
    AlertStatus,
    ElixRecord,
    Percentage,
    UTCTimestamp,
)


class PredictiveAlert(ElixRecord):
    """A forecasted failure for an asset.

    ``asset_id`` is a soft reference; nothing checks that the asset exists.
    """

    id: str
    asset_id: str | None = Field(default=None, alias="assetId")
    asset_name: str | None = Field(default=None, alias="assetName")
    risk_percentage: Percentage = Field(default=0.0, alias="riskPercentage")
    priority: AlertPriority = AlertPriority.LOW
    status: AlertStatus = AlertStatus.ACTIVE
    recommendation: str = ""
    timeframe: str | None = None
    category: str | None = None
    potential_cost_impact: float | None = Field(default=None, alias="potentialCostImpact")
    confidence_level: Percentage | None = Field(default=None, alias="confidenceLevel")
    work_order_id: str | None = None
    acknowledged_by: str | None = None
    acknowledged_at: UTCTimestamp | None = None
    acknowledgement_notes: str | None = Field(default=None, alias="acknowledgementNotes")
    created_by: str | None = None
    created_at: UTCTimestamp | None = None
    updated_at: UTCTimestamp | None = None

    @property
    def priority_ordinal(self) -> int:
        return PRIORITY_ORDINAL[self.priority]

    @property
    def is_active_critical(self) -> bool:
        return self.priority == AlertPriority.CRITICAL and self.status == AlertStatus.ACTIVE


class AlertCreate(ElixRecord):
    """Body of POST /alerts. Status is always forced to active on creation."""

    asset_id: str = Field(..., min_length=1, alias="assetId")
    asset_name: str | None = Field(default=None, alias="assetName")
    risk_percentage: Percentage = Field(..., alias="riskPercentage")
    priority: AlertPriority
    recommendation: str = ""
    timeframe: str | None = None
    category: str | None = None
    potential_cost_impact: float | None = Field(default=None, alias="potentialCostImpact")
    confidence_level: Percentage | None = Field(default=None, alias="confidenceLevel")
