"""Predictive alert endpoints.

GET  /alerts : all alerts, ranked for display
POST /alerts : create an active alert (id = PA-<epoch ms>)
POST /alerts/{alert_id}/acknowledge : mark acknowledged by the caller
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from src.api.dependencies import get_alert_repo, require_user
from src.api.errors import record_errors, store_errors
from src.auth.identity import IdentityUser
from src.models.alert import AlertCreate, PredictiveAlert
from src.models.common import AlertStatus, epoch_millis, utc_now
from src.performance.ranking import rank_alerts
from src.repositories.alerts import AlertRepository

router = APIRouter(prefix="/alerts", tags=["alerts"])


class AcknowledgeRequest(BaseModel):
    notes: str | None = None


class AlertListResponse(BaseModel):
    alerts: list[dict[str, Any]]


class AlertResponse(BaseModel):
    alert: dict[str, Any]
    message: str


@router.get("", response_model=AlertListResponse)
async def list_alerts(
    user: IdentityUser = Depends(require_user),
    repo: AlertRepository = Depends(get_alert_repo),
) -> AlertListResponse:
    with store_errors("fetching alerts"):
        alerts = await repo.list_all()
    return AlertListResponse(alerts=[a.to_record() for a in rank_alerts(alerts)])


@router.post("", status_code=201, response_model=AlertResponse)
async def create_alert(
    body: AlertCreate,
    user: IdentityUser = Depends(require_user),
    repo: AlertRepository = Depends(get_alert_repo),
) -> AlertResponse:
    now = utc_now()
    record = body.to_record()
    record.update({
        "id": f"PA-{epoch_millis(now)}",
        "created_by": user.id,
        "created_at": now.isoformat(),
        "status": AlertStatus.ACTIVE.value,
    })
    with record_errors():
        alert = PredictiveAlert.model_validate(record)
    with store_errors("creating alert"):
        await repo.save(alert)
    return AlertResponse(alert=alert.to_record(), message="Alert created successfully")


@router.post("/{alert_id}/acknowledge", response_model=AlertResponse)
async def acknowledge_alert(
    alert_id: str,
    body: AcknowledgeRequest,
    user: IdentityUser = Depends(require_user),
    repo: AlertRepository = Depends(get_alert_repo),
) -> AlertResponse:
    with store_errors("fetching alert"):
        alert = await repo.get(alert_id)
    if alert is None:
        raise HTTPException(status_code=404, detail="Alert not found")

    now = utc_now()
    alert.status = AlertStatus.ACKNOWLEDGED
    alert.acknowledged_by = user.id
    alert.acknowledged_at = now
    alert.updated_at = now
    if body.notes:
        alert.acknowledgement_notes = body.notes
    with store_errors("acknowledging alert"):
        await repo.save(alert)
    return AlertResponse(alert=alert.to_record(), message="Alert acknowledged")
