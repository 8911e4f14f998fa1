"""Shared types, enums, and base models used across Elix record models."""

from datetime import datetime, timezone
from enum import StrEnum
from typing import Annotated, Any
from uuid import UUID

from pydantic import AfterValidator, BaseModel, Field
from uuid_extensions import uuid7


def utc_now() -> datetime:
    """Return the current UTC timestamp (timezone-aware)."""
    return datetime.now(tz=timezone.utc)


def new_uuid7() -> UUID:
    """Generate a new time-sortable UUID v7."""
    return uuid7()


def epoch_millis(moment: datetime | None = None) -> int:
    """Milliseconds since the epoch, used as the suffix of generated record ids."""
    moment = moment or utc_now()
    return int(moment.timestamp() * 1000)


# --- Reusable annotated types ---

def as_utc(value: datetime) -> datetime:
    """Read a naive timestamp as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


UTCTimestamp = Annotated[
    datetime,
    AfterValidator(as_utc),
    Field(description="UTC timezone-aware timestamp."),
]
Percentage = Annotated[float, Field(ge=0.0, le=100.0)]


# --- Shared enums ---


class AssetStatus(StrEnum):
    """Operating status of an asset.

    HEALTHY is the legacy spelling of OPERATIONAL still written by the
    basic sample dataset.
    """

    OPERATIONAL = "operational"
    HEALTHY = "healthy"
    WARNING = "warning"
    CRITICAL = "critical"
    MAINTENANCE = "maintenance"
    OFFLINE = "offline"
    RETIRED = "retired"


class Criticality(StrEnum):
    """Business criticality tier of an asset."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class AlertPriority(StrEnum):
    """Priority tier of a predictive alert."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


PRIORITY_ORDINAL: dict[AlertPriority, int] = {
    AlertPriority.CRITICAL: 3,
    AlertPriority.HIGH: 2,
    AlertPriority.MEDIUM: 1,
    AlertPriority.LOW: 0,
}


class AlertStatus(StrEnum):
    """Lifecycle status of a predictive alert."""

    ACTIVE = "active"
    ACKNOWLEDGED = "acknowledged"
    ADDRESSED = "addressed"
    RESOLVED = "resolved"


class WorkOrderStatus(StrEnum):
    """Work-order lifecycle states."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# --- Base models ---


class ElixBase(BaseModel):
    """Base model with common configuration for all Elix Pydantic models."""

    model_config = {
        "populate_by_name": True,
        "protected_namespaces": (),
    }


class ElixRecord(ElixBase):
    """A flat JSON record held in the key-value store.

    Unknown fields are kept so ad hoc attributes (supplier, serialNumber,
    sensor readings) survive a read-modify-write cycle.
    """

    model_config = {"extra": "allow"}

    def to_record(self) -> dict[str, Any]:
        """Serialize to the JSON shape stored in the key-value store."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
