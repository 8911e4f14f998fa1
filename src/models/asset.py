"""Asset records: monitored equipment at a regional site."""

import re

from pydantic import Field

from src.models.common import (
    AssetStatus,
    Criticality,
    ElixBase,
    ElixRecord,
    Percentage,
    UTCTimestamp,
    epoch_millis,
)

UNKNOWN_CATEGORY = "Unknown"


class Coordinates(ElixBase):
    lat: float
    lng: float


class Location(ElixRecord):
    """Site placement of an asset. Building/floor are free text."""

    site: str
    coordinates: Coordinates | None = None
    building: str | None = None
    floor: str | None = None


class Asset(ElixRecord):
    """A piece of equipment tracked by the dashboard."""

    id: str
    name: str = ""
    type: str | None = None
    category: str | None = None
    status: AssetStatus = AssetStatus.OPERATIONAL
    location: Location | None = None
    efficiency: Percentage | None = None
    criticality: Criticality | None = None
    value: float | None = Field(default=None, ge=0.0)
    created_by: str | None = None
    created_at: UTCTimestamp | None = None
    updated_at: UTCTimestamp | None = None

    @property
    def grouping_category(self) -> str:
        """Category used for uptime grouping: category, then type, then Unknown."""
        return self.category or self.type or UNKNOWN_CATEGORY


class AssetCreate(ElixRecord):
    """Body of POST /assets. The server assigns id and audit fields."""

    name: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)
    category: str | None = None
    status: AssetStatus = AssetStatus.OPERATIONAL
    location: Location | None = None
    efficiency: Percentage | None = None
    criticality: Criticality | None = None
    value: float | None = Field(default=None, ge=0.0)


class AssetUpdate(ElixRecord):
    """Body of PUT /assets/{id}. Only supplied fields are changed."""

    name: str | None = Field(default=None, min_length=1)
    type: str | None = Field(default=None, min_length=1)
    category: str | None = None
    status: AssetStatus | None = None
    location: Location | None = None
    efficiency: Percentage | None = None
    criticality: Criticality | None = None
    value: float | None = Field(default=None, ge=0.0)


def make_asset_id(asset_type: str, millis: int | None = None) -> str:
    """Build `<type>-<epoch ms>`, with the type lowercased and spaces hyphenated."""
    slug = re.sub(r"\s+", "-", asset_type.strip().lower())
    return f"{slug}-{millis if millis is not None else epoch_millis()}"
