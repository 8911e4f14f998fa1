"""Asset endpoints.

GET    /assets : all assets
GET    /assets/{asset_id} : one asset
POST   /assets : create (id = <type>-<epoch ms>)
PUT    /assets/{asset_id} : edit supplied fields
PATCH  /assets/{asset_id}/status : change status only
DELETE /assets/{asset_id} : remove the key
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from src.api.dependencies import get_asset_repo, require_user
from src.api.errors import record_errors, store_errors
from src.auth.identity import IdentityUser
from src.models.asset import Asset, AssetCreate, AssetUpdate, make_asset_id
from src.models.common import AssetStatus, epoch_millis, utc_now
from src.repositories.assets import AssetRepository

router = APIRouter(prefix="/assets", tags=["assets"])


# ---------------------------------------------------------------------------
# Request / Response schemas
# ---------------------------------------------------------------------------


class AssetStatusRequest(BaseModel):
    status: AssetStatus


class AssetListResponse(BaseModel):
    assets: list[dict[str, Any]]


class AssetResponse(BaseModel):
    asset: dict[str, Any]
    message: str | None = None


class DeleteResponse(BaseModel):
    success: bool
    message: str


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _get_or_404(repo: AssetRepository, asset_id: str) -> Asset:
    with store_errors("fetching asset"):
        asset = await repo.get(asset_id)
    if asset is None:
        raise HTTPException(status_code=404, detail="Asset not found")
    return asset


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.get("", response_model=AssetListResponse)
async def list_assets(
    user: IdentityUser = Depends(require_user),
    repo: AssetRepository = Depends(get_asset_repo),
) -> AssetListResponse:
    with store_errors("fetching assets"):
        assets = await repo.list_all()
    return AssetListResponse(assets=[a.to_record() for a in assets])


@router.get("/{asset_id}", response_model=AssetResponse)
async def get_asset(
    asset_id: str,
    user: IdentityUser = Depends(require_user),
    repo: AssetRepository = Depends(get_asset_repo),
) -> AssetResponse:
    asset = await _get_or_404(repo, asset_id)
    return AssetResponse(asset=asset.to_record())


@router.post("", status_code=201, response_model=AssetResponse)
async def create_asset(
    body: AssetCreate,
    user: IdentityUser = Depends(require_user),
    repo: AssetRepository = Depends(get_asset_repo),
) -> AssetResponse:
    now = utc_now()
    record = body.to_record()
    record.update({
        "id": make_asset_id(body.type, epoch_millis(now)),
        "created_by": user.id,
        "created_at": now.isoformat(),
        "updated_at": now.isoformat(),
    })
    with record_errors():
        asset = Asset.model_validate(record)
    with store_errors("creating asset"):
        await repo.save(asset)
    return AssetResponse(asset=asset.to_record(), message="Asset created successfully")


@router.put("/{asset_id}", response_model=AssetResponse)
async def update_asset(
    asset_id: str,
    body: AssetUpdate,
    user: IdentityUser = Depends(require_user),
    repo: AssetRepository = Depends(get_asset_repo),
) -> AssetResponse:
    """Merge the supplied fields into the stored asset. The id never changes."""
    current = await _get_or_404(repo, asset_id)
    record = current.to_record()
    record.update(body.model_dump(mode="json", by_alias=True, exclude_unset=True))
    record.update({"id": asset_id, "updated_at": utc_now().isoformat()})
    with record_errors():
        asset = Asset.model_validate(record)
    with store_errors("updating asset"):
        await repo.save(asset)
    return AssetResponse(asset=asset.to_record(), message="Asset updated successfully")


@router.patch("/{asset_id}/status", response_model=AssetResponse)
async def update_asset_status(
    asset_id: str,
    body: AssetStatusRequest,
    user: IdentityUser = Depends(require_user),
    repo: AssetRepository = Depends(get_asset_repo),
) -> AssetResponse:
    asset = await _get_or_404(repo, asset_id)
    asset.status = body.status
    asset.updated_at = utc_now()
    with store_errors("updating asset status"):
        await repo.save(asset)
    return AssetResponse(asset=asset.to_record(), message="Asset status updated")


@router.delete("/{asset_id}", response_model=DeleteResponse)
async def delete_asset(
    asset_id: str,
    user: IdentityUser = Depends(require_user),
    repo: AssetRepository = Depends(get_asset_repo),
) -> DeleteResponse:
    with store_errors("deleting asset"):
        removed = await repo.delete(asset_id)
    if not removed:
        raise HTTPException(status_code=404, detail="Asset not found")
    return DeleteResponse(success=True, message="Asset deleted successfully")
