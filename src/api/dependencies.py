"""FastAPI dependency injection factories.

The key-value store wraps the request's AsyncSession; record repositories
wrap the store. Endpoints receive all of them via Depends(), so tests can
swap the session or the identity provider without touching handlers.
"""

import logging

from fastapi import Depends, Header, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.identity import (
    IdentityProvider,
    IdentityProviderError,
    IdentityUser,
    SupabaseIdentityProvider,
)
from src.config.settings import Settings, get_settings
from src.db.session import get_async_session
from src.repositories.alerts import AlertRepository
from src.repositories.assets import AssetRepository
from src.repositories.kv_store import KVStore
from src.repositories.users import UserProfileRepository
from src.repositories.work_orders import WorkOrderRepository

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


async def get_kv_store(
    session: AsyncSession = Depends(get_async_session),
) -> KVStore:
    return KVStore(session)


async def get_asset_repo(store: KVStore = Depends(get_kv_store)) -> AssetRepository:
    return AssetRepository(store)


async def get_alert_repo(store: KVStore = Depends(get_kv_store)) -> AlertRepository:
    return AlertRepository(store)


async def get_work_order_repo(store: KVStore = Depends(get_kv_store)) -> WorkOrderRepository:
    return WorkOrderRepository(store)


async def get_user_profile_repo(store: KVStore = Depends(get_kv_store)) -> UserProfileRepository:
    return UserProfileRepository(store)


# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------


def get_identity_provider(
    settings: Settings = Depends(get_settings),
) -> IdentityProvider:
    return SupabaseIdentityProvider.from_settings(settings)


async def require_user(
    authorization: str | None = Header(default=None),
    provider: IdentityProvider = Depends(get_identity_provider),
) -> IdentityUser:
    """Resolve the bearer token to a user or fail with 401."""
    parts = (authorization or "").split(" ")
    token = parts[1] if len(parts) > 1 else ""
    if not token:
        raise HTTPException(status_code=401, detail="No access token provided")

    try:
        user = await provider.get_user(token)
    except IdentityProviderError as exc:
        logger.warning("Token validation failed: %s", exc)
        user = None
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    return user


# ---------------------------------------------------------------------------
# Demo mode
# ---------------------------------------------------------------------------


def require_demo_mode(settings: Settings = Depends(get_settings)) -> Settings:
    if not settings.DEMO_ENDPOINTS_ENABLED:
        raise HTTPException(status_code=404, detail="Not Found")
    return settings
