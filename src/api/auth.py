"""Account endpoints.

POST /auth/signup : create an identity-provider user plus its profile
GET  /auth/profile : the caller's stored profile
POST /auth/demo-user : ensure the shared demo account exists
"""

from typing import Any

import structlog
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from src.api.dependencies import get_identity_provider, get_user_profile_repo, require_user
from src.api.errors import store_errors
from src.auth.identity import (
    IdentityProvider,
    IdentityProviderError,
    IdentityUser,
    UserAlreadyExistsError,
)
from src.config.settings import Settings, get_settings
from src.models.common import utc_now
from src.models.user import DEFAULT_ROLE, SignupRequest, UserProfile
from src.repositories.users import UserProfileRepository

router = APIRouter(prefix="/auth", tags=["auth"])

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


class SignupResponse(BaseModel):
    user: dict[str, Any]
    message: str


class ProfileResponse(BaseModel):
    profile: dict[str, Any]


class DemoUserResponse(BaseModel):
    message: str
    user: dict[str, Any]


@router.post("/signup", response_model=SignupResponse)
async def signup(
    body: SignupRequest,
    provider: IdentityProvider = Depends(get_identity_provider),
    profiles: UserProfileRepository = Depends(get_user_profile_repo),
) -> SignupResponse:
    role = body.role or DEFAULT_ROLE
    try:
        user = await provider.create_user(
            email=body.email,
            password=body.password,
            metadata={"name": body.name, "role": role},
        )
    except IdentityProviderError as exc:
        raise HTTPException(status_code=400, detail=f"Signup failed: {exc}") from exc

    profile = UserProfile(
        id=user.id,
        email=body.email,
        name=body.name,
        role=role,
        created_at=utc_now(),
    )
    with store_errors("creating profile"):
        await profiles.save(profile)
    logger.info("user_signed_up", user_id=user.id, role=role)
    return SignupResponse(user=user.to_dict(), message="User created successfully")


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(
    user: IdentityUser = Depends(require_user),
    profiles: UserProfileRepository = Depends(get_user_profile_repo),
) -> ProfileResponse:
    with store_errors("fetching profile"):
        profile = await profiles.get(user.id)
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return ProfileResponse(profile=profile.to_record())


@router.post("/demo-user", response_model=DemoUserResponse)
async def create_demo_user(
    settings: Settings = Depends(get_settings),
    provider: IdentityProvider = Depends(get_identity_provider),
    profiles: UserProfileRepository = Depends(get_user_profile_repo),
) -> DemoUserResponse:
    """Idempotent: an existing demo account is reported, not an error."""
    email = settings.DEMO_USER_EMAIL
    try:
        user = await provider.create_user(
            email=email,
            password=settings.DEMO_USER_PASSWORD,
            metadata={"name": settings.DEMO_USER_NAME, "role": settings.DEMO_USER_ROLE},
        )
    except UserAlreadyExistsError:
        return DemoUserResponse(message="Demo user already exists", user={"email": email})
    except IdentityProviderError as exc:
        raise HTTPException(status_code=500, detail=f"Error creating demo user: {exc}") from exc

    with store_errors("creating demo user"):
        await profiles.save(UserProfile(
            id=user.id, email=email, name=settings.DEMO_USER_NAME,
            role=settings.DEMO_USER_ROLE, created_at=utc_now(),
        ))
    return DemoUserResponse(message="Demo user created successfully", user=user.to_dict())
