"""Tests for signup, profile and demo-user endpoints."""

import pytest
from httpx import AsyncClient

from src.auth.identity import IdentityProviderError
from src.config.settings import Settings, get_settings
from src.models.user import UserProfile
from src.repositories.kv_store import KVStore
from src.repositories.users import UserProfileRepository


class TestSignup:
    @pytest.mark.anyio
    async def test_signup_creates_user_and_profile(self, client: AsyncClient, store: KVStore,
                                                   identity) -> None:
        resp = await client.post("/auth/signup", json={
            "email": "new@elix.com", "password": "secret1", "name": "New Manager",
        })
        assert resp.status_code == 200
        user = resp.json()["user"]
        assert user["email"] == "new@elix.com"
        assert identity.created[0]["metadata"] == {"name": "New Manager", "role": "site_manager"}

        profile = await UserProfileRepository(store).get(user["id"])
        assert profile is not None
        assert profile.name == "New Manager"
        assert profile.role == "site_manager"

    @pytest.mark.anyio
    async def test_signup_with_role(self, client: AsyncClient, identity) -> None:
        await client.post("/auth/signup", json={
            "email": "ops@elix.com", "password": "secret1", "name": "Ops", "role": "admin",
        })
        assert identity.created[0]["metadata"]["role"] == "admin"

    @pytest.mark.anyio
    async def test_provider_failure_is_400(self, client: AsyncClient, identity) -> None:
        identity.fail_with = IdentityProviderError("Password should be stronger")
        resp = await client.post("/auth/signup", json={
            "email": "x@elix.com", "password": "secret1",
        })
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Signup failed: Password should be stronger"

    @pytest.mark.anyio
    async def test_duplicate_email_is_400(self, client: AsyncClient) -> None:
        resp = await client.post("/auth/signup", json={
            "email": "manager@elix.com", "password": "secret1",
        })
        assert resp.status_code == 400
        assert resp.json()["detail"].startswith("Signup failed:")

    @pytest.mark.anyio
    async def test_short_password_is_422(self, client: AsyncClient) -> None:
        resp = await client.post("/auth/signup", json={"email": "x@elix.com", "password": "1"})
        assert resp.status_code == 422


class TestProfile:
    @pytest.mark.anyio
    async def test_profile(self, client: AsyncClient, store: KVStore,
                           auth_headers: dict) -> None:
        await UserProfileRepository(store).save(
            UserProfile(id="user-1", email="manager@elix.com", name="Site Manager"),
        )
        resp = await client.get("/auth/profile", headers=auth_headers)
        assert resp.status_code == 200
        assert resp.json()["profile"]["name"] == "Site Manager"

    @pytest.mark.anyio
    async def test_profile_missing(self, client: AsyncClient, auth_headers: dict) -> None:
        resp = await client.get("/auth/profile", headers=auth_headers)
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Profile not found"

    @pytest.mark.anyio
    async def test_profile_requires_auth(self, client: AsyncClient) -> None:
        assert (await client.get("/auth/profile")).status_code == 401


class TestDemoUser:
    @pytest.mark.anyio
    async def test_idempotent(self, client: AsyncClient, identity) -> None:
        first = await client.post("/auth/demo-user")
        assert first.status_code == 200
        assert first.json()["message"] == "Demo user created successfully"
        assert first.json()["user"]["email"] == "demo@elix.com"

        second = await client.post("/auth/demo-user")
        assert second.status_code == 200
        assert second.json()["message"] == "Demo user already exists"
        assert len(identity.created) == 1

    @pytest.mark.anyio
    async def test_provisioned_as_operations_director(self, client: AsyncClient, store: KVStore,
                                                      identity) -> None:
        resp = await client.post("/auth/demo-user")
        assert identity.created[0]["metadata"] == {
            "name": "Operations Director", "role": "operations_director",
        }
        profile = await UserProfileRepository(store).get(resp.json()["user"]["id"])
        assert profile.name == "Operations Director"
        assert profile.role == "operations_director"

    @pytest.mark.anyio
    async def test_identity_from_settings(self, client: AsyncClient, identity) -> None:
        from src.api.main import app

        app.dependency_overrides[get_settings] = lambda: Settings(
            DEMO_USER_EMAIL="ops@elix.com", DEMO_USER_NAME="Site Lead",
            DEMO_USER_ROLE="site_manager",
        )
        resp = await client.post("/auth/demo-user")
        assert resp.json()["user"]["email"] == "ops@elix.com"
        assert identity.created[0]["metadata"] == {"name": "Site Lead", "role": "site_manager"}
