"""Shared pytest fixtures for the Elix test suite.

Provides:
- db_engine: in-memory SQLite async engine with the kv_store table
- db_session: SAVEPOINT-isolated async session (app commits don't leak)
- store: KVStore over db_session
- identity: in-memory identity provider with one known token
- client: AsyncClient with session and identity provider overridden
- auth_headers: bearer header for the known token
"""

from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from src.auth.identity import IdentityProviderError, IdentityUser, UserAlreadyExistsError
from src.db.session import Base, get_async_session
from src.repositories.kv_store import KVStore
import src.db.tables  # noqa: F401 register KVStoreRow on Base.metadata

VALID_TOKEN = "valid-token"
TEST_USER_ID = "user-1"


class FakeIdentityProvider:
    """Stands in for the identity provider; knows one token per user."""

    def __init__(self) -> None:
        self.users: dict[str, IdentityUser] = {
            VALID_TOKEN: IdentityUser(id=TEST_USER_ID, email="manager@elix.com",
                                      metadata={"name": "Site Manager"}),
        }
        self.created: list[dict[str, Any]] = []
        self.fail_with: IdentityProviderError | None = None

    async def get_user(self, access_token: str) -> IdentityUser | None:
        if self.fail_with is not None:
            raise self.fail_with
        return self.users.get(access_token)

    async def create_user(self, *, email: str, password: str,
                          metadata: dict[str, Any]) -> IdentityUser:
        if self.fail_with is not None:
            raise self.fail_with
        if any(u.email == email for u in self.users.values()):
            raise UserAlreadyExistsError("A user with this email address has already been registered", 422)
        user = IdentityUser(id=f"user-{len(self.users) + 1}", email=email, metadata=metadata)
        self.users[f"token-{user.id}"] = user
        self.created.append({"email": email, "password": password, "metadata": metadata})
        return user


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
async def db_engine():
    """Create an in-memory SQLite async engine with all tables."""
    eng = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
async def db_session(db_engine):
    """Provide a SAVEPOINT-isolated session.

    The outer transaction is never committed; it rolls back at teardown.
    Application code calling session.commit() triggers a SAVEPOINT release,
    which is then restarted so subsequent operations stay in the same
    outer transaction.
    """
    async with db_engine.connect() as conn:
        trans = await conn.begin()
        session = AsyncSession(bind=conn, expire_on_commit=False)

        nested = await conn.begin_nested()

        @event.listens_for(session.sync_session, "after_transaction_end")
        def restart_savepoint(sync_session, transaction):  # noqa: ARG001
            nonlocal nested
            if transaction.nested and not transaction._parent.nested:
                nested = conn.sync_connection.begin_nested()

        yield session

        await session.close()
        await trans.rollback()


@pytest.fixture
def store(db_session) -> KVStore:
    return KVStore(db_session)


@pytest.fixture
def identity() -> FakeIdentityProvider:
    return FakeIdentityProvider()


@pytest.fixture
async def client(db_session, identity):
    """AsyncClient with the DB session and identity provider overridden."""
    from src.api.dependencies import get_identity_provider
    from src.api.main import app

    async def _override_session():
        yield db_session

    app.dependency_overrides[get_async_session] = _override_session
    app.dependency_overrides[get_identity_provider] = lambda: identity

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {VALID_TOKEN}"}
