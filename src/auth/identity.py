"""Identity provider client: token validation and account creation.

Credentials never touch Elix: bearer tokens are checked against the
Supabase Auth (GoTrue) REST API and new accounts are created through its
admin endpoint with the service-role key.

    GET  {SUPABASE_URL}/auth/v1/user : resolve a bearer token
    POST {SUPABASE_URL}/auth/v1/admin/users : create a confirmed user
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

import httpx

from src.config.settings import Settings

logger = logging.getLogger(__name__)


@dataclass
class IdentityUser:
    """A user as reported by the identity provider."""

    id: str
    email: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)
    created_at: str | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "IdentityUser":
        return cls(
            id=str(payload["id"]),
            email=payload.get("email") or "",
            metadata=payload.get("user_metadata") or {},
            created_at=payload.get("created_at"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "email": self.email,
            "user_metadata": self.metadata,
            "created_at": self.created_at,
        }


class IdentityProviderError(Exception):
    """The identity provider rejected a request or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UserAlreadyExistsError(IdentityProviderError):
    """Account creation failed because the email is already registered."""


class IdentityProvider(Protocol):
    async def get_user(self, access_token: str) -> IdentityUser | None: ...

    async def create_user(self, *, email: str, password: str,
                          metadata: dict[str, Any]) -> IdentityUser: ...


class SupabaseIdentityProvider:
    """GoTrue REST client. One short-lived httpx client per call."""

    def __init__(
        self,
        base_url: str,
        service_key: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/") + "/auth/v1"
        self._service_key = service_key
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "SupabaseIdentityProvider":
        return cls(
            settings.SUPABASE_URL,
            settings.SUPABASE_SERVICE_ROLE_KEY,
            timeout=settings.IDENTITY_TIMEOUT_SECONDS,
        )

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
            headers={"apikey": self._service_key},
        )

    async def get_user(self, access_token: str) -> IdentityUser | None:
        """Resolve a bearer token. Returns None when the token is rejected."""
        try:
            async with self._client() as client:
                resp = await client.get(
                    "/user", headers={"Authorization": f"Bearer {access_token}"},
                )
        except httpx.HTTPError as exc:
            raise IdentityProviderError(f"Identity provider unreachable: {exc}") from exc

        if resp.status_code in (401, 403):
            return None
        if resp.status_code >= 400:
            raise IdentityProviderError(_error_message(resp), resp.status_code)

        payload = resp.json()
        if not payload.get("id"):
            return None
        return IdentityUser.from_payload(payload)

    async def create_user(self, *, email: str, password: str,
                          metadata: dict[str, Any]) -> IdentityUser:
        """Create a user with email pre-confirmed (no mail server configured)."""
        try:
            async with self._client() as client:
                resp = await client.post(
                    "/admin/users",
                    headers={"Authorization": f"Bearer {self._service_key}"},
                    json={
                        "email": email,
                        "password": password,
                        "user_metadata": metadata,
                        "email_confirm": True,
                    },
                )
        except httpx.HTTPError as exc:
            raise IdentityProviderError(f"Identity provider unreachable: {exc}") from exc

        if resp.status_code >= 400:
            message = _error_message(resp)
            if resp.status_code in (409, 422) and "already" in message.lower():
                raise UserAlreadyExistsError(message, resp.status_code)
            raise IdentityProviderError(message, resp.status_code)

        payload = resp.json()
        # Older GoTrue releases wrap the user object.
        user = payload.get("user", payload)
        logger.info("Created identity-provider user %s", user.get("id"))
        return IdentityUser.from_payload(user)


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or f"HTTP {resp.status_code}"
    if isinstance(body, dict):
        for key in ("msg", "message", "error_description", "error"):
            if body.get(key):
                return str(body[key])
    return f"HTTP {resp.status_code}"
