"""Async HTTP client for the Elix API.

One method per endpoint; each returns the unwrapped payload
(``list_assets()`` returns the list under ``assets``, and so on).
Non-2xx responses raise ElixAPIError carrying the status and the
``detail`` message; transport failures propagate as httpx.HTTPError.
Nothing is retried.
"""

import logging
from typing import Any

import httpx

from src.config.settings import Settings

logger = logging.getLogger(__name__)


class ElixAPIError(Exception):
    """The API answered with a non-2xx status."""

    def __init__(self, status_code: int, detail: str) -> None:
        super().__init__(f"HTTP {status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


class ElixClient:
    """Thin wrapper over an httpx.AsyncClient.

    Requests carry the user's access token when one is set, the public
    anon key otherwise. Use as an async context manager or call aclose().
    """

    def __init__(
        self,
        base_url: str,
        *,
        access_token: str | None = None,
        anon_key: str = "",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.access_token = access_token
        self._anon_key = anon_key
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings, access_token: str | None = None) -> "ElixClient":
        return cls(
            settings.ELIX_API_URL,
            access_token=access_token,
            anon_key=settings.SUPABASE_ANON_KEY,
        )

    async def __aenter__(self) -> "ElixClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.access_token or self._anon_key}"}

    async def _request(self, method: str, path: str, *,
                       json: dict[str, Any] | None = None) -> dict[str, Any]:
        resp = await self._http.request(method, path, json=json, headers=self._headers())
        if resp.status_code >= 400:
            detail = _detail(resp)
            logger.debug("%s %s failed: %s %s", method, path, resp.status_code, detail)
            raise ElixAPIError(resp.status_code, detail)
        return resp.json()

    # ------------------------------------------------------------------
    # Infrastructure and accounts
    # ------------------------------------------------------------------

    async def health(self) -> dict[str, Any]:
        return await self._request("GET", "/health")

    async def signup(self, email: str, password: str, name: str = "",
                     role: str | None = None) -> dict[str, Any]:
        body: dict[str, Any] = {"email": email, "password": password, "name": name}
        if role is not None:
            body["role"] = role
        return (await self._request("POST", "/auth/signup", json=body))["user"]

    async def get_profile(self) -> dict[str, Any]:
        return (await self._request("GET", "/auth/profile"))["profile"]

    async def create_demo_user(self) -> dict[str, Any]:
        return await self._request("POST", "/auth/demo-user")

    # ------------------------------------------------------------------
    # Assets
    # ------------------------------------------------------------------

    async def list_assets(self) -> list[dict[str, Any]]:
        return (await self._request("GET", "/assets"))["assets"]

    async def get_asset(self, asset_id: str) -> dict[str, Any]:
        return (await self._request("GET", f"/assets/{asset_id}"))["asset"]

    async def create_asset(self, asset: dict[str, Any]) -> dict[str, Any]:
        return (await self._request("POST", "/assets", json=asset))["asset"]

    async def update_asset(self, asset_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        return (await self._request("PUT", f"/assets/{asset_id}", json=changes))["asset"]

    async def update_asset_status(self, asset_id: str, status: str) -> dict[str, Any]:
        resp = await self._request("PATCH", f"/assets/{asset_id}/status", json={"status": status})
        return resp["asset"]

    async def delete_asset(self, asset_id: str) -> bool:
        return (await self._request("DELETE", f"/assets/{asset_id}"))["success"]

    # ------------------------------------------------------------------
    # Alerts and work orders
    # ------------------------------------------------------------------

    async def list_alerts(self) -> list[dict[str, Any]]:
        return (await self._request("GET", "/alerts"))["alerts"]

    async def create_alert(self, alert: dict[str, Any]) -> dict[str, Any]:
        return (await self._request("POST", "/alerts", json=alert))["alert"]

    async def acknowledge_alert(self, alert_id: str, notes: str | None = None) -> dict[str, Any]:
        resp = await self._request("POST", f"/alerts/{alert_id}/acknowledge", json={"notes": notes})
        return resp["alert"]

    async def create_work_order(self, work_order: dict[str, Any]) -> dict[str, Any]:
        return (await self._request("POST", "/work-orders", json=work_order))["workOrder"]

    async def list_work_orders_for_asset(self, asset_id: str) -> list[dict[str, Any]]:
        return (await self._request("GET", f"/work-orders/asset/{asset_id}"))["workOrders"]

    async def update_work_order_status(self, work_order_id: str, status: str,
                                       **fields: Any) -> dict[str, Any]:
        """``fields`` may carry notes, actualCost and actualHours."""
        resp = await self._request(
            "PUT", f"/work-orders/{work_order_id}/status", json={"status": status, **fields},
        )
        return resp["workOrder"]

    # ------------------------------------------------------------------
    # Performance and demo
    # ------------------------------------------------------------------

    async def performance_overview(self) -> dict[str, Any]:
        return await self._request("GET", "/performance/overview")

    async def category_performance(self) -> list[dict[str, Any]]:
        return (await self._request("GET", "/performance/categories"))["categoryPerformance"]

    async def demo_performance_metrics(self) -> dict[str, Any]:
        return await self._request("GET", "/demo/performance-metrics")

    async def realtime_updates(self) -> dict[str, Any]:
        return await self._request("GET", "/demo/realtime-updates")

    async def init_demo(self, assets: list[dict[str, Any]], alerts: list[dict[str, Any]],
                        work_orders: list[dict[str, Any]] | None = None) -> dict[str, Any]:
        body = {"assets": assets, "alerts": alerts, "workOrders": work_orders or []}
        return (await self._request("POST", "/demo/init", json=body))["stats"]

    async def init_sample_data(self) -> dict[str, Any]:
        return (await self._request("POST", "/demo/init-sample"))["stats"]


def _detail(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or resp.reason_phrase
    if isinstance(body, dict) and body.get("detail") is not None:
        return str(body["detail"])
    return resp.reason_phrase
