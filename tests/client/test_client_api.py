"""Tests for ElixClient against an httpx MockTransport."""

import json

import httpx
import pytest

from src.client.api import ElixAPIError, ElixClient


def _client(handler, **kwargs) -> ElixClient:
    return ElixClient("http://api.test", transport=httpx.MockTransport(handler), **kwargs)


class TestHeaders:
    @pytest.mark.anyio
    async def test_uses_access_token(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers["authorization"]
            return httpx.Response(200, json={"assets": []})

        async with _client(handler, access_token="user-tok", anon_key="anon") as client:
            await client.list_assets()
        assert seen["auth"] == "Bearer user-tok"

    @pytest.mark.anyio
    async def test_falls_back_to_anon_key(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers["authorization"]
            return httpx.Response(200, json={"stats": {"assets": 3}})

        async with _client(handler, anon_key="anon") as client:
            await client.init_sample_data()
        assert seen["auth"] == "Bearer anon"


class TestEndpoints:
    @pytest.mark.anyio
    async def test_unwraps_payloads(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            routes = {
                ("GET", "/assets/HM-001"): {"asset": {"id": "HM-001"}},
                ("GET", "/alerts"): {"alerts": [{"id": "PA-1"}]},
                ("GET", "/work-orders/asset/HM-001"): {"workOrders": [{"id": "WO-1"}]},
                ("GET", "/performance/categories"): {"categoryPerformance": []},
            }
            return httpx.Response(200, json=routes[(request.method, request.url.path)])

        async with _client(handler, access_token="t") as client:
            assert await client.get_asset("HM-001") == {"id": "HM-001"}
            assert await client.list_alerts() == [{"id": "PA-1"}]
            assert await client.list_work_orders_for_asset("HM-001") == [{"id": "WO-1"}]
            assert await client.category_performance() == []

    @pytest.mark.anyio
    async def test_status_update_body(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"workOrder": {"id": "WO-1", "status": "completed"}})

        async with _client(handler, access_token="t") as client:
            order = await client.update_work_order_status("WO-1", "completed", actualCost=120)
        assert order["status"] == "completed"
        assert seen == {
            "method": "PUT",
            "path": "/work-orders/WO-1/status",
            "body": {"status": "completed", "actualCost": 120},
        }

    @pytest.mark.anyio
    async def test_init_demo_sends_camel_case(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"stats": {"assets": 1, "alerts": 0, "workOrders": 0}})

        async with _client(handler) as client:
            stats = await client.init_demo([{"id": "A"}], [])
        assert stats["assets"] == 1
        assert seen["body"] == {"assets": [{"id": "A"}], "alerts": [], "workOrders": []}


class TestErrors:
    @pytest.mark.anyio
    async def test_error_detail(self) -> None:
        handler = lambda request: httpx.Response(404, json={"detail": "Asset not found"})  # noqa: E731
        async with _client(handler, access_token="t") as client:
            with pytest.raises(ElixAPIError) as exc_info:
                await client.get_asset("ghost")
        assert exc_info.value.status_code == 404
        assert exc_info.value.detail == "Asset not found"

    @pytest.mark.anyio
    async def test_non_json_error(self) -> None:
        handler = lambda request: httpx.Response(502, text="Bad Gateway")  # noqa: E731
        async with _client(handler) as client:
            with pytest.raises(ElixAPIError) as exc_info:
                await client.health()
        assert exc_info.value.detail == "Bad Gateway"

    @pytest.mark.anyio
    async def test_transport_error_propagates(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        async with _client(handler) as client:
            with pytest.raises(httpx.ConnectError):
                await client.list_assets()
