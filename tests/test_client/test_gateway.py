"""Tests for the gateway HTTP client."""

from __future__ import annotations

import json

import httpx
import pytest

from qrmint.client.errors import GatewayError
from qrmint.client.gateway import GatewayClient

WALLET = "0x1111111111111111111111111111111111111111"
RECORD = {
    "id": 1,
    "wallet_address": WALLET,
    "website_url": "https://a.com/x y",
    "website_name": "A",
    "memo": "m",
    "amount": "0",
    "qr_data": WALLET,
    "created_at": "2026-01-01T00:00:00Z",
}


def _gateway(handler) -> GatewayClient:
    return GatewayClient("http://gateway.test/", transport=httpx.MockTransport(handler))


class TestConnection:
    async def test_context_manager(self) -> None:
        gateway = _gateway(lambda request: httpx.Response(200, json={}))
        assert not gateway.is_connected
        async with gateway:
            assert gateway.is_connected
        assert not gateway.is_connected

    async def test_not_connected(self) -> None:
        gateway = GatewayClient("http://gateway.test")
        with pytest.raises(RuntimeError, match="not connected"):
            await gateway.health()

    def test_base_url_trimmed(self) -> None:
        assert GatewayClient("http://gateway.test/").base_url == "http://gateway.test"


class TestCreateQRCode:
    async def test_created(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            seen["version"] = request.headers.get("x-client-version")
            return httpx.Response(201, json=RECORD)

        async with _gateway(handler) as gateway:
            record = await gateway.create_qr_code({"wallet_address": WALLET})
        assert record == RECORD
        assert seen["path"] == "/api/qr-codes"
        assert seen["body"] == {"wallet_address": WALLET}
        assert seen["version"]

    async def test_error_body_message(self) -> None:
        handler = lambda request: httpx.Response(  # noqa: E731
            409, json={"error": "This website URL already has a QR code generated"}
        )
        async with _gateway(handler) as gateway:
            with pytest.raises(GatewayError) as exc_info:
                await gateway.create_qr_code({})
        assert exc_info.value.status_code == 409
        assert exc_info.value.message == "This website URL already has a QR code generated"
        assert not exc_info.value.retryable

    async def test_server_error_without_body(self) -> None:
        async with _gateway(lambda request: httpx.Response(500, text="oops")) as gateway:
            with pytest.raises(GatewayError) as exc_info:
                await gateway.create_qr_code({})
        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Internal Server Error"
        assert exc_info.value.retryable

    async def test_empty_body(self) -> None:
        async with _gateway(lambda request: httpx.Response(201)) as gateway:
            with pytest.raises(GatewayError, match="Empty response from server"):
                await gateway.create_qr_code({})

    async def test_missing_qr_data(self) -> None:
        body = {k: v for k, v in RECORD.items() if k != "qr_data"}
        async with _gateway(lambda request: httpx.Response(201, json=body)) as gateway:
            with pytest.raises(GatewayError, match="Missing QR data in response"):
                await gateway.create_qr_code({})

    @pytest.mark.parametrize(
        ("status_code", "kwargs"),
        [
            (200, {"text": "<html>proxy page</html>"}),
            (201, {"json": [1, 2]}),
            (201, {"json": "ok"}),
        ],
    )
    async def test_non_object_body(self, status_code, kwargs) -> None:
        handler = lambda request: httpx.Response(status_code, **kwargs)  # noqa: E731
        async with _gateway(handler) as gateway:
            with pytest.raises(GatewayError, match="Invalid response from server") as exc_info:
                await gateway.create_qr_code({})
        assert exc_info.value.status_code == status_code
        assert not exc_info.value.retryable

    async def test_network_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with _gateway(handler) as gateway:
            with pytest.raises(GatewayError, match="Network error") as exc_info:
                await gateway.create_qr_code({})
        assert exc_info.value.status_code == 0
        assert not exc_info.value.retryable


class TestGetQRCode:
    async def test_url_fully_percent_encoded(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["raw_path"] = request.url.raw_path
            return httpx.Response(200, json=RECORD)

        async with _gateway(handler) as gateway:
            record = await gateway.get_qr_code(WALLET, "https://a.com/x y")
        assert record == RECORD
        assert seen["raw_path"] == f"/api/qr-codes/{WALLET}/https%3A%2F%2Fa.com%2Fx%20y".encode()

    async def test_not_found_is_none(self) -> None:
        handler = lambda request: httpx.Response(404, json={"error": "QR code not found"})  # noqa: E731
        async with _gateway(handler) as gateway:
            assert await gateway.get_qr_code(WALLET, "https://a.com") is None

    async def test_server_error(self) -> None:
        handler = lambda request: httpx.Response(500, json={"error": "Failed to fetch QR code"})  # noqa: E731
        async with _gateway(handler) as gateway:
            with pytest.raises(GatewayError, match="Failed to fetch QR code"):
                await gateway.get_qr_code(WALLET, "https://a.com")

    async def test_html_body(self) -> None:
        handler = lambda request: httpx.Response(200, text="<html>proxy page</html>")  # noqa: E731
        async with _gateway(handler) as gateway:
            with pytest.raises(GatewayError, match="Invalid response from server"):
                await gateway.get_qr_code(WALLET, "https://a.com")

    async def test_list_body(self) -> None:
        async with _gateway(lambda request: httpx.Response(200, json=[RECORD])) as gateway:
            with pytest.raises(GatewayError, match="Invalid response from server"):
                await gateway.get_qr_code(WALLET, "https://a.com")


class TestHealth:
    async def test_health(self) -> None:
        body = {"status": "healthy", "timestamp": "2026-01-01T00:00:00Z"}
        async with _gateway(lambda request: httpx.Response(200, json=body)) as gateway:
            assert await gateway.health() == body

    async def test_html_body(self) -> None:
        async with _gateway(lambda request: httpx.Response(200, text="up")) as gateway:
            with pytest.raises(GatewayError, match="Invalid response from server"):
                await gateway.health()
