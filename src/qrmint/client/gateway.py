"""Gateway REST client — create and look up QR payment records.

Async HTTP client for the QRmint gateway:
- POST /api/qr-codes
- GET  /api/qr-codes/<wallet_address>/<percent-encoded website_url>
- GET  /api/health
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from qrmint import __version__
from qrmint.client.errors import GatewayError

_CLIENT_HEADERS = {
    "Accept": "application/json",
    "X-Client-Version": __version__,
}


def _error_message(resp: httpx.Response) -> str:
    """The ``error`` field of a gateway error body, or the reason phrase."""
    try:
        data = resp.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])
    return resp.reason_phrase or f"HTTP {resp.status_code}"


def _json_object(resp: httpx.Response) -> dict[str, Any]:
    """Decode a success body that must be a JSON object."""
    try:
        data = resp.json()
    except ValueError:
        raise GatewayError("Invalid response from server", status_code=resp.status_code) from None
    if not isinstance(data, dict):
        raise GatewayError("Invalid response from server", status_code=resp.status_code)
    return data


class GatewayClient:
    """Async HTTP client for the QR record gateway.

    Usage::

        async with GatewayClient("https://api.qrmint.example") as gateway:
            record = await gateway.get_qr_code(wallet, url)
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def connect(self) -> None:
        """Create the underlying HTTP client."""
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers=_CLIENT_HEADERS,
            timeout=self._timeout,
            transport=self._transport,
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> GatewayClient:
        await self.connect()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    @property
    def base_url(self) -> str:
        return self._base_url

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def create_qr_code(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Create a record.

        Returns:
            The stored record as returned by the gateway.

        Raises:
            GatewayError: Non-2xx answer, transport failure, or a success
                body without ``qr_data``.
        """
        resp = await self._request("POST", "/api/qr-codes", json=payload)
        if resp.status_code >= 400:
            raise GatewayError(_error_message(resp), status_code=resp.status_code)
        if not resp.content:
            raise GatewayError("Empty response from server", status_code=resp.status_code)
        data = _json_object(resp)
        if not data:
            raise GatewayError("Empty response from server", status_code=resp.status_code)
        if not data.get("qr_data"):
            raise GatewayError("Missing QR data in response", status_code=resp.status_code)
        return data

    async def get_qr_code(self, wallet_address: str, website_url: str) -> dict[str, Any] | None:
        """Look up a record; ``None`` when the gateway answers 404.

        Raises:
            GatewayError: Any other non-2xx answer or a transport failure.
        """
        path = f"/api/qr-codes/{quote(wallet_address, safe='')}/{quote(website_url, safe='')}"
        resp = await self._request("GET", path)
        if resp.status_code == 404:
            return None
        if resp.status_code >= 400:
            raise GatewayError(_error_message(resp), status_code=resp.status_code)
        return _json_object(resp)

    async def health(self) -> dict[str, Any]:
        resp = await self._request("GET", "/api/health")
        if resp.status_code >= 400:
            raise GatewayError(_error_message(resp), status_code=resp.status_code)
        return _json_object(resp)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        client = self._ensure_connected()
        try:
            return await client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise GatewayError(f"Network error: {exc}", status_code=0) from exc

    def _ensure_connected(self) -> httpx.AsyncClient:
        if self._client is None:
            msg = "GatewayClient is not connected — call connect() first"
            raise RuntimeError(msg)
        return self._client
