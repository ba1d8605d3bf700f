"""QR code endpoints.

- ``POST /api/qr-codes`` — create a record
- ``GET  /api/qr-codes/{wallet_address}/{website_url}`` — look one up
- ``GET  /api/health`` — liveness
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated
from urllib.parse import unquote

from fastapi import APIRouter, Depends, Request

from qrmint.api.dependencies import get_engine
from qrmint.api.schemas import HealthResponse, QRCodeCreateRequest, QRCodeResponse
from qrmint.engine.client import QRMintEngine  # noqa: TC001

router = APIRouter(prefix="/api")

_COLLECTION = "/qr-codes/"


def _encoded_destination(request: Request, fallback: str) -> str:
    """Return the ``website_url`` path segment decoded exactly once.

    The server has already percent-decoded ``scope["path"]``, which is what
    the ``website_url`` path parameter holds. Decoding that again would
    corrupt URLs containing literal ``%`` sequences, so the segment is taken
    from ``raw_path`` instead. Falls back to the path parameter when the
    server does not provide ``raw_path``.
    """
    raw_path: bytes | None = request.scope.get("raw_path")
    if not raw_path:
        return fallback
    path = raw_path.decode("latin-1").split("?", 1)[0]
    _, _, tail = path.partition(_COLLECTION)
    _, _, encoded = tail.partition("/")
    return unquote(encoded)


def _qr_resp(qr: object) -> dict:
    return QRCodeResponse.model_validate(qr).model_dump(mode="json")


@router.post("/qr-codes", status_code=201, tags=["qr-codes"])
async def create_qr_code(
    engine: Annotated[QRMintEngine, Depends(get_engine)],
    body: QRCodeCreateRequest,
) -> dict:
    """Create a QR payment record for a wallet and website URL."""
    qr = await engine.qr_code_service.create_qr_code(
        wallet_address=body.wallet_address,
        website_url=body.website_url,
        website_name=body.website_name,
        memo=body.memo,
        amount=body.amount,
        qr_data=body.qr_data,
    )
    return _qr_resp(qr)


@router.get("/qr-codes/{wallet_address}/{website_url:path}", tags=["qr-codes"])
async def get_qr_code(
    wallet_address: str,
    website_url: str,
    request: Request,
    engine: Annotated[QRMintEngine, Depends(get_engine)],
) -> dict:
    """Fetch the QR record for a wallet address and percent-encoded website URL."""
    destination = _encoded_destination(request, website_url)
    qr = await engine.qr_code_service.get_qr_code(wallet_address, destination)
    return _qr_resp(qr)


@router.get("/health", tags=["base"])
async def health() -> dict:
    return HealthResponse(status="healthy", timestamp=datetime.now(tz=UTC)).model_dump(mode="json")
