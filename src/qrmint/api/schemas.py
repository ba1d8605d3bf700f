"""API request/response Pydantic schemas.

These are the *API-layer* schemas that define the HTTP contract. They do
not inherit from SQLAlchemy models; the routes map between the two.
"""

from __future__ import annotations

from datetime import datetime  # noqa: TC003 - Pydantic needs this at runtime
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class ErrorResponse(BaseModel):
    """Standard error body."""

    error: str


class QRCodeCreateRequest(BaseModel):
    """POST /api/qr-codes.

    ``website_name`` and ``qr_data`` are checked by the service, not here,
    so that their failures carry the gateway's own messages.
    """

    wallet_address: str
    website_url: str
    website_name: str | None = None
    memo: str | None = None
    amount: str | None = None
    qr_data: str | None = None

    @field_validator("amount", mode="before")
    @classmethod
    def _amount_as_string(cls, value: Any) -> Any:
        if isinstance(value, int | float) and not isinstance(value, bool):
            return str(value)
        return value


class QRCodeResponse(BaseModel):
    """Serialised QR payment record."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    wallet_address: str
    website_url: str
    website_name: str
    memo: str
    amount: str
    qr_data: str
    created_at: datetime


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
