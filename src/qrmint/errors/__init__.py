"""Error taxonomy for the QR record gateway."""

from qrmint.errors.qrmint_errors import (
    ConflictError,
    NotFoundError,
    QRMintError,
    RateLimitError,
    StoreError,
    ValidationError,
)

__all__ = [
    "ConflictError",
    "NotFoundError",
    "QRMintError",
    "RateLimitError",
    "StoreError",
    "ValidationError",
]
