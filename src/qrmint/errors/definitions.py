"""Pre-defined error messages and instances used by the gateway."""

from __future__ import annotations

from qrmint.errors.qrmint_errors import ConflictError, NotFoundError, ValidationError

# -- Generic messages shown in production ----------------------------------

MSG_CREATE_FAILED = "Failed to create QR code"
MSG_FETCH_FAILED = "Failed to fetch QR code"

# -- Validation ------------------------------------------------------------

ErrWebsiteNameRequired = ValidationError("Website name is required")
ErrQRDataMismatch = ValidationError("QR data must match wallet address")

# -- Conflict --------------------------------------------------------------

ErrDuplicateWalletURL = ConflictError(
    "QR code already exists for this combination of wallet address and website URL"
)
ErrURLAlreadyHasQR = ConflictError("This website URL already has a QR code generated")

# -- Not Found -------------------------------------------------------------

ErrQRCodeNotFound = NotFoundError("QR code not found")
