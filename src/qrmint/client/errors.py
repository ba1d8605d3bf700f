"""Client-side failures surfaced by the request orchestrator."""

from __future__ import annotations

from qrmint.errors.qrmint_errors import QRMintError


class FormError(QRMintError):
    """Form input rejected before any network call."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=400, code="form-error")


class PaymentError(QRMintError):
    """The on-chain fee transfer failed or was not confirmed."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=402, code="payment-error")


class GatewayError(QRMintError):
    """The gateway answered with a non-success status or could not be reached.

    ``status_code`` is the HTTP status, or ``0`` when no response arrived.
    ``attempts`` is set by the orchestrator to the number of create calls made.
    """

    def __init__(self, message: str, *, status_code: int) -> None:
        super().__init__(message, status_code=status_code, code="gateway-error")
        self.attempts = 0

    @property
    def retryable(self) -> bool:
        return self.status_code == 500
