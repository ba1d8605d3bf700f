"""QRMintError — base exception class and the gateway error taxonomy."""

from __future__ import annotations

GENERIC_ERROR_MESSAGE = "Internal server error"


class QRMintError(Exception):
    """Base error for all gateway operations.

    Attributes:
        message: Human-readable error description.
        status_code: HTTP status code the error maps to.
        code: Machine-readable error code string.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int = 500,
        code: str = "qrmint-error",
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code

    def public_message(self, *, production: bool) -> str:
        """Message safe to return to a client.

        Client errors always carry their own message. Server errors are
        replaced by a generic text in production.
        """
        if production and self.status_code >= 500:
            return GENERIC_ERROR_MESSAGE
        return self.message


class ValidationError(QRMintError):
    """Malformed or missing input."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=400, code="validation-error")


class ConflictError(QRMintError):
    """A record already exists for the requested destination."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=409, code="conflict")


class NotFoundError(QRMintError):
    """Lookup on a key that was never created."""

    def __init__(self, message: str = "QR code not found") -> None:
        super().__init__(message, status_code=404, code="not-found")


class StoreError(QRMintError):
    """Datastore failure.

    ``generic_message`` is what production clients see instead of the
    underlying detail.
    """

    def __init__(self, message: str, *, generic_message: str = GENERIC_ERROR_MESSAGE) -> None:
        super().__init__(message, status_code=500, code="store-error")
        self.generic_message = generic_message

    def public_message(self, *, production: bool) -> str:
        return self.generic_message if production else self.message


class RateLimitError(QRMintError):
    """Client exceeded the request cap for the current window."""

    def __init__(
        self,
        message: str = "Too many requests, please try again later.",
        *,
        retry_after: int = 1,
    ) -> None:
        super().__init__(message, status_code=429, code="rate-limited")
        self.retry_after = retry_after
