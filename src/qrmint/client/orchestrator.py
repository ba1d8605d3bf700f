"""Client request orchestrator — the generate and retrieve flows.

Generate:

1. require a connected wallet account
2. validate the form locally
3. pay the fee, when fee gating is configured
4. look for an existing record and show it if there is one
5. create the record, retrying HTTP 500 with a linearly growing delay
6. render the payload, or surface the gateway's error message

Every failure ends as a :class:`FlowResult` with a message; nothing raises
out of :meth:`QRCodeOrchestrator.generate` or :meth:`QRCodeOrchestrator.retrieve`.
"""

from __future__ import annotations

import asyncio
import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from qrmint.client.errors import FormError, GatewayError, PaymentError
from qrmint.client.forms import QRForm, derive_display_name, is_valid_url, validate_form
from qrmint.client.render import QRDisplay

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from qrmint.client.gateway import GatewayClient
    from qrmint.client.payment import FeePayment, PaymentReceipt

logger = logging.getLogger(__name__)

MSG_CONNECT_WALLET = "Please connect your wallet first"
MSG_GENERATE_FAILED = "Failed to generate QR code. Please try again."
MSG_RETRIEVE_FAILED = "Failed to retrieve QR code"
MSG_NOT_FOUND = "No QR code found"
MSG_SERVER_ERROR = "Server error. Please try again in a few moments."

DEFAULT_MAX_RETRIES = 2
DEFAULT_RETRY_DELAY = 1.0


class PaymentStatus(enum.StrEnum):
    """Display-only progress of a flow."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class WalletAccount:
    """The authenticated account handed over by the wallet provider."""

    address: str


@dataclass
class FlowResult:
    status: PaymentStatus
    record: dict[str, Any] | None = None
    error: str | None = None
    attempts: int = 0
    existing: bool = False
    receipt: PaymentReceipt | None = None

    @property
    def ok(self) -> bool:
        return self.status == PaymentStatus.COMPLETED

    @property
    def qr_data(self) -> str | None:
        return self.record.get("qr_data") if self.record else None

    def display(self) -> QRDisplay | None:
        if not self.record:
            return None
        name = self.record.get("website_name") or derive_display_name(
            self.record.get("website_url", "")
        )
        return QRDisplay(display_name=name, address=self.record["qr_data"])


def _failure_message(exc: Exception, fallback: str) -> str:
    if isinstance(exc, GatewayError):
        if exc.message:
            return exc.message
        if exc.status_code == 500:
            return MSG_SERVER_ERROR
        return fallback
    return getattr(exc, "message", None) or str(exc) or fallback


class QRCodeOrchestrator:
    """Drives one user's generate and retrieve flows against the gateway.

    Args:
        gateway: Connected gateway client.
        fee: Fee step; ``None`` disables fee gating.
        max_retries: Extra create attempts after an HTTP 500.
        retry_delay: Base delay in seconds; attempt *n* waits ``n * retry_delay``.
        check_existing: Look up an existing record before creating.
        sleep: Awaitable sleep, injectable for tests.
    """

    def __init__(
        self,
        gateway: GatewayClient,
        *,
        fee: FeePayment | None = None,
        max_retries: int = DEFAULT_MAX_RETRIES,
        retry_delay: float = DEFAULT_RETRY_DELAY,
        check_existing: bool = True,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._gateway = gateway
        self._fee = fee
        self._max_retries = max_retries
        self._retry_delay = retry_delay
        self._check_existing = check_existing
        self._sleep = sleep
        self._status = PaymentStatus.PENDING

    @property
    def status(self) -> PaymentStatus:
        return self._status

    # ------------------------------------------------------------------
    # Flows
    # ------------------------------------------------------------------

    async def generate(self, account: WalletAccount | None, form: QRForm) -> FlowResult:
        """Run the generate flow for *account* with the submitted *form*."""
        if account is None or not account.address:
            return FlowResult(status=PaymentStatus.PENDING, error=MSG_CONNECT_WALLET)

        self._status = PaymentStatus.PROCESSING
        attempts = 0
        try:
            validate_form(form)
            receipt = await self._pay()

            if self._check_existing:
                existing = await self._gateway.get_qr_code(account.address, form.website_url)
                if existing is not None:
                    logger.info("Found existing QR code for %s", form.website_url)
                    return self._complete(existing, receipt=receipt, existing=True)

            payload = {
                "wallet_address": account.address,
                "website_url": form.website_url,
                "website_name": derive_display_name(form.website_url),
                "memo": form.memo,
                "amount": form.amount or "0",
                "qr_data": account.address,
            }
            record, attempts = await self._create_with_retry(payload)
            return self._complete(record, receipt=receipt, attempts=attempts)
        except (FormError, PaymentError, GatewayError) as exc:
            if isinstance(exc, GatewayError):
                attempts = exc.attempts
            return self._fail(_failure_message(exc, MSG_GENERATE_FAILED), attempts=attempts)

    async def retrieve(self, account: WalletAccount | None, website_url: str) -> FlowResult:
        """Look up the record *account* generated for *website_url*."""
        if account is None or not account.address:
            return FlowResult(status=PaymentStatus.PENDING, error=MSG_CONNECT_WALLET)

        self._status = PaymentStatus.PROCESSING
        try:
            if not is_valid_url(website_url):
                raise FormError("Please enter a valid website URL")
            receipt = await self._pay()
            record = await self._gateway.get_qr_code(account.address, website_url)
            if record is None:
                return self._fail(MSG_NOT_FOUND)
            return self._complete(record, receipt=receipt, existing=True)
        except (FormError, PaymentError, GatewayError) as exc:
            return self._fail(_failure_message(exc, MSG_RETRIEVE_FAILED))

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    async def _pay(self) -> PaymentReceipt | None:
        if self._fee is None:
            return None
        return await self._fee.ensure_paid()

    async def _create_with_retry(self, payload: dict[str, Any]) -> tuple[dict[str, Any], int]:
        attempt = 0
        while True:
            attempt += 1
            try:
                return await self._gateway.create_qr_code(payload), attempt
            except GatewayError as exc:
                if not exc.retryable or attempt > self._max_retries:
                    exc.attempts = attempt
                    raise
                delay = self._retry_delay * attempt
                logger.warning(
                    "Create attempt %d failed (%s); retrying in %.1fs",
                    attempt,
                    exc.message,
                    delay,
                )
                await self._sleep(delay)

    def _complete(
        self,
        record: dict[str, Any],
        *,
        receipt: PaymentReceipt | None,
        attempts: int = 0,
        existing: bool = False,
    ) -> FlowResult:
        self._status = PaymentStatus.COMPLETED
        if self._fee is not None:
            self._fee.reset()
        return FlowResult(
            status=self._status,
            record=record,
            attempts=attempts,
            existing=existing,
            receipt=receipt,
        )

    def _fail(self, message: str, *, attempts: int = 0) -> FlowResult:
        self._status = PaymentStatus.FAILED
        logger.warning("Flow failed: %s", message)
        receipt = self._fee.receipt if self._fee is not None else None
        return FlowResult(status=self._status, error=message, attempts=attempts, receipt=receipt)
