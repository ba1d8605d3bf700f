"""QR code service — validation, duplicate prevention and lookup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from qrmint.engine.models.qr_code import QRCode
from qrmint.engine.repository.qr_codes import QRCodeRepository
from qrmint.errors.definitions import (
    MSG_CREATE_FAILED,
    MSG_FETCH_FAILED,
    ErrDuplicateWalletURL,
    ErrQRCodeNotFound,
    ErrQRDataMismatch,
    ErrURLAlreadyHasQR,
    ErrWebsiteNameRequired,
)
from qrmint.errors.qrmint_errors import StoreError
from qrmint.errors.store_errors import RecordNotFound, UniqueViolation

if TYPE_CHECKING:
    from qrmint.engine.client import QRMintEngine

logger = logging.getLogger(__name__)


class QRCodeService:
    """Business logic for QR payment records.

    Create runs two independent existence checks before inserting:

    1. ``(wallet_address, website_url)`` — exact pair
    2. ``website_url`` alone

    The second subsumes the first; both are kept because each answers with
    its own message. The checks are separate reads, so concurrent creates for
    one URL can both pass them. The unique constraint on ``website_url`` then
    rejects the later insert, which is reported as the same conflict as
    check 2.
    """

    def __init__(self, engine: QRMintEngine) -> None:
        self._engine = engine
        self._repo = QRCodeRepository(engine.datastore)

    @property
    def repository(self) -> QRCodeRepository:
        return self._repo

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def create_qr_code(
        self,
        *,
        wallet_address: str,
        website_url: str,
        website_name: str | None,
        memo: str | None = None,
        amount: str | None = None,
        qr_data: str | None,
    ) -> QRCode:
        """Validate, check for duplicates and insert a new record.

        Raises:
            ValidationError: Missing website name or ``qr_data`` mismatch.
            ConflictError: A record already exists for the pair or the URL.
            StoreError: The datastore failed.
        """
        with self._engine.metrics.track_create_qr_code():
            if not website_name:
                logger.warning("Rejected QR code for %s: missing website name", website_url)
                raise ErrWebsiteNameRequired

            if qr_data != wallet_address:
                logger.warning("Rejected QR code for %s: qr_data does not match wallet", website_url)
                raise ErrQRDataMismatch

            if await self._exists(
                MSG_CREATE_FAILED, wallet_address=wallet_address, website_url=website_url
            ):
                logger.warning("Duplicate wallet+url for %s", website_url)
                self._engine.metrics.record_conflict("wallet_url")
                raise ErrDuplicateWalletURL

            if await self._exists(MSG_CREATE_FAILED, website_url=website_url):
                logger.warning("Website URL %s already has a QR code", website_url)
                self._engine.metrics.record_conflict("url")
                raise ErrURLAlreadyHasQR

            record = QRCode(
                wallet_address=wallet_address,
                website_url=website_url,
                website_name=website_name,
                memo=memo or "",
                amount=amount or "0",
                qr_data=qr_data,
            )
            try:
                stored = await self._repo.insert(record)
            except UniqueViolation:
                logger.warning("Concurrent insert for %s lost the race", website_url)
                self._engine.metrics.record_conflict("url")
                raise ErrURLAlreadyHasQR from None
            except StoreError as exc:
                logger.error("QR code insert failed: %s", exc.message)
                raise StoreError(exc.message, generic_message=MSG_CREATE_FAILED) from exc

            if stored is None:
                logger.error("QR code insert for %s returned no row", website_url)
                raise StoreError(
                    "Failed to retrieve created QR code", generic_message=MSG_CREATE_FAILED
                )

            logger.info("Created QR code %s for %s", stored.id, website_url)
            self._engine.metrics.record_created()
            return stored

    async def get_qr_code(self, wallet_address: str, website_url: str) -> QRCode:
        """Look up the record for an exact ``(wallet_address, website_url)`` pair.

        Raises:
            NotFoundError: No such record.
            StoreError: The datastore failed.
        """
        with self._engine.metrics.track_get_qr_code():
            try:
                return await self._repo.find_single(
                    wallet_address=wallet_address, website_url=website_url
                )
            except RecordNotFound:
                logger.info("No QR code for %s / %s", wallet_address, website_url)
                raise ErrQRCodeNotFound from None
            except StoreError as exc:
                logger.error("QR code lookup failed: %s", exc.message)
                raise StoreError(exc.message, generic_message=MSG_FETCH_FAILED) from exc

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    async def _exists(self, generic_message: str, **filters: str) -> bool:
        try:
            await self._repo.find_single(**filters)
        except RecordNotFound:
            return False
        except StoreError as exc:
            logger.error("Duplicate check failed: %s", exc.message)
            raise StoreError(exc.message, generic_message=generic_message) from exc
        return True
