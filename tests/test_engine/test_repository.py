"""Tests for QRCodeRepository single-row access and insert signalling."""

from __future__ import annotations

import pytest

from qrmint.engine.models.qr_code import QRCode
from qrmint.engine.repository.qr_codes import QRCodeRepository
from qrmint.errors.qrmint_errors import StoreError
from qrmint.errors.store_errors import RecordNotFound, UniqueViolation

WALLET = "0x1111111111111111111111111111111111111111"


def _record(url: str = "https://a.example.com", wallet: str = WALLET) -> QRCode:
    return QRCode(
        wallet_address=wallet,
        website_url=url,
        website_name="A",
        memo="",
        amount="0",
        qr_data=wallet,
    )


@pytest.fixture
def repo(engine) -> QRCodeRepository:
    return QRCodeRepository(engine.datastore)


class TestQRCodeRepository:
    async def test_insert_and_find(self, repo) -> None:
        stored = await repo.insert(_record())
        assert stored is not None
        found = await repo.find_single(website_url="https://a.example.com")
        assert found.id == stored.id
        assert found.wallet_address == WALLET

    async def test_find_no_rows(self, repo) -> None:
        with pytest.raises(RecordNotFound):
            await repo.find_single(website_url="https://missing.example.com")

    async def test_find_multiple_rows_is_store_error(self, repo) -> None:
        await repo.insert(_record("https://a.example.com"))
        await repo.insert(_record("https://b.example.com"))
        with pytest.raises(StoreError):
            await repo.find_single(wallet_address=WALLET)

    async def test_duplicate_url_is_unique_violation(self, repo) -> None:
        await repo.insert(_record())
        with pytest.raises(UniqueViolation):
            await repo.insert(_record(wallet="0x2222222222222222222222222222222222222222"))
