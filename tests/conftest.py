"""Shared test fixtures for the qrmint test suite."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterator

WALLET = "0x1111111111111111111111111111111111111111"


@pytest.fixture
def app_config(tmp_path):
    """Provide a test AppConfig backed by a throwaway SQLite file."""
    from qrmint.config.settings import AppConfig, DatabaseConfig

    return AppConfig(
        db=DatabaseConfig(dsn=f"sqlite+aiosqlite:///{tmp_path / 'qrmint.db'}"),
    )


@pytest.fixture
async def engine(app_config) -> AsyncIterator:
    """An initialized QRMintEngine with an empty store."""
    from qrmint.engine.client import QRMintEngine

    eng = QRMintEngine(app_config)
    await eng.initialize()
    yield eng
    await eng.close()


@pytest.fixture
def test_client(app_config) -> Iterator:
    """Provide a FastAPI TestClient with the lifespan running."""
    from fastapi.testclient import TestClient

    from qrmint.api.app import create_app

    app = create_app(config=app_config)
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client


@pytest.fixture
def make_payload():
    """Factory for a valid create body; keyword arguments replace fields."""

    def _make(**overrides: str) -> dict[str, str]:
        payload = {
            "wallet_address": WALLET,
            "website_url": "https://shop.example.com",
            "website_name": "Shop",
            "memo": "coffee",
            "amount": "12.50",
            "qr_data": WALLET,
        }
        payload.update(overrides)
        return payload

    return _make
