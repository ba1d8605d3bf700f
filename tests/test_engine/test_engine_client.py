"""Tests for QRMintEngine lifecycle."""

from __future__ import annotations

import pytest

from qrmint.config.settings import AppConfig, DatabaseConfig
from qrmint.engine.client import QRMintEngine
from qrmint.metrics.collector import EngineMetrics


def _memory_config() -> AppConfig:
    return AppConfig(db=DatabaseConfig(dsn="sqlite+aiosqlite:///:memory:"))


class TestQRMintEngine:
    async def test_init(self) -> None:  # noqa: ASYNC910
        config = _memory_config()
        engine = QRMintEngine(config)
        assert not engine.is_initialized
        assert engine.config is config

    async def test_initialize_and_close(self) -> None:
        engine = QRMintEngine(_memory_config())
        await engine.initialize()
        assert engine.is_initialized
        assert engine.datastore.is_open
        assert engine.qr_code_service is not None

        await engine.close()
        assert not engine.is_initialized

    async def test_double_initialize_raises(self) -> None:
        engine = QRMintEngine(_memory_config())
        await engine.initialize()
        with pytest.raises(RuntimeError, match="already initialized"):
            await engine.initialize()
        await engine.close()

    async def test_close_idempotent(self) -> None:
        engine = QRMintEngine(_memory_config())
        await engine.initialize()
        await engine.close()
        await engine.close()
        assert not engine.is_initialized

    async def test_shared_metrics(self) -> None:
        metrics = EngineMetrics()
        engine = QRMintEngine(_memory_config(), metrics=metrics)
        await engine.initialize()
        assert engine.metrics is metrics
        await engine.close()

    def test_properties_before_initialize(self) -> None:
        engine = QRMintEngine(_memory_config())
        with pytest.raises(RuntimeError, match="not initialized"):
            _ = engine.datastore
        with pytest.raises(RuntimeError, match="not initialized"):
            _ = engine.qr_code_service
        with pytest.raises(RuntimeError, match="not initialized"):
            _ = engine.metrics
