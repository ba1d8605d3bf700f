"""QRMintEngine — central engine client owning the datastore and services."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from qrmint.config.settings import AppConfig
    from qrmint.datastore.client import Datastore
    from qrmint.engine.services.qr_code_service import QRCodeService
    from qrmint.metrics.collector import EngineMetrics

logger = logging.getLogger(__name__)

# Error messages
_ERR_NOT_INITIALIZED = "Engine not initialized. Call initialize() first."


class QRMintEngine:
    """Engine that owns the datastore, the QR code service and metrics.

    Created once per process at startup and closed on shutdown.
    """

    def __init__(self, config: AppConfig, *, metrics: EngineMetrics | None = None) -> None:
        """Initialize engine with configuration.

        Args:
            config: Application configuration.
            metrics: Metrics sink to share with the HTTP layer. A private one
                is created when omitted.
        """
        self._config = config
        self._initialized = False

        self._datastore: Datastore | None = None
        self._qr_code_service: QRCodeService | None = None
        self._metrics: EngineMetrics | None = metrics

    async def initialize(self) -> None:
        """Open the datastore, create tables and start services.

        Raises:
            RuntimeError: If already initialized.
        """
        if self._initialized:
            msg = "Engine already initialized"
            raise RuntimeError(msg)

        from qrmint.datastore.client import Datastore
        from qrmint.datastore.migrations import run_auto_migrate
        from qrmint.engine.services.qr_code_service import QRCodeService
        from qrmint.metrics.collector import EngineMetrics

        self._datastore = Datastore(self._config.db)
        await self._datastore.open()
        await run_auto_migrate(self._datastore.engine)

        if self._metrics is None:
            self._metrics = EngineMetrics()

        self._qr_code_service = QRCodeService(self)
        self._initialized = True
        logger.info("QRmint engine initialized (%s)", self._config.environment)

    async def close(self) -> None:
        """Gracefully shut down the datastore.

        Can be called multiple times (idempotent).
        """
        if not self._initialized:
            return

        self._qr_code_service = None
        if self._datastore is not None:
            await self._datastore.close()
            self._datastore = None

        self._initialized = False

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def config(self) -> AppConfig:
        return self._config

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def datastore(self) -> Datastore:
        if self._datastore is None:
            raise RuntimeError(_ERR_NOT_INITIALIZED)
        return self._datastore

    @property
    def metrics(self) -> EngineMetrics:
        if self._metrics is None:
            raise RuntimeError(_ERR_NOT_INITIALIZED)
        return self._metrics

    @property
    def qr_code_service(self) -> QRCodeService:
        if self._qr_code_service is None:
            raise RuntimeError(_ERR_NOT_INITIALIZED)
        return self._qr_code_service
