"""FastAPI dependency injection helpers."""

from __future__ import annotations

from fastapi import Request

from qrmint.engine.client import QRMintEngine  # noqa: TC001
from qrmint.errors.qrmint_errors import StoreError


def get_engine(request: Request) -> QRMintEngine:
    """Retrieve the engine from ``app.state``.

    The engine is stored on ``app.state.engine`` during lifespan startup.

    Raises:
        StoreError: If the engine is not initialized.
    """
    engine: QRMintEngine | None = getattr(request.app.state, "engine", None)
    if engine is None:
        raise StoreError("engine not initialized")
    return engine
