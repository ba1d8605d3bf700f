"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest
from starlette.responses import Response

from qrmint import __version__
from qrmint.api.middleware.cors import setup_cors
from qrmint.api.middleware.errors import UnhandledErrorMiddleware
from qrmint.api.middleware.rate_limit import RateLimitMiddleware, SlidingWindowLimiter
from qrmint.api.qr_codes import router as qr_codes_router
from qrmint.config.settings import AppConfig
from qrmint.engine.client import QRMintEngine
from qrmint.errors.qrmint_errors import QRMintError
from qrmint.metrics.collector import EngineMetrics
from qrmint.metrics.middleware import PrometheusMiddleware

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle hooks.

    Initialises the engine (datastore, services) on startup and
    shuts it down on exit.
    """
    config: AppConfig = app.state.config
    engine = QRMintEngine(config, metrics=app.state.metrics)

    try:
        await engine.initialize()
        app.state.engine = engine
        yield
    finally:
        await engine.close()
        logger.info("QRmint engine shut down")


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    loc = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    msg = first.get("msg", "invalid value")
    return f"{loc}: {msg}" if loc else msg


def create_app(*, config: AppConfig | None = None) -> FastAPI:
    """Build and return the FastAPI application.

    Args:
        config: Optional AppConfig. If *None*, a default config is created
            from environment variables.
    """
    if config is None:
        config = AppConfig()

    app = FastAPI(
        title="qrmint",
        version=__version__,
        description="USDC payment QR codes on Base",
        lifespan=_lifespan,
    )

    app.state.config = config
    app.state.metrics = EngineMetrics()
    production = config.is_production

    # -- Error handlers --
    @app.exception_handler(QRMintError)
    async def _qrmint_error_handler(request: Request, exc: QRMintError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.public_message(production=production)},
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        message = _validation_message(exc)
        logger.warning("Rejected %s %s: %s", request.method, request.url.path, message)
        return JSONResponse(status_code=400, content={"error": message})

    # -- Base routes --
    @app.get("/metrics", tags=["base"], include_in_schema=False)
    async def metrics_endpoint() -> Response:
        """Prometheus metrics endpoint."""
        return Response(
            content=generate_latest(app.state.metrics.registry),
            media_type="text/plain; version=0.0.4; charset=utf-8",
        )

    app.include_router(qr_codes_router)

    # -- Middleware (last added runs first) --
    app.add_middleware(UnhandledErrorMiddleware, production=production)

    if config.metrics.enabled:
        app.add_middleware(PrometheusMiddleware, registry=app.state.metrics.registry)

    if config.rate_limit.enabled:
        limiter = SlidingWindowLimiter(
            config.rate_limit.max_requests,
            config.rate_limit.window_seconds,
        )
        app.state.rate_limiter = limiter
        app.add_middleware(
            RateLimitMiddleware,
            limiter=limiter,
            path_prefix=config.rate_limit.path_prefix,
        )

    setup_cors(app, config.cors.origins())

    return app
