"""Prometheus HTTP request metrics middleware for FastAPI.

Tracks:
- ``http_request_total`` (counter) — requests by method, route, status
- ``http_request_duration_seconds`` (histogram) — duration by method, route

Requests are labelled with the matched route template
(``/api/qr-codes/{wallet_address}/{website_url:path}``) rather than the raw
path, so wallet addresses and URLs never become label values.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware

if TYPE_CHECKING:
    from collections.abc import Callable

    from prometheus_client import CollectorRegistry
    from starlette.requests import Request
    from starlette.responses import Response

_APP_LABEL = "qrmint"
_UNMATCHED = "unmatched"

_LABELS = ("method", "route", "status_code", "app")
_DURATION_LABELS = ("method", "route", "app")


def _route_label(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", _UNMATCHED)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Starlette middleware that records request count and duration."""

    def __init__(self, app: object, *, registry: CollectorRegistry) -> None:
        super().__init__(app)  # type: ignore[arg-type]
        self._request_count = Counter(
            "http_request_total",
            "Total HTTP requests",
            _LABELS,
            registry=registry,
        )
        self._request_duration = Histogram(
            "http_request_duration_seconds",
            "HTTP request duration in seconds",
            _DURATION_LABELS,
            registry=registry,
        )

    async def dispatch(self, request: Request, call_next: Callable) -> Response:  # type: ignore[type-arg]
        """Wrap each request with timing and counting."""
        start = time.monotonic()
        response: Response = await call_next(request)
        duration = time.monotonic() - start

        route = _route_label(request)
        self._request_count.labels(
            method=request.method,
            route=route,
            status_code=str(response.status_code),
            app=_APP_LABEL,
        ).inc()
        self._request_duration.labels(
            method=request.method,
            route=route,
            app=_APP_LABEL,
        ).observe(duration)

        return response
