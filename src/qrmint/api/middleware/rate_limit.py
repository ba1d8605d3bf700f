"""Per-client request cap on the API path prefix.

A sliding window of request timestamps is kept per client IP. The limiter
is created once when the app is built and lives for the whole process.
"""

from __future__ import annotations

import logging
import time
from collections import defaultdict, deque
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from qrmint.errors.qrmint_errors import RateLimitError

if TYPE_CHECKING:
    from collections.abc import Callable

    from starlette.requests import Request
    from starlette.responses import Response

logger = logging.getLogger(__name__)


class SlidingWindowLimiter:
    """Counts hits per key inside a rolling ``window_seconds`` window.

    Keys whose newest hit has left the window are swept out once per window,
    so only clients seen in the last two windows are held.
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits: dict[str, deque[float]] = defaultdict(deque)
        self._last_sweep = clock()

    def __len__(self) -> int:
        return len(self._hits)

    def hit(self, key: str) -> None:
        """Record one request for *key*.

        Raises:
            RateLimitError: *key* already used up the current window.
        """
        now = self._clock()
        if now - self._last_sweep >= self.window_seconds:
            self._sweep(now)
        hits = self._hits[key]
        while hits and now - hits[0] >= self.window_seconds:
            hits.popleft()
        if len(hits) >= self.max_requests:
            retry_after = max(1, int(self.window_seconds - (now - hits[0])))
            raise RateLimitError(retry_after=retry_after)
        hits.append(now)

    def reset(self) -> None:
        self._hits.clear()

    def _sweep(self, now: float) -> None:
        stale = [k for k, hits in self._hits.items() if not hits or now - hits[-1] >= self.window_seconds]
        for k in stale:
            del self._hits[k]
        self._last_sweep = now


def _client_key(request: Request) -> str:
    return request.client.host if request.client else "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Reject requests under ``path_prefix`` once a client exceeds its cap."""

    def __init__(self, app: object, *, limiter: SlidingWindowLimiter, path_prefix: str = "/api") -> None:
        super().__init__(app)  # type: ignore[arg-type]
        self._limiter = limiter
        self._prefix = path_prefix

    async def dispatch(self, request: Request, call_next: Callable) -> Response:  # type: ignore[type-arg]
        if not request.url.path.startswith(self._prefix):
            return await call_next(request)

        key = _client_key(request)
        try:
            self._limiter.hit(key)
        except RateLimitError as exc:
            logger.warning("Rate limit exceeded for %s on %s", key, request.url.path)
            return JSONResponse(
                status_code=exc.status_code,
                content={"error": exc.message},
                headers={"Retry-After": str(exc.retry_after)},
            )
        return await call_next(request)
