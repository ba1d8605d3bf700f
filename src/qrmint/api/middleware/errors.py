"""Catch-all error middleware.

Starlette runs ``Exception`` handlers in its outermost ``ServerErrorMiddleware``,
outside CORS, so an unexpected 500 would reach the browser without
``Access-Control-Allow-Origin``. This middleware sits inside CORS and turns
unhandled exceptions into the ``{"error": ...}`` body there.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from qrmint.errors.qrmint_errors import GENERIC_ERROR_MESSAGE

if TYPE_CHECKING:
    from collections.abc import Callable

    from starlette.requests import Request
    from starlette.responses import Response

logger = logging.getLogger(__name__)


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """Answer 500 for exceptions no route-level handler claimed.

    In production the body carries only the generic message; in development
    it carries ``str(exc)``.
    """

    def __init__(self, app: object, *, production: bool) -> None:
        super().__init__(app)  # type: ignore[arg-type]
        self._production = production

    async def dispatch(self, request: Request, call_next: Callable) -> Response:  # type: ignore[type-arg]
        try:
            return await call_next(request)
        except Exception as exc:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            message = GENERIC_ERROR_MESSAGE if self._production else str(exc) or GENERIC_ERROR_MESSAGE
            return JSONResponse(status_code=500, content={"error": message})
