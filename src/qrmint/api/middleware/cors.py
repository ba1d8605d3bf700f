"""CORS middleware configuration.

Only allow-listed origins may call the API with credentials. An origin is
allowed when it equals an allow-list entry or contains one. Requests from
any other origin are refused before they reach a route handler. Requests
without an ``Origin`` header (curl, server-to-server) pass through.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from starlette.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse

if TYPE_CHECKING:
    from collections.abc import Sequence

    from fastapi import FastAPI
    from starlette.datastructures import Headers
    from starlette.types import ASGIApp, Receive, Scope, Send

logger = logging.getLogger(__name__)

ALLOWED_METHODS = ["GET", "POST"]
CORS_REJECTED_MESSAGE = "Not allowed by CORS"


class AllowListCORSMiddleware(CORSMiddleware):
    """``CORSMiddleware`` with exact-or-substring origin matching."""

    def __init__(self, app: ASGIApp, *, origins: Sequence[str]) -> None:
        self._origins = [o.rstrip("/") for o in origins if o]
        super().__init__(
            app,
            allow_origins=self._origins,
            allow_methods=ALLOWED_METHODS,
            allow_headers=["*"],
            allow_credentials=True,
        )

    def is_allowed_origin(self, origin: str) -> bool:
        origin = origin.rstrip("/")
        return any(origin == allowed or allowed in origin for allowed in self._origins)

    async def simple_response(
        self, scope: Scope, receive: Receive, send: Send, request_headers: Headers
    ) -> None:
        origin = request_headers["origin"]
        if not self.is_allowed_origin(origin):
            logger.warning("Rejected request from origin %s", origin)
            response = JSONResponse({"error": CORS_REJECTED_MESSAGE}, status_code=403)
            await response(scope, receive, send)
            return
        await super().simple_response(scope, receive, send, request_headers)


def setup_cors(app: FastAPI, origins: Sequence[str]) -> None:
    """Add the allow-list CORS middleware to *app*."""
    app.add_middleware(AllowListCORSMiddleware, origins=list(origins))
