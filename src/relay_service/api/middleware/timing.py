"""Request timing: one log line per call plus an ``X-Response-Time-Ms`` header.

The mobile client polls every 1.5 s, so health probes are logged at DEBUG to
keep the INFO stream readable.
"""
from __future__ import annotations

import logging
import time
from collections.abc import Collection

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

HEADER = "X-Response-Time-Ms"


class RequestTimingMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, quiet_paths: Collection[str] = ()) -> None:
        super().__init__(app)
        self._quiet_paths = frozenset(quiet_paths)

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        response.headers[HEADER] = f"{elapsed_ms:.1f}"
        level = logging.DEBUG if request.url.path in self._quiet_paths else logging.INFO
        logger.log(
            level,
            "%s %s %s %.1fms",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response
