"""
Request logging middleware.

Logs one line per request with method, status, elapsed time and path.
The status comes from a ResponseObserver wrapped around ``send``.

Implemented as pure ASGI middleware (not BaseHTTPMiddleware) to avoid
the known Starlette issue with stacked BaseHTTPMiddleware corrupting
response bodies.
"""

import logging
import time
from typing import Optional

from starlette.types import ASGIApp, Receive, Scope, Send

from ..core.colors import Palette, palette_for
from .request_line import RequestLine
from .response_observer import ResponseObserver

logger = logging.getLogger("shellserve.middleware.request_logger")


class RequestLoggerMiddleware:
    """Times every HTTP request and logs it once it returns."""

    def __init__(self, app: ASGIApp, palette: Optional[Palette] = None):
        self.app = app
        self.palette = palette if palette is not None else palette_for(True)

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start_time = time.perf_counter()
        observer = ResponseObserver(send)

        # Faults propagate untouched; ErrorHandlerMiddleware logs those.
        await self.app(scope, receive, observer)

        line = (
            RequestLine(self.palette)
            .set_method(scope.get("method", "?"))
            .set_status(observer.status)
            .set_path(scope.get("path", "?"))
            .set_elapsed(time.perf_counter() - start_time)
        )
        logger.info("%s", line)
