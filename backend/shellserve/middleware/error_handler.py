"""
Recovery middleware.

Traps any exception raised while handling a request, logs a fault line
and answers with an empty 500 instead of letting the fault reach the
server. Must sit outside RequestLoggerMiddleware so a faulted request
still gets exactly one log line.

Implemented as pure ASGI middleware (not BaseHTTPMiddleware) to avoid
the known Starlette issue with stacked BaseHTTPMiddleware corrupting
response bodies.
"""

import logging
import traceback
from dataclasses import dataclass
from typing import Optional

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from ..core.colors import Palette, palette_for
from .request_line import RequestLine

logger = logging.getLogger("shellserve.middleware.error_handler")

FAULT_STATUS = 500


@dataclass(frozen=True)
class Fault:
    """Outcome of a trapped request: the exception that ended it."""
    error: Exception
    response_started: bool
    response_complete: bool


class ErrorHandlerMiddleware:
    """Converts request faults into 500 responses and a fault log line."""

    def __init__(self, app: ASGIApp, palette: Optional[Palette] = None):
        self.app = app
        self.palette = palette if palette is not None else palette_for(True)

    async def _trap(self, scope: Scope, receive: Receive, send: Send) -> Optional[Fault]:
        response_started = False
        response_complete = False

        async def send_wrapper(message: Message):
            nonlocal response_started, response_complete
            if message["type"] == "http.response.start":
                response_started = True
            elif message["type"] == "http.response.body" and not message.get("more_body", False):
                response_complete = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            return Fault(
                error=exc,
                response_started=response_started,
                response_complete=response_complete,
            )
        return None

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        fault = await self._trap(scope, receive, send)
        if fault is None:
            return

        line = (
            RequestLine(self.palette)
            .set_method(scope.get("method", "?"))
            .set_status(FAULT_STATUS)
            .set_path(scope.get("path", "?"))
        )
        logger.error("%s", line.panic_string(fault.error))
        logger.debug(
            "".join(traceback.format_exception(type(fault.error), fault.error, fault.error.__traceback__))
        )

        if fault.response_started:
            # Headers already went out; end the body so the client is not left hanging.
            if not fault.response_complete:
                await send({"type": "http.response.body", "body": b"", "more_body": False})
            return

        await send({
            "type": "http.response.start",
            "status": line.status,
            "headers": [[b"content-length", b"0"]],
        })
        await send({
            "type": "http.response.body",
            "body": b"",
        })
