"""Request pipeline middleware: recovery, request logging, response observation."""

from starlette.middleware import Middleware

from ..core.colors import Palette
from .error_handler import ErrorHandlerMiddleware
from .request_line import RequestLine, format_duration
from .request_logger import RequestLoggerMiddleware
from .response_observer import ResponseObserver


def pipeline(palette: Palette) -> list:
    """
    Middleware stack in application order, outermost first.

    Recovery wraps logging so a fault raised inside the timed region is
    reported once, by the fault line.
    """
    return [
        Middleware(ErrorHandlerMiddleware, palette=palette),
        Middleware(RequestLoggerMiddleware, palette=palette),
    ]


__all__ = [
    "ErrorHandlerMiddleware",
    "RequestLoggerMiddleware",
    "ResponseObserver",
    "RequestLine",
    "format_duration",
    "pipeline",
]
