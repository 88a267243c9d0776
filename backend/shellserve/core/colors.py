"""
Status classes and the terminal color palette used by the request log.

The palette is built once at startup and handed to the middlewares;
nothing mutates it afterwards.
"""

import enum
from dataclasses import dataclass


class StatusClass(str, enum.Enum):
    """Hundreds-digit grouping of an HTTP status code."""
    INFORMATIONAL = "informational"
    SUCCESS = "success"
    REDIRECT = "redirect"
    CLIENT_FAULT = "client_fault"
    SERVER_FAULT = "server_fault"


def status_class(status: int) -> StatusClass:
    if 100 <= status < 200:
        return StatusClass.INFORMATIONAL
    if 200 <= status < 300:
        return StatusClass.SUCCESS
    if 300 <= status < 400:
        return StatusClass.REDIRECT
    if 400 <= status < 500:
        return StatusClass.CLIENT_FAULT
    return StatusClass.SERVER_FAULT


# ANSI escape sequences
RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
MAGENTA = "\033[35m"
CYAN = "\033[36m"
RESET = "\033[0m"


@dataclass(frozen=True)
class Palette:
    informational: str = ""
    success: str = ""
    redirect: str = ""
    client_fault: str = ""
    server_fault: str = ""
    reset: str = ""

    @classmethod
    def ansi(cls) -> "Palette":
        return cls(
            informational=CYAN,
            success=GREEN,
            redirect=YELLOW,
            client_fault=MAGENTA,
            server_fault=RED,
            reset=RESET,
        )

    @classmethod
    def plain(cls) -> "Palette":
        """Palette with no escape sequences, for non-terminal sinks."""
        return cls()

    def color_for(self, klass: StatusClass) -> str:
        return getattr(self, klass.value)


def palette_for(use_color: bool) -> Palette:
    return Palette.ansi() if use_color else Palette.plain()
