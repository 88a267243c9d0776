"""
One request, rendered as one log line.

    | GET     | 200 | 1.2345ms     | /
    | GET     | 500 |             | /nil_pointer 'NoneType' object has no attribute 'n'

Method and status columns are colored by the status class; the method
and elapsed columns are right-padded so a live log stays scannable.
"""

from typing import Optional

from ..core.colors import Palette, StatusClass, palette_for, status_class

METHOD_WIDTH = 7
ELAPSED_WIDTH = 12
UNKNOWN_FAULT = "Unknown"
PANIC_TEMPLATE = "| {} | {} |             | {} {}"

_NS_PER_US = 1_000
_NS_PER_MS = 1_000_000
_NS_PER_S = 1_000_000_000
_NS_PER_MIN = 60 * _NS_PER_S
_NS_PER_HOUR = 60 * _NS_PER_MIN


def pad(width: int, value) -> str:
    """Right-pad to ``width``; longer values are left intact."""
    text = str(value)
    return text + " " * max(width - len(text), 0)


def _fraction(value: int, unit: int) -> str:
    whole, rest = divmod(value, unit)
    digits = len(str(unit)) - 1
    frac = str(rest).rjust(digits, "0").rstrip("0")
    return f"{whole}.{frac}" if frac else str(whole)


def format_duration(seconds: float) -> str:
    """Render a duration the way Go's ``time.Duration`` prints itself."""
    ns = int(round(seconds * _NS_PER_S))
    if ns == 0:
        return "0s"
    sign = "-" if ns < 0 else ""
    ns = abs(ns)

    if ns < _NS_PER_US:
        return f"{sign}{ns}ns"
    if ns < _NS_PER_MS:
        return f"{sign}{_fraction(ns, _NS_PER_US)}µs"
    if ns < _NS_PER_S:
        return f"{sign}{_fraction(ns, _NS_PER_MS)}ms"

    hours, rest = divmod(ns, _NS_PER_HOUR)
    minutes, rest = divmod(rest, _NS_PER_MIN)
    secs = _fraction(rest, _NS_PER_S) + "s"
    if hours:
        return f"{sign}{hours}h{minutes}m{secs}"
    if minutes:
        return f"{sign}{minutes}m{secs}"
    return f"{sign}{secs}"


def describe_fault(fault) -> str:
    """A fault's own message, or ``Unknown`` when it carries none."""
    if isinstance(fault, BaseException):
        message = str(fault)
        if message:
            return message
    return UNKNOWN_FAULT


class RequestLine:
    """
    Fluent builder for a single request log record.

    Each setter returns the same object so a line can be built in one
    expression. Only ``set_status`` derives extra state (the status class).
    """

    def __init__(self, palette: Optional[Palette] = None):
        self._palette = palette if palette is not None else palette_for(True)
        self._method = ""
        self._status = 0
        self._elapsed = 0.0
        self._path = ""
        self._status_class: Optional[StatusClass] = None

    def set_method(self, method: str) -> "RequestLine":
        self._method = method
        return self

    def set_path(self, path: str) -> "RequestLine":
        self._path = path
        return self

    def set_elapsed(self, elapsed: float) -> "RequestLine":
        self._elapsed = elapsed
        return self

    def set_status(self, status: int) -> "RequestLine":
        self._status = status
        self._status_class = status_class(status)
        return self

    @property
    def method(self) -> str:
        return self._method

    @property
    def status(self) -> int:
        return self._status

    @property
    def elapsed(self) -> float:
        return self._elapsed

    @property
    def path(self) -> str:
        return self._path

    @property
    def status_class(self) -> Optional[StatusClass]:
        return self._status_class

    @property
    def color(self) -> str:
        # No status yet means the request faulted before dispatch.
        if self._status_class is None:
            return self._palette.server_fault
        return self._palette.color_for(self._status_class)

    def _colored(self, text: str) -> str:
        return f"{self.color}{text}{self._palette.reset}"

    def _pad_and_color(self, width: int, value) -> str:
        if width > 0:
            return self._colored(pad(width, value))
        return self._colored(str(value))

    def __str__(self) -> str:
        return "| {} | {} | {} | {}".format(
            self._pad_and_color(METHOD_WIDTH, self._method),
            self._pad_and_color(0, self._status),
            pad(ELAPSED_WIDTH, format_duration(self._elapsed)),
            self._path,
        )

    def panic_string(self, fault) -> str:
        """Fault line: blank elapsed column, then the fault description."""
        return PANIC_TEMPLATE.format(
            self._pad_and_color(METHOD_WIDTH, self._method),
            self._pad_and_color(0, self._status),
            self._path,
            self._colored(describe_fault(fault)),
        )

    def __repr__(self) -> str:
        return (
            f"RequestLine(method={self._method!r}, status={self._status}, "
            f"elapsed={self._elapsed!r}, path={self._path!r})"
        )
