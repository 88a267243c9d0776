"""
Tests for RequestLine formatting, status colors and duration rendering.
"""

import pytest

from shellserve.core.colors import (
    CYAN,
    GREEN,
    MAGENTA,
    RED,
    RESET,
    YELLOW,
    Palette,
    StatusClass,
    status_class,
)
from shellserve.middleware.request_line import RequestLine, describe_fault, format_duration, pad


@pytest.mark.parametrize(
    "status,expected",
    [
        (100, StatusClass.INFORMATIONAL),
        (199, StatusClass.INFORMATIONAL),
        (200, StatusClass.SUCCESS),
        (299, StatusClass.SUCCESS),
        (300, StatusClass.REDIRECT),
        (399, StatusClass.REDIRECT),
        (400, StatusClass.CLIENT_FAULT),
        (499, StatusClass.CLIENT_FAULT),
        (500, StatusClass.SERVER_FAULT),
        (599, StatusClass.SERVER_FAULT),
        (99, StatusClass.SERVER_FAULT),
        (0, StatusClass.SERVER_FAULT),
    ],
)
def test_status_class_partitions(status: int, expected: StatusClass):
    """Test every status class partition including the boundaries."""
    assert status_class(status) == expected


@pytest.mark.parametrize(
    "status,color",
    [
        (101, CYAN),
        (199, CYAN),
        (200, GREEN),
        (299, GREEN),
        (300, YELLOW),
        (399, YELLOW),
        (400, MAGENTA),
        (499, MAGENTA),
        (500, RED),
        (503, RED),
    ],
)
def test_status_color_in_line(status: int, color: str):
    """Test that method and status columns carry the status class color."""
    line = RequestLine(Palette.ansi()).set_method("GET").set_status(status).set_path("/")

    assert line.color == color
    assert str(line).startswith(f"| {color}GET    {RESET} | {color}{status}{RESET} | ")


def test_unset_status_uses_server_fault_color():
    """Test that a line with no status yet defaults to the server-fault color."""
    line = RequestLine(Palette.ansi()).set_method("GET")

    assert line.status == 0
    assert line.status_class is None
    assert line.color == RED


def test_only_set_status_derives_class():
    """Test that the other setters leave the status class alone."""
    line = RequestLine(Palette.plain()).set_method("POST").set_path("/x").set_elapsed(0.5)
    assert line.status_class is None

    line.set_status(404)
    assert line.status_class == StatusClass.CLIENT_FAULT


def test_plain_line_format():
    """Test the steady-state line layout."""
    line = (
        RequestLine(Palette.plain())
        .set_method("GET")
        .set_status(200)
        .set_elapsed(0.0012345)
        .set_path("/")
    )

    assert str(line) == "| GET     | 200 | 1.2345ms     | /"


@pytest.mark.parametrize(
    "method,column",
    [
        ("GET", "GET    "),
        ("OPTIONS", "OPTIONS"),
        ("PROPFIND", "PROPFIND"),
    ],
)
def test_method_padding_never_truncates(method: str, column: str):
    """Test that padding only ever adds spaces."""
    line = RequestLine(Palette.plain()).set_method(method).set_status(200).set_path("/")
    assert str(line).startswith(f"| {column} | 200 | ")


def test_pad():
    assert pad(5, "ab") == "ab   "
    assert pad(2, "abcd") == "abcd"
    assert pad(0, 42) == "42"


def test_long_elapsed_is_not_truncated():
    line = RequestLine(Palette.plain()).set_method("GET").set_status(200).set_elapsed(1.123456789)
    assert "| 1.123456789s | " in str(line)


@pytest.mark.parametrize(
    "seconds,expected",
    [
        (0, "0s"),
        (850e-9, "850ns"),
        (12.5e-6, "12.5µs"),
        (0.0012345, "1.2345ms"),
        (0.25, "250ms"),
        (1.5, "1.5s"),
        (2, "2s"),
        (90, "1m30s"),
        (3725, "1h2m5s"),
    ],
)
def test_format_duration(seconds, expected):
    """Test Go-style duration rendering."""
    assert format_duration(seconds) == expected


def test_panic_string_layout():
    """Test the fault line: blank elapsed column and the fault message."""
    line = RequestLine(Palette.plain()).set_method("GET").set_status(500).set_path("/nil_pointer")

    rendered = line.panic_string(AttributeError("'NoneType' object has no attribute 'n'"))

    assert rendered == (
        "| GET     | 500 |             | /nil_pointer 'NoneType' object has no attribute 'n'"
    )


def test_panic_string_colors_description():
    line = RequestLine(Palette.ansi()).set_method("GET").set_status(500).set_path("/boom")

    assert line.panic_string(ValueError("boom")).endswith(f"/boom {RED}boom{RESET}")


@pytest.mark.parametrize("fault", [RuntimeError(), "a plain string", None, 42])
def test_fault_without_description_is_unknown(fault):
    """Test that faults with no message of their own are described as Unknown."""
    assert describe_fault(fault) == "Unknown"

    line = RequestLine(Palette.plain()).set_method("GET").set_status(500).set_path("/p")
    assert line.panic_string(fault).endswith("| /p Unknown")


def test_plain_palette_has_no_escapes():
    line = RequestLine(Palette.plain()).set_method("GET").set_status(500).set_path("/")
    assert "\033[" not in str(line)
    assert "\033[" not in line.panic_string(ValueError("x"))
