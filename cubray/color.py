"""Parsing of integers and 'R,G,B' colour settings in scene files."""

from __future__ import annotations

import re

_INT_MIN = -2147483648
_INT_MAX = 2147483647
_MAX_DIGITS = 10
_WHITESPACE = " \t\n\v\f\r"
_DIGITS = re.compile(r"[0-9]*")
_ALL_DIGITS = re.compile(r"[0-9]*\Z")
# This value doubles as the marker for an invalid colour, so it is refused.
_RESERVED = 0xFFFFFFFF


def parse_atoi(text: str) -> int:
    """Parse a whole string as a 32-bit signed integer.

    Leading whitespace and one sign are allowed; anything after the digits,
    more than ten significant digits or an out-of-range value is rejected.
    """
    if not text:
        raise ValueError("empty number")
    body = text.lstrip(_WHITESPACE)
    sign = 1
    if body[:1] in ("-", "+"):
        if body[0] == "-":
            sign = -1
        body = body[1:]
    if len(body.lstrip("0")) > _MAX_DIGITS:
        raise ValueError(f"number too long: {text!r}")
    digits = _DIGITS.match(body).group()
    if body[len(digits):]:
        raise ValueError(f"not a number: {text!r}")
    if text in ("-", "+"):
        raise ValueError(f"not a number: {text!r}")
    value = sign * int(digits or "0")
    if not _INT_MIN <= value <= _INT_MAX:
        raise ValueError(f"number out of range: {text!r}")
    return value


def parse_rgb(text: str) -> int:
    """Parse 'R,G,B' into an opaque 0xRRGGBBAA colour."""
    parts = text.split(",")
    if text.endswith(","):
        parts.pop()
    if not text or len(parts) != 3:
        raise ValueError("Invalid RGB configuration")
    channels = []
    for part in parts:
        if not _ALL_DIGITS.match(part):
            raise ValueError("Invalid RGB configuration")
        value = parse_atoi(part)
        if not 0 <= value <= 255:
            raise ValueError("Invalid RGB configuration")
        channels.append(value)
    red, green, blue = channels
    color = red << 24 | green << 16 | blue << 8 | 0xFF
    if color == _RESERVED:
        raise ValueError("Invalid RGB configuration")
    return color