"""Reader for the XPM42 text image format."""

from __future__ import annotations

import os
import re
from typing import IO, Union

from .errors import MlxErrno, MlxError
from .image import Texture
from .pixels import fnv_hash, pack_pixel, rgba_to_mono

_MAGIC = b"!XPM42\n"
_TABLE_SIZE = 65535
_MAX_DIMENSION = 32767
_MAX_CPP = 10

_INT = re.compile(rb"\s*([+-]?)(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)")
_MODE = re.compile(rb"\s*(\S)")
_CHANNEL = re.compile(rb"\s*([+-]?)([0-9a-fA-F]*)")


def _invalid() -> MlxError:
    return MlxError(MlxErrno.INVXPM)


def _next_line(stream: IO) -> bytes:
    line = stream.readline()
    return line.encode("utf-8") if isinstance(line, str) else line


def _scan_int(line: bytes, pos: int) -> tuple[int, int]:
    match = _INT.match(line, pos)
    if not match:
        raise _invalid()
    sign, digits = match.groups()
    if digits[:2].lower() == b"0x":
        value = int(digits[2:], 16)
    elif len(digits) > 1 and digits.startswith(b"0"):
        value = int(digits, 8)
    else:
        value = int(digits)
    return (-value if sign == b"-" else value), match.end()


def _scan_header(line: bytes) -> tuple[int, int, int, int, bytes]:
    values = []
    pos = 0
    for _ in range(4):
        value, pos = _scan_int(line, pos)
        values.append(value)
    match = _MODE.match(line, pos)
    if not match:
        raise _invalid()
    width, height, colors, cpp = values
    mode = match.group(1)
    if not (0 <= width <= _MAX_DIMENSION and 0 <= height <= _MAX_DIMENSION):
        raise _invalid()
    if mode not in (b"c", b"m") or not 1 <= cpp <= _MAX_CPP:
        raise _invalid()
    return width, height, colors, cpp, mode


def _hex_channel(pair: bytes) -> int:
    sign, digits = _CHANNEL.match(pair).groups()
    value = int(digits, 16) if digits else 0
    return (-value if sign == b"-" else value) & 0xFF


def _insert_entry(line: bytes, cpp: int, mode: bytes, table: dict[int, int]) -> None:
    if line.rfind(b" ") != cpp:
        raise _invalid()
    if line[cpp + 1:cpp + 2] != b"#" or not line[cpp + 2:cpp + 3].isalnum():
        raise _invalid()
    start = cpp + 2
    color = 0
    for shift, offset in ((24, 0), (16, 2), (8, 4), (0, 6)):
        color |= _hex_channel(line[start + offset:start + offset + 2]) << shift
    key = fnv_hash(line[:cpp]) % _TABLE_SIZE
    table[key] = rgba_to_mono(color) if mode == b"m" else color


def read_xpm42(stream: IO) -> Texture:
    """Decode an XPM42 image from an open text or binary stream."""
    if _next_line(stream) != _MAGIC:
        raise _invalid()
    header = _next_line(stream)
    if not header:
        raise _invalid()
    width, height, colors, cpp, mode = _scan_header(header)

    table: dict[int, int] = {}
    for _ in range(colors):
        line = _next_line(stream)
        if not line:
            raise _invalid()
        _insert_entry(line, cpp, mode, table)

    pixels = bytearray()
    for _ in range(height):
        line = _next_line(stream)
        if not line:
            raise _invalid()
        if line.endswith(b"\n"):
            line = line[:-1]
        if len(line) != width * cpp:
            raise _invalid()
        pixels.extend(
            b"".join(
                pack_pixel(table.get(fnv_hash(line[start:start + cpp]) % _TABLE_SIZE, 0))
                for start in range(0, len(line), cpp)
            )
        )
    return Texture(width, height, pixels)


def load_xpm42(path: Union[str, os.PathLike]) -> Texture:
    """Load an XPM42 image from a file whose name contains '.xpm42'."""
    name = os.fspath(path)
    if ".xpm42" not in str(name):
        raise MlxError(MlxErrno.INVEXT)
    try:
        stream = open(name, "rb")
    except OSError as exc:
        raise MlxError(MlxErrno.INVFILE) from exc
    with stream:
        return read_xpm42(stream)