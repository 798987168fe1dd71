"""Colour packing, greyscale conversion and string hashing helpers."""

from __future__ import annotations

import struct

_FNV_PRIME = 0x100000001B3
_FNV_OFFSET = 0xCBF29CE484222325
_MASK64 = (1 << 64) - 1
# Bytes above 0x7F are sign-extended before being mixed into the hash.
_SIGN_EXTEND = _MASK64 ^ 0xFF


def _f32(value: float) -> float:
    """Round a float to single precision."""
    return struct.unpack("f", struct.pack("f", value))[0]


_RED_WEIGHT = _f32(0.299)
_GREEN_WEIGHT = _f32(0.587)
_BLUE_WEIGHT = _f32(0.114)


def fnv_hash(data: bytes | str) -> int:
    """Return the 64-bit FNV-1a hash of the given bytes."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    value = _FNV_OFFSET
    for byte in data:
        value ^= byte if byte < 0x80 else byte | _SIGN_EXTEND
        value = (value * _FNV_PRIME) & _MASK64
    return value


def rgba_to_mono(color: int) -> int:
    """Convert a 0xRRGGBBAA colour to grey, keeping its alpha."""
    red = int(_f32(_RED_WEIGHT * ((color >> 24) & 0xFF))) & 0xFF
    green = int(_f32(_GREEN_WEIGHT * ((color >> 16) & 0xFF))) & 0xFF
    blue = int(_f32(_BLUE_WEIGHT * ((color >> 8) & 0xFF))) & 0xFF
    grey = (red + green + blue) & 0xFF
    return grey << 24 | grey << 16 | grey << 8 | (color & 0xFF)


def pack_pixel(color: int) -> bytes:
    """Return the four RGBA bytes of a 0xRRGGBBAA colour."""
    return (color & 0xFFFFFFFF).to_bytes(4, "big")


def unpack_pixel(data: bytes) -> int:
    """Return the 0xRRGGBBAA colour stored in four RGBA bytes."""
    if len(data) != 4:
        raise ValueError(f"a pixel is 4 bytes, got {len(data)}")
    return int.from_bytes(data, "big")