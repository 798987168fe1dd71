import pytest

from cubray.pixels import fnv_hash, pack_pixel, rgba_to_mono, unpack_pixel


def test_fnv_hash_of_empty_input_is_offset_basis():
    assert fnv_hash(b"") == 0xCBF29CE484222325


def test_fnv_hash_known_vector():
    assert fnv_hash(b"a") == 0xAF63DC4C8601EC8C


def test_fnv_hash_accepts_text_and_bytes_alike():
    assert fnv_hash("xy") == fnv_hash(b"xy")


def test_fnv_hash_fits_in_64_bits_and_depends_on_order():
    assert 0 <= fnv_hash(b"ab") < 1 << 64
    assert fnv_hash(b"ab") != fnv_hash(b"ba")


def test_fnv_hash_high_bytes_differ_from_low_bytes():
    assert fnv_hash(b"\x80") != fnv_hash(b"\x00")
    assert 0 <= fnv_hash(b"\xff\xfe") < 1 << 64


@pytest.mark.parametrize("color", [0xFFFFFFFF, 0x12345678, 0xAB00CD40, 0x00FF0080])
def test_rgba_to_mono_gives_equal_channels_and_keeps_alpha(color):
    mono = rgba_to_mono(color)
    assert (mono >> 24) & 0xFF == (mono >> 16) & 0xFF == (mono >> 8) & 0xFF
    assert mono & 0xFF == color & 0xFF


def test_rgba_to_mono_of_black_is_black():
    assert rgba_to_mono(0x00000080) == 0x00000080


def test_rgba_to_mono_is_idempotent_on_dark_grey():
    once = rgba_to_mono(0x404040FF)
    assert rgba_to_mono(once) <= once


def test_pack_pixel_is_big_endian_rgba():
    assert pack_pixel(0x11223344) == b"\x11\x22\x33\x44"


@pytest.mark.parametrize("color", [0, 0xFFFFFFFF, 0xDEADBEEF, 0x000000FF])
def test_pack_unpack_round_trip(color):
    assert unpack_pixel(pack_pixel(color)) == color


def test_unpack_pixel_rejects_wrong_length():
    with pytest.raises(ValueError):
        unpack_pixel(b"\x00\x01\x02")