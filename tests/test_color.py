import pytest

from cubray.color import parse_atoi, parse_rgb


@pytest.mark.parametrize(
    "text, expected",
    [
        ("42", 42),
        ("  -17", -17),
        ("+5", 5),
        ("0", 0),
        ("00000000000042", 42),
        ("2147483647", 2147483647),
        ("-2147483648", -2147483648),
        ("   ", 0),
    ],
)
def test_parse_atoi_accepts(text, expected):
    assert parse_atoi(text) == expected


@pytest.mark.parametrize(
    "text",
    ["", "-", "+", "12a", "1 2", "2147483648", "-2147483649", "12345678901", "x"],
)
def test_parse_atoi_rejects(text):
    with pytest.raises(ValueError):
        parse_atoi(text)


def test_parse_rgb_channels():
    color = parse_rgb("220,100,7")
    assert color >> 24 == 220
    assert (color >> 16) & 0xFF == 100
    assert (color >> 8) & 0xFF == 7
    assert color & 0xFF == 255


def test_parse_rgb_black_is_opaque():
    assert parse_rgb("0,0,0") == 255


def test_parse_rgb_allows_one_trailing_comma():
    assert parse_rgb("1,2,3,") == parse_rgb("1,2,3")


def test_parse_rgb_allows_leading_zeros():
    assert parse_rgb("0010,020,0") == parse_rgb("10,20,0")


@pytest.mark.parametrize(
    "text",
    [
        "",
        "256,0,0",
        "1,2",
        "1,2,3,4",
        "1,,3",
        "1,2,3,,",
        "a,b,c",
        "-1,2,3",
        " 1,2,3",
        "1,2,3 ",
        "255,255,255",
    ],
)
def test_parse_rgb_rejects(text):
    with pytest.raises(ValueError):
        parse_rgb(text)