import pytest

from cubray.image import Image, Texture
from cubray.pixels import pack_pixel
from cubray.player import Player
from cubray.raycast import cast_ray
from cubray.render import (
    FLOOR_TILE_COLOR,
    WALL_COLOR,
    draw_column,
    draw_frame,
    draw_minimap,
    draw_rect_filled,
    map_height,
    map_width,
    minimap_scale,
)

GRID = ["11111", "10001", "10001", "10001", "11111"]
CEILING = 0x0000FFFF
FLOOR = 0x00FF00FF
WALL = 0x336699FF


def _texture(color=WALL):
    return Texture(4, 4, pack_pixel(color) * 16)


def test_map_dimensions():
    rows = ["111", "10001\n", "1"]
    assert map_height(rows) == len(rows)
    assert map_width(rows) == len("10001")
    assert map_width([]) == 0


def test_minimap_scale_has_minimum_and_fits():
    assert minimap_scale(200, 200, 1000, 1000) == 2
    scale = minimap_scale(200, 150, 10, 6)
    assert scale * (10 + 2) <= 200
    assert scale * (6 + 2) <= 150
    assert (scale + 1) * (10 + 2) > 200 or (scale + 1) * (6 + 2) > 150


def test_draw_rect_filled_clips_to_image():
    image = Image(4, 4)
    draw_rect_filled(image, 2, 2, 4, WALL)
    for x in range(4):
        for y in range(4):
            expected = WALL if x >= 2 and y >= 2 else 0
            assert image.get_pixel(x, y) == expected


def test_draw_minimap_colors_cells():
    image = Image(6, 4)
    draw_minimap(image, ["1 0", "1N1"], 2)
    assert image.get_pixel(0, 0) == WALL_COLOR
    assert image.get_pixel(3, 1) == FLOOR_TILE_COLOR
    assert image.get_pixel(5, 0) == FLOOR_TILE_COLOR
    assert image.get_pixel(2, 2) == 0
    assert image.get_pixel(4, 3) == WALL_COLOR


def test_draw_column_layers():
    image = Image(16, 20)
    player = Player.spawn(2.5, 2.5, "E")
    ray = cast_ray(player, GRID, 8, image.width, image.height)
    draw_column(image, ray, _texture(), player, 8, CEILING, FLOOR)
    for y in range(image.height):
        if y < ray.draw_start:
            expected = CEILING
        elif y < ray.draw_end:
            expected = WALL
        else:
            expected = FLOOR
        assert image.get_pixel(8, y) == expected
    assert image.get_pixel(7, 0) == 0


def test_draw_frame_fills_every_column():
    image = Image(16, 20)
    player = Player.spawn(2.5, 2.5, "E")
    textures = [_texture() for _ in range(4)]
    draw_frame(image, GRID, player, textures, CEILING, FLOOR)
    for x in range(image.width):
        assert image.get_pixel(x, 0) == CEILING
        assert image.get_pixel(x, image.height - 1) == FLOOR
        assert image.get_pixel(x, image.height // 2) == WALL


def test_draw_frame_uses_texture_of_facing_wall():
    image = Image(8, 20)
    player = Player.spawn(2.5, 2.5, "N")
    north = _texture(0x111111FF)
    other = _texture(0x222222FF)
    draw_frame(image, GRID, player, [north, other, other, other], CEILING, FLOOR)
    assert image.get_pixel(image.width // 2, image.height // 2) == 0x111111FF


@pytest.mark.parametrize("color", [CEILING, FLOOR])
def test_draw_rect_outside_image_is_ignored(color):
    image = Image(2, 2)
    draw_rect_filled(image, 5, 5, 3, color)
    assert bytes(image.pixels) == bytes(16)