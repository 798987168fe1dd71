import pytest

from cubray.image import Texture
from cubray.pixels import pack_pixel
from cubray.player import Player
from cubray.raycast import Ray, cast_ray, select_wall_texture, texture_column, texture_x

GRID = ["11111", "10001", "10001", "10001", "11111"]
WIDTH = 64
HEIGHT = 48
COLOR = 0x336699FF


def _texture(size=4, color=COLOR):
    return Texture(size, size, pack_pixel(color) * (size * size))


def test_center_ray_facing_east_hits_east_wall():
    player = Player.spawn(2.5, 2.5, "E")
    ray = cast_ray(player, GRID, WIDTH // 2, WIDTH, HEIGHT)
    assert ray.hit == 1
    assert (ray.map_x, ray.map_y) == (4, 2)
    assert ray.side == 0
    assert ray.perp_wall_dist == pytest.approx(1.5)


@pytest.mark.parametrize("heading", ["N", "E", "S", "W"])
def test_every_column_hits_a_wall_with_valid_slice(heading):
    player = Player.spawn(2.5, 2.5, heading)
    for column in range(WIDTH):
        ray = cast_ray(player, GRID, column, WIDTH, HEIGHT)
        assert ray.hit == 1
        assert GRID[ray.map_y][ray.map_x] == "1"
        assert 0 <= ray.draw_start <= ray.draw_end <= HEIGHT - 1


def test_ray_leaving_the_map_does_not_hit():
    player = Player.spawn(1.5, 0.5, "E")
    ray = cast_ray(player, ["000"], WIDTH // 2, WIDTH, HEIGHT)
    assert ray.hit == 0


def test_cast_ray_rejects_bad_dimensions():
    with pytest.raises(ValueError):
        cast_ray(Player.spawn(2.5, 2.5), GRID, 0, 0, HEIGHT)


def test_select_wall_texture_by_side_and_direction():
    textures = ("north", "south", "east", "west")
    east = cast_ray(Player.spawn(2.5, 2.5, "E"), GRID, WIDTH // 2, WIDTH, HEIGHT)
    north = cast_ray(Player.spawn(2.5, 2.5, "N"), GRID, WIDTH // 2, WIDTH, HEIGHT)
    assert select_wall_texture(east, textures) == "east"
    assert select_wall_texture(north, textures) == "north"
    assert select_wall_texture(Ray(side=1, ray_dir_y=0.5), textures) == "south"
    assert select_wall_texture(Ray(side=0, ray_dir_x=-0.5), textures) == "west"


def test_texture_x_within_texture_width():
    texture = _texture(8)
    for heading in "NESW":
        player = Player.spawn(2.3, 2.7, heading)
        for column in range(WIDTH):
            ray = cast_ray(player, GRID, column, WIDTH, HEIGHT)
            assert 0 <= texture_x(player, ray, texture) < texture.width


def test_texture_column_length_and_colors():
    player = Player.spawn(2.5, 2.5, "E")
    ray = cast_ray(player, GRID, 5, WIDTH, HEIGHT)
    colors = texture_column(ray, _texture(), player, HEIGHT)
    assert len(colors) == ray.draw_end - ray.draw_start
    assert set(colors) == {COLOR}


def test_texture_column_empty_slice():
    player = Player.spawn(2.5, 2.5, "E")
    ray = Ray(draw_start=10, draw_end=10, line_height=0)
    assert texture_column(ray, _texture(), player, HEIGHT) == []