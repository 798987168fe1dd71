"""Grid ray casting and wall texture sampling."""

from __future__ import annotations

import math
import struct
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypeVar

from .image import Texture
from .player import Player

T = TypeVar("T")

_FAR = 1e30
_MAX_INT = 2147483647


def _f32(value: float) -> float:
    """Round a float to single precision."""
    return struct.unpack("f", struct.pack("f", value))[0]


@dataclass
class Ray:
    """The state and result of casting one screen column's ray."""

    camera_x: float = 0.0
    ray_dir_x: float = 0.0
    ray_dir_y: float = 0.0
    map_x: int = 0
    map_y: int = 0
    delta_dist_x: float = 0.0
    delta_dist_y: float = 0.0
    side_dist_x: float = 0.0
    side_dist_y: float = 0.0
    step_x: int = 0
    step_y: int = 0
    hit: int = 0
    side: int = 0
    perp_wall_dist: float = 0.0
    line_height: int = 0
    real_draw_start: int = 0
    draw_start: int = 0
    draw_end: int = 0


def _divide(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return math.inf
    return numerator / denominator


def _init_ray(player: Player, column: int, width: int) -> Ray:
    ray = Ray(camera_x=2 * column / float(width) - 1)
    ray.ray_dir_x = player.dir_x + player.plane_x * ray.camera_x
    ray.ray_dir_y = player.dir_y + player.plane_y * ray.camera_x
    ray.map_x = int(player.x)
    ray.map_y = int(player.y)
    ray.delta_dist_x = _FAR if ray.ray_dir_x == 0 else abs(1 / ray.ray_dir_x)
    ray.delta_dist_y = _FAR if ray.ray_dir_y == 0 else abs(1 / ray.ray_dir_y)
    return ray


def _step_and_side_dist(ray: Ray, player: Player) -> None:
    if ray.ray_dir_x < 0:
        ray.step_x = -1
        ray.side_dist_x = (player.x - ray.map_x) * ray.delta_dist_x
    else:
        ray.step_x = 1
        ray.side_dist_x = (ray.map_x + 1.0 - player.x) * ray.delta_dist_x
    if ray.ray_dir_y < 0:
        ray.step_y = -1
        ray.side_dist_y = (player.y - ray.map_y) * ray.delta_dist_y
    else:
        ray.step_y = 1
        ray.side_dist_y = (ray.map_y + 1.0 - player.y) * ray.delta_dist_y


def _perform_dda(ray: Ray, grid: Sequence[str]) -> None:
    while not ray.hit:
        if ray.side_dist_x < ray.side_dist_y:
            ray.side_dist_x += ray.delta_dist_x
            ray.map_x += ray.step_x
            ray.side = 0
        else:
            ray.side_dist_y += ray.delta_dist_y
            ray.map_y += ray.step_y
            ray.side = 1
        if not 0 <= ray.map_y < len(grid) or not 0 <= ray.map_x < len(grid[ray.map_y]):
            break
        if grid[ray.map_y][ray.map_x] == "1":
            ray.hit = 1


def _perp_wall_dist(ray: Ray, player: Player) -> None:
    if ray.side == 0:
        ray.perp_wall_dist = _divide(
            ray.map_x - player.x + (1 - ray.step_x) / 2.0, ray.ray_dir_x
        )
    else:
        ray.perp_wall_dist = _divide(
            ray.map_y - player.y + (1 - ray.step_y) / 2.0, ray.ray_dir_y
        )


def _line_height(ray: Ray, height: int) -> None:
    if ray.perp_wall_dist == 0:
        ray.line_height = _MAX_INT
    else:
        ray.line_height = min(int(height / ray.perp_wall_dist), _MAX_INT)
    ray.real_draw_start = -(ray.line_height // 2) + height // 2
    ray.draw_start = max(ray.real_draw_start, 0)
    ray.draw_end = min(ray.line_height // 2 + height // 2, height - 1)


def cast_ray(player: Player, grid: Sequence[str], column: int, width: int, height: int) -> Ray:
    """Cast the ray for one screen column and work out its wall slice."""
    if width <= 0 or height <= 0:
        raise ValueError("screen dimensions must be positive")
    ray = _init_ray(player, column, width)
    _step_and_side_dist(ray, player)
    _perform_dda(ray, grid)
    _perp_wall_dist(ray, player)
    _line_height(ray, height)
    return ray


def select_wall_texture(ray: Ray, textures: Sequence[T]) -> T:
    """Pick the wall texture from (north, south, east, west) for the side hit."""
    if ray.side == 0:
        return textures[2] if ray.ray_dir_x > 0 else textures[3]
    return textures[1] if ray.ray_dir_y > 0 else textures[0]


def texture_x(player: Player, ray: Ray, texture: Texture) -> int:
    """Return the texture column that the ray's wall hit maps to."""
    if ray.side == 0:
        wall_x = _f32(player.y + ray.perp_wall_dist * ray.ray_dir_y)
    else:
        wall_x = _f32(player.x + ray.perp_wall_dist * ray.ray_dir_x)
    if math.isfinite(wall_x):
        wall_x = _f32(wall_x - math.floor(wall_x))
    else:
        wall_x = 0.0
    column = int(_f32(wall_x * _f32(float(texture.width))))
    column = min(max(column, 0), texture.width - 1)
    if (ray.side == 0 and ray.ray_dir_x < 0) or (ray.side == 1 and ray.ray_dir_y > 0):
        column = texture.width - column - 1
    return column


def texture_column(ray: Ray, texture: Texture, player: Player, height: int) -> list[int]:
    """Return the colours of rows draw_start up to draw_end of the wall slice."""
    if ray.draw_start >= ray.draw_end:
        return []
    column = texture_x(player, ray, texture)
    step = _f32(float(texture.height) / float(ray.line_height))
    if ray.real_draw_start < 0:
        position = _f32(-ray.real_draw_start * step)
    else:
        position = _f32(
            (ray.real_draw_start - height // 2 + ray.line_height // 2) * step
        )
    mask = texture.height - 1
    colors = []
    for _ in range(ray.draw_start, ray.draw_end):
        colors.append(texture.pixel(column, int(position) & mask))
        position = _f32(position + step)
    return colors