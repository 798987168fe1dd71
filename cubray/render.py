"""Drawing the 3D view and the overhead minimap into images."""

from __future__ import annotations

from collections.abc import Sequence

from .image import Image, Texture
from .player import Player
from .raycast import Ray, cast_ray, select_wall_texture, texture_column

WALL_COLOR = 0x1A1A1AFF
FLOOR_TILE_COLOR = 0xCCCCCCFF
MIN_MINIMAP_SCALE = 2


def _put(image: Image, x: int, y: int, color: int) -> None:
    if 0 <= x < image.width and 0 <= y < image.height:
        image.put_pixel(x, y, color)


def map_height(grid: Sequence[str]) -> int:
    """Return the number of map rows."""
    return len(grid)


def map_width(grid: Sequence[str]) -> int:
    """Return the length of the longest row, not counting line endings."""
    return max((len(row.split("\n", 1)[0]) for row in grid), default=0)


def draw_column(
    image: Image,
    ray: Ray,
    texture: Texture,
    player: Player,
    column: int,
    ceiling: int,
    floor: int,
) -> None:
    """Draw ceiling, textured wall slice and floor for one screen column."""
    for y in range(ray.draw_start):
        _put(image, column, y, ceiling)
    colors = texture_column(ray, texture, player, image.height)
    for y, color in enumerate(colors, start=ray.draw_start):
        _put(image, column, y, color)
    for y in range(ray.draw_end, image.height):
        _put(image, column, y, floor)


def draw_frame(
    image: Image,
    grid: Sequence[str],
    player: Player,
    textures: Sequence[Texture],
    ceiling: int,
    floor: int,
) -> None:
    """Render the whole view; textures are ordered north, south, east, west."""
    for column in range(image.width):
        ray = cast_ray(player, grid, column, image.width, image.height)
        texture = select_wall_texture(ray, textures)
        draw_column(image, ray, texture, player, column, ceiling, floor)


def minimap_scale(window_width: int, window_height: int, map_width: int, map_height: int) -> int:
    """Return the pixel size of one minimap cell that fits the given area."""
    scale = min(window_width // (map_width + 2), window_height // (map_height + 2))
    return max(scale, MIN_MINIMAP_SCALE)


def draw_rect_filled(image: Image, x: int, y: int, scale: int, color: int) -> None:
    """Fill a scale-by-scale square at (x, y), clipped to the image."""
    for px in range(x, x + scale):
        for py in range(y, y + scale):
            _put(image, px, py, color)


def draw_minimap(image: Image, grid: Sequence[str], scale: int) -> None:
    """Draw walls and open floor of the map, one square per cell."""
    for row, line in enumerate(grid):
        for column, cell in enumerate(line):
            if cell == "1":
                color = WALL_COLOR
            elif cell in "0 ":
                color = FLOOR_TILE_COLOR
            else:
                continue
            draw_rect_filled(image, column * scale, row * scale, scale, color)