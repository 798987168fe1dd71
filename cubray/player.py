"""The player's position, view direction and movement through the map."""

from __future__ import annotations

import math
import struct
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum

DEFAULT_FOV = 0.66
TURN_SPEED = 0.02
MOUSE_SENSITIVITY = 0.001


def _f32(value: float) -> float:
    """Round a float to single precision."""
    return struct.unpack("f", struct.pack("f", value))[0]


MOVE_SPEED = _f32(0.03)
COLLISION_MARGIN = _f32(0.1)

_HEADINGS = {
    "N": 3 * math.pi / 2,
    "E": 0.0,
    "S": math.pi / 2,
    "W": math.pi,
}


class Move(Enum):
    """Movement keys, in the order they are applied each frame."""

    FORWARD = "W"
    BACKWARD = "S"
    LEFT = "A"
    RIGHT = "D"


def _is_wall(grid: Sequence[str], column: int, row: int) -> bool:
    if row < 0 or row >= len(grid) or column < 0 or column >= len(grid[row]):
        return True
    return grid[row][column] == "1"


def _probe(current: float, target: float) -> float:
    """Return the point checked for collisions when moving towards target."""
    if target > _f32(current):
        return _f32(target + COLLISION_MARGIN)
    return _f32(target - COLLISION_MARGIN)


@dataclass
class Player:
    """Position, unit view direction and camera plane of the player."""

    x: float
    y: float
    dir_x: float = 1.0
    dir_y: float = 0.0
    plane_x: float = 0.0
    plane_y: float = DEFAULT_FOV
    fov: float = DEFAULT_FOV

    @classmethod
    def spawn(cls, x: float, y: float, heading: str = "N", fov: float = DEFAULT_FOV) -> Player:
        """Create a player facing the compass heading 'N', 'E', 'S' or 'W'."""
        try:
            angle = _HEADINGS[heading]
        except KeyError:
            raise ValueError(f"unknown heading: {heading!r}") from None
        return cls(
            x=x,
            y=y,
            dir_x=math.cos(angle),
            dir_y=math.sin(angle),
            plane_x=-math.sin(angle) * fov,
            plane_y=math.cos(angle) * fov,
            fov=fov,
        )

    def rotate(self, angle: float) -> None:
        """Turn the view direction and camera plane by angle radians."""
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        dir_x, plane_x = self.dir_x, self.plane_x
        self.dir_x = dir_x * cos_a - self.dir_y * sin_a
        self.dir_y = dir_x * sin_a + self.dir_y * cos_a
        self.plane_x = plane_x * cos_a - self.plane_y * sin_a
        self.plane_y = plane_x * sin_a + self.plane_y * cos_a

    def movement_vector(self, move: Move) -> tuple[float, float]:
        """Return the (dx, dy) displacement one frame of a move produces."""
        move = Move(move)
        if move is Move.FORWARD:
            dx, dy = self.dir_x, self.dir_y
        elif move is Move.BACKWARD:
            dx, dy = -self.dir_x, -self.dir_y
        elif move is Move.LEFT:
            dx, dy = self.dir_y, -self.dir_x
        else:
            dx, dy = -self.dir_y, self.dir_x
        return _f32(dx * MOVE_SPEED), _f32(dy * MOVE_SPEED)

    def try_move(self, grid: Sequence[str], dx: float, dy: float) -> None:
        """Move by (dx, dy), sliding along walls instead of entering them."""
        new_x = _f32(self.x + dx)
        new_y = _f32(self.y + dy)
        test_x = _probe(self.x, new_x)
        test_y = _probe(self.y, new_y)
        if not _is_wall(grid, int(test_x), int(self.y)):
            self.x = new_x
        if not _is_wall(grid, int(self.x), int(test_y)):
            self.y = new_y

    def step(self, grid: Sequence[str], moves: Iterable[Move]) -> None:
        """Apply every held movement key for one frame."""
        held = {Move(move) for move in moves}
        for move in Move:
            if move in held:
                dx, dy = self.movement_vector(move)
                self.try_move(grid, dx, dy)