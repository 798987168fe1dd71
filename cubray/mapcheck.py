"""Player lookup and wall-enclosure checks for scene maps."""

from __future__ import annotations

from collections.abc import Sequence

HEADINGS = frozenset("NSEW")
_FILL_LIMIT = 80000
# Left, down, right, up: the order in which neighbours are explored.
_MOVES = ((-1, 0), (0, 1), (1, 0), (0, -1))


class MapError(ValueError):
    """Raised when a map layout is not playable."""


def find_player(grid: Sequence[str]) -> tuple[int, int, str]:
    """Return the column, row and heading letter of the single player start."""
    starts = [
        (column, row, cell)
        for row, line in enumerate(grid)
        for column, cell in enumerate(line)
        if cell in HEADINGS
    ]
    if len(starts) != 1:
        raise MapError("The character must have only one position in the map")
    return starts[0]


def _check_bounds(cells: list[list[str]], x: int, y: int) -> None:
    """Fail when a reachable cell touches the edge of the map."""
    if x <= 0 or y <= 0 or y + 1 >= len(cells):
        raise MapError("Invalid map")
    if x > len(cells[y - 1]) - 1 or x > len(cells[y + 1]) - 1:
        raise MapError("Invalid map")
    if x + 1 >= len(cells[y]):
        raise MapError("Invalid map")


def check_enclosed(grid: Sequence[str], x: int, y: int) -> frozenset[tuple[int, int]]:
    """Flood-fill from (x, y) and fail if the reachable area is not walled in.

    Every cell other than a wall ('1') is walkable, spaces included. Returns
    the set of (column, row) cells that were reached. The input is not changed.
    """
    cells = [list(line) for line in grid]
    visited: set[tuple[int, int]] = set()
    stack: list[list[int]] = []
    entered = 0

    def enter(cx: int, cy: int) -> None:
        _check_bounds(cells, cx, cy)
        if entered > _FILL_LIMIT:
            raise MapError("Map is too large to check")
        cells[cy][cx] = "1"
        visited.add((cx, cy))
        stack.append([cx, cy, 0])

    enter(x, y)
    while stack:
        frame = stack[-1]
        cx, cy, direction = frame
        if direction == len(_MOVES):
            stack.pop()
            continue
        frame[2] = direction + 1
        dx, dy = _MOVES[direction]
        nx, ny = cx + dx, cy + dy
        if cells[ny][nx] != "1":
            entered += 1
            enter(nx, ny)
    return frozenset(visited)