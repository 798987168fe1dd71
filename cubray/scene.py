"""Reading and validating '.cub' scene descriptions."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from .color import parse_rgb
from .mapcheck import MapError, check_enclosed, find_player

IDENTIFIERS = ("NO", "SO", "WE", "EA", "F", "C")
_MAP_CHARS = frozenset("01 NSEW\n")
_VALUE = re.compile(r"[^ \n]*")


class SceneError(ValueError):
    """Raised when a scene file or its contents are invalid."""


@dataclass
class Scene:
    """Everything a scene file describes, ready for the game."""

    north: str
    south: str
    west: str
    east: str
    floor: int
    ceiling: int
    grid: list[str] = field(default_factory=list)
    player_x: float = 0.0
    player_y: float = 0.0
    heading: str = "N"


@dataclass
class _Layout:
    values: dict[str, str]
    grid: list[str]
    column: int
    row: int
    heading: str


def _split_lines(text: str) -> list[str]:
    """Split on '\\n' only, keeping each line's terminator."""
    parts = text.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def check_extension(path: str) -> str:
    """Return the path if its last extension is '.cub'."""
    if len(path) < 4:
        raise SceneError("Invalid file extension")
    dot = path.rfind(".")
    if dot < 0 or path[dot:] != ".cub":
        raise SceneError("Invalid file extension")
    return path


def parse_header_line(line: str, found: Mapping[str, str]) -> Optional[tuple[str, str]]:
    """Parse one header line into (identifier, value), or None for a blank line.

    Identifiers already present in ``found`` cannot be defined again.
    """
    if line.startswith("\n"):
        return None
    body = line.lstrip(" ")
    if body.startswith("\n"):
        return None
    for key in IDENTIFIERS:
        if body.startswith(key + " "):
            if key in found:
                raise SceneError("Texture cannot be redefined")
            value = _VALUE.match(body, len(key) + 1).group()
            return key, value
    raise SceneError("Invalid map data")


def parse_map_lines(lines: Sequence[str]) -> list[str]:
    """Collect the map rows that follow the header, without line endings."""
    if not lines:
        raise SceneError("No map provided")
    grid: list[str] = []
    for line in lines:
        body = line.lstrip(" ")
        if not body or body.startswith("\n"):
            if grid:
                raise SceneError("Empty line inside map")
            continue
        if not set(body) <= _MAP_CHARS:
            raise SceneError("Bad character found in map")
        grid.append(line[:-1] if line.endswith("\n") else line)
    return grid


def _read_header(lines: list[str]) -> tuple[dict[str, str], list[str]]:
    values: dict[str, str] = {}
    for index, line in enumerate(lines):
        pair = parse_header_line(line, values)
        if pair is not None:
            key, value = pair
            values[key] = value
        if len(values) == len(IDENTIFIERS):
            return values, lines[index + 1:]
    raise SceneError("Texture missing")


def _parse_layout(text: str) -> _Layout:
    lines = _split_lines(text)
    if not lines:
        raise SceneError("File is empty")
    values, rest = _read_header(lines)
    grid = parse_map_lines(rest)
    try:
        column, row, heading = find_player(grid)
        grid[row] = grid[row][:column] + "0" + grid[row][column + 1:]
        check_enclosed(grid, column, row)
    except MapError as exc:
        raise SceneError(str(exc)) from exc
    return _Layout(values, grid, column, row, heading)


def _color(text: str) -> int:
    try:
        return parse_rgb(text)
    except ValueError as exc:
        raise SceneError("Invalid RGB configuration") from exc


def _finish(layout: _Layout) -> Scene:
    values = layout.values
    return Scene(
        north=values["NO"],
        south=values["SO"],
        west=values["WE"],
        east=values["EA"],
        floor=_color(values["F"]),
        ceiling=_color(values["C"]),
        grid=layout.grid,
        player_x=layout.column + 0.5,
        player_y=layout.row + 0.5,
        heading=layout.heading,
    )


def parse_scene(text: str) -> Scene:
    """Parse the full text of a scene without touching the file system."""
    return _finish(_parse_layout(text))


def _check_image(path: str) -> None:
    try:
        with open(path, "rb"):
            pass
    except OSError as exc:
        raise SceneError("An image no longer exists") from exc


def load_scene(path: Union[str, os.PathLike], check_images: bool = True) -> Scene:
    """Read and validate a '.cub' scene file."""
    name = check_extension(os.fspath(path))
    try:
        data = Path(name).read_bytes()
    except OSError as exc:
        raise SceneError("Cannot open file") from exc
    if not data:
        raise SceneError("File is empty")
    layout = _parse_layout(data.decode("utf-8", errors="replace"))
    if check_images:
        for key in ("WE", "NO", "SO", "EA"):
            _check_image(layout.values[key])
    return _finish(layout)