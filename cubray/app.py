"""The game loop: input handling, per-frame updates and the window."""

from __future__ import annotations

import sys
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Optional

from .errors import MlxError
from .image import BPP, Canvas, Image, Instance, Texture
from .player import MOUSE_SENSITIVITY, TURN_SPEED, Move, Player
from .png import load_png
from .render import draw_frame, draw_minimap, map_height, map_width, minimap_scale
from .scene import Scene, SceneError, load_scene

WIDTH = 960
HEIGHT = 600
TITLE = "Cub3D"
MINIMAP_AREA = 200
MARKER_SIZE = 5
MARKER_COLOR = 0xFF0000FF


def _blend(src: bytes, dst: bytes) -> bytes:
    """Blend one RGBA pixel over another using the source alpha."""
    alpha = src[3]
    if alpha == 0xFF:
        return src
    if alpha == 0:
        return dst
    inverse = 0xFF - alpha
    return bytes(
        (src[i] * alpha + dst[i] * inverse + 127) // 0xFF for i in range(4)
    )


@dataclass
class Game:
    """A running game: the player, the map and the images drawn each frame.

    With ``minimap`` enabled the game also shows an overhead map with a
    marker for the player and lets the mouse turn the view.
    """

    scene: Scene
    textures: tuple[Texture, Texture, Texture, Texture]
    player: Player
    canvas: Canvas
    view: Image
    width: int
    height: int
    minimap: Optional[Image] = None
    marker: Optional[Image] = None
    scale: int = 0
    mouse_locked: bool = True
    _marker_instance: Optional[Instance] = field(default=None, repr=False)

    @classmethod
    def from_scene(
        cls,
        scene: Scene,
        textures: Sequence[Texture],
        width: int = WIDTH,
        height: int = HEIGHT,
        minimap: bool = False,
    ) -> Game:
        """Set up the images for a scene; textures are north, south, east, west."""
        textures = tuple(textures)
        if len(textures) != 4:
            raise ValueError(f"expected 4 wall textures, got {len(textures)}")
        player = Player.spawn(scene.player_x, scene.player_y, scene.heading)
        canvas = Canvas()
        view = canvas.new_image(width, height)
        canvas.image_to_window(view, 0, 0)
        game = cls(
            scene=scene,
            textures=textures,
            player=player,
            canvas=canvas,
            view=view,
            width=width,
            height=height,
        )
        if minimap:
            game._init_minimap()
        return game

    def _init_minimap(self) -> None:
        grid = self.scene.grid
        columns, rows = map_width(grid), map_height(grid)
        self.scale = minimap_scale(MINIMAP_AREA, MINIMAP_AREA, columns, rows)
        self.minimap = self.canvas.new_image(columns * self.scale, rows * self.scale)
        self.canvas.image_to_window(self.minimap, 0, 0)
        self.marker = self.canvas.new_image(MARKER_SIZE, MARKER_SIZE)
        for y in range(MARKER_SIZE):
            for x in range(MARKER_SIZE):
                self.marker.put_pixel(x, y, MARKER_COLOR)
        index = self.canvas.image_to_window(
            self.marker,
            int(self.player.x * self.scale),
            int(self.player.y * self.scale),
        )
        self._marker_instance = self.marker.instances[index]
        draw_minimap(self.minimap, grid, self.scale)

    def tick(self, moves: Iterable[Move] = (), turn: int = 0, mouse_dx: float = 0) -> None:
        """Advance one frame: move, turn, then redraw the view.

        ``turn`` is positive to turn right and negative to turn left.
        ``mouse_dx`` turns the view only with the minimap on and the mouse locked.
        """
        self.player.step(self.scene.grid, moves)
        if self.minimap is not None and self.mouse_locked and mouse_dx != 0:
            self.player.rotate(mouse_dx * MOUSE_SENSITIVITY)
        if turn > 0:
            self.player.rotate(TURN_SPEED)
        elif turn < 0:
            self.player.rotate(-TURN_SPEED)
        draw_frame(
            self.view,
            self.scene.grid,
            self.player,
            self.textures,
            self.scene.ceiling,
            self.scene.floor,
        )
        if self._marker_instance is not None:
            self._marker_instance.x = int(self.player.x * self.scale)
            self._marker_instance.y = int(self.player.y * self.scale)

    def toggle_mouse_lock(self) -> bool:
        """Switch mouse look on or off and return the new state."""
        self.mouse_locked = not self.mouse_locked
        return self.mouse_locked

    def frame_bytes(self) -> bytes:
        """Return the window contents as RGBA bytes, all instances composited."""
        frame = bytearray(self.width * self.height * BPP)
        for image, instance in self.canvas.render_order():
            self._blit(frame, image, instance.x, instance.y)
        return bytes(frame)

    def _blit(self, frame: bytearray, image: Image, left: int, top: int) -> None:
        x0, x1 = max(left, 0), min(left + image.width, self.width)
        y0, y1 = max(top, 0), min(top + image.height, self.height)
        if x0 >= x1 or y0 >= y1:
            return
        count = x1 - x0
        for row in range(y0, y1):
            src_start = ((row - top) * image.width + (x0 - left)) * BPP
            src = image.pixels[src_start:src_start + count * BPP]
            dst_start = (row * self.width + x0) * BPP
            if src[3::BPP].count(0xFF) == count:
                frame[dst_start:dst_start + count * BPP] = src
                continue
            for offset in range(0, count * BPP, BPP):
                pixel = bytes(src[offset:offset + BPP])
                if pixel[3] == 0:
                    continue
                at = dst_start + offset
                frame[at:at + BPP] = _blend(pixel, bytes(frame[at:at + BPP]))


def _error(message: str) -> int:
    sys.stdout.write(f"Error\n{message}\n")
    sys.stdout.flush()
    return 1


def _run_window(game: Game, bonus: bool) -> None:
    import pygame

    pygame.init()
    try:
        screen = pygame.display.set_mode((game.width, game.height))
        pygame.display.set_caption(TITLE)
        center = (game.width // 2, game.height // 2)
        last_mouse_x = center[0]
        if bonus:
            pygame.mouse.set_visible(False)
            pygame.mouse.set_pos(center)
        clock = pygame.time.Clock()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif bonus and event.key == pygame.K_1:
                        if game.toggle_mouse_lock():
                            pygame.mouse.set_visible(False)
                            pygame.mouse.set_pos(center)
                            last_mouse_x = center[0]
                        else:
                            pygame.mouse.set_visible(True)
            if not running:
                break
            keys = pygame.key.get_pressed()
            moves = [
                move
                for move, key in (
                    (Move.FORWARD, pygame.K_w),
                    (Move.BACKWARD, pygame.K_s),
                    (Move.LEFT, pygame.K_a),
                    (Move.RIGHT, pygame.K_d),
                )
                if keys[key]
            ]
            turn = int(keys[pygame.K_RIGHT]) - int(keys[pygame.K_LEFT])
            mouse_dx = 0
            if bonus and game.mouse_locked:
                mouse_dx = pygame.mouse.get_pos()[0] - last_mouse_x
                pygame.mouse.set_pos(center)
                last_mouse_x = center[0]
            game.tick(moves, turn, mouse_dx)
            surface = pygame.image.frombuffer(
                game.frame_bytes(), (game.width, game.height), "RGBA"
            )
            screen.blit(surface, (0, 0))
            pygame.display.flip()
            clock.tick(60)
    finally:
        pygame.quit()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the game on a '.cub' scene file; '--bonus' adds minimap and mouse look."""
    args = list(sys.argv[1:] if argv is None else argv)
    bonus = "--bonus" in args
    args = [arg for arg in args if arg != "--bonus"]
    if len(args) != 1:
        return _error("Incorrect number of arguments")
    try:
        scene = load_scene(args[0])
    except SceneError as exc:
        return _error(str(exc))
    try:
        textures = [
            load_png(path)
            for path in (scene.north, scene.south, scene.east, scene.west)
        ]
    except MlxError:
        return _error("Failed to load a texture")
    game = Game.from_scene(scene, textures, WIDTH, HEIGHT, bonus)
    _run_window(game, bonus)
    return 0