# cubray

A small first-person raycaster. It reads a `.cub` scene file, which names
four wall textures and gives a floor colour, a ceiling colour and a grid map.
It checks that the map is closed around the player, then renders the scene
with textured walls in a pygame window.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Running

```
cubray maps/level.cub
cubray --bonus maps/level.cub
```

`--bonus` adds an overhead minimap with a red player marker in the top-left
corner and turns the view with the mouse.

Controls:

- `W` / `S`: move forward and back
- `A` / `D`: strafe
- `Left` / `Right`: turn
- `Esc` or closing the window: quit
- `1` (with `--bonus`): lock or unlock the mouse; while locked the cursor is
  hidden and kept in the middle of the window

If the arguments, the scene or a texture are wrong, the command prints
`Error` and a message on standard output and exits with status 1.

## The scene format

```
NO ./textures/north.png
SO ./textures/south.png
WE ./textures/west.png
EA ./textures/east.png
F 220,100,0
C 225,30,0

111111
100101
101001
1100N1
111111
```

- The file name must end in `.cub`.
- `NO`, `SO`, `WE` and `EA` name the wall textures, which must be PNG files
  that exist. The value runs to the next space or the end of the line. Each
  key may appear only once, and all six keys must come before the map.
  Textures whose height is a power of two are sampled correctly.
- `F` and `C` give the floor and ceiling colours as `R,G,B`, each value from
  0 to 255. `255,255,255` is refused.
- The map uses `0` (floor), `1` (wall), space, and exactly one of `N`, `S`,
  `E` or `W`, marking where the player starts and which way they face.
- The map may not hold empty lines. Every cell the player can reach, spaces
  included, must be walled in; the reachable area is limited to about 80,000
  cells.

A scene that breaks these rules is rejected with a `SceneError` naming the
problem.

## Using it as a library

```python
from cubray.scene import load_scene
from cubray.png import load_png
from cubray.app import Game
from cubray.player import Move

scene = load_scene("maps/level.cub", check_images=True)
textures = [load_png(p) for p in (scene.north, scene.south, scene.east, scene.west)]
game = Game.from_scene(scene, textures, 640, 480, minimap=False)
game.tick(moves=[Move.FORWARD], turn=1, mouse_dx=0)
rgba = game.frame_bytes()  # 640 * 480 RGBA bytes
```

Other pieces can be used on their own:

- `cubray.scene`: `parse_scene` parses scene text without touching the file
  system; `check_extension`, `parse_header_line` and `parse_map_lines` check
  the individual parts.
- `cubray.mapcheck`: `find_player` and `check_enclosed`, raising `MapError`.
- `cubray.color`: `parse_rgb` turns `"R,G,B"` into a packed `0xRRGGBBAA`
  value; `parse_atoi` parses a 32-bit signed integer.
- `cubray.player`: `Player` with `spawn`, `rotate`, `movement_vector`,
  `try_move` and `step`, and the `Move` enum.
- `cubray.raycast`: `cast_ray` runs a DDA ray walk over the grid and returns
  a `Ray`; `select_wall_texture`, `texture_x` and `texture_column` sample
  the wall texture.
- `cubray.render`: `draw_frame`, `draw_column`, `draw_minimap`,
  `draw_rect_filled`, `minimap_scale`, `map_width` and `map_height`.
- `cubray.image`: `Texture`, `Image` and `Canvas`, RGBA pixel buffers with a
  depth-ordered render queue.
- `cubray.png`: `load_png` decodes a PNG file into a `Texture`.
- `cubray.xpm42`: `load_xpm42` and `read_xpm42` read the XPM42 text image
  format.
- `cubray.pixels`: `fnv_hash`, `rgba_to_mono`, `pack_pixel` and
  `unpack_pixel`.
- `cubray.errors`: `MlxError`, its `MlxErrno` codes and `strerror`.

## What it does not do

The `cubray` command loads PNG textures only; XPM42 images can be read
through the library but not named in a scene. There is no text drawing, no
sound, and no sprites or doors: the world is walls, floor and ceiling.