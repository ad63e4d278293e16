# solong

A small tile-based puzzle game. You move a player around a walled map,
pick up every collectable, and then walk out through the exit. The exit
stays shut until the last collectable has been taken. After the first
move the step counter is shown in the top-left corner of the window,
and it is printed on the terminal after each movement key.

## Installing

```
pip install .
```

This pulls in `pygame`, which draws the window. The tests need
`pytest`, available through the `test` extra:

```
pip install ".[test]"
```

## Playing

```
solong maps/level.ber
```

The command takes exactly one argument, the map file. It looks for its
tile images as XPM files in a `textures` directory in the current
working directory: `tile.xpm`, `up.xpm`, `down.xpm`, `left.xpm`,
`right.xpm`, `wall.xpm`, `coll.xpm`, `exit.xpm` and `noexit.xpm`. If any
of them is missing, the game prints `Error` with the name of each
missing image and stops.

Controls:

| Key            | Action                          |
|----------------|---------------------------------|
| `w` / Up       | move up                         |
| `z` / Down     | move down                       |
| `a` / Left     | move left                       |
| `s` / Right    | move right                      |
| `m`            | print the current map           |
| Escape         | quit                            |

Closing the window also ends the game. Stepping onto the open exit
prints the number of steps taken and `Bravo - you have won !`, and the
game ends.

## Map files

A map is a text file with the `.ber` extension. Each line is one row of
tiles:

- `1` wall
- `0` floor
- `C` collectable
- `E` exit
- `P` player start

For example:

```
1111111
1P0C0E1
1111111
```

A map is accepted only when all of the following hold:

- its name ends in `.ber`;
- it is not empty and has no empty lines (a final newline is allowed);
- every row has the same length;
- it is closed in by walls on every side;
- it holds only the characters listed above;
- there is exactly one player and exactly one exit, and at least one
  collectable;
- the player can reach every collectable and the exit without walking
  through the exit.

The window, at 100 pixels per tile, has to fit on the screen; a map
that would be too large for it is refused. Whenever a map is refused,
the game prints `Error` followed by the reason.

## Using it as a library

The modules can be used without opening a window:

- `solong.gamemap` reads and checks maps: `load_map`, `read_map`,
  `validate_map`, `has_valid_path`, `find_start`, `flood_fill` and the
  single checks `has_extension`, `is_rectangle`, `has_closed_border`,
  `has_only_known_items` and `count_object`. Reading and validation
  raise `MapError` (a `ValueError`) naming the fault.
- `solong.game` holds the game rules: `Game` with `move`, `press` and
  `window_size`, along with `Direction`, `MoveResult` and
  `direction_for_key`. `press` takes a key code or a single character
  and writes its terminal messages to the stream given as `out`
  (standard output by default).
- `solong.xpm` reads XPM images: `load_xpm`, `parse_xpm` and
  `parse_xpm_text` give an `XpmImage` (with `pixel` and `to_bytes`) or
  raise `XpmError`; `split_words`, `strip_comments`, `parse_color` and
  `convert_color` are the helpers they use.
- `solong.colors` resolves X11 colour names with `lookup_color`, which
  ignores case, gives -1 for `none` and raises `KeyError` for an
  unknown name.
- `solong.app` holds the command: `main`, `run` (which also takes a
  texture directory), `missing_textures` and `load_textures`.

```python
from solong.gamemap import load_map
from solong.game import Direction, Game

game = Game(load_map("maps/level.ber"))
result = game.move(Direction.EAST)
print(result, game.steps)
```