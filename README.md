# oursweeper

An endless minesweeper board. The board is split into 16×16 chunks that are
generated on demand the first time any of their squares is read, so the board
extends in every direction. Opening a mine does not end the game: the chunk
that held the mine is replaced by a freshly generated one and the chunks
around it are renumbered.

## What is in the package

- `oursweeper.utils`: `Coordinates` (a named `x, y` pair), `CursorData`,
  the coordinate helpers `to_chunk_coordinates`, `to_local_coordinates`,
  `to_global_coordinates`, `on_chunk_boundary` and `around` (the 3×3 block
  around a square, centre included), a one-shot `Flag`, an `EventMap` that
  calls handlers registered under a key, `int_to_hex` (eight upper-case hex
  digits) and `fnv_hash` (a signed 32-bit FNV-1a hash of a string).
- `oursweeper.chunk`: `SquareState`, `Square` (packed into one byte with
  `Square.to_byte` / `Square.from_byte`), `Chunk` with `get`, `all_squares`,
  `transform`, `transform_copy`, `serialize` and `deserialize`, and
  `ChunkGenerator`, which places a random number of mines drawn around a mean
  density. It takes an optional `random.Random` for repeatable boards.
- `oursweeper.board`: `Board`, the grid of chunks. Without a generator it
  uses a mean density of 0.15 ± 0.03 and starts with a chunk at the origin.
  In client mode, missing chunks are not generated; reading from them gives a
  blank closed square.
- `oursweeper.game`: `Game`, the rules: opening squares, flood-opening
  empty areas, opening the neighbours of a number whose mines are all flagged,
  toggling flags, marking over-flagged numbers, and autosaving. The set
  `Game.updated_chunks` collects the chunk coordinates each action changed.
- `oursweeper.saveload`: JSON save files (`save_board`, `load_board`,
  `chunks_to_json`, `json_to_chunks`, `SaveFormatError`).
- `oursweeper.config`: `Config`, a JSON-backed settings store whose `merge`
  overlays nested objects key by key, and `DEFAULTS`, the standard settings.
- `oursweeper.options`: `parse_options`, which turns command-line arguments
  into a settings dictionary.
- `oursweeper.window`, `oursweeper.view`, `oursweeper.board_view`: curses
  drawing: `Window`, the `curses_session` context manager, `View`,
  `ChunkView` (one cell per chunk, showing how far each is explored) and
  `BoardView`.

## Using the game logic

```python
from oursweeper.board import Board
from oursweeper.chunk import SquareState
from oursweeper.game import Game
from oursweeper.utils import to_chunk_coordinates

game = Game(Board())

game.open_square_handler(0, 0)
game.flag_square_handler(3, 4)

square = game.board.get(0, 0)
print(square.state is SquareState.OPENED, square.number)

print(to_chunk_coordinates((-1, 17)))   # Coordinates(x=-1, y=1)
```

Squares are addressed with global coordinates. Chunk coordinates are those
divided by 16 and rounded towards negative infinity.

A `Game` reads `show_overflagged` and `save_path` from the mapping passed as
`config`. Without one it uses a copy of `oursweeper.config.DEFAULTS`.

## Saving and loading

A save file is JSON with a format `version` (currently 1) and a `chunks`
object. Its keys are `"x:y"` chunk coordinates. Each value holds the 256
square bytes of that chunk, one character per byte.

```python
from oursweeper.saveload import load_board, save_board

save_board(game.board, "save.nm")
board = load_board("save.nm")   # OSError or SaveFormatError on failure
```

`Game.load(filename)` builds a game from a save file. It falls back to a new
board if the file cannot be read or has another version.

Saving is off until `save_on_close` is called. After that:

- autosaves go to `save_path + ".autosave"` at most every five minutes;
- `close()` writes to `save_path`;
- a `Game` used as a context manager calls `close()` on exit.

Save errors are logged, not raised.

## Configuration

```python
from oursweeper.config import DEFAULTS, Config

config = Config(DEFAULTS)
config.load(".nmrc")          # returns False if the file cannot be opened
config["show_overflagged"] = False
config.save("settings.json")
```

`load` merges the file into the current settings by default. With
`merge=False` the file replaces them.

## Command-line options

`parse_options(argv)` recognises these options:

| Option                  | Result                   |
|-------------------------|--------------------------|
| `-s` / `--server`       | `server: "true"`         |
| `-p` / `--port`         | `port`                   |
| `-l` / `--log`          | `log_file`               |
| `-c` / `--config_file`  | `config_file`            |
| `-g` / `--game`         | `game`                   |
| `--host`                | `host`                   |

The first argument that is not an option is stored as `rest`. `-h` /
`--help` prints usage and exits with status 0. An unknown option exits with
status 1.

## Keys in the board view

`BoardView.handle_input` reacts to these keys. Square events are reported
through the `on_open`, `on_flag` and `on_move` callbacks, with global
coordinates.

| Key               | Action                          |
|-------------------|---------------------------------|
| Space             | Open the square (`on_open`)     |
| F                 | Flag the square (`on_flag`)     |
| C                 | Centre on the cursor            |
| 0                 | Centre on the origin            |
| B                 | Toggle chunk borders            |
| Arrows / W A S D  | Move; Ctrl+arrow moves by five  |

In `ChunkView` the arrow keys move the chunk cursor. When the view is
switched out, the board cursor is centred on the chosen chunk.

## What the package does not do

- There is no command to run. The package installs no program that starts a
  game, and nothing ties the views, the key handling and a `Game` together
  into a playable terminal session. Such a loop has to be written using
  `curses_session`, `BoardView` and `Game`.
- There is no networking: no multiplayer server and no client. `EventMap`,
  `fnv_hash`, `CursorData` and the client mode of `Board` are building blocks
  for one.
- The board cannot be exported as an image.

## Running the tests

```
pip install -e .[test]
pytest
```