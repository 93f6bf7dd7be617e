"""Server-side minesweeper rules: opening, flagging, renumbering and saving."""

from __future__ import annotations

import logging
import time
from typing import Any, List, Mapping, Optional, Set, Tuple

from oursweeper.board import Board
from oursweeper.chunk import SquareState
from oursweeper.config import DEFAULTS
from oursweeper.saveload import SaveFormatError, load_board, save_board
from oursweeper.utils import (
    CHUNK_SIZE,
    Coordinates,
    around,
    on_chunk_boundary,
    to_chunk_coordinates,
    to_global_coordinates,
    to_local_coordinates,
)

log = logging.getLogger(__name__)

AUTOSAVE_INTERVAL = 300


class Game:
    """A game on an unbounded board, tracking which chunks changed."""

    def __init__(self, board: Optional[Board] = None, config: Optional[Mapping[str, Any]] = None) -> None:
        self.board = board if board is not None else Board()
        self.config = config if config is not None else dict(DEFAULTS)
        self.updated_chunks: Set[Coordinates] = set()
        self.last_autosave = time.monotonic()
        self._save_enabled = False

    @classmethod
    def load(cls, filename: str, config: Optional[Mapping[str, Any]] = None) -> "Game":
        """Load a game from ``filename``, or start a new one if that fails."""
        try:
            board = load_board(filename)
        except (OSError, SaveFormatError) as err:
            log.error("[Loader] Unable to load savegame '%s': %s", filename, err)
            board = Board()
        return cls(board, config)

    def __enter__(self) -> "Game":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def save_on_close(self) -> None:
        """Enable saving: autosaves and a final save when the game is closed."""
        self._save_enabled = True

    def close(self) -> None:
        """Save the game if saving is enabled."""
        self.save_game()

    def _number_square(self, x: int, y: int) -> None:
        square = self.board.get(x, y)
        if square.state != SquareState.OPENED:
            return
        square.number = sum(1 for nx, ny in around(x, y) if self.board.get(nx, ny).is_mine)

    def _open_square(self, x: int, y: int) -> Optional[Tuple[Coordinates, bool]]:
        square = self.board.get(x, y)
        if square.state == SquareState.OPENED:
            return None
        square.state = SquareState.OPENED
        self._number_square(x, y)
        return to_chunk_coordinates((x, y)), square.is_mine

    def _is_overflagged(self, x: int, y: int) -> bool:
        square = self.board.get(x, y)
        flags = sum(
            1 for nx, ny in around(x, y) if self.board.get(nx, ny).state == SquareState.FLAGGED
        )
        return square.state == SquareState.OPENED and flags > square.number

    def _compute_overflagging(self, x: int, y: int) -> None:
        for nx, ny in around(x, y):
            self.board.get(nx, ny).overflag = self._is_overflagged(nx, ny)

    def _renumber_chunk(self, c: Coordinates, renumber_original: bool = True) -> None:
        for current in around(c.x, c.y):
            if current == c and not renumber_original:
                continue
            for local_x in range(CHUNK_SIZE):
                for local_y in range(CHUNK_SIZE):
                    gx, gy = to_global_coordinates((local_x, local_y), current)
                    self._number_square(gx, gy)
                    self._compute_overflagging(gx, gy)
            self.updated_chunks.add(current)

    def _completely_flagged(self, x: int, y: int) -> bool:
        square = self.board.get(x, y)
        flags = sum(
            1 for nx, ny in around(x, y) if self.board.get(nx, ny).state == SquareState.FLAGGED
        )
        log.info("Number of flags: %d, square number: %d", flags, square.number)
        return flags == square.number

    def _open_region(self, x: int, y: int, orig_state: Optional[SquareState] = None) -> None:
        pending: List[Tuple[int, int, Optional[SquareState]]] = [(x, y, orig_state)]
        while pending:
            cx, cy, orig = pending.pop()
            square = self.board.get(cx, cy)
            if orig is None:
                orig = square.state
            if square.state == SquareState.FLAGGED:
                continue

            result = self._open_square(cx, cy)
            if result is None:
                continue
            chunk_coordinates, mine_opened = result
            self.updated_chunks.add(chunk_coordinates)

            if mine_opened:
                # The chunk is replaced; its neighbours need new numbers.
                self.board.regenerate_chunk(chunk_coordinates)
                self._renumber_chunk(chunk_coordinates, renumber_original=False)
                continue

            if square.number == 0 and orig != SquareState.OPENED:
                pending.extend((nx, ny, None) for nx, ny in reversed(list(around(cx, cy))))

            self.maybe_autosave()

    def open_square_handler(self, x: int, y: int, check_flags: bool = True) -> None:
        """Open the square at (x, y), flooding empty areas.

        Opening an already opened square whose mines are all flagged opens its
        neighbours. Opening a mine regenerates its chunk.
        """
        orig_state = self.board.get(x, y).state
        if orig_state == SquareState.OPENED and check_flags and self._completely_flagged(x, y):
            for nx, ny in around(x, y):
                self._open_region(nx, ny)
        self._open_region(x, y, orig_state)

    def flag_square_handler(self, x: int, y: int) -> None:
        """Toggle the flag on the square at (x, y); opened squares are left alone."""
        square = self.board.get(x, y)
        if square.state == SquareState.OPENED:
            return

        square.state = (
            SquareState.CLOSED if square.state == SquareState.FLAGGED else SquareState.FLAGGED
        )

        if self.config.get("show_overflagged"):
            self._compute_overflagging(x, y)
            if on_chunk_boundary(to_local_coordinates((x, y))):
                chunk_coordinates = to_chunk_coordinates((x, y))
                self.updated_chunks.update(around(chunk_coordinates.x, chunk_coordinates.y))

        self.updated_chunks.add(to_chunk_coordinates((x, y)))
        self.maybe_autosave()

    def save_game(self, save_path: Optional[str] = None) -> None:
        """Save the board if saving is enabled; failures are logged, not raised."""
        if not self._save_enabled:
            return
        path = save_path if save_path is not None else self.config["save_path"]
        try:
            save_board(self.board, path)
        except OSError as err:
            log.error("Received exception while saving game: %s", err)

    def maybe_autosave(self) -> None:
        """Save to the autosave file if the last autosave is over five minutes old."""
        now = time.monotonic()
        if now - self.last_autosave > AUTOSAVE_INTERVAL:
            self.save_game(self.config["save_path"] + ".autosave")
            self.last_autosave = now