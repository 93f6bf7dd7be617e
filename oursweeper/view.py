"""Views that draw the board into windows, and the chunk overview."""

from __future__ import annotations

import curses
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Optional, Protocol

from oursweeper.chunk import Chunk, SquareState
from oursweeper.utils import (
    CHUNK_SIZE,
    Coordinates,
    CursorData,
    to_chunk_coordinates,
    to_global_coordinates,
)
from oursweeper.window import Window, _color_pair

CursorMap = Dict[int, CursorData]

_EXPLORED_COLOR = 19
_PARTIAL_COLOR = 13


class _ChunkSource(Protocol):
    def get_chunk(self, c: tuple[int, int]) -> Optional[Chunk]:
        ...


class HandlerResult(Enum):
    DRAW_ALL = 0
    DRAW_CURSORS = 1


class View(ABC):
    """Something that draws into the main and sidebar windows and reacts to keys."""

    def __init__(self, cursor: CursorData, main: Window, sidebar: Window) -> None:
        self.cursor = cursor
        self.main = main
        self.sidebar = sidebar

    @abstractmethod
    def draw_main(self, source: _ChunkSource, others: CursorMap) -> None:
        """Draw the main window."""

    def draw_sidebar(self, source: _ChunkSource, cursors: CursorMap) -> None:
        """Draw the sidebar; views without one draw nothing."""
        return None

    def draw_cursor(self) -> None:
        """Draw the player's own cursor; views without one draw nothing."""
        return None

    def handle_input(self, ch: int) -> HandlerResult:
        """React to a key press and tell what needs redrawing."""
        return HandlerResult.DRAW_ALL

    def center_cursor(self, global_x: Optional[int] = None, global_y: Optional[int] = None) -> None:
        """Centre the view on a position; views without a board do nothing."""
        return None

    def switched_in_handler(self) -> None:
        """Called when this view becomes the current one."""
        return None

    def switched_out_handler(self) -> None:
        """Called when another view replaces this one."""
        return None

    def global_x(self) -> int:
        return self.cursor.x + self.cursor.offset_x

    def global_y(self) -> int:
        return self.cursor.y + self.cursor.offset_y

    def chunk_x(self) -> int:
        return self.global_x() // CHUNK_SIZE

    def chunk_y(self) -> int:
        return self.global_y() // CHUNK_SIZE


class ChunkView(View):
    """An overview with one cell per chunk, showing how far each is explored."""

    def __init__(self, cursor: CursorData, main: Window, sidebar: Window) -> None:
        super().__init__(cursor, main, sidebar)
        self.chunk_cursor = CursorData()
        self.moved = False

    def draw_main(self, source: _ChunkSource, others: CursorMap) -> None:
        self.main.erase()
        for y in range(self.main.lines):
            for x in range(self.main.cols // 3):
                self.main.move(3 * x + 1, y)
                chunk = source.get_chunk(
                    Coordinates(x + self.chunk_cursor.offset_x, y + self.chunk_cursor.offset_y)
                )
                if chunk is None:
                    self.draw_empty_chunk(x, y)
                else:
                    self.draw_chunk(x, y, chunk)
        self.main.refresh()

    def draw_chunk(self, x: int, y: int, chunk: Chunk) -> None:
        """Draw one chunk cell: green when explored, red with '!' when partly open."""
        self.main.move(3 * x, y)
        selected = x == self.chunk_cursor.x and y == self.chunk_cursor.y
        left, right = ("[", "]") if selected else (" ", " ")

        if chunk.all_squares(
            lambda square: square.state in (SquareState.OPENED, SquareState.FLAGGED)
        ):
            attr = _color_pair(_EXPLORED_COLOR)
            self.main.attr_on(attr).write(f"{left} {right}").attr_off(attr)
        elif chunk.all_squares(lambda square: square.state == SquareState.CLOSED):
            self.main.write(f"{left} {right}")
        else:
            attr = _color_pair(_PARTIAL_COLOR)
            self.main.attr_on(attr).write(f"{left}!{right}").attr_off(attr)

    def draw_empty_chunk(self, x: int, y: int) -> None:
        self.main.move(3 * x, y).write("   ")

    def handle_input(self, ch: int) -> HandlerResult:
        cc = self.chunk_cursor
        if ch == curses.KEY_LEFT:
            if cc.x > 0:
                cc.x -= 1
        elif ch == curses.KEY_RIGHT:
            if cc.x < self.main.cols // 3 - 1:
                cc.x += 1
        elif ch == curses.KEY_UP:
            if cc.y > 0:
                cc.y -= 1
        elif ch == curses.KEY_DOWN:
            if cc.y < self.main.lines - 1:
                cc.y += 1

        self.moved = True
        return HandlerResult.DRAW_ALL

    def switched_in_handler(self) -> None:
        """Centre the chunk cursor on the chunk holding the board cursor."""
        chunk = to_chunk_coordinates(self.cursor.to_global())
        half_cols = self.main.cols // 6
        half_lines = self.main.lines // 2

        self.chunk_cursor.x = chunk.x + half_cols
        self.chunk_cursor.y = chunk.y + half_lines
        self.chunk_cursor.offset_x = -half_cols
        self.chunk_cursor.offset_y = -half_lines

    def switched_out_handler(self) -> None:
        """If the chunk cursor moved, centre the board cursor on that chunk."""
        if not self.moved:
            return
        target = to_global_coordinates((8, 8), self.chunk_cursor.to_global())
        half_cols = self.main.cols // 6
        half_lines = self.main.lines // 2

        self.cursor.offset_x = target.x - half_cols
        self.cursor.offset_y = target.y - half_lines
        self.cursor.x = half_cols
        self.cursor.y = half_lines

        self.moved = False