"""The main board view: three-column squares with "[ ]" cursors."""

from __future__ import annotations

import curses
from typing import Callable, Optional, Protocol

from oursweeper.chunk import Chunk, Square, SquareState
from oursweeper.utils import (
    BORDER_COLOR,
    CHUNK_SIZE,
    Coordinates,
    CursorData,
    int_to_hex,
)
from oursweeper.view import CursorMap, HandlerResult, View
from oursweeper.window import Window, _color_pair

SquareEvent = Callable[[int, int], None]

_CONTROL_KEYS = {
    "kRIT5": curses.KEY_RIGHT,
    "kLFT5": curses.KEY_LEFT,
    "kUP5": curses.KEY_UP,
    "kDN5": curses.KEY_DOWN,
}
_ARROW_KEYS = (curses.KEY_LEFT, curses.KEY_RIGHT, curses.KEY_UP, curses.KEY_DOWN)

_SIDEBAR_HELP = (
    "        Ours        ",
    "        Help        ",
    "┌──────────────────┐",
    "│ Open       Space │",
    "│ Flag           F │",
    "│ Center         C │",
    "│ Chunk view     V │",
    "│ Center         C │",
    "│ Goto origin    0 │",
    "│ Show chunks    B │",
    "│ Save image     P │",
    "│ Toggle sidebar T │",
    "│ Quit           Q │",
    "└──────────────────┘\n",
)
_SIDEBAR_BOTTOM = "└──────────────────┘\n"
_SIDEBAR_TOP = "┌──────────────────┐"


class _SquareSource(Protocol):
    def get(self, x: int, y: int) -> Square:
        ...

    def get_chunk(self, c: tuple[int, int]) -> Optional[Chunk]:
        ...


def _ignore(x: int, y: int) -> None:
    return None


def _key_name(ch: int) -> str:
    """Return the terminal's name for a key code outside the plain range."""
    if ch <= 255 or ch in _ARROW_KEYS:
        return ""
    try:
        name = curses.keyname(ch)
    except (curses.error, ValueError, OverflowError):
        return ""
    return name.decode("ascii", "replace") if name else ""


def _open_color(number: int) -> int:
    """Return the colour pair for an opened square's number, -1 for blank."""
    if number == 0:
        return -1
    if 1 <= number <= 5:
        return number + 1
    if number in (6, 7):
        return 6
    if number == 8:
        return 5
    return 0


class BoardView(View):
    """The standard board view.

    Each square is three columns wide and one line high. Square events are
    reported through the ``on_open``, ``on_flag`` and ``on_move`` callbacks,
    which receive global board coordinates.
    """

    def __init__(
        self,
        cursor: CursorData,
        main: Window,
        sidebar: Window,
        on_open: Optional[SquareEvent] = None,
        on_flag: Optional[SquareEvent] = None,
        on_move: Optional[SquareEvent] = None,
    ) -> None:
        super().__init__(cursor, main, sidebar)
        self.on_open = on_open or _ignore
        self.on_flag = on_flag or _ignore
        self.on_move = on_move or _ignore
        self.border_enabled = False
        self.sticky_flags = False
        self.have_previous_flag = False
        self.previous_flag = Coordinates(0, 0)

    def draw_main(self, source: _SquareSource, others: CursorMap) -> None:
        """Draw every visible square, then the other players' and our cursors."""
        main = self.main
        main.erase()
        for y in range(main.lines):
            for x in range(main.cols // 3):
                main.move(3 * x + 1, y)
                square = source.get(x + self.cursor.offset_x, y + self.cursor.offset_y)
                if square.is_mine and square.state == SquareState.OPENED:
                    main.write("*")
                elif square.state == SquareState.OPENED:
                    self.draw_open_square(x, y, square)
                elif square.state == SquareState.FLAGGED:
                    self.draw_flag_square(x, y, square)
                else:
                    self.draw_closed_square(x, y, square)

        self.draw_cursors(others)
        self.draw_cursor()
        main.refresh()

    def draw_cursor(self) -> None:
        """Draw brackets around the square under our own cursor."""
        x, y = self.cursor.x, self.cursor.y
        self.main.move(3 * x, y).write("[").move(3 * x + 2, y).write("]").refresh()

    def draw_cursors(self, cursors: CursorMap) -> None:
        """Draw the other players' cursors in their colours.

        Cursors left of or above the view are skipped, as are those at or past
        the current drawing position of the main window.
        """
        main = self.main
        width, height = main.getx(), main.gety()

        for other in cursors.values():
            x = other.x - self.cursor.offset_x
            y = other.y - self.cursor.offset_y
            if x < 0 or y < 0 or x >= width or y >= height:
                continue

            attr = _color_pair(other.color)
            main.attr_on(attr)
            if y < main.lines and 3 * x < main.cols:
                main.move(3 * x, y).write("[")
            if y < main.lines and 3 * x + 2 < main.cols:
                main.move(3 * x + 2, y).write("]")
            main.attr_off(attr)

    def draw_sidebar(self, source: _SquareSource, cursors: CursorMap) -> None:
        """Draw the help box, the connected clients and the cursor position."""
        sidebar = self.sidebar
        sidebar.erase()
        for line in _SIDEBAR_HELP:
            sidebar.write(line)

        sidebar.write("       Clients      ").write(_SIDEBAR_TOP)
        for player_id, other in cursors.items():
            attr = _color_pair(other.color)
            sidebar.write("│ ").attr_on(attr).write("o ").attr_off(attr)
            sidebar.write(int_to_hex(player_id)).write("       │")
            sidebar.write(f"│   ({other.x}, {other.y})")
            self._close_sidebar_line()
        sidebar.write(_SIDEBAR_BOTTOM)

        sidebar.write("     Information    ").write(_SIDEBAR_TOP)
        sidebar.write(f"│ Chunk {self.chunk_x()}, {self.chunk_y()}")
        self._close_sidebar_line()
        sidebar.write(f"│ Pos {self.global_x()}, {self.global_y()}")
        self._close_sidebar_line()
        sidebar.write(_SIDEBAR_BOTTOM)

        sidebar.refresh()

    def _close_sidebar_line(self) -> None:
        line = self.sidebar.gety()
        self.sidebar.move(19, line).write("│").move(0, line + 1)

    def draw_open_square(self, x: int, y: int, square: Square) -> None:
        """Draw an opened square with its number in the number's colour."""
        color = _open_color(square.number)
        if square.overflag:
            color = BORDER_COLOR

        if color == -1:
            self.main.move(3 * x, y).write("   ")
            self.draw_border(square, x, y)
            return

        attr = _color_pair(color)
        self.main.attr_on(attr).move(3 * x, y).write(f" {square.number} ").attr_off(attr)
        self.draw_border(square, x, y)

    def draw_closed_square(self, x: int, y: int, square: Square) -> None:
        self.main.move(3 * x, y).attr_on(curses.A_REVERSE).write("   ").attr_off(curses.A_REVERSE)
        self.draw_border(square, x, y)

    def draw_flag_square(self, x: int, y: int, square: Square) -> None:
        self.main.move(3 * x, y).attr_on(curses.A_BOLD).write(" # ").attr_off(curses.A_BOLD)
        self.draw_border(square, x, y)

    def draw_border(self, square: Square, x: int, y: int) -> None:
        """Mark chunk edges around the square at window (x, y) if borders are on."""
        if not self.border_enabled:
            return

        global_x = x + self.cursor.offset_x
        global_y = y + self.cursor.offset_y

        needs_left = global_x % CHUNK_SIZE == 0
        needs_right = (global_x + 1) % CHUNK_SIZE == 0
        needs_bottom = (global_y + 1) % CHUNK_SIZE == 0 and not needs_right and not needs_left

        border = _color_pair(BORDER_COLOR)
        main = self.main
        if needs_left:
            main.move(3 * x, y).attr_on(border).write(" ").attr_off(border)
        if needs_right:
            main.move(3 * x + 2, y).attr_on(border).write(" ").attr_off(border)
        if needs_bottom:
            data = main.move(3 * x + 1, y).char_at()
            main.move(3 * x, y)
            attr = _color_pair(12 if square.state == SquareState.CLOSED else 6)
            main.attr_on(curses.A_UNDERLINE).attr_on(attr)
            main.write(f" {data} ")
            main.attr_off(attr).attr_off(curses.A_UNDERLINE)

    def handle_input(self, ch: int) -> HandlerResult:
        """React to a key; arrows and WASD move, Ctrl+arrows move five squares."""
        control = 0
        mapped = _CONTROL_KEYS.get(_key_name(ch))
        if mapped is not None:
            control, ch = 1, mapped
        step = 1 + 4 * control

        cursor = self.cursor
        full_redraw = False

        if ch == ord(" "):
            self.on_open(cursor.offset_x + cursor.x, cursor.offset_y + cursor.y)
            full_redraw = True
        elif ch == ord("c"):
            self.center_cursor()
            full_redraw = True
        elif ch == ord("0"):
            self.center_cursor(0, 0)
            full_redraw = True
        elif ch == ord("b"):
            self.border_enabled = not self.border_enabled
            full_redraw = True
        elif ch == ord("f"):
            self.on_flag(cursor.offset_x + cursor.x, cursor.offset_y + cursor.y)
            full_redraw = True
        elif ch in (curses.KEY_LEFT, ord("a")):
            if cursor.x > 4 * control:
                cursor.x -= step
            else:
                cursor.offset_x -= step
                full_redraw = True
        elif ch in (curses.KEY_RIGHT, ord("d")):
            if cursor.x < self.main.cols // 3 - step:
                cursor.x += step
            else:
                cursor.offset_x += step
                full_redraw = True
        elif ch in (curses.KEY_UP, ord("w")):
            if cursor.y > 4 * control:
                cursor.y -= step
            else:
                cursor.offset_y -= step
                full_redraw = True
        elif ch in (curses.KEY_DOWN, ord("s")):
            if cursor.y < self.main.lines - step:
                cursor.y += step
            else:
                cursor.offset_y += step
                full_redraw = True

        if ch in _ARROW_KEYS:
            self.on_move(cursor.x + cursor.offset_x, cursor.y + cursor.offset_y)

        return HandlerResult.DRAW_ALL if full_redraw else HandlerResult.DRAW_CURSORS

    def center_cursor(self, global_x: Optional[int] = None, global_y: Optional[int] = None) -> None:
        """Scroll so the given global position (default: the cursor's) is centred."""
        if global_x is None:
            global_x = self.global_x()
        if global_y is None:
            global_y = self.global_y()

        half_cols = self.main.cols // 6
        half_lines = self.main.lines // 2
        self.cursor.offset_x = global_x - half_cols
        self.cursor.x = half_cols
        self.cursor.offset_y = global_y - half_lines
        self.cursor.y = half_lines

        self.on_move(global_x, global_y)

    def handle_sticky_flag(self) -> None:
        """Flag under the cursor, remembering the first of a pair of sticky flags."""
        position = Coordinates(
            self.cursor.offset_x + self.cursor.x, self.cursor.offset_y + self.cursor.y
        )
        if not self.have_previous_flag:
            self.have_previous_flag = True
            self.previous_flag = position
        else:
            self.have_previous_flag = False
            self.sticky_flags = False
        self.on_flag(position.x, position.y)