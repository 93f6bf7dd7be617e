"""Curses windows with cursor-relative drawing, and terminal session setup."""

from __future__ import annotations

import curses
import locale
from contextlib import contextmanager, suppress
from typing import Any, Iterator

_COLOR_PAIRS = (
    (curses.COLOR_WHITE, -1),
    (curses.COLOR_BLUE, -1),
    (curses.COLOR_CYAN, -1),
    (curses.COLOR_GREEN, -1),
    (curses.COLOR_MAGENTA, -1),
    (curses.COLOR_RED, -1),
    # Inverted colours.
    (curses.COLOR_BLACK, curses.COLOR_WHITE),
    (curses.COLOR_BLUE, curses.COLOR_WHITE),
    (curses.COLOR_CYAN, curses.COLOR_WHITE),
    (curses.COLOR_GREEN, curses.COLOR_WHITE),
    (curses.COLOR_MAGENTA, curses.COLOR_WHITE),
    (curses.COLOR_RED, curses.COLOR_WHITE),
    # Red backgrounds.
    (curses.COLOR_BLACK, curses.COLOR_RED),
    (curses.COLOR_BLUE, curses.COLOR_RED),
    (curses.COLOR_CYAN, curses.COLOR_RED),
    (curses.COLOR_GREEN, curses.COLOR_RED),
    (curses.COLOR_MAGENTA, curses.COLOR_RED),
    (curses.COLOR_WHITE, curses.COLOR_RED),
    (curses.COLOR_BLACK, curses.COLOR_GREEN),
)


def _color_pair(number: int) -> int:
    """Return the attribute for colour pair ``number``."""
    try:
        return curses.color_pair(number)
    except curses.error:
        # Before the screen is initialised, use the ncurses encoding directly.
        return number << 8


class Window:
    """A curses window that tracks its position and size.

    Drawing calls return the window itself, so they can be chained. With
    ``nowrap`` set, text that reaches the last column is dropped instead of
    wrapping onto the next line.
    """

    def __init__(self, win: Any) -> None:
        self.win = win
        self.starty, self.startx = win.getbegyx()
        self.lines, self.cols = win.getmaxyx()
        self.nowrap = False

    @classmethod
    def create(cls, x: int, y: int, cols: int, lines: int) -> "Window":
        """Create a new curses window at (x, y) with the given size."""
        window = cls(curses.newwin(lines, cols, y, x))
        window.startx, window.starty = x, y
        window.cols, window.lines = cols, lines
        return window

    def resize(self, x: int, y: int, cols: int, lines: int) -> None:
        """Resize the window and move it to (x, y)."""
        with suppress(curses.error):
            self.win.resize(lines, cols)
        self.startx, self.starty = x, y
        self.cols, self.lines = cols, lines
        with suppress(curses.error):
            self.win.mvwin(y, x)

    def getx(self) -> int:
        return self.win.getyx()[1]

    def gety(self) -> int:
        return self.win.getyx()[0]

    def move(self, x: int, y: int) -> "Window":
        """Move the drawing cursor; positions outside the window are ignored."""
        with suppress(curses.error):
            self.win.move(y, x)
        return self

    def write(self, text: Any) -> "Window":
        """Write ``text`` (converted with str) at the cursor."""
        for ch in str(text):
            maxx = self.win.getmaxyx()[1]
            x = self.win.getyx()[1]
            if self.nowrap and x == maxx - 1:
                continue
            # Writing the bottom-right cell reports an error after drawing it.
            with suppress(curses.error):
                self.win.addstr(ch)
        return self

    def char_at(self) -> str:
        """Return the character under the cursor."""
        return chr(self.win.inch() & curses.A_CHARTEXT)

    def attr_on(self, attr: int) -> "Window":
        self.win.attron(attr)
        return self

    def attr_off(self, attr: int) -> "Window":
        self.win.attroff(attr)
        return self

    def erase(self) -> "Window":
        self.win.erase()
        return self

    def refresh(self) -> "Window":
        self.win.refresh()
        return self

    def set_scroll(self, enabled: bool) -> None:
        """Turn scrolling of the window on or off."""
        self.win.scrollok(enabled)
        self.win.idlok(enabled)

    def remove(self) -> None:
        """Release the underlying curses window."""
        self.win = None


@contextmanager
def curses_session() -> Iterator[Any]:
    """Set up the terminal for the game, yield the screen, and restore it afterwards."""
    locale.setlocale(locale.LC_ALL, "")
    stdscr = curses.initscr()
    try:
        if curses.has_colors():
            curses.start_color()
            curses.use_default_colors()
            for pair, (foreground, background) in enumerate(_COLOR_PAIRS, start=1):
                curses.init_pair(pair, foreground, background)
        curses.noecho()
        curses.cbreak()
        stdscr.keypad(True)
        stdscr.nodelay(True)
        with suppress(curses.error):
            curses.curs_set(0)
        yield stdscr
    finally:
        curses.endwin()