"""An endless, chunked minesweeper board: game rules, JSON save files, settings and curses views."""

__version__ = "0.1.0"