import curses
from unittest import mock

import pytest

from oursweeper import window as window_module
from oursweeper.window import Window, curses_session


class FakeWin:
    def __init__(self, cols, lines, begin_x=0, begin_y=0):
        self.cols = cols
        self.lines = lines
        self.begin = (begin_y, begin_x)
        self.grid = [[" "] * cols for _ in range(lines)]
        self.y = 0
        self.x = 0
        self.attrs = 0
        self.calls = []

    def getbegyx(self):
        return self.begin

    def getmaxyx(self):
        return (self.lines, self.cols)

    def getyx(self):
        return (self.y, self.x)

    def move(self, y, x):
        if not (0 <= y < self.lines and 0 <= x < self.cols):
            raise curses.error("move")
        self.y, self.x = y, x

    def addstr(self, text):
        for ch in text:
            self.grid[self.y][self.x] = ch
            self.x += 1
            if self.x >= self.cols:
                if self.y + 1 >= self.lines:
                    self.x = self.cols - 1
                    raise curses.error("addstr")
                self.x = 0
                self.y += 1

    def inch(self):
        return ord(self.grid[self.y][self.x]) | self.attrs

    def attron(self, attr):
        self.attrs |= attr
        self.calls.append(("attron", attr))

    def attroff(self, attr):
        self.attrs &= ~attr
        self.calls.append(("attroff", attr))

    def erase(self):
        self.grid = [[" "] * self.cols for _ in range(self.lines)]
        self.calls.append(("erase",))

    def refresh(self):
        self.calls.append(("refresh",))

    def resize(self, lines, cols):
        self.calls.append(("resize", lines, cols))
        self.lines, self.cols = lines, cols

    def mvwin(self, y, x):
        self.calls.append(("mvwin", y, x))
        self.begin = (y, x)

    def scrollok(self, flag):
        self.calls.append(("scrollok", flag))

    def idlok(self, flag):
        self.calls.append(("idlok", flag))

    def row(self, y):
        return "".join(self.grid[y])


def test_reads_geometry_from_window():
    win = Window(FakeWin(20, 7, begin_x=2, begin_y=3))
    assert (win.startx, win.starty, win.cols, win.lines) == (2, 3, 20, 7)
    assert win.nowrap is False


def test_create_uses_newwin_arguments():
    fake = FakeWin(10, 5)
    with mock.patch("curses.newwin", return_value=fake) as newwin:
        win = Window.create(2, 3, 10, 5)
    newwin.assert_called_once_with(5, 10, 3, 2)
    assert (win.startx, win.starty, win.cols, win.lines) == (2, 3, 10, 5)
    assert win.win is fake


def test_move_and_position():
    win = Window(FakeWin(10, 4))
    result = win.move(6, 2)
    assert result is win
    assert (win.getx(), win.gety()) == (6, 2)


def test_move_outside_is_ignored():
    win = Window(FakeWin(10, 4))
    win.move(3, 1)
    win.move(50, 50)
    assert (win.getx(), win.gety()) == (3, 1)


def test_write_places_text():
    fake = FakeWin(10, 2)
    win = Window(fake)
    win.move(2, 1).write("ab").write(7)
    assert fake.row(1) == "  ab7     "
    assert win.getx() == 5


def test_write_wraps_by_default():
    fake = FakeWin(3, 2)
    Window(fake).write("abcd")
    assert fake.row(0) == "abc"
    assert fake.row(1) == "d  "


def test_nowrap_drops_text_at_last_column():
    fake = FakeWin(5, 2)
    win = Window(fake)
    win.nowrap = True
    win.write("abcdefg")
    assert fake.row(0) == "abcd "
    assert fake.row(1) == "     "
    assert win.getx() == 4


def test_write_at_bottom_right_does_not_raise():
    fake = FakeWin(2, 1)
    Window(fake).write("xy")
    assert fake.row(0) == "xy"


def test_char_at_ignores_attributes():
    fake = FakeWin(5, 1)
    win = Window(fake)
    win.write("q")
    win.attr_on(curses.A_BOLD)
    win.move(0, 0)
    assert win.char_at() == "q"


def test_attributes_are_forwarded():
    fake = FakeWin(5, 1)
    win = Window(fake)
    win.attr_on(curses.A_REVERSE).attr_off(curses.A_REVERSE)
    assert fake.calls == [("attron", curses.A_REVERSE), ("attroff", curses.A_REVERSE)]
    assert fake.attrs == 0


def test_erase_and_refresh():
    fake = FakeWin(4, 1)
    win = Window(fake)
    win.write("abc").erase().refresh()
    assert fake.row(0) == "    "
    assert fake.calls == [("erase",), ("refresh",)]


def test_resize_updates_geometry():
    fake = FakeWin(10, 5)
    win = Window(fake)
    win.resize(4, 1, 8, 3)
    assert (win.startx, win.starty, win.cols, win.lines) == (4, 1, 8, 3)
    assert ("resize", 3, 8) in fake.calls
    assert ("mvwin", 1, 4) in fake.calls


def test_set_scroll():
    fake = FakeWin(4, 1)
    Window(fake).set_scroll(True)
    assert fake.calls == [("scrollok", True), ("idlok", True)]


def test_remove_releases_window():
    win = Window(FakeWin(4, 1))
    win.remove()
    assert win.win is None


def test_curses_session_sets_up_and_tears_down():
    with mock.patch.object(window_module, "curses") as fake_curses, \
            mock.patch("locale.setlocale"):
        fake_curses.error = curses.error
        fake_curses.has_colors.return_value = True
        with curses_session() as screen:
            assert screen is fake_curses.initscr.return_value
            assert fake_curses.endwin.call_count == 0
        assert fake_curses.init_pair.call_count == 19
        screen.keypad.assert_called_once_with(True)
        screen.nodelay.assert_called_once_with(True)
        fake_curses.curs_set.assert_called_once_with(0)
        assert fake_curses.endwin.call_count == 1


def test_curses_session_restores_on_error():
    with mock.patch.object(window_module, "curses") as fake_curses, \
            mock.patch("locale.setlocale"):
        fake_curses.error = curses.error
        fake_curses.has_colors.return_value = False
        captured = []
        with pytest.raises(RuntimeError) as excinfo:
            with curses_session() as screen:
                captured.append(screen)
                raise RuntimeError("boom")
        assert str(excinfo.value) == "boom"
        assert captured == [fake_curses.initscr.return_value]
        assert fake_curses.init_pair.call_count == 0
        assert fake_curses.endwin.call_count == 1