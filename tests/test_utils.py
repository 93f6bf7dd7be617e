import pytest

from oursweeper.utils import (
    CHUNK_SIZE,
    Coordinates,
    CursorData,
    EventMap,
    Flag,
    around,
    fnv_hash,
    int_to_hex,
    on_chunk_boundary,
    to_chunk_coordinates,
    to_global_coordinates,
    to_local_coordinates,
)


@pytest.mark.parametrize(
    "point",
    [(0, 0), (15, 15), (16, 0), (-1, -1), (-16, -17), (100, -250), (-33, 47)],
)
def test_local_and_chunk_round_trip(point):
    local = to_local_coordinates(point)
    chunk = to_chunk_coordinates(point)
    assert to_global_coordinates(local, chunk) == Coordinates(*point)
    assert 0 <= local.x < CHUNK_SIZE
    assert 0 <= local.y < CHUNK_SIZE


def test_negative_coordinates_fall_in_previous_chunk():
    assert to_chunk_coordinates(Coordinates(-1, 0)) == Coordinates(-1, 0)


def test_chunk_coordinates_of_chunk_corners_agree():
    origin = to_global_coordinates((0, 0), (3, -2))
    corner = to_global_coordinates((CHUNK_SIZE - 1, CHUNK_SIZE - 1), (3, -2))
    assert to_chunk_coordinates(origin) == to_chunk_coordinates(corner) == (3, -2)


@pytest.mark.parametrize(
    "local, expected",
    [((0, 5), True), ((CHUNK_SIZE - 1, 3), True), ((5, 0), True),
     ((7, CHUNK_SIZE - 1), True), ((5, 5), False), ((1, 14), False)],
)
def test_on_chunk_boundary(local, expected):
    assert on_chunk_boundary(local) is expected


def test_around_yields_three_by_three_block():
    cells = list(around(4, -2))
    assert len(cells) == 9
    assert len(set(cells)) == 9
    assert Coordinates(4, -2) in cells
    assert all(abs(cx - 4) <= 1 and abs(cy + 2) <= 1 for cx, cy in cells)


def test_int_to_hex_pinned_values():
    assert int_to_hex(255) == "000000FF"
    assert int_to_hex(-1) == "FFFFFFFF"


@pytest.mark.parametrize("value", [0, 1, 12345, -42, 2**31 - 1, -(2**31)])
def test_int_to_hex_round_trip(value):
    text = int_to_hex(value)
    assert len(text) == 8
    assert text == text.upper()
    assert int(text, 16) == value & 0xFFFFFFFF


def test_fnv_hash_is_deterministic_and_signed_32_bit():
    first = fnv_hash("127.0.0.14096")
    assert first == fnv_hash("127.0.0.14096")
    assert -(2**31) <= first < 2**31


def test_fnv_hash_distinguishes_inputs():
    assert fnv_hash("a") != fnv_hash("b")
    assert fnv_hash("10.0.0.1" + "5000") != fnv_hash("10.0.0.1" + "5001")


def test_fnv_hash_handles_non_ascii():
    value = fnv_hash("héllo")
    assert -(2**31) <= value < 2**31
    assert value != fnv_hash("hello")


def test_flag_is_one_shot():
    flag = Flag()
    assert flag() is False
    flag.set()
    assert flag() is True
    assert flag() is False


def test_event_map_fires_handlers_in_order():
    events = EventMap()
    calls = []
    events.connect("open", lambda x, y: calls.append(("first", x, y)))
    events.connect("open", lambda x, y: calls.append(("second", x, y)))
    events.fire("open", 1, 2)
    assert calls == [("first", 1, 2), ("second", 1, 2)]


def test_event_map_ignores_unknown_keys():
    events = EventMap()
    calls = []
    events.connect("open", calls.append)
    events.fire("flag", 3)
    assert calls == []


def test_cursor_to_global():
    cursor = CursorData(x=3, y=4, offset_x=-10, offset_y=20)
    assert cursor.to_global() == Coordinates(3 - 10, 4 + 20)


def test_coordinates_are_hashable_pairs():
    mapping = {Coordinates(1, 2): "a"}
    assert mapping[(1, 2)] == "a"
    x, y = Coordinates(7, 8)
    assert (x, y) == (7, 8)