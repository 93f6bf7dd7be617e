"""Coordinate helpers, hashing and small event utilities shared by the game."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, DefaultDict, Hashable, Iterator, List, NamedTuple

CHUNK_SIZE = 16
BORDER_COLOR = 13

_FNV_PRIME = 16777619
_FNV_OFFSET_BASIS = 2166136261
_MASK32 = 0xFFFFFFFF


class Coordinates(NamedTuple):
    """A pair of integer coordinates, usable as a dictionary key."""

    x: int
    y: int


@dataclass
class CursorData:
    """A cursor position on screen together with the view offset."""

    x: int = 0
    y: int = 0
    offset_x: int = 0
    offset_y: int = 0
    color: int = 0

    def to_global(self) -> Coordinates:
        """Return the cursor position in global board coordinates."""
        return Coordinates(self.x + self.offset_x, self.y + self.offset_y)


class Flag:
    """A one-shot flag: calling it returns its state and clears it."""

    def __init__(self) -> None:
        self._flag = False

    def set(self) -> None:
        self._flag = True

    def __call__(self) -> bool:
        value, self._flag = self._flag, False
        return value


class EventMap:
    """Dispatches events to handlers registered under a key."""

    def __init__(self) -> None:
        self._handlers: DefaultDict[Hashable, List[Callable[..., Any]]] = defaultdict(list)

    def connect(self, key: Hashable, fn: Callable[..., Any]) -> None:
        """Register ``fn`` to be called whenever ``key`` is fired."""
        self._handlers[key].append(fn)

    def fire(self, key: Hashable, *args: Any) -> None:
        """Call every handler registered for ``key``, in registration order."""
        for handler in list(self._handlers.get(key, ())):
            handler(*args)


def to_chunk_coordinates(c: tuple[int, int]) -> Coordinates:
    """Return the coordinates of the chunk holding global square ``c``."""
    x, y = c
    return Coordinates(x // CHUNK_SIZE, y // CHUNK_SIZE)


def to_global_coordinates(local: tuple[int, int], chunk: tuple[int, int]) -> Coordinates:
    """Combine chunk-local coordinates and chunk coordinates into global ones."""
    lx, ly = local
    cx, cy = chunk
    return Coordinates(lx + CHUNK_SIZE * cx, ly + CHUNK_SIZE * cy)


def to_local_coordinates(c: tuple[int, int]) -> Coordinates:
    """Return the position of global square ``c`` within its chunk."""
    x, y = c
    return Coordinates(x % CHUNK_SIZE, y % CHUNK_SIZE)


def on_chunk_boundary(local: tuple[int, int]) -> bool:
    """Tell whether chunk-local coordinates lie on the edge of a chunk."""
    x, y = local
    edge = CHUNK_SIZE - 1
    return x in (0, edge) or y in (0, edge)


def around(x: int, y: int) -> Iterator[Coordinates]:
    """Yield the 3x3 block of coordinates centred on (x, y), centre included."""
    for xoff in (-1, 0, 1):
        for yoff in (-1, 0, 1):
            yield Coordinates(x + xoff, y + yoff)


def int_to_hex(value: int) -> str:
    """Format a 32-bit integer as eight upper-case hex digits."""
    return format(value & _MASK32, "08X")


def fnv_hash(text: str) -> int:
    """Return the 32-bit FNV-1a hash of ``text`` (with a trailing NUL) as a signed int."""
    result = _FNV_OFFSET_BASIS
    for byte in text.encode("utf-8") + b"\0":
        # Bytes are treated as signed chars and sign-extended before mixing.
        signed = byte - 256 if byte >= 0x80 else byte
        result ^= signed & _MASK32
        result = (result * _FNV_PRIME) & _MASK32
    return result - (1 << 32) if result >= (1 << 31) else result