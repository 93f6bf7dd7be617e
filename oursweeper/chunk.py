"""Squares, fixed-size chunks of squares, and random chunk generation."""

from __future__ import annotations

import copy
import logging
import math
import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Iterator, List, Optional

from oursweeper.utils import CHUNK_SIZE

log = logging.getLogger(__name__)

SQUARES_PER_CHUNK = CHUNK_SIZE * CHUNK_SIZE


class SquareState(IntEnum):
    CLOSED = 0
    OPENED = 1
    FLAGGED = 2


@dataclass
class Square:
    """One board square; packs into a single byte."""

    state: SquareState = SquareState.CLOSED
    overflag: bool = False
    is_mine: bool = False
    number: int = 0

    def to_byte(self) -> int:
        """Pack the square: state in bits 0-1, overflag bit 2, mine bit 3, number bits 4-7."""
        return (
            (int(self.state) & 0b11)
            | (int(self.overflag) << 2)
            | (int(self.is_mine) << 3)
            | ((self.number & 0xF) << 4)
        )

    @classmethod
    def from_byte(cls, value: int) -> "Square":
        """Unpack a square from its one-byte form."""
        return cls(
            state=SquareState(value & 0b11),
            overflag=bool(value & 0b100),
            is_mine=bool(value & 0b1000),
            number=(value >> 4) & 0xF,
        )


class Chunk:
    """A CHUNK_SIZE x CHUNK_SIZE grid of squares, addressed as (x, y)."""

    def __init__(self) -> None:
        self._rows: List[List[Square]] = [
            [Square() for _ in range(CHUNK_SIZE)] for _ in range(CHUNK_SIZE)
        ]

    def get(self, x: int, y: int) -> Square:
        """Return the square at chunk-local (x, y)."""
        if not (0 <= x < CHUNK_SIZE and 0 <= y < CHUNK_SIZE):
            raise IndexError(f"square ({x}, {y}) is outside the chunk")
        return self._rows[y][x]

    def __iter__(self) -> Iterator[Square]:
        for row in self._rows:
            yield from row

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Chunk):
            return NotImplemented
        return self._rows == other._rows

    def all_squares(self, predicate: Callable[[Square], bool]) -> bool:
        """Tell whether every square satisfies ``predicate``."""
        return all(predicate(square) for square in self)

    def transform(self, fn: Callable[[Square], None]) -> None:
        """Apply ``fn`` to every square in place."""
        for square in self:
            fn(square)

    def transform_copy(self, fn: Callable[[Square], None]) -> "Chunk":
        """Return a copy of the chunk with ``fn`` applied to every square."""
        result = copy.deepcopy(self)
        result.transform(fn)
        return result

    def serialize(self) -> bytes:
        """Return the chunk as one byte per square, row by row."""
        return bytes(square.to_byte() for square in self)

    @classmethod
    def deserialize(cls, data: bytes) -> "Chunk":
        """Build a chunk from the bytes produced by :meth:`serialize`."""
        if len(data) != SQUARES_PER_CHUNK:
            raise ValueError(
                f"chunk data must be {SQUARES_PER_CHUNK} bytes, got {len(data)}"
            )
        chunk = cls()
        chunk._rows = [
            [Square.from_byte(b) for b in data[row * CHUNK_SIZE:(row + 1) * CHUNK_SIZE]]
            for row in range(CHUNK_SIZE)
        ]
        return chunk


class ChunkGenerator:
    """Generates chunks with a randomly varying mine density."""

    def __init__(
        self,
        mean_density: float,
        variation: float,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.mean_density = mean_density
        self.variation = variation
        self.rng = rng if rng is not None else random.Random()

    def generate(self) -> Chunk:
        """Return a fresh closed chunk with mines placed at random."""
        density = self.rng.uniform(
            self.mean_density - self.variation, self.mean_density + self.variation
        )
        nmines = max(0, math.floor(density * SQUARES_PER_CHUNK))
        if nmines > SQUARES_PER_CHUNK:
            raise ValueError(f"mine density {density} is above 1")

        log.info("[ckgen] generating chunk with %d mines (%s%%)", nmines, density * 100.0)

        chunk = Chunk()
        for index in self.rng.sample(range(SQUARES_PER_CHUNK), nmines):
            y, x = divmod(index, CHUNK_SIZE)
            chunk.get(x, y).is_mine = True
        return chunk