"""An unbounded minesweeper board made of lazily generated chunks."""

from __future__ import annotations

import logging
from typing import Dict, Optional

from oursweeper.chunk import Chunk, ChunkGenerator, Square
from oursweeper.utils import (
    CHUNK_SIZE,
    Coordinates,
    around,
    to_chunk_coordinates,
    to_local_coordinates,
)

log = logging.getLogger(__name__)

DEFAULT_MEAN_DENSITY = 0.15
DEFAULT_VARIATION = 0.03


class Board:
    """A board of chunks keyed by chunk coordinates.

    Without a generator the board uses the standard density settings and starts
    with a chunk at the origin. In client mode missing chunks are never
    generated; reads from them return a blank square instead.
    """

    def __init__(
        self,
        generator: Optional[ChunkGenerator] = None,
        client_mode: bool = False,
    ) -> None:
        self.chunks: Dict[Coordinates, Chunk] = {}
        self.client_mode = client_mode
        if generator is None:
            self.generator = ChunkGenerator(DEFAULT_MEAN_DENSITY, DEFAULT_VARIATION)
            self.add_chunk(Coordinates(0, 0), self.generator.generate())
        else:
            self.generator = generator

    def add_chunk(self, c: tuple[int, int], chunk: Chunk) -> None:
        """Store ``chunk`` at chunk coordinates ``c``, replacing any present."""
        self.chunks[Coordinates(*c)] = chunk

    def get_chunk(self, c: tuple[int, int]) -> Optional[Chunk]:
        """Return the chunk at chunk coordinates ``c``, or None if absent."""
        return self.chunks.get(Coordinates(*c))

    def regenerate_chunk(self, c: tuple[int, int]) -> Chunk:
        """Replace the chunk at ``c`` with a freshly generated one and return it."""
        chunk = self.generator.generate()
        self.chunks[Coordinates(*c)] = chunk
        return chunk

    def clear_at(self, x: int, y: int) -> None:
        """Remove mines from the 3x3 block around global (x, y) within its chunk."""
        local = to_local_coordinates((x, y))
        chunk_coordinates = to_chunk_coordinates((x, y))

        log.info(
            "Clearing around (X: %d Y: %d), Chunk %d, %d.",
            local.x, local.y, chunk_coordinates.x, chunk_coordinates.y,
        )

        chunk = self.get_chunk(chunk_coordinates)
        if chunk is None:
            chunk = self.regenerate_chunk(chunk_coordinates)

        for lx, ly in around(local.x, local.y):
            if 0 <= lx < CHUNK_SIZE and 0 <= ly < CHUNK_SIZE:
                chunk.get(lx, ly).is_mine = False

    def get(self, x: int, y: int) -> Square:
        """Return the square at global (x, y), generating its chunk if needed."""
        local = to_local_coordinates((x, y))
        chunk_coordinates = to_chunk_coordinates((x, y))

        chunk = self.chunks.get(chunk_coordinates)
        if chunk is None:
            if self.client_mode:
                return Square()
            log.info(
                "[board] generating chunk at (%d, %d)",
                chunk_coordinates.x, chunk_coordinates.y,
            )
            chunk = self.generator.generate()
            self.chunks[chunk_coordinates] = chunk

        return chunk.get(local.x, local.y)