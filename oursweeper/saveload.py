"""Saving boards to and loading them from JSON save files."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Mapping

from oursweeper.board import Board
from oursweeper.chunk import Chunk
from oursweeper.utils import Coordinates

log = logging.getLogger(__name__)

FORMAT_VERSION = 1


class SaveFormatError(ValueError):
    """Raised when a save file uses an unsupported format version."""


def chunks_to_json(chunks: Mapping[tuple[int, int], Chunk]) -> Dict[str, str]:
    """Map "x:y" keys to each chunk's bytes, one character per byte."""
    result: Dict[str, str] = {}
    for (x, y), chunk in chunks.items():
        key = f"{x}:{y}"
        log.debug("[Saver] Writing chunk %s to save file.", key)
        result[key] = chunk.serialize().decode("latin-1")
    return result


def json_to_chunks(chunk_map: Mapping[str, str]) -> Dict[Coordinates, Chunk]:
    """Rebuild chunks from the mapping produced by :func:`chunks_to_json`."""
    chunks: Dict[Coordinates, Chunk] = {}
    for key, value in chunk_map.items():
        x_text, separator, y_text = key.partition(":")
        if not separator:
            raise ValueError(f"invalid chunk key {key!r}")
        try:
            coordinates = Coordinates(int(x_text), int(y_text))
        except ValueError:
            raise ValueError(f"invalid chunk key {key!r}") from None
        chunks[coordinates] = Chunk.deserialize(value.encode("latin-1"))
    return chunks


def save_board(board: Board, filename: str) -> None:
    """Write every chunk of ``board`` to ``filename``."""
    output: Dict[str, Any] = {
        "version": FORMAT_VERSION,
        "chunks": chunks_to_json(board.chunks),
    }
    with open(filename, "w", encoding="utf-8") as handle:
        json.dump(output, handle, separators=(",", ":"))
    log.info("[Saver] Game saved to %s", filename)


def load_board(filename: str) -> Board:
    """Read a board from ``filename``.

    Raises OSError if the file cannot be read and SaveFormatError if it uses
    another format version.
    """
    with open(filename, encoding="utf-8") as handle:
        data = json.load(handle)

    version = data.get("version")
    if version != FORMAT_VERSION:
        raise SaveFormatError(
            f"save game uses format version {version}, instead of required {FORMAT_VERSION}"
        )

    board = Board()
    board.chunks = json_to_chunks(data.get("chunks") or {})
    log.info("[Loader] Successfully loaded savegame '%s'!", filename)
    return board