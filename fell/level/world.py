"""Sparse chunk storage for generated levels."""

from typing import Dict, Iterator, List, Mapping, Optional, Tuple

import pygame

from config import CHUNK_SIZE
from fell.core.utils import world_to_chunk_pos, world_to_rel_pos
from fell.level.chunk import Chunk
from fell.tiles.tile_parser import TileParser, tile_parser
from fell.tiles.tile_types import TileType


class World:
    """Maps chunk coordinates to chunks.

    Chunks are kept in a dict so the level can take any shape; a coordinate
    holds at most one chunk. Reads outside stored chunks behave as air.
    """

    def __init__(self, chunk_size: int = CHUNK_SIZE):
        self.chunk_size = chunk_size
        self._chunks: Dict[Tuple[int, int], Chunk] = {}

    def get_chunk(self, chunk_x: int, chunk_y: int) -> Optional[Chunk]:
        """Return the chunk at the given position, or None if it doesn't exist."""
        return self._chunks.get((chunk_x, chunk_y))

    def set_chunk(self, chunk_x: int, chunk_y: int, chunk: Chunk) -> None:
        """Insert or overwrite the chunk at the given position."""
        if chunk.size != self.chunk_size:
            raise ValueError(f"Chunk size {chunk.size} does not match world chunk size {self.chunk_size}")
        if chunk.position != (chunk_x, chunk_y):
            raise ValueError(f"Chunk tagged {chunk.position} cannot be stored at {(chunk_x, chunk_y)}")
        self._chunks[(chunk_x, chunk_y)] = chunk

    def get_tile(self, world_x: int, world_y: int) -> TileType:
        """Return the tile at the given world location (air if no chunk)."""
        chunk = self.get_chunk(*world_to_chunk_pos(world_x, world_y, self.chunk_size))
        if chunk is None:
            return TileType.AIR

        rel_x, rel_y = world_to_rel_pos(world_x, world_y, self.chunk_size)
        return chunk.get_tile(rel_x, rel_y)

    def set_tile(self, world_x: int, world_y: int, tile: TileType) -> None:
        """Set a tile at the given world location, creating its chunk if needed."""
        chunk_x, chunk_y = world_to_chunk_pos(world_x, world_y, self.chunk_size)
        chunk = self.get_chunk(chunk_x, chunk_y)

        if chunk is None:
            chunk = Chunk(chunk_x, chunk_y, self.chunk_size)
            self._chunks[(chunk_x, chunk_y)] = chunk

        rel_x, rel_y = world_to_rel_pos(world_x, world_y, self.chunk_size)
        chunk.set_tile(rel_x, rel_y, tile)

    def chunk_coords(self) -> List[Tuple[int, int]]:
        return sorted(self._chunks)

    def merge(self, other: "World") -> None:
        """Copy every chunk of another world into this one, overwriting clashes."""
        if other.chunk_size != self.chunk_size:
            raise ValueError(f"Cannot merge world with chunk size {other.chunk_size} into {self.chunk_size}")
        self._chunks.update(other._chunks)

    def clear(self) -> None:
        self._chunks.clear()

    def to_ascii(
        self,
        rect: pygame.Rect,
        marks: Optional[Mapping[Tuple[int, int], str]] = None,
        parser: Optional[TileParser] = None,
    ) -> List[str]:
        """
        Render the world tiles inside rect as text rows, highest row first.

        Args:
            rect: Area in world tile coordinates (rect.y is the lowest row)
            marks: Optional world tile -> character overrides (player, enemies)
            parser: Parser whose character map is used for tiles
        """
        parser = parser or tile_parser
        tile_to_ascii: Dict[TileType, str] = {}
        for char, tile_type in parser.ascii_map.items():
            tile_to_ascii.setdefault(tile_type, char)
        marks = marks or {}

        rows = []
        for world_y in range(rect.y + rect.height - 1, rect.y - 1, -1):
            row = []
            for world_x in range(rect.x, rect.x + rect.width):
                mark = marks.get((world_x, world_y))
                row.append(mark if mark else tile_to_ascii.get(self.get_tile(world_x, world_y), '?'))
            rows.append(''.join(row))
        return rows

    def __contains__(self, coord: Tuple[int, int]) -> bool:
        return coord in self._chunks

    def __len__(self) -> int:
        return len(self._chunks)

    def __iter__(self) -> Iterator[Chunk]:
        return iter(self._chunks.values())
