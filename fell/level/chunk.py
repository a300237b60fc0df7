"""Fixed-size square tile blocks, the unit rooms are stored in."""

from typing import List, Optional, Tuple

from config import CHUNK_SIZE
from fell.core.utils import chunk_to_world_pos
from fell.level.errors import TemplateFormatError
from fell.tiles.tile_parser import TileParser, tile_parser
from fell.tiles.tile_types import TileType


class Chunk:
    """
    A fixed-size square block of tiles stored in the World.

    Attributes:
        chunk_x, chunk_y: Owning chunk coordinate
        size: Width and height in tiles
        tiles: Grid indexed tiles[y][x], y = 0 is the bottom row
    """

    def __init__(self, chunk_x: int, chunk_y: int, size: int = CHUNK_SIZE, fill: TileType = TileType.AIR):
        self.chunk_x = chunk_x
        self.chunk_y = chunk_y
        self.size = size
        self.tiles: List[List[TileType]] = [[fill] * size for _ in range(size)]

    @classmethod
    def from_text(
        cls,
        chunk_x: int,
        chunk_y: int,
        text: str,
        size: int = CHUNK_SIZE,
        parser: Optional[TileParser] = None,
    ) -> "Chunk":
        """Build a chunk from template text (top row first)."""
        parser = parser or tile_parser
        rows = parser.split_rows(text)
        issues = parser.validate_rows(rows, size)
        if issues:
            raise TemplateFormatError(
                "Invalid room template: " + "; ".join(issues[:5]),
                room=(chunk_x, chunk_y),
            )

        chunk = cls(chunk_x, chunk_y, size)
        chunk.tiles = parser.parse_rows(rows)
        return chunk

    @property
    def position(self) -> Tuple[int, int]:
        return self.chunk_x, self.chunk_y

    @property
    def world_origin(self) -> Tuple[int, int]:
        """World tile coordinate of the bottom-left tile."""
        return chunk_to_world_pos(self.chunk_x, self.chunk_y, self.size)

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if a chunk-local coordinate is inside this chunk."""
        return 0 <= x < self.size and 0 <= y < self.size

    def get_tile(self, x: int, y: int) -> TileType:
        if not self.in_bounds(x, y):
            raise IndexError(f"tile ({x}, {y}) out of bounds for chunk {self.position}")
        return self.tiles[y][x]

    def set_tile(self, x: int, y: int, tile: TileType) -> None:
        if not self.in_bounds(x, y):
            raise IndexError(f"tile ({x}, {y}) out of bounds for chunk {self.position}")
        self.tiles[y][x] = tile

    def to_rows(self, parser: Optional[TileParser] = None) -> List[str]:
        """Template-style text rows, top row first."""
        return (parser or tile_parser).get_ascii_representation(self.tiles)

    def __repr__(self) -> str:
        return f"Chunk(chunk_x={self.chunk_x}, chunk_y={self.chunk_y}, size={self.size})"
