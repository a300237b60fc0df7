from typing import Tuple

from config import CHUNK_SIZE


def world_to_chunk_pos(world_x: int, world_y: int, chunk_size: int = CHUNK_SIZE) -> Tuple[int, int]:
    """Return the chunk coordinate owning the world tile (floor division)."""
    return world_x // chunk_size, world_y // chunk_size


def world_to_rel_pos(world_x: int, world_y: int, chunk_size: int = CHUNK_SIZE) -> Tuple[int, int]:
    """Return the tile offset inside its chunk. Always non-negative."""
    return world_x % chunk_size, world_y % chunk_size


def chunk_to_world_pos(chunk_x: int, chunk_y: int, chunk_size: int = CHUNK_SIZE) -> Tuple[int, int]:
    """Return the world tile coordinate of a chunk's bottom-left corner."""
    return chunk_x * chunk_size, chunk_y * chunk_size