"""Standable-tile test and the spiral search for the player spawn."""

from typing import Tuple

from fell.level.chunk import Chunk
from fell.level.errors import SpawnPointNotFoundError
from fell.tiles.tile_registry import TileRegistry, tile_registry

# Spiral order: up, right, down, left (y grows upward)
SPIRAL_STEPS = ((0, 1), (1, 0), (0, -1), (-1, 0))


def is_spawnable(chunk: Chunk, tile_x: int, tile_y: int, tiles: TileRegistry = tile_registry) -> bool:
    """
    Check whether an entity can stand at (tile_x, tile_y): the tile is
    passable and the tile directly below it is not.

    tile_y must be above 0 so the tile below stays inside this chunk; the
    bottom row of a room never hosts spawns.
    """
    if not (0 <= tile_x < chunk.size and 0 < tile_y < chunk.size):
        return False

    passable = tiles.is_passable(chunk.get_tile(tile_x, tile_y))
    passable_below = tiles.is_passable(chunk.get_tile(tile_x, tile_y - 1))
    return passable and not passable_below


def find_spawn_point(
    chunk: Chunk,
    origin: Tuple[int, int],
    tiles: TileRegistry = tile_registry,
) -> Tuple[int, int]:
    """
    Find a standable tile close to origin by moving outward in a spiral.

    Each run walks run_length tiles, then turns; the run length grows by one
    after every second turn. Positions outside the chunk are skipped. The
    search stops once a run would be longer than the chunk is wide twice
    over, at which point every tile has been visited.

    Raises:
        SpawnPointNotFoundError: the chunk holds no standable tile.
    """
    x, y = origin
    direction = 0
    turns = 0
    run = 0
    run_length = 1
    max_run_length = 2 * chunk.size + 1

    while run_length <= max_run_length:
        if is_spawnable(chunk, x, y, tiles):
            return x, y

        dx, dy = SPIRAL_STEPS[direction]
        x += dx
        y += dy
        run += 1
        if run == run_length:
            run = 0
            # turn "right" (up -> right -> down -> left)
            direction = (direction + 1) % 4
            turns += 1
            if turns == 2:
                turns = 0
                run_length += 1

    raise SpawnPointNotFoundError(
        f"No standable tile within reach of {origin}",
        room=chunk.position,
    )
