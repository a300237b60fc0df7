"""Solution path construction.

Builds a path through the room grid that is guaranteed to be traversable.
Other routes may open up off the main path by chance when neighbouring
rooms happen to share exits.
"""

import logging
import random
from typing import List, Set, Tuple

from fell.core.constants import (
    PATH_DIRECTION_OUTCOMES,
    PATH_LEFT_OUTCOMES,
    PATH_RIGHT_OUTCOMES,
)
from fell.level.procgen_data import PathEntry
from fell.level.room_types import Direction

logger = logging.getLogger(__name__)


def _choose_move(
    roll: int,
    room_x: int,
    room_y: int,
    level_width: int,
    checked_rooms: Set[Tuple[int, int]],
) -> Direction:
    """Turn a direction roll into a move, falling back to DOWN when blocked."""
    if roll in PATH_LEFT_OUTCOMES:
        if room_x > 0 and (room_x - 1, room_y) not in checked_rooms:
            return Direction.LEFT
    elif roll in PATH_RIGHT_OUTCOMES:
        if room_x < level_width - 1 and (room_x + 1, room_y) not in checked_rooms:
            return Direction.RIGHT
    return Direction.DOWN


def build_solution_path(
    level_width: int,
    level_height: int,
    rng: random.Random,
) -> Tuple[List[PathEntry], Tuple[int, int]]:
    """
    Walk from a random room on the entry row (room_y = level_height - 1) until
    the walk leaves the grid below row 0.

    Horizontal moves only enter rooms that are not on the path yet, so every
    room is recorded once and the walk always terminates: each row can take
    at most level_width - 1 sideways steps before a DOWN is forced.

    Returns:
        (path, start_room). The last path entry lies one row below the grid
        with its UP exit flagged.
    """
    start_x = rng.randrange(level_width)
    start_y = level_height - 1

    room_x, room_y = start_x, start_y
    path = [PathEntry(room_x, room_y)]
    # Tracks which rooms have been put in the solution path already.
    # This prevents the path overwriting itself.
    checked_rooms = {(room_x, room_y)}

    while room_y >= 0:
        current = path[-1]
        move = _choose_move(rng.randrange(PATH_DIRECTION_OUTCOMES), room_x, room_y, level_width, checked_rooms)

        dx, dy = move.delta
        room_x += dx
        room_y += dy

        current.exits[move] = True
        entry = PathEntry(room_x, room_y)
        entry.exits[move.opposite] = True

        path.append(entry)
        checked_rooms.add((room_x, room_y))

    logger.debug("Solution path from %s: %s", (start_x, start_y), [entry.position for entry in path])
    return path, (start_x, start_y)
