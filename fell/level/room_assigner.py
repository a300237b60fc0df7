"""Room type assignment for the room grid."""

import logging
import random
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Union

from fell.core.constants import ROOM_OUT_OF_BOUNDS
from fell.level.procgen_data import PathEntry
from fell.level.room_types import (
    ALL_ROOM_TYPES,
    ROOM_OPTIONS,
    Direction,
    RoomType,
    compatible_room_types,
)

logger = logging.getLogger(__name__)


class RoomGrid:
    """
    Flattened 2D array of room types indexed by (room_x, room_y).

    In-bounds cells hold None until a type is assigned. Reads outside the
    grid return ROOM_OUT_OF_BOUNDS and writes outside it are ignored.
    """

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.cells: List[Optional[RoomType]] = [None] * (width * height)

    def in_bounds(self, room_x: int, room_y: int) -> bool:
        return 0 <= room_x < self.width and 0 <= room_y < self.height

    def get(self, room_x: int, room_y: int) -> Union[RoomType, int, None]:
        if self.in_bounds(room_x, room_y):
            return self.cells[room_y * self.width + room_x]
        return ROOM_OUT_OF_BOUNDS

    def set(self, room_x: int, room_y: int, room_type: RoomType) -> None:
        if self.in_bounds(room_x, room_y):
            self.cells[room_y * self.width + room_x] = room_type

    def is_assigned(self, room_x: int, room_y: int) -> bool:
        return self.in_bounds(room_x, room_y) and self.get(room_x, room_y) is not None

    def as_rows(self) -> List[List[int]]:
        """Rows indexed [room_y][room_x] as plain ints (-1 for unassigned)."""
        return [
            [int(cell) if cell is not None else ROOM_OUT_OF_BOUNDS
             for cell in self.cells[row * self.width:(row + 1) * self.width]]
            for row in range(self.height)
        ]


def assign_path_room_types(
    path: Iterable[PathEntry],
    grid: RoomGrid,
    rng: random.Random,
    room_options: Mapping[Direction, FrozenSet[RoomType]] = ROOM_OPTIONS,
) -> Dict[tuple, RoomType]:
    """
    Given a filled solution path, set the room types along the path randomly
    according to what each room's required exits allow.

    Entries outside the grid (the exit below the last row) are skipped.

    Returns:
        Mapping of room coordinate -> assigned type for the in-grid entries.
    """
    assigned = {}
    for entry in path:
        if not grid.in_bounds(entry.x, entry.y):
            continue

        options = compatible_room_types(entry.required_exits(), room_options)
        choice = rng.choice(options)
        grid.set(entry.x, entry.y, choice)
        assigned[entry.position] = choice
        logger.debug("Path room %s exits=%s -> %s (options=%s)",
                     entry.position, [d.name for d in entry.required_exits()], choice.name,
                     [o.name for o in options])
    return assigned


def resolve_room_type(grid: RoomGrid, room_x: int, room_y: int, rng: random.Random) -> RoomType:
    """Return the room's type, picking any type for rooms the path never touched."""
    room_type = grid.get(room_x, room_y)
    if room_type is None:
        room_type = rng.choice(ALL_ROOM_TYPES)
        grid.set(room_x, room_y, room_type)
    return room_type
