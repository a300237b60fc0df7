"""Room types, exit directions and the room-options table.

Room types:
    0 = arbitrary (no guaranteed exits)
    1 = exits to the left and right
    2 = exits to the left, right, and down
    3 = exits to the left, right, and up
    4 = exits in all four directions
"""

from enum import IntEnum
from itertools import combinations
from typing import Dict, FrozenSet, Iterable, List, Mapping

from fell.level.errors import ConfigurationError


class Direction(IntEnum):
    LEFT = 0
    RIGHT = 1
    DOWN = 2
    UP = 3

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]

    @property
    def delta(self):
        """(dx, dy) in room coordinates; y grows upward."""
        return _DELTAS[self]


_OPPOSITES = {
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
    Direction.DOWN: Direction.UP,
    Direction.UP: Direction.DOWN,
}

_DELTAS = {
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, -1),
    Direction.UP: (0, 1),
}


class RoomType(IntEnum):
    ARBITRARY = 0
    LEFT_RIGHT = 1
    LEFT_RIGHT_DOWN = 2
    LEFT_RIGHT_UP = 3
    ALL_FOUR = 4


ALL_ROOM_TYPES: List[RoomType] = list(RoomType)

# Exits each room type physically provides.
SUPPORTED_EXITS: Dict[RoomType, FrozenSet[Direction]] = {
    RoomType.ARBITRARY: frozenset(),
    RoomType.LEFT_RIGHT: frozenset({Direction.LEFT, Direction.RIGHT}),
    RoomType.LEFT_RIGHT_DOWN: frozenset({Direction.LEFT, Direction.RIGHT, Direction.DOWN}),
    RoomType.LEFT_RIGHT_UP: frozenset({Direction.LEFT, Direction.RIGHT, Direction.UP}),
    RoomType.ALL_FOUR: frozenset(Direction),
}


def build_room_options(supported_exits: Mapping[RoomType, Iterable[Direction]]) -> Dict[Direction, FrozenSet[RoomType]]:
    """Invert a type -> exits mapping into direction -> types providing it."""
    options: Dict[Direction, FrozenSet[RoomType]] = {}
    for direction in Direction:
        options[direction] = frozenset(
            room_type for room_type, exits in supported_exits.items() if direction in exits
        )
    return options


# Provides all options for a given exit direction. For example, the set
# stored under Direction.LEFT contains every room type that exits left.
ROOM_OPTIONS: Dict[Direction, FrozenSet[RoomType]] = build_room_options(SUPPORTED_EXITS)


def compatible_room_types(
    required_exits: Iterable[Direction],
    room_options: Mapping[Direction, FrozenSet[RoomType]] = ROOM_OPTIONS,
) -> List[RoomType]:
    """Return the sorted room types providing every required exit.

    With no required exits every room type is eligible.
    """
    required_exits = list(required_exits)
    options = None
    for direction in required_exits:
        if options is None:
            options = set(room_options[direction])
        else:
            options &= room_options[direction]

    if options is None:
        return list(ALL_ROOM_TYPES)
    if not options:
        raise ConfigurationError(
            f"No room type supports exits {sorted(d.name for d in required_exits)}"
        )
    return sorted(options)


def validate_room_options(room_options: Mapping[Direction, FrozenSet[RoomType]] = ROOM_OPTIONS) -> None:
    """Check the table can serve every combination of exits a path may require."""
    for direction in Direction:
        if not room_options.get(direction):
            raise ConfigurationError(f"Room options for {direction.name} are empty")

    for count in range(1, len(Direction) + 1):
        for subset in combinations(Direction, count):
            compatible_room_types(subset, room_options)
