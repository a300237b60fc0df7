"""Procedural generation data structures.

Configuration, solution path entries and the record of a generated level.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import pygame

from config import (
    LEVEL_WIDTH,
    LEVEL_HEIGHT,
    CHUNK_SIZE,
    INITIAL_MOB_CAP,
    MOB_SPAWN_PROBABILITY_PERCENT,
)
from fell.level.errors import ConfigurationError
from fell.level.room_types import Direction

INT_FIELDS = (
    "level_width", "level_height", "chunk_size",
    "initial_mob_cap", "mob_spawn_probability_percent",
)


def _is_int(value: Any) -> bool:
    # bool is an int subclass but never a valid size or count
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class GenerationConfig:
    """Configuration for procedural level generation."""
    # Size of the level in rooms
    level_width: int = LEVEL_WIDTH
    level_height: int = LEVEL_HEIGHT

    # Width and height of a room/chunk in tiles
    chunk_size: int = CHUNK_SIZE

    # Enemy population: per-room cap for the first row, +1 per completed row
    initial_mob_cap: int = INITIAL_MOB_CAP
    # Chance (0-100) that a standable tile spawns an enemy
    mob_spawn_probability_percent: int = MOB_SPAWN_PROBABILITY_PERCENT

    # Directory holding type<N>/ template folders and solid.txt.
    # None uses the templates packaged with fell.
    room_data_dir: Optional[str] = None

    # Tile the start-room spawn search spirals out from.
    # None uses the chunk center.
    spawn_search_origin: Optional[Tuple[int, int]] = None

    @property
    def spawn_origin(self) -> Tuple[int, int]:
        if self.spawn_search_origin is not None:
            return tuple(self.spawn_search_origin)
        center = self.chunk_size // 2
        return center, center

    def validate(self) -> None:
        """Raise ConfigurationError if generation cannot run with these values."""
        for name in INT_FIELDS:
            value = getattr(self, name)
            if not _is_int(value):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")

        if self.level_width < 1 or self.level_height < 1:
            raise ConfigurationError(
                f"Room grid must be at least 1x1, got {self.level_width}x{self.level_height}"
            )
        if self.chunk_size < 2:
            raise ConfigurationError(f"chunk_size must be at least 2, got {self.chunk_size}")
        if self.initial_mob_cap < 0:
            raise ConfigurationError(f"initial_mob_cap must not be negative, got {self.initial_mob_cap}")
        if not 0 <= self.mob_spawn_probability_percent <= 100:
            raise ConfigurationError(
                f"mob_spawn_probability_percent must be within 0-100, got {self.mob_spawn_probability_percent}"
            )

        origin = self.spawn_search_origin
        if origin is not None:
            if not isinstance(origin, (tuple, list)) or len(origin) != 2 or not all(_is_int(v) for v in origin):
                raise ConfigurationError(f"spawn_search_origin must be a pair of integers, got {origin!r}")
        origin_x, origin_y = self.spawn_origin
        if not (0 <= origin_x < self.chunk_size and 0 <= origin_y < self.chunk_size):
            raise ConfigurationError(f"spawn_search_origin {self.spawn_origin} lies outside the chunk")


@dataclass
class PathEntry:
    """One room on the solution path and the exits it must provide."""
    x: int
    y: int
    exits: List[bool] = field(default_factory=lambda: [False] * len(Direction))

    @property
    def position(self) -> Tuple[int, int]:
        return self.x, self.y

    def required_exits(self) -> List[Direction]:
        return [direction for direction in Direction if self.exits[direction]]


@dataclass
class EnemySpawn:
    """An enemy placed by the generator, ready to be instantiated by the host."""
    archetype: str
    room: Tuple[int, int]
    tile: Tuple[int, int]
    position: pygame.math.Vector2

    @property
    def world_tile(self) -> Tuple[int, int]:
        return int(self.position.x), int(self.position.y)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "archetype": self.archetype,
            "room": list(self.room),
            "tile": list(self.tile),
            "position": [self.position.x, self.position.y],
        }


@dataclass
class GeneratedLevel:
    """Everything a generation pass decided, kept for inspection and tests."""
    seed: int
    room_types: List[List[int]]
    solution_path: List[PathEntry]
    start_room: Tuple[int, int]
    spawn_tile: Tuple[int, int]
    player_spawn: pygame.math.Vector2
    enemy_spawns: List[EnemySpawn]
    row_mob_caps: Dict[int, int]
    bounds: pygame.Rect

    def enemies_in_room(self, room_x: int, room_y: int) -> List[EnemySpawn]:
        return [spawn for spawn in self.enemy_spawns if spawn.room == (room_x, room_y)]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary, seed first."""
        return {
            "seed": int(self.seed),
            "bounds": [self.bounds.x, self.bounds.y, self.bounds.width, self.bounds.height],
            "start_room": list(self.start_room),
            "spawn_tile": list(self.spawn_tile),
            "player_spawn": [self.player_spawn.x, self.player_spawn.y],
            "room_types": [list(row) for row in self.room_types],
            "solution_path": [
                {"x": entry.x, "y": entry.y, "exits": [d.name.lower() for d in entry.required_exits()]}
                for entry in self.solution_path
            ],
            "row_mob_caps": {str(row): cap for row, cap in self.row_mob_caps.items()},
            "enemy_spawns": [spawn.to_dict() for spawn in self.enemy_spawns],
        }
