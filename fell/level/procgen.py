"""Room-grid level generator.

Pipeline for one seed:
- Build a solution path from the entry row down through the bottom of the grid
- Assign every path room a type supporting the exits the path needs
- Materialize each room from a random template of its type, top row first
- Find the player spawn in the start room with a spiral search
- Roll enemy spawns on standable tiles of every other room, with a per-room
  cap that grows by one after each row
- Seal the grid with a ring of solid chunks

Rooms are written into a staging World that is merged into the caller's
world only after the whole level succeeded; the player is moved and events
are emitted after that merge.
"""

import logging
import random
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pygame

from config import PLAYER_SPAWN_Y_OFFSET
from fell.core.constants import MOB_ROLL_RANGE
from fell.core.events import EventBus, GameEvent
from fell.entities.enemy_archetypes import DEFAULT_ARCHETYPES, EnemyArchetype
from fell.level.chunk import Chunk
from fell.level.errors import ConfigurationError, ContentError, GenerationError
from fell.level.procgen_data import EnemySpawn, GeneratedLevel, GenerationConfig
from fell.level.room_assigner import RoomGrid, assign_path_room_types, resolve_room_type
from fell.level.room_templates import RoomTemplateLibrary
from fell.level.room_types import ROOM_OPTIONS, RoomType, validate_room_options
from fell.level.solution_path import build_solution_path
from fell.level.spawn_finder import find_spawn_point, is_spawnable
from fell.level.world import World
from fell.tiles.tile_parser import TileParser, tile_parser
from fell.tiles.tile_registry import TileRegistry, tile_registry

logger = logging.getLogger(__name__)

SEED_MIN = -(2 ** 31)
SEED_MAX = 2 ** 31 - 1


class ProcGen:
    """Generates one level per call to generate()."""

    def __init__(
        self,
        config: Optional[GenerationConfig] = None,
        templates: Optional[RoomTemplateLibrary] = None,
        archetypes: Optional[Sequence[EnemyArchetype]] = None,
        events: Optional[EventBus] = None,
        player: Optional[Any] = None,
        tiles: Optional[TileRegistry] = None,
        parser: Optional[TileParser] = None,
    ):
        """
        Args:
            config: Generation settings (validated here)
            templates: Room template source; defaults to the packaged templates
            archetypes: Enemy archetypes to choose from
            events: Bus receiving PLAYER_SPAWNED / ENEMY_SPAWNED / LEVEL_GENERATED
            player: Object whose `pos` is set to the spawn position, if given
            tiles: Tile lookup used for the passable predicate
            parser: Parser turning template text into chunks
        """
        self.config = config or GenerationConfig()
        self.config.validate()

        self.templates = templates or RoomTemplateLibrary(self.config.room_data_dir, self.config.chunk_size)
        if self.templates.chunk_size != self.config.chunk_size:
            raise ConfigurationError(
                f"Template chunk size {self.templates.chunk_size} does not match config {self.config.chunk_size}"
            )

        self.archetypes: List[EnemyArchetype] = list(DEFAULT_ARCHETYPES if archetypes is None else archetypes)
        self.events = events or EventBus()
        self.player = player
        self.tiles = tiles or tile_registry
        self.parser = parser or tile_parser

        self.room_options = ROOM_OPTIONS
        validate_room_options(self.room_options)

        self.layout: Optional[GeneratedLevel] = None

    def _check_content(self) -> None:
        if not self.archetypes:
            raise ConfigurationError("No enemy archetypes configured")
        self.templates.validate(RoomType)

    def generate(self, world: World, seed: Optional[int] = None) -> pygame.Rect:
        """
        Generate a level into world.

        Args:
            world: Chunk store receiving the rooms and the perimeter
            seed: Seed for the generator; drawn at random when None

        Returns:
            World-space rect (in tiles) spanning the room grid.

        Raises:
            ConfigurationError: invalid setup, nothing is written
            ContentError: templates cannot satisfy the level, nothing is written
        """
        if seed is None:
            seed = random.randint(SEED_MIN, SEED_MAX)
        logger.info("Seed: %d", seed)

        try:
            self.config.validate()
            if self.templates.chunk_size != self.config.chunk_size:
                raise ConfigurationError(
                    f"Template chunk size {self.templates.chunk_size} does not match config {self.config.chunk_size}"
                )
            if world.chunk_size != self.config.chunk_size:
                raise ConfigurationError(
                    f"World chunk size {world.chunk_size} does not match config {self.config.chunk_size}"
                )
            self._check_content()
            layout, staging = self._build(seed)
        except GenerationError as exc:
            exc.seed = seed
            logger.error("Level generation failed: %s", exc)
            raise

        world.merge(staging)
        self.layout = layout
        self._publish(layout)

        logger.info(
            "Generated %dx%d level: start room %s, spawn %s, %d enemies",
            self.config.level_width, self.config.level_height,
            layout.start_room, layout.spawn_tile, len(layout.enemy_spawns),
        )
        return pygame.Rect(layout.bounds)

    def _build(self, seed: int) -> Tuple[GeneratedLevel, World]:
        cfg = self.config
        size = cfg.chunk_size
        rng = random.Random(seed)

        path, start_room = build_solution_path(cfg.level_width, cfg.level_height, rng)
        grid = RoomGrid(cfg.level_width, cfg.level_height)
        assign_path_room_types(path, grid, rng, self.room_options)

        staging = World(size)
        spawn_tile: Optional[Tuple[int, int]] = None
        enemy_spawns: List[EnemySpawn] = []
        row_mob_caps: Dict[int, int] = {}
        mob_cap = cfg.initial_mob_cap

        # Fill in the level with rooms of appropriate types, top row first.
        for room_y in range(cfg.level_height - 1, -1, -1):
            row_mob_caps[room_y] = mob_cap
            for room_x in range(cfg.level_width):
                room_type = resolve_room_type(grid, room_x, room_y, rng)
                template = rng.choice(self.templates.templates_for(room_type))

                try:
                    chunk = Chunk.from_text(room_x, room_y, template, size, self.parser)
                except GenerationError as exc:
                    exc.room = (room_x, room_y)
                    raise
                staging.set_chunk(room_x, room_y, chunk)
                logger.debug("Room %s: type=%s", (room_x, room_y), room_type.name)

                if (room_x, room_y) == start_room:
                    # The player starts here; no enemies in the start room
                    spawn_tile = find_spawn_point(chunk, cfg.spawn_origin, self.tiles)
                    logger.debug("Player spawn tile %s in room %s", spawn_tile, start_room)
                    continue

                enemy_spawns.extend(self._populate_room(chunk, mob_cap, rng))

            mob_cap += 1

        self._add_solid_perimeter(staging)

        player_spawn = pygame.math.Vector2(
            start_room[0] * size + spawn_tile[0] + 0.5,
            start_room[1] * size + spawn_tile[1] + PLAYER_SPAWN_Y_OFFSET,
        )
        layout = GeneratedLevel(
            seed=seed,
            room_types=grid.as_rows(),
            solution_path=path,
            start_room=start_room,
            spawn_tile=spawn_tile,
            player_spawn=player_spawn,
            enemy_spawns=enemy_spawns,
            row_mob_caps=row_mob_caps,
            bounds=pygame.Rect(0, 0, size * cfg.level_width, size * cfg.level_height),
        )
        return layout, staging

    def _populate_room(self, chunk: Chunk, mob_cap: int, rng: random.Random) -> List[EnemySpawn]:
        """Roll enemy spawns on the chunk's standable tiles up to mob_cap."""
        spawns: List[EnemySpawn] = []
        room_x, room_y = chunk.position
        size = chunk.size

        for tile_y in range(size):
            for tile_x in range(size):
                # Stop spawning mobs if the cap is reached
                if len(spawns) >= mob_cap:
                    return spawns
                if not is_spawnable(chunk, tile_x, tile_y, self.tiles):
                    continue
                if rng.randrange(MOB_ROLL_RANGE) >= self.config.mob_spawn_probability_percent:
                    continue

                archetype = rng.choice(self.archetypes)
                # Room corner + tile offset; the archetype offset keeps sprites out of the floor
                position = pygame.math.Vector2(
                    room_x * size + tile_x + 0.5,
                    room_y * size + tile_y + archetype.spawn_offset_y,
                )
                spawns.append(EnemySpawn(archetype.name, (room_x, room_y), (tile_x, tile_y), position))
                logger.debug("Spawned %s at %s in room %s", archetype.name, (tile_x, tile_y), (room_x, room_y))
        return spawns

    def _add_solid_perimeter(self, world: World) -> None:
        """Add a ring of solid rooms around the outside of the map."""
        cfg = self.config
        solid = self.templates.solid_template()

        sample = Chunk.from_text(-1, -1, solid, cfg.chunk_size, self.parser)
        if any(self.tiles.is_passable(tile) for row in sample.tiles for tile in row):
            raise ContentError("Solid perimeter template contains passable tiles", room=sample.position)

        def place(chunk_x: int, chunk_y: int) -> None:
            world.set_chunk(chunk_x, chunk_y, Chunk.from_text(chunk_x, chunk_y, solid, cfg.chunk_size, self.parser))

        for chunk_y in range(-1, cfg.level_height + 1):
            place(-1, chunk_y)
            place(cfg.level_width, chunk_y)

        for chunk_x in range(cfg.level_width):
            place(chunk_x, -1)
            place(chunk_x, cfg.level_height)

    def _publish(self, layout: GeneratedLevel) -> None:
        if self.player is not None:
            self.player.pos = pygame.math.Vector2(layout.player_spawn)
        self.events.emit(GameEvent.PLAYER_SPAWNED)

        for spawn in layout.enemy_spawns:
            self.events.emit(GameEvent.ENEMY_SPAWNED, spawn=spawn)
        self.events.emit(GameEvent.LEVEL_GENERATED, layout=layout)
