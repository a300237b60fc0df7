import json
import logging

import pygame
import pytest

from fell.core.events import EventBus, GameEvent
from fell.entities import RAT, SLIME
from fell.level.errors import ConfigurationError, ContentError, SpawnPointNotFoundError
from fell.level.procgen import ProcGen
from fell.level.procgen_data import GenerationConfig
from fell.level.room_types import SUPPORTED_EXITS, RoomType
from fell.level.spawn_finder import is_spawnable
from fell.level.world import World
from fell.tiles import tile_registry

from conftest import OPEN_ROOM, SOLID_ROOM, make_library


def world_tiles(world):
    return {chunk.position: [list(row) for row in chunk.tiles] for chunk in world}


def test_same_seed_same_level(open_library):
    first_world, second_world = World(16), World(16)
    first = ProcGen(templates=open_library)
    second = ProcGen(templates=make_library())

    first.generate(first_world, seed=42)
    second.generate(second_world, seed=42)

    assert first.layout.to_dict() == second.layout.to_dict()
    assert world_tiles(first_world) == world_tiles(second_world)


def test_generate_with_packaged_templates():
    world = World(16)
    generator = ProcGen()
    bounds = generator.generate(world, seed=1234)

    assert bounds == pygame.Rect(0, 0, 64, 64)
    layout = generator.layout
    room_x, room_y = layout.start_room
    assert room_y == 3
    assert is_spawnable(world.get_chunk(room_x, room_y), *layout.spawn_tile)


def test_returned_bounds_is_a_copy(open_library):
    generator = ProcGen(templates=open_library)
    bounds = generator.generate(World(16), seed=5)
    bounds.x = 99
    assert generator.layout.bounds.x == 0


def test_every_room_and_perimeter_chunk_is_written(open_library):
    world = World(16)
    ProcGen(templates=open_library).generate(world, seed=8)

    rooms = {(x, y) for x in range(4) for y in range(4)}
    ring = {(x, y) for x in range(-1, 5) for y in range(-1, 5)} - rooms
    assert set(world.chunk_coords()) == rooms | ring

    for coord in ring:
        chunk = world.get_chunk(*coord)
        assert not any(tile_registry.is_passable(tile) for row in chunk.tiles for tile in row)


@pytest.mark.parametrize("seed", range(30))
def test_path_rooms_support_required_exits(seed):
    generator = ProcGen()
    generator.generate(World(16), seed=seed)
    layout = generator.layout

    for entry in layout.solution_path:
        if entry.y < 0:
            continue
        room_type = RoomType(layout.room_types[entry.y][entry.x])
        assert set(entry.required_exits()) <= SUPPORTED_EXITS[room_type]

    # Every room ends up with a type
    assert all(cell in list(RoomType) for row in layout.room_types for cell in row)


def test_mob_cap_grows_per_row():
    config = GenerationConfig(mob_spawn_probability_percent=100)
    generator = ProcGen(config, templates=make_library())
    generator.generate(World(16), seed=21)
    layout = generator.layout

    assert layout.row_mob_caps == {3: 2, 2: 3, 1: 4, 0: 5}
    assert layout.enemies_in_room(*layout.start_room) == []

    for room_y, cap in layout.row_mob_caps.items():
        for room_x in range(4):
            if (room_x, room_y) == layout.start_room:
                continue
            assert len(layout.enemies_in_room(room_x, room_y)) == cap

    assert len(layout.enemy_spawns) == 3 * 2 + 4 * 3 + 4 * 4 + 4 * 5


def test_enemy_positions_use_archetype_pivot():
    config = GenerationConfig(mob_spawn_probability_percent=100)
    generator = ProcGen(config, templates=make_library(), archetypes=[RAT, SLIME])
    generator.generate(World(16), seed=3)

    for spawn in generator.layout.enemy_spawns:
        room_x, room_y = spawn.room
        tile_x, tile_y = spawn.tile
        offset = 0.55 if spawn.archetype == "Slime" else 0.05
        assert spawn.position.x == pytest.approx(room_x * 16 + tile_x + 0.5)
        assert spawn.position.y == pytest.approx(room_y * 16 + tile_y + offset)
        assert tile_y == 1


def test_zero_probability_spawns_nothing(open_library):
    config = GenerationConfig(mob_spawn_probability_percent=0)
    generator = ProcGen(config, templates=open_library)
    generator.generate(World(16), seed=11)
    assert generator.layout.enemy_spawns == []


def test_player_spawn_and_events(open_library, player):
    events = EventBus()
    received = []
    events.on(GameEvent.PLAYER_SPAWNED, lambda **kw: received.append(("player", kw)))
    events.on(GameEvent.ENEMY_SPAWNED, lambda spawn: received.append(("enemy", spawn)))
    events.on(GameEvent.LEVEL_GENERATED, lambda layout: received.append(("level", layout)))

    config = GenerationConfig(mob_spawn_probability_percent=50)
    generator = ProcGen(config, templates=open_library, events=events, player=player)
    generator.generate(World(16), seed=77)
    layout = generator.layout

    room_x, room_y = layout.start_room
    tile_x, tile_y = layout.spawn_tile
    assert player.pos == pygame.math.Vector2(room_x * 16 + tile_x + 0.5, room_y * 16 + tile_y + 0.05)

    assert received[0] == ("player", {})
    assert [item for kind, item in received if kind == "enemy"] == layout.enemy_spawns
    assert received[-1] == ("level", layout)


def test_spawn_failure_leaves_world_untouched(player):
    templates = {room_type: [SOLID_ROOM] for room_type in RoomType}
    events = EventBus()
    fired = []
    events.on(GameEvent.PLAYER_SPAWNED, lambda: fired.append(True))

    world = World(16)
    generator = ProcGen(templates=make_library(templates), events=events, player=player)
    with pytest.raises(SpawnPointNotFoundError) as excinfo:
        generator.generate(world, seed=5)

    assert excinfo.value.seed == 5
    assert excinfo.value.room is not None
    assert "seed=5" in str(excinfo.value)
    assert len(world) == 0
    assert player.pos is None
    assert fired == []
    assert generator.layout is None


def test_missing_category_is_configuration_error():
    library = make_library({RoomType.LEFT_RIGHT: [OPEN_ROOM]})
    world = World(16)
    with pytest.raises(ConfigurationError):
        ProcGen(templates=library).generate(world, seed=1)
    assert len(world) == 0


def test_passable_perimeter_template_is_rejected():
    world = World(16)
    with pytest.raises(ContentError):
        ProcGen(templates=make_library(solid=OPEN_ROOM)).generate(world, seed=1)
    assert len(world) == 0


def test_invalid_config_rejected(open_library):
    with pytest.raises(ConfigurationError):
        ProcGen(GenerationConfig(level_width=0), templates=open_library)
    with pytest.raises(ConfigurationError):
        ProcGen(GenerationConfig(mob_spawn_probability_percent=101), templates=open_library)
    with pytest.raises(ConfigurationError):
        ProcGen(GenerationConfig(chunk_size=8), templates=open_library)
    with pytest.raises(ConfigurationError):
        ProcGen(templates=open_library, archetypes=[]).generate(World(16), seed=1)


def test_world_chunk_size_must_match(open_library):
    with pytest.raises(ConfigurationError):
        ProcGen(templates=open_library).generate(World(8), seed=1)


def test_one_room_level(open_library, player):
    config = GenerationConfig(level_width=1, level_height=1)
    world = World(16)
    bounds = ProcGen(config, templates=open_library, player=player).generate(world, seed=2)

    assert bounds == pygame.Rect(0, 0, 16, 16)
    assert len(world) == 9
    assert player.pos is not None


def test_seed_is_logged(open_library, caplog):
    with caplog.at_level(logging.INFO, logger="fell.level.procgen"):
        ProcGen(templates=open_library).generate(World(16), seed=42)
    assert "Seed: 42" in caplog.text


def test_random_seed_is_drawn_and_recorded(open_library, caplog):
    generator = ProcGen(templates=open_library)
    with caplog.at_level(logging.INFO, logger="fell.level.procgen"):
        generator.generate(World(16))

    seed = generator.layout.seed
    assert -(2 ** 31) <= seed <= 2 ** 31 - 1
    assert f"Seed: {seed}" in caplog.text


def test_layout_serializes_to_json(open_library):
    generator = ProcGen(templates=open_library)
    generator.generate(World(16), seed=9)
    data = json.loads(json.dumps(generator.layout.to_dict()))

    assert data["seed"] == 9
    assert data["bounds"] == [0, 0, 64, 64]
    assert data["solution_path"][-1]["exits"] == ["up"]


@pytest.mark.parametrize("overrides", [
    {"level_width": "4"},
    {"chunk_size": 16.0},
    {"initial_mob_cap": True},
    {"spawn_search_origin": (1,)},
    {"spawn_search_origin": 8},
    {"spawn_search_origin": (8, "8")},
])
def test_mistyped_config_is_configuration_error(open_library, overrides):
    with pytest.raises(ConfigurationError):
        ProcGen(GenerationConfig(**overrides), templates=open_library)


def test_config_changed_after_construction_is_rechecked(open_library, player):
    generator = ProcGen(templates=open_library, player=player)
    generator.config.level_width = 0

    world = World(16)
    with pytest.raises(ConfigurationError) as excinfo:
        generator.generate(world, seed=4)
    assert excinfo.value.seed == 4
    assert len(world) == 0
    assert player.pos is None

    generator.config.level_width = 4
    generator.config.chunk_size = 8
    with pytest.raises(ConfigurationError):
        generator.generate(World(8), seed=4)
