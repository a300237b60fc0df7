import pytest

from fell.level.chunk import Chunk
from fell.level.errors import ConfigurationError, TemplateFormatError
from fell.level.room_templates import RoomTemplateLibrary
from fell.level.room_types import SUPPORTED_EXITS, Direction, RoomType
from fell.level.spawn_finder import is_spawnable
from fell.tiles import tile_registry

from conftest import OPEN_ROOM, SOLID_ROOM, make_library


def exit_tiles(size, direction):
    last = size - 1
    return {
        Direction.LEFT: [(0, y) for y in range(size)],
        Direction.RIGHT: [(last, y) for y in range(size)],
        Direction.DOWN: [(x, 0) for x in range(size)],
        Direction.UP: [(x, last) for x in range(size)],
    }[direction]


@pytest.fixture(scope="module")
def packaged():
    library = RoomTemplateLibrary()
    library.validate()
    return library


@pytest.mark.parametrize("room_type", list(RoomType))
def test_packaged_templates_are_usable(packaged, room_type):
    templates = packaged.templates_for(room_type)
    assert templates

    for text in templates:
        chunk = Chunk.from_text(0, 0, text, packaged.chunk_size)
        assert any(is_spawnable(chunk, x, y) for y in range(chunk.size) for x in range(chunk.size))

        # Each promised exit has an opening on that edge
        for direction in SUPPORTED_EXITS[room_type]:
            edge = exit_tiles(chunk.size, direction)
            assert any(tile_registry.is_passable(chunk.get_tile(x, y)) for x, y in edge), direction


def test_packaged_solid_template_is_impassable(packaged):
    chunk = Chunk.from_text(0, 0, packaged.solid_template(), packaged.chunk_size)
    assert not any(tile_registry.is_passable(tile) for row in chunk.tiles for tile in row)


def test_templates_are_cached_per_library(packaged):
    assert packaged.templates_for(RoomType.ALL_FOUR) is packaged.templates_for(RoomType.ALL_FOUR)
    assert RoomTemplateLibrary().templates_for(RoomType.ALL_FOUR) == packaged.templates_for(RoomType.ALL_FOUR)


def write_template(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def test_directory_templates_load_in_name_order(tmp_path):
    second = OPEN_ROOM.replace("#", "=")
    write_template(tmp_path / "type1" / "b.txt", second)
    write_template(tmp_path / "type1" / "a.txt", OPEN_ROOM)
    write_template(tmp_path / "type1" / "notes.md", "ignored")
    write_template(tmp_path / "solid.txt", SOLID_ROOM)

    library = RoomTemplateLibrary(str(tmp_path))
    assert library.templates_for(RoomType.LEFT_RIGHT) == [OPEN_ROOM, second]
    assert library.solid_template() == SOLID_ROOM


def test_missing_or_empty_category(tmp_path):
    (tmp_path / "type0").mkdir()
    library = RoomTemplateLibrary(str(tmp_path))

    with pytest.raises(ConfigurationError):
        library.templates_for(RoomType.ARBITRARY)
    with pytest.raises(ConfigurationError):
        library.templates_for(RoomType.ALL_FOUR)
    with pytest.raises(ConfigurationError):
        library.solid_template()


def test_malformed_template_file(tmp_path):
    write_template(tmp_path / "type2" / "short.txt", "####\n####")
    with pytest.raises(TemplateFormatError):
        RoomTemplateLibrary(str(tmp_path)).templates_for(RoomType.LEFT_RIGHT_DOWN)


def test_from_mapping_validates_text():
    with pytest.raises(TemplateFormatError):
        make_library({RoomType.ARBITRARY: ["#?#"]})

    library = make_library({RoomType.ARBITRARY: []})
    with pytest.raises(ConfigurationError):
        library.templates_for(RoomType.ARBITRARY)
