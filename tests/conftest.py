import pytest

from fell.level.procgen_data import GenerationConfig
from fell.level.room_templates import RoomTemplateLibrary
from fell.level.room_types import RoomType

SIZE = 16

# 15 rows of air over a solid floor: every tile on row y=1 is standable
OPEN_ROOM = "\n".join(["." * SIZE] * (SIZE - 1) + ["#" * SIZE])
SOLID_ROOM = "\n".join(["#" * SIZE] * SIZE)


def make_library(templates=None, solid=SOLID_ROOM, size=SIZE):
    if templates is None:
        templates = {room_type: [OPEN_ROOM] for room_type in RoomType}
    return RoomTemplateLibrary.from_mapping(templates, solid, chunk_size=size)


@pytest.fixture
def open_library():
    return make_library()


@pytest.fixture
def default_config():
    return GenerationConfig()


class DummyPlayer:
    def __init__(self):
        self.pos = None


@pytest.fixture
def player():
    return DummyPlayer()
