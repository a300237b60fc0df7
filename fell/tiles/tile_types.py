from enum import IntEnum

from config import TILE_AIR, TILE_FLOOR, TILE_WALL, TILE_PLATFORM


class TileType(IntEnum):
    """Tile kinds a room template can contain."""

    AIR = TILE_AIR
    FLOOR = TILE_FLOOR
    WALL = TILE_WALL
    PLATFORM = TILE_PLATFORM

    @property
    def display_name(self) -> str:
        """Return human-readable name."""
        return self.name.capitalize()
