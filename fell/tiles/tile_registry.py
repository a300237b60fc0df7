from typing import Dict, Optional
from config import TILE_COLORS
from .tile_types import TileType
from .tile_data import TileData, CollisionProperties, VisualProperties

# tile type -> (collision type, passable)
DEFAULT_COLLISION = {
    TileType.AIR: ("none", True),
    TileType.FLOOR: ("full", False),
    TileType.WALL: ("full", False),
    # One-way ledge, but standable for spawning purposes
    TileType.PLATFORM: ("one_way", False),
}


class TileRegistry:
    """Registry for storing and managing tile definitions."""

    def __init__(self):
        self._tiles: Dict[TileType, TileData] = {}
        self._initialize_default_tiles()

    def _initialize_default_tiles(self):
        for tile_type, (collision_type, passable) in DEFAULT_COLLISION.items():
            self.register_tile(TileData(
                tile_type=tile_type,
                name=tile_type.display_name,
                collision=CollisionProperties(
                    collision_type=collision_type,
                    passable=passable,
                ),
                visual=VisualProperties(base_color=TILE_COLORS.get(int(tile_type))),
            ))

    def register_tile(self, tile_data: TileData):
        """Register a new tile type, replacing any previous definition."""
        self._tiles[tile_data.tile_type] = tile_data

    def get_tile(self, tile_type: TileType) -> Optional[TileData]:
        """Get tile data by type."""
        return self._tiles.get(tile_type)

    def get_all_tiles(self) -> Dict[TileType, TileData]:
        """Get all registered tiles."""
        return self._tiles.copy()

    def is_passable(self, tile_type: TileType) -> bool:
        """Return the `passable` flag for a tile type.

        Unregistered tile types are a content defect and raise KeyError.
        """
        tile_data = self._tiles.get(tile_type)
        if tile_data is None:
            raise KeyError(f"Unknown tile type {tile_type!r}")
        return tile_data.passable


# Global tile registry instance
tile_registry = TileRegistry()
