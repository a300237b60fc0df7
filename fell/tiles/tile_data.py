from dataclasses import dataclass, field
from typing import Optional, Tuple
from .tile_types import TileType


@dataclass
class CollisionProperties:
    """Collision properties for a tile."""
    collision_type: str = "none"  # "none", "full", "one_way"
    passable: bool = True


@dataclass
class VisualProperties:
    """Visual properties for a tile."""
    base_color: Optional[Tuple[int, int, int]] = None  # None = not drawn


@dataclass
class TileData:
    """Complete data for a tile type.

    Shared by reference through the registry; generation code only reads it.
    """
    tile_type: TileType
    name: str
    collision: CollisionProperties = field(default_factory=CollisionProperties)
    visual: VisualProperties = field(default_factory=VisualProperties)

    @property
    def passable(self) -> bool:
        """Check if entities can occupy this tile."""
        return self.collision.passable
