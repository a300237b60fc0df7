from .tile_types import TileType
from .tile_data import TileData, CollisionProperties, VisualProperties
from .tile_registry import TileRegistry, tile_registry
from .tile_parser import TileParser, tile_parser

__all__ = [
    'TileType',
    'TileData', 'CollisionProperties', 'VisualProperties',
    'TileRegistry', 'tile_registry',
    'TileParser', 'tile_parser',
]
