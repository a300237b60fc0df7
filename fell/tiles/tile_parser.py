from typing import List, Dict, Optional
from .tile_types import TileType


class TileParser:
    """Parses ASCII room templates to tile grids.

    Template text lists the highest row first. Parsed grids are indexed
    ``grid[y][x]`` with ``y = 0`` as the bottom row, so ``y - 1`` is always
    the tile underneath.
    """

    def __init__(self):
        # Default ASCII to tile type mapping
        self.ascii_map: Dict[str, TileType] = {
            '.': TileType.AIR,
            ' ': TileType.AIR,
            '=': TileType.FLOOR,
            '#': TileType.WALL,
            '_': TileType.PLATFORM,
        }

    @staticmethod
    def split_rows(text: str) -> List[str]:
        """Split template text into rows, dropping line endings and empty edge lines."""
        rows = text.splitlines()
        while rows and not rows[-1]:
            rows.pop()
        while rows and not rows[0]:
            rows.pop(0)
        return rows

    def parse_rows(self, rows: List[str]) -> List[List[TileType]]:
        """
        Parse template rows (top row first) to a bottom-up tile grid.

        Unknown characters are treated as air; use validate_rows to report them.
        """
        if not rows:
            return []

        width = max(len(row) for row in rows)
        grid: List[List[TileType]] = []
        for row in reversed(rows):
            line = [TileType.AIR] * width
            for x, char in enumerate(row):
                line[x] = self.ascii_map.get(char, TileType.AIR)
            grid.append(line)
        return grid

    def parse_text(self, text: str) -> List[List[TileType]]:
        return self.parse_rows(self.split_rows(text))

    def validate_rows(self, rows: List[str], size: Optional[int] = None) -> List[str]:
        """
        Validate template rows and return list of issues found.
        """
        issues = []

        if not rows:
            issues.append("Template is empty")
            return issues

        if size is not None and len(rows) != size:
            issues.append(f"Expected {size} rows, found {len(rows)}")

        line_lengths = [len(row) for row in rows]
        if len(set(line_lengths)) > 1:
            issues.append(f"Inconsistent line lengths: {line_lengths}")
        elif size is not None and line_lengths[0] != size:
            issues.append(f"Expected {size} columns, found {line_lengths[0]}")

        for y, row in enumerate(rows):
            for x, char in enumerate(row):
                if char not in self.ascii_map:
                    issues.append(f"Unknown character '{char}' at position ({x}, {y})")

        return issues

    def get_ascii_representation(self, grid: List[List[TileType]]) -> List[str]:
        """
        Convert a bottom-up tile grid back to template rows (top row first).
        Useful for debugging or dumping generated levels.
        """
        if not grid:
            return []

        # First character registered for a tile wins ('.' for air, not ' ')
        tile_to_ascii: Dict[TileType, str] = {}
        for char, tile_type in self.ascii_map.items():
            tile_to_ascii.setdefault(tile_type, char)

        return [''.join(tile_to_ascii.get(tile, '?') for tile in row) for row in reversed(grid)]


# Shared parser used by chunk construction
tile_parser = TileParser()
