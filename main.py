"""
Fell level generator - command line entry point.

Usage:
    # Generate a level with the configured seed and print it
    python main.py

    # Fixed seed, only the room-type grid
    python main.py --seed 42 --rooms-only

    # Dump the generated level as JSON
    python main.py --seed 42 --json

    # Open a pygame window showing the level
    python main.py --seed 42 --view
"""

import argparse
import json
import logging
import sys
from typing import Dict, List, Optional, Tuple

import pygame

from config import (
    BG,
    FPS,
    ENEMY_COL,
    PLAYER_COL,
    PREVIEW_TILE_PX,
    PROCGEN_CONFIG_PATH,
)
from fell.core.constants import ENEMY_CHAR, PLAYER_CHAR
from fell.level.config_loader import load_procgen_config, load_procgen_runtime_config
from fell.level.errors import GenerationError
from fell.level.procgen import ProcGen
from fell.level.procgen_data import GeneratedLevel
from fell.level.world import World
from fell.tiles import tile_registry

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def tile_draw_rect(sx: int, sy: int, px: int, collision_type: str) -> pygame.Rect:
    """Screen rect for one tile; one-way ledges only fill their top quarter."""
    if collision_type == "one_way":
        return pygame.Rect(sx, sy, px, max(1, px // 4))
    return pygame.Rect(sx, sy, px, px)


class LevelPreview:
    """Minimal pygame window drawing a generated world, one rect per tile."""

    def __init__(self, world: World, layout: GeneratedLevel, area: pygame.Rect, tile_px: int = PREVIEW_TILE_PX):
        self.world = world
        self.layout = layout
        self.area = area
        self.tile_px = tile_px
        self.styles = {
            tile_type: (data.visual.base_color, data.collision.collision_type)
            for tile_type, data in tile_registry.get_all_tiles().items()
        }

        pygame.init()
        self.screen = pygame.display.set_mode((area.width * tile_px, area.height * tile_px))
        pygame.display.set_caption(f"Fell - seed {layout.seed}")
        self.clock = pygame.time.Clock()

    def to_screen(self, world_x: float, world_y: float) -> Tuple[int, int]:
        # World Y grows upward, screen Y grows downward
        top = self.area.y + self.area.height
        return (
            int((world_x - self.area.x) * self.tile_px),
            int((top - world_y) * self.tile_px),
        )

    def draw(self):
        self.screen.fill(BG)
        px = self.tile_px
        for world_y in range(self.area.y, self.area.y + self.area.height):
            for world_x in range(self.area.x, self.area.x + self.area.width):
                color, collision_type = self.styles.get(self.world.get_tile(world_x, world_y), (None, "none"))
                if color is None:
                    continue
                sx, sy = self.to_screen(world_x, world_y + 1)
                pygame.draw.rect(self.screen, color, tile_draw_rect(sx, sy, px, collision_type))

        for spawn in self.layout.enemy_spawns:
            sx, sy = self.to_screen(spawn.position.x, spawn.position.y)
            pygame.draw.rect(self.screen, ENEMY_COL, (sx - px // 2, sy - px, px, px))

        sx, sy = self.to_screen(self.layout.player_spawn.x, self.layout.player_spawn.y)
        pygame.draw.circle(self.screen, PLAYER_COL, (sx, sy - px // 2), max(2, px // 2))
        pygame.display.flip()

    def run(self):
        while True:
            self.clock.tick(FPS)
            for ev in pygame.event.get():
                if ev.type == pygame.QUIT:
                    pygame.quit()
                    return
                if ev.type == pygame.KEYDOWN and ev.key == pygame.K_ESCAPE:
                    pygame.quit()
                    return
            self.draw()


def format_room_grid(layout: GeneratedLevel) -> List[str]:
    """Room types as text, top row first, start room in brackets."""
    lines = []
    for room_y in range(len(layout.room_types) - 1, -1, -1):
        cells = []
        for room_x, room_type in enumerate(layout.room_types[room_y]):
            cell = str(room_type)
            cells.append(f"[{cell}]" if (room_x, room_y) == layout.start_room else f" {cell} ")
        lines.append(''.join(cells))
    return lines


def spawn_marks(layout: GeneratedLevel) -> Dict[Tuple[int, int], str]:
    marks = {spawn.world_tile: ENEMY_CHAR for spawn in layout.enemy_spawns}
    marks[(int(layout.player_spawn.x), int(layout.player_spawn.y))] = PLAYER_CHAR
    return marks


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate a room-grid platformer level.")
    parser.add_argument('--seed', type=int, default=None,
                        help='Generator seed (default: from config seed_mode)')
    parser.add_argument('--config', default=PROCGEN_CONFIG_PATH,
                        help='Path to the procgen JSON config')
    parser.add_argument('--width', type=int, default=None, help='Level width in rooms')
    parser.add_argument('--height', type=int, default=None, help='Level height in rooms')
    parser.add_argument('--rooms-only', action='store_true',
                        help='Print only the room-type grid')
    parser.add_argument('--json', action='store_true',
                        help='Print the generated level as JSON')
    parser.add_argument('--view', action='store_true',
                        help='Show the level in a pygame window')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config = load_procgen_config(args.config)
    if args.width is not None:
        config.level_width = args.width
    if args.height is not None:
        config.level_height = args.height

    seed = args.seed
    if seed is None:
        seed = load_procgen_runtime_config(args.config).resolve_seed()

    world = World(config.chunk_size)
    try:
        generator = ProcGen(config)
        bounds = generator.generate(world, seed)
    except GenerationError as e:
        logger.error("Generation failed: %s", e)
        return 1

    layout = generator.layout
    if args.json:
        print(json.dumps(layout.to_dict(), indent=2))
        return 0

    print(f"Seed: {layout.seed}")
    print("Room types (top row first, start room in brackets):")
    for line in format_room_grid(layout):
        print(line)

    # Include the solid perimeter in the dump and the preview
    area = bounds.inflate(2 * config.chunk_size, 2 * config.chunk_size)
    if not args.rooms_only:
        print()
        for row in world.to_ascii(area, spawn_marks(layout)):
            print(row)

    if args.view:
        LevelPreview(world, layout, area).run()
    return 0


if __name__ == '__main__':
    sys.exit(main())
