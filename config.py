# === Global configuration & tuning ===

# Colors (used by ASCII/debug dumps and tile metadata)
BG = (18, 20, 27)
TILE_COL = (54, 60, 78)
FLOOR_COL = (92, 74, 58)
PLATFORM_COL = (120, 104, 80)

# === Tile System Constants ===
TILE_AIR = 0          # Empty/air - no collision
TILE_FLOOR = 1        # Floor - solid, standable
TILE_WALL = 2         # Wall - full collision from all sides
TILE_PLATFORM = 3     # Platform - standable ledge

TILE_COLORS = {
    TILE_AIR: None,               # Transparent - no rendering
    TILE_FLOOR: FLOOR_COL,
    TILE_WALL: TILE_COL,
    TILE_PLATFORM: PLATFORM_COL,
}

# === Procedural Level Generation Configuration ===
# Room grid size (in rooms)
LEVEL_WIDTH = 4
LEVEL_HEIGHT = 4

# Width and height of a chunk (one room) in tiles
CHUNK_SIZE = 16

# Enemy population
INITIAL_MOB_CAP = 2                 # Per-room cap for the first generated row
MOB_SPAWN_PROBABILITY_PERCENT = 5   # Chance (0-100) a standable tile spawns a mob

# Vertical offsets (in tiles) applied on spawn so sprites don't clip into the floor
PLAYER_SPAWN_Y_OFFSET = 0.05
CENTER_PIVOT_Y_OFFSET = 0.55
FOOT_PIVOT_Y_OFFSET = 0.05

# Default location of the generation config file
PROCGEN_CONFIG_PATH = "config/procgen_config.json"

# === Preview window (main.py --view) ===
FPS = 30
PREVIEW_TILE_PX = 6
PLAYER_COL = (120, 200, 255)
ENEMY_COL = (220, 80, 80)
