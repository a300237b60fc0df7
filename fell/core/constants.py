# fell/core/constants.py
"""
Global constants for level generation, including coordinate system rules.

Coordinate System:
- Origin: Bottom-left corner of room (0, 0).
- X-axis: Increases from left to right.
- Y-axis: Increases upward. The tile below (x, y) is (x, y - 1).
- Rooms, chunks and tiles share this orientation; a "down" exit leads to
  the room at room_y - 1.
"""

# === Room Grid Sentinels ===
# Value returned when reading a room type outside the room grid.
ROOM_OUT_OF_BOUNDS = -1

# === Path Builder ===
# Number of outcomes in a path step roll: two bias left, two bias right,
# the last forces a downward move.
PATH_DIRECTION_OUTCOMES = 5
PATH_LEFT_OUTCOMES = (0, 1)
PATH_RIGHT_OUTCOMES = (2, 3)

# === Enemy Spawner ===
# Mob spawn rolls are drawn from [0, MOB_ROLL_RANGE)
MOB_ROLL_RANGE = 100

# === Debug dump characters ===
PLAYER_CHAR = 'P'
ENEMY_CHAR = 'E'
