"""Enemy archetypes the level generator can place.

Creature behaviour lives with the host game. The generator only needs a
name and the sprite pivot, but each archetype also carries its movement and
aggro policy as plain data so the host can build behaviour from tags
instead of a class per creature.
"""

from dataclasses import dataclass, field
from enum import Enum

from config import CENTER_PIVOT_Y_OFFSET, FOOT_PIVOT_Y_OFFSET


class MovementPolicy(Enum):
    WALK = "walk"      # runs along the ground toward the player
    HOP = "hop"        # jumps toward the player on a timer
    CLIMB = "climb"    # walks and scales walls


@dataclass(frozen=True)
class AggroPolicy:
    """Distances (in tiles) at which an enemy starts and stops chasing."""
    acquire_x: float
    acquire_y: float
    release_x: float
    release_y: float

    def should_acquire(self, dx: float, dy: float) -> bool:
        return abs(dx) <= self.acquire_x and abs(dy) < self.acquire_y

    def should_release(self, dx: float, dy: float) -> bool:
        return abs(dx) >= self.release_x or abs(dy) >= self.release_y


@dataclass(frozen=True)
class EnemyArchetype:
    name: str
    # Sprites anchored at their center need lifting half a tile on spawn
    use_center_pivot: bool = False
    movement: MovementPolicy = MovementPolicy.WALK
    aggro: AggroPolicy = field(default_factory=lambda: AggroPolicy(8.0, 8.0, 15.0, 15.0))

    @property
    def spawn_offset_y(self) -> float:
        """Vertical offset (in tiles) added to the standable tile on spawn."""
        return CENTER_PIVOT_Y_OFFSET if self.use_center_pivot else FOOT_PIVOT_Y_OFFSET


RAT = EnemyArchetype(
    name="Rat",
    use_center_pivot=False,
    movement=MovementPolicy.WALK,
    aggro=AggroPolicy(acquire_x=10.0, acquire_y=3.2, release_x=15.0, release_y=float("inf")),
)

SLIME = EnemyArchetype(
    name="Slime",
    use_center_pivot=True,
    movement=MovementPolicy.HOP,
    aggro=AggroPolicy(acquire_x=8.0, acquire_y=8.0, release_x=15.0, release_y=15.0),
)

SPIDER = EnemyArchetype(
    name="Spider",
    use_center_pivot=False,
    movement=MovementPolicy.CLIMB,
    aggro=AggroPolicy(acquire_x=6.0, acquire_y=6.0, release_x=12.0, release_y=12.0),
)

DEFAULT_ARCHETYPES = (RAT, SLIME, SPIDER)
