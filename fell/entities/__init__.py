from .enemy_archetypes import (
    MovementPolicy,
    AggroPolicy,
    EnemyArchetype,
    RAT, SLIME, SPIDER,
    DEFAULT_ARCHETYPES,
)

__all__ = [
    'MovementPolicy', 'AggroPolicy', 'EnemyArchetype',
    'RAT', 'SLIME', 'SPIDER', 'DEFAULT_ARCHETYPES',
]
