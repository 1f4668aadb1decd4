"""
Enemy Archetypes
=================
Enemy entity creation. Behavior lives in systems.ai_system.

GUARD: holds an origin, chases anything inside its detection radius,
walks home and reloads once the player is gone.
SCOUT: reserved. Same components, no out-of-range behavior, never spawned.
"""

from .ecs import World
from .components import Motion, EnemyBrain, Archetype, AIState
from .vector import Vector2


ENEMY_SPEED = 6.0
ENEMY_AMMO = 100


def create_enemy(world: World, position: Vector2,
                 archetype: Archetype = Archetype.GUARD) -> int:
    """
    Create an enemy at position.

    The spawn position becomes the patrol origin. Enemies start IDLE
    with a full magazine and no shot on record.
    """
    return world.create_entity(
        Motion(position=position, velocity=Vector2(0.0, 0.0), speed=ENEMY_SPEED),
        EnemyBrain(
            origin=position,
            archetype=archetype,
            state=AIState.IDLE,
            ammo=ENEMY_AMMO,
        ),
    )


def create_guard(world: World, position: Vector2) -> int:
    return create_enemy(world, position, Archetype.GUARD)


def create_scout(world: World, position: Vector2) -> int:
    return create_enemy(world, position, Archetype.SCOUT)
