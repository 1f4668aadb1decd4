"""
Projectile System
==================
Projectile lifecycle: spawn, move in a straight line, hit the player,
expire when leaving the arena.
"""

from typing import Optional

from .ecs import World
from .components import Motion, Health, ProjectileTag, ARENA_SIZE
from .vector import Vector2


PROJECTILE_SPEED = 20.0
PROJECTILE_HIT_RADIUS = 10.0
PROJECTILE_DAMAGE = 10


def spawn_projectile(world: World, position: Vector2, velocity: Vector2) -> int:
    """Spawn a projectile entity. It knows nothing about who fired it."""
    return world.create_entity(
        Motion(position=position, velocity=velocity, speed=0.0),
        ProjectileTag(),
    )


def advance(motion: Motion) -> None:
    """Straight-line step, no clamp."""
    motion.position = motion.position + motion.velocity


def should_be_removed(motion: Motion, arena_size: float = ARENA_SIZE) -> bool:
    """True once the projectile is outside [0, arena_size] on either axis."""
    x, y = motion.position.x, motion.position.y
    return x < 0 or x > arena_size or y < 0 or y > arena_size


def collides_with(motion: Motion, target: Vector2) -> bool:
    return motion.position.distance_to(target) < PROJECTILE_HIT_RADIUS


def projectile_system(world: World, player_motion: Optional[Motion],
                      player_health: Optional[Health],
                      arena_size: float = ARENA_SIZE) -> int:
    """
    Advance every projectile once, newest first.

    A hit costs the player PROJECTILE_DAMAGE but does not consume the
    projectile, so one that lingers inside the hit radius hits again
    next tick. Only leaving the arena removes a projectile. Removal is
    swept after the pass so each live projectile is visited exactly once.

    Returns the number of hits on the player this tick.
    """
    hits = 0

    for proj_id, motion, _ in reversed(list(world.query(Motion, ProjectileTag))):
        advance(motion)

        if player_motion is not None and player_health is not None:
            if collides_with(motion, player_motion.position):
                player_health.life -= PROJECTILE_DAMAGE
                hits += 1

        if should_be_removed(motion, arena_size):
            world.destroy_entity(proj_id)

    world.sweep()
    return hits
