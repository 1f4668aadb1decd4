"""
Enemy AI System
================
Per-enemy state machine, evaluated every tick in priority order:

    melee contact  (< 20)   hold, bite on cooldown, state untouched
    detection      (< 800)  CHASE: close in under 400, shoot beyond it
    out of range            GUARD walks home (PATROL), then reloads (IDLE)
"""

from typing import List, Optional

from .clock import MonotonicClock
from .ecs import World
from .components import (
    Motion, Health, PlayerTag, EnemyBrain, AIState, Archetype
)
from .enemies import ENEMY_AMMO
from .projectiles import spawn_projectile, PROJECTILE_SPEED
from .vector import Vector2


MELEE_RANGE = 20.0
MELEE_DAMAGE = 50
MELEE_COOLDOWN = 0.5  # seconds
DETECTION_RADIUS = 800.0
ENGAGEMENT_RADIUS = 400.0
HOME_TOLERANCE = 5.0
SHOOT_COOLDOWN = 0.2  # seconds


def find_player(world: World):
    """Return (entity_id, Motion, Health) for the player, or (None, None, None)."""
    for eid, motion, health, _ in world.query(Motion, Health, PlayerTag):
        return eid, motion, health
    return None, None, None


def shoot(world: World, motion: Motion, brain: EnemyBrain,
          target: Vector2) -> Optional[int]:
    """
    Fire one projectile from the enemy toward target.

    Does nothing with an empty magazine. Ammo and cooldown bookkeeping
    belong to the caller.
    """
    if brain.ammo == 0:
        return None
    direction = (target - motion.position).normalize()
    return spawn_projectile(world, motion.position, direction * PROJECTILE_SPEED)


def ai_system(world: World, clock=None, shoot_cooldown: float = SHOOT_COOLDOWN) -> List[dict]:
    """
    Run the state machine for every enemy against the current player.

    Returns a list of event dicts ('melee' and 'shot').
    """
    clock = clock or MonotonicClock()
    events = []

    _, player_motion, player_health = find_player(world)
    if player_motion is None:
        return events

    for entity_id, motion, brain in world.query(Motion, EnemyBrain):
        motion.clamp_to_arena()
        motion.velocity = Vector2(0.0, 0.0)

        distance = motion.position.distance_to(player_motion.position)

        if distance < MELEE_RANGE:
            # Contact holds position and short-circuits the tick; state stays
            if _melee_bite(brain, player_health, clock):
                events.append({'type': 'melee', 'enemy': entity_id, 'damage': MELEE_DAMAGE})
            continue

        if distance < DETECTION_RADIUS:
            brain.state = AIState.CHASE
            if _chase_behavior(world, motion, brain, player_motion.position,
                               distance, clock, shoot_cooldown):
                events.append({'type': 'shot', 'enemy': entity_id})
        elif brain.archetype == Archetype.GUARD:
            _patrol_behavior(motion, brain)
        # SCOUT: no out-of-range behavior, holds position

    return events


# =============================================================================
# MELEE
# =============================================================================

def _melee_bite(brain: EnemyBrain, player_health: Health, clock) -> bool:
    """Damage the player if the cooldown allows. Returns True on a bite."""
    now = clock.now()
    if now - brain.last_shot_time > MELEE_COOLDOWN:
        player_health.life -= MELEE_DAMAGE
        brain.last_shot_time = now
        return True
    return False


# =============================================================================
# CHASE
# =============================================================================

def _chase_behavior(world: World, motion: Motion, brain: EnemyBrain,
                    target: Vector2, distance: float, clock,
                    shoot_cooldown: float) -> bool:
    """Close in inside the engagement radius, otherwise hold and shoot.

    Returns True if a projectile was fired.
    """
    if distance < ENGAGEMENT_RADIUS:
        motion.velocity = (target - motion.position).normalize() * motion.speed
        motion.position = motion.position + motion.velocity
        return False

    if brain.ammo <= 0:
        return False

    now = clock.now()
    if now - brain.last_shot_time > shoot_cooldown:
        shoot(world, motion, brain, target)
        brain.ammo -= 1
        brain.last_shot_time = now
        return True
    return False


# =============================================================================
# PATROL (GUARD)
# =============================================================================

def _patrol_behavior(motion: Motion, brain: EnemyBrain) -> None:
    brain.state = AIState.PATROL

    if motion.position.distance_to(brain.origin) > HOME_TOLERANCE:
        motion.velocity = (brain.origin - motion.position).normalize() * (motion.speed / 2)
        motion.position = motion.position + motion.velocity
    else:
        motion.position = brain.origin
        brain.ammo = ENEMY_AMMO
        brain.state = AIState.IDLE
