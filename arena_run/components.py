"""
Component Definitions
======================
Plain dataclasses. Motion is the only one with behavior of its own:
the arena clamp every moving actor runs before it thinks.
"""

from dataclasses import dataclass, field
from enum import Enum, auto

from .clock import NEVER
from .vector import Vector2


ARENA_SIZE = 5000.0
WALL_MARGIN = 10.0


# =============================================================================
# PHYSICS COMPONENTS
# =============================================================================

@dataclass
class Motion:
    """Position, velocity and base speed (units per tick)."""
    position: Vector2 = field(default_factory=Vector2)
    velocity: Vector2 = field(default_factory=Vector2)
    speed: float = 0.0

    def clamp_to_arena(self, arena_size: float = ARENA_SIZE,
                       margin: float = WALL_MARGIN) -> bool:
        """
        Pull the position back inside [margin, arena_size - margin].

        Any axis that hit a wall loses its velocity, so actors stop
        against walls instead of bouncing. Returns True if clamped.
        """
        x, y = self.position.x, self.position.y
        vx, vy = self.velocity.x, self.velocity.y
        hit = False

        if x - margin < 0:
            x, vx, hit = margin, 0.0, True
        if x + margin > arena_size:
            x, vx, hit = arena_size - margin, 0.0, True
        if y - margin < 0:
            y, vy, hit = margin, 0.0, True
        if y + margin > arena_size:
            y, vy, hit = arena_size - margin, 0.0, True

        if hit:
            self.position = Vector2(x, y)
            self.velocity = Vector2(vx, vy)
        return hit


# =============================================================================
# COMBAT COMPONENTS
# =============================================================================

@dataclass
class Health:
    """Player life. Not clamped: damage can push it below zero."""
    life: int = 100
    maximum: int = 100

    @property
    def dead(self) -> bool:
        return self.life <= 0


# =============================================================================
# AI COMPONENTS
# =============================================================================

class AIState(Enum):
    """Enemy state machine states."""
    IDLE = auto()
    PATROL = auto()
    CHASE = auto()


class Archetype(Enum):
    GUARD = auto()
    SCOUT = auto()  # reserved: never spawned, no out-of-range behavior


@dataclass
class EnemyBrain:
    """Per-enemy behavior state."""
    origin: Vector2 = field(default_factory=Vector2)
    archetype: Archetype = Archetype.GUARD
    state: AIState = AIState.IDLE
    ammo: int = 100
    last_shot_time: float = NEVER  # shared by melee and ranged cooldowns


# =============================================================================
# TAG COMPONENTS (empty, used for queries)
# =============================================================================

@dataclass
class PlayerTag:
    """Marks the player entity."""
    pass


@dataclass
class ProjectileTag:
    """Marks a projectile entity. Projectiles skip the arena clamp."""
    pass
