"""
Draw Pass
==========
Enumerates the simulation into draw calls on a DrawSink, in screen space.

Order: enemies, player (with debug sight lines), projectiles, arena border.
"""

from typing import Protocol, Tuple

from .camera import Camera
from .ecs import World
from .components import (
    Motion, Health, PlayerTag, EnemyBrain, ProjectileTag, AIState, ARENA_SIZE
)
from .systems import DETECTION_RADIUS, ENGAGEMENT_RADIUS


Color = Tuple[int, int, int, int]

WHITE: Color = (255, 255, 255, 255)
GRAY: Color = (100, 100, 100, 255)
RED: Color = (255, 0, 0, 255)

STATE_COLORS = {
    AIState.IDLE: (100, 100, 100, 255),
    AIState.PATROL: (0, 250, 0, 255),
    AIState.CHASE: (250, 0, 0, 255),
}
ENGAGEMENT_RING_COLOR: Color = (50, 50, 50, 255)
DETECTION_RING_COLOR: Color = (100, 50, 50, 255)

ACTOR_RADIUS = 10.0
PROJECTILE_RADIUS = 2.0
STROKE_WIDTH = 1.0


class DrawSink(Protocol):
    """Anything that can draw these four primitives in screen coordinates."""

    def fill_circle(self, x: float, y: float, radius: float, color: Color) -> None: ...

    def stroke_circle(self, x: float, y: float, radius: float, width: float,
                      color: Color) -> None: ...

    def stroke_line(self, x1: float, y1: float, x2: float, y2: float, width: float,
                    color: Color) -> None: ...

    def stroke_rect(self, x: float, y: float, w: float, h: float, width: float,
                    color: Color) -> None: ...


def player_color(life: int, maximum: int = 100) -> Color:
    """Cyan that darkens with damage: (0, c, c, c) with c = 255 * life / max."""
    c = int(255 * (life / maximum))
    c = max(0, min(255, c))
    return (0, c, c, c)


def render_system(world: World, camera: Camera, sink: DrawSink,
                  debug: bool = False, arena_size: float = ARENA_SIZE) -> None:
    """Draw every entity of the world through the sink."""
    off = camera.position

    enemies = list(world.query(Motion, EnemyBrain))

    for _, motion, brain in enemies:
        x, y = motion.position.x + off.x, motion.position.y + off.y
        sink.fill_circle(x, y, ACTOR_RADIUS, STATE_COLORS[brain.state])
        if debug:
            sink.stroke_circle(x, y, ENGAGEMENT_RADIUS, STROKE_WIDTH, ENGAGEMENT_RING_COLOR)
            sink.stroke_circle(x, y, DETECTION_RADIUS, STROKE_WIDTH, DETECTION_RING_COLOR)

    for _, motion, health, _ in world.query(Motion, Health, PlayerTag):
        px, py = motion.position.x + off.x, motion.position.y + off.y
        if debug:
            # Sight line to every enemy, red for those chasing
            for _, enemy_motion, brain in enemies:
                color = RED if brain.state == AIState.CHASE else GRAY
                sink.stroke_line(
                    px, py,
                    enemy_motion.position.x + off.x, enemy_motion.position.y + off.y,
                    STROKE_WIDTH, color,
                )
        sink.fill_circle(px, py, ACTOR_RADIUS, player_color(health.life, health.maximum))

    for _, motion, _ in world.query(Motion, ProjectileTag):
        sink.fill_circle(motion.position.x + off.x, motion.position.y + off.y,
                         PROJECTILE_RADIUS, WHITE)

    sink.stroke_rect(off.x, off.y, arena_size, arena_size, STROKE_WIDTH, WHITE)
