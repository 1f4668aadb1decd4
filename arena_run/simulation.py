"""
Simulation
===========
Owns one arena: the world, camera, spawner, clock and RNG.

Nothing here is global. Build as many Simulations as you like; give
them a ManualClock and a seeded Random and they replay identically.
"""

import random
from typing import List, Optional, Tuple

from loguru import logger

from .camera import Camera, VIEWPORT_WIDTH, VIEWPORT_HEIGHT
from .clock import MonotonicClock
from .ecs import World
from .components import Motion, Health, EnemyBrain, ProjectileTag, ARENA_SIZE
from .player import InputSnapshot, DebugToggle, create_player, player_input_system
from .projectiles import projectile_system
from .render import DrawSink, render_system
from .spawner import WaveSpawner, SPAWN_INTERVAL, SPAWN_COUNT
from .systems import ai_system, find_player, SHOOT_COOLDOWN
from .vector import Vector2


class Simulation:
    """One tick() then one draw() per frame."""

    def __init__(self, clock=None, rng: Optional[random.Random] = None,
                 shoot_cooldown: float = SHOOT_COOLDOWN,
                 spawn_interval: float = SPAWN_INTERVAL,
                 spawn_count: int = SPAWN_COUNT):
        self.clock = clock or MonotonicClock()
        self.rng = rng or random.Random()
        self.world = World()
        self.camera = Camera()
        self.spawner = WaveSpawner(spawn_interval, spawn_count, self.rng, ARENA_SIZE)
        self.debug_toggle = DebugToggle()
        self.debug = False
        self.default_shoot_cooldown = shoot_cooldown
        self.shoot_cooldown = shoot_cooldown
        self.player_id: Optional[int] = None
        self.ticks = 0
        self.deaths = 0
        self.init()

    # ----------------------------
    # Lifecycle
    # ----------------------------

    def init(self) -> None:
        """Place a fresh player at a random point and recenter the camera."""
        if self.player_id is not None:
            self.world.destroy_entity(self.player_id)
            self.world.sweep()

        limit = int(ARENA_SIZE)
        position = Vector2(float(self.rng.randrange(limit)), float(self.rng.randrange(limit)))

        self.debug = False
        self.player_id = create_player(self.world, position)
        self.camera = Camera()
        self.shoot_cooldown = self.default_shoot_cooldown
        logger.info(f"Simulation initialized, player at ({position.x:.0f}, {position.y:.0f})")

    def reset(self) -> None:
        """Full restart after player death: empty arena, wave overdue, new player."""
        self.world.clear()
        self.player_id = None
        self.spawner.make_overdue()
        self.debug = False
        self.init()

    # ----------------------------
    # Tick
    # ----------------------------

    def tick(self, snapshot: InputSnapshot = None) -> None:
        """Advance the simulation by one step."""
        snapshot = snapshot or InputSnapshot()

        player_input_system(self.world, snapshot)

        if self.debug_toggle.update(snapshot):
            self.debug = not self.debug
            logger.debug(f"Debug overlay {'on' if self.debug else 'off'}")

        health = self.player_health
        if health is not None and health.dead:
            self.deaths += 1
            logger.warning(
                f"Player died (life {health.life}) after {self.ticks} ticks, "
                f"{self.enemy_count} enemies alive; resetting"
            )
            self.reset()

        ai_system(self.world, self.clock, self.shoot_cooldown)

        motion = self.player_motion
        if motion is not None:
            self.camera.follow(motion.position, VIEWPORT_WIDTH, VIEWPORT_HEIGHT)

        projectile_system(self.world, self.player_motion, self.player_health, ARENA_SIZE)

        self.spawner.update(self.world, self.clock.now())
        self.ticks += 1

    def draw(self, sink: DrawSink) -> None:
        render_system(self.world, self.camera, sink, self.debug, ARENA_SIZE)

    # ----------------------------
    # Queries
    # ----------------------------

    @property
    def player_motion(self) -> Optional[Motion]:
        return find_player(self.world)[1]

    @property
    def player_health(self) -> Optional[Health]:
        return find_player(self.world)[2]

    @property
    def enemies(self) -> List[Tuple[int, Motion, EnemyBrain]]:
        return list(self.world.query(Motion, EnemyBrain))

    @property
    def projectiles(self) -> List[Tuple[int, Motion, ProjectileTag]]:
        return list(self.world.query(Motion, ProjectileTag))

    @property
    def enemy_count(self) -> int:
        return self.world.count(Motion, EnemyBrain)

    @property
    def projectile_count(self) -> int:
        return self.world.count(Motion, ProjectileTag)
