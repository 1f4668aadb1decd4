"""
Wave Spawner
=============
Timer-driven enemy waves: every spawn_interval seconds a batch of
GUARDs appears at uniformly random points of the arena.
"""

import random
from typing import List, Optional

from loguru import logger

from .clock import NEVER
from .ecs import World
from .components import ARENA_SIZE
from .enemies import create_guard
from .vector import Vector2


SPAWN_INTERVAL = 10.0  # seconds
SPAWN_COUNT = 10


class WaveSpawner:
    """Spawns a wave whenever more than `interval` seconds passed since the last one."""

    def __init__(self, interval: float = SPAWN_INTERVAL, count: int = SPAWN_COUNT,
                 rng: Optional[random.Random] = None, arena_size: float = ARENA_SIZE):
        self.interval = interval
        self.count = count
        self.rng = rng or random.Random()
        self.arena_size = arena_size
        self.last_spawn_time = NEVER
        self.waves_spawned = 0

    def make_overdue(self) -> None:
        """Force a wave on the next update."""
        self.last_spawn_time = NEVER

    def due(self, now: float) -> bool:
        return now - self.last_spawn_time > self.interval

    def random_position(self) -> Vector2:
        # Integer grid positions in [0, arena_size)
        limit = int(self.arena_size)
        return Vector2(float(self.rng.randrange(limit)), float(self.rng.randrange(limit)))

    def update(self, world: World, now: float) -> List[int]:
        """Spawn a wave if one is due. Returns the new enemy IDs."""
        if not self.due(now):
            return []

        spawned = [create_guard(world, self.random_position()) for _ in range(self.count)]
        self.last_spawn_time = now
        self.waves_spawned += 1
        logger.info(f"Wave {self.waves_spawned}: spawned {len(spawned)} guards")
        return spawned
