"""Unit tests for timed guard waves."""

from __future__ import annotations

import random

import pytest

from arena_run.components import Motion, EnemyBrain, AIState, Archetype
from arena_run.spawner import WaveSpawner


pytestmark = pytest.mark.unit


def _enemies(world):
    return list(world.query(Motion, EnemyBrain))


def test_first_update_is_overdue(world, rng):
    spawner = WaveSpawner(rng=rng)
    ids = spawner.update(world, now=0.0)

    assert len(ids) == 10
    enemies = _enemies(world)
    assert len(enemies) == 10
    for _, motion, brain in enemies:
        assert brain.archetype == Archetype.GUARD
        assert brain.state == AIState.IDLE
        assert brain.ammo == 100
        assert motion.speed == 6.0
        assert brain.origin == motion.position
        assert 0 <= motion.position.x < 5000
        assert 0 <= motion.position.y < 5000
        assert motion.position.x == int(motion.position.x)

    positions = {(m.position.x, m.position.y) for _, m, _ in enemies}
    assert len(positions) == 10


def test_waits_for_interval(world, rng):
    spawner = WaveSpawner(rng=rng)
    spawner.update(world, now=50.0)

    assert spawner.update(world, now=55.0) == []
    assert spawner.update(world, now=60.0) == []  # strictly more than 10 s
    assert len(spawner.update(world, now=60.5)) == 10
    assert len(_enemies(world)) == 20
    assert spawner.waves_spawned == 2


def test_make_overdue(world, rng):
    spawner = WaveSpawner(rng=rng)
    spawner.update(world, now=1.0)
    spawner.make_overdue()
    assert spawner.due(1.0)


def test_custom_count_and_seed_replay():
    from arena_run.ecs import World

    a, b = World(), World()
    WaveSpawner(count=4, rng=random.Random(7)).update(a, now=0.0)
    WaveSpawner(count=4, rng=random.Random(7)).update(b, now=0.0)
    pa = [m.position for _, m, _ in _enemies(a)]
    pb = [m.position for _, m, _ in _enemies(b)]
    assert len(pa) == 4
    assert pa == pb
