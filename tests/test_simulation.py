"""Integration tests for the Simulation tick: waves, combat, reset, debug, replay."""

from __future__ import annotations

import random

import pytest

from arena_run.clock import ManualClock
from arena_run.components import AIState, Archetype
from arena_run.enemies import create_guard
from arena_run.player import InputSnapshot
from arena_run.projectiles import spawn_projectile
from arena_run.simulation import Simulation
from arena_run.vector import Vector2


pytestmark = pytest.mark.unit

CHORD = InputSnapshot(modifier=True, toggle=True)


class TestWaves:
    def test_first_tick_spawns_ten_idle_guards(self, sim):
        assert sim.enemy_count == 0
        sim.tick()
        assert sim.enemy_count == 10
        for _, motion, brain in sim.enemies:
            assert brain.archetype == Archetype.GUARD
            assert brain.state == AIState.IDLE
            assert brain.ammo == 100
            assert 0 <= motion.position.x < 5000
            assert 0 <= motion.position.y < 5000

    def test_next_wave_after_interval(self, sim, clock):
        sim.tick()
        clock.advance(5.0)
        sim.tick()
        assert sim.enemy_count == 10
        clock.advance(5.5)
        sim.tick()
        assert sim.enemy_count == 20


class TestCombat:
    def test_ranged_enemy_fires_and_projectile_advances(self, quiet_sim):
        eid = create_guard(quiet_sim.world, Vector2(3100.0, 2500.0))
        quiet_sim.tick()

        (_, proj, _), = quiet_sim.projectiles
        # Fired this tick at the enemy, then advanced once toward the player
        assert proj.position == Vector2(3080.0, 2500.0)
        brain = dict((e, b) for e, _, b in quiet_sim.enemies)[eid]
        assert brain.ammo == 99
        assert brain.state == AIState.CHASE

    def test_melee_then_reset(self, quiet_sim, clock):
        create_guard(quiet_sim.world, Vector2(2510.0, 2500.0))
        old_player = quiet_sim.player_id

        quiet_sim.tick()
        assert quiet_sim.player_health.life == 50
        quiet_sim.tick()
        assert quiet_sim.player_health.life == 50

        clock.advance(0.6)
        quiet_sim.tick()
        assert quiet_sim.player_health.life == 0
        assert quiet_sim.deaths == 0

        # Death is noticed at the start of the next tick
        quiet_sim.tick()
        assert quiet_sim.deaths == 1
        assert quiet_sim.player_id != old_player
        assert quiet_sim.player_health.life == 100
        assert quiet_sim.enemy_count == 0


class TestReset:
    def test_death_clears_everything(self, sim, clock):
        sim.tick()
        old_enemies = {eid for eid, _, _ in sim.enemies}
        spawn_projectile(sim.world, Vector2(10.0, 10.0), Vector2(0.0, 0.0))
        sim.debug = True
        sim.shoot_cooldown = 9.0
        clock.advance(1.0)

        sim.player_health.life = -5
        sim.tick()

        assert sim.deaths == 1
        assert sim.player_health.life == 100
        assert sim.debug is False
        assert sim.shoot_cooldown == 0.2
        assert sim.projectile_count == 0
        # Spawn timer was reset to overdue: a fresh wave of 10, none of the old ones
        new_enemies = {eid for eid, _, _ in sim.enemies}
        assert len(new_enemies) == 10
        assert not (new_enemies & old_enemies)
        for _, _, brain in sim.enemies:
            assert brain.state == AIState.IDLE

    def test_camera_restarts_from_origin(self, sim):
        for _ in range(50):
            sim.tick()
        sim.player_health.life = 0
        sim.tick()
        goal = sim.camera.target_offset(sim.player_motion.position)
        assert sim.camera.position.x == pytest.approx(goal.x * 0.05)
        assert sim.camera.position.y == pytest.approx(goal.y * 0.05)


class TestDebugToggle:
    def test_chord_flips_once_per_press(self, sim):
        sim.tick(CHORD)
        assert sim.debug is True
        sim.tick(CHORD)
        sim.tick(CHORD)
        assert sim.debug is True
        sim.tick(InputSnapshot())
        sim.tick(CHORD)
        assert sim.debug is False

    def test_toggle_without_modifier_does_nothing(self, sim):
        sim.tick(InputSnapshot(toggle=True))
        assert sim.debug is False


class TestTick:
    def test_player_moves_from_input(self, quiet_sim):
        quiet_sim.tick(InputSnapshot(right=True))
        assert quiet_sim.player_motion.position == Vector2(2508.0, 2500.0)

    def test_camera_follows_player(self, quiet_sim):
        quiet_sim.tick()
        goal = quiet_sim.camera.target_offset(Vector2(2500.0, 2500.0))
        assert quiet_sim.camera.position.x == pytest.approx(goal.x * 0.05)

    def test_draw_ends_with_arena_border(self, sim, sink):
        sim.tick()
        sim.draw(sink)
        assert len(sink.of("fill_circle")) == 11
        assert sink.calls[-1][0] == "stroke_rect"

    def test_ticks_counted(self, sim):
        for _ in range(3):
            sim.tick()
        assert sim.ticks == 3


def _run(seed: int, ticks: int):
    clock = ManualClock()
    sim = Simulation(clock=clock, rng=random.Random(seed))
    inputs = [InputSnapshot(up=True), InputSnapshot(right=True, down=True), InputSnapshot()]
    for i in range(ticks):
        sim.tick(inputs[i % len(inputs)])
        clock.advance(1 / 60)
    return (
        sim.player_motion.position,
        sim.player_health.life,
        [(m.position, b.state, b.ammo) for _, m, b in sim.enemies],
        [m.position for _, m, _ in sim.projectiles],
    )


def test_seeded_runs_replay_identically():
    assert _run(42, 240) == _run(42, 240)


def test_instances_are_independent(clock):
    a = Simulation(clock=clock, rng=random.Random(1))
    b = Simulation(clock=clock, rng=random.Random(1))
    a.tick()
    assert a.enemy_count == 10
    assert b.enemy_count == 0
    a.debug = True
    assert b.debug is False
