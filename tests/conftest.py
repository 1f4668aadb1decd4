"""Shared fixtures: manual clock, seeded RNG, bare worlds and a recording draw sink."""

from __future__ import annotations

import random

import pytest

from arena_run.clock import ManualClock
from arena_run.ecs import World
from arena_run.player import create_player
from arena_run.simulation import Simulation
from arena_run.vector import Vector2


class RecordingSink:
    """DrawSink that remembers every call as (primitive, args...)."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def fill_circle(self, x, y, radius, color):
        self.calls.append(("fill_circle", x, y, radius, color))

    def stroke_circle(self, x, y, radius, width, color):
        self.calls.append(("stroke_circle", x, y, radius, width, color))

    def stroke_line(self, x1, y1, x2, y2, width, color):
        self.calls.append(("stroke_line", x1, y1, x2, y2, width, color))

    def stroke_rect(self, x, y, w, h, width, color):
        self.calls.append(("stroke_rect", x, y, w, h, width, color))

    def of(self, kind: str) -> list[tuple]:
        return [c for c in self.calls if c[0] == kind]


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock(start=100.0)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def world() -> World:
    return World()


@pytest.fixture
def player_world(world):
    """World with the player parked in the middle of the arena."""
    player_id = create_player(world, Vector2(2500.0, 2500.0))
    return world, player_id


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def sim(clock, rng) -> Simulation:
    return Simulation(clock=clock, rng=rng)


@pytest.fixture
def quiet_sim(clock, rng) -> Simulation:
    """Simulation whose waves are empty, with the player at the arena center."""
    s = Simulation(clock=clock, rng=rng, spawn_count=0)
    s.player_motion.position = Vector2(2500.0, 2500.0)
    return s
