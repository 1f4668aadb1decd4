"""Unit tests for the ECS World: ordering, deferred destruction, clear."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from arena_run.ecs import World


pytestmark = pytest.mark.unit


@dataclass
class Tag:
    name: str = ""


@dataclass
class Other:
    value: int = 0


def test_ids_increase_and_components_attach():
    world = World()
    a = world.create_entity(Tag("a"))
    b = world.create_entity(Tag("b"), Other(2))
    assert b == a + 1
    assert world.get_component(b, Other).value == 2
    assert world.get_component(a, Other) is None
    assert world.has_component(a, Tag)
    assert not world.has_component(a, Other)


def test_query_yields_in_creation_order():
    world = World()
    ids = [world.create_entity(Tag(str(i)), Other(i)) for i in range(20)]
    # Interleave an entity missing one component
    world.create_entity(Tag("lonely"))
    assert [eid for eid, _, _ in world.query(Tag, Other)] == ids
    assert world.entities_with(Other) == ids


def test_destroy_is_deferred_until_sweep():
    world = World()
    a = world.create_entity(Tag("a"))
    b = world.create_entity(Tag("b"))

    world.destroy_entity(a)
    assert not world.is_alive(a)
    assert world.entities_with(Tag) == [b]
    assert world.get_component(a, Tag) is not None

    assert world.sweep() == 1
    assert world.get_component(a, Tag) is None
    assert world.entity_count() == 1


def test_destroy_while_iterating():
    world = World()
    for i in range(6):
        world.create_entity(Other(i))
    seen = []
    for eid, other in world.query(Other):
        seen.append(other.value)
        if other.value % 2 == 0:
            world.destroy_entity(eid)
    world.sweep()
    assert seen == [0, 1, 2, 3, 4, 5]
    assert [o.value for _, o in world.query(Other)] == [1, 3, 5]


def test_clear_drops_everything_but_keeps_counting():
    world = World()
    last = world.create_entity(Tag())
    world.clear()
    assert world.entity_count() == 0
    assert world.count(Tag) == 0
    assert world.create_entity(Tag()) == last + 1


def test_query_without_store_is_empty():
    world = World()
    world.create_entity(Tag())
    assert list(world.query(Tag, Other)) == []
    assert list(world.query()) == []
