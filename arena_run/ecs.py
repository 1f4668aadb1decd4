"""
Entity-Component-System Core
=============================
Integer entity IDs with one component store per component type.

Queries walk entities in creation order, so every system sees the
same sequence on every run.
"""

from typing import Dict, List, Type, TypeVar, Optional, Iterator, Tuple, Any


C = TypeVar('C')


class World:
    """
    Owns every entity of one simulation.

    Destruction is deferred: destroy_entity() marks, sweep() removes.
    Systems can therefore destroy while iterating a query.
    """

    def __init__(self):
        self._next_entity_id: int = 0
        self._entities: Dict[int, None] = {}  # ordered set
        self._components: Dict[Type, Dict[int, Any]] = {}
        self._dead_entities: Dict[int, None] = {}

    def create_entity(self, *components: Any) -> int:
        """Create a new entity, optionally with components, and return its ID."""
        entity_id = self._next_entity_id
        self._next_entity_id += 1
        self._entities[entity_id] = None
        for component in components:
            self.add_component(entity_id, component)
        return entity_id

    def destroy_entity(self, entity_id: int) -> None:
        """Mark an entity for destruction (processed by sweep())."""
        if entity_id in self._entities:
            self._dead_entities[entity_id] = None

    def sweep(self) -> int:
        """Remove all entities marked for destruction. Returns how many went."""
        removed = 0
        for entity_id in self._dead_entities:
            if entity_id in self._entities:
                del self._entities[entity_id]
                for component_store in self._components.values():
                    component_store.pop(entity_id, None)
                removed += 1
        self._dead_entities.clear()
        return removed

    def clear(self) -> None:
        """Drop every entity. IDs keep counting up."""
        self._entities.clear()
        self._components.clear()
        self._dead_entities.clear()

    def add_component(self, entity_id: int, component: Any) -> None:
        self._components.setdefault(type(component), {})[entity_id] = component

    def get_component(self, entity_id: int, component_type: Type[C]) -> Optional[C]:
        """Get a component for an entity, or None if not found."""
        store = self._components.get(component_type)
        if store is None:
            return None
        return store.get(entity_id)

    def has_component(self, entity_id: int, component_type: Type) -> bool:
        store = self._components.get(component_type)
        return store is not None and entity_id in store

    def query(self, *component_types: Type) -> Iterator[Tuple[Any, ...]]:
        """
        Query for all live entities that have ALL specified component types.

        Yields tuples of (entity_id, component1, component2, ...) in
        entity creation order.
        """
        if not component_types:
            return

        stores = []
        for component_type in component_types:
            store = self._components.get(component_type)
            if not store:
                return
            stores.append(store)

        # Smallest store drives the scan; dict order is creation order
        driver = min(stores, key=len)
        for entity_id in list(driver):
            if entity_id in self._dead_entities:
                continue
            if all(entity_id in store for store in stores):
                yield (entity_id,) + tuple(store[entity_id] for store in stores)

    def entities_with(self, *component_types: Type) -> List[int]:
        """IDs of live entities that have all specified components."""
        return [result[0] for result in self.query(*component_types)]

    def count(self, *component_types: Type) -> int:
        return sum(1 for _ in self.query(*component_types))

    def entity_count(self) -> int:
        """Return the number of live entities."""
        return len(self._entities) - len(self._dead_entities)

    def is_alive(self, entity_id: int) -> bool:
        return entity_id in self._entities and entity_id not in self._dead_entities
