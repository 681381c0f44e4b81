"""Scene registry owning every entity of the simulation."""

import itertools
from contextlib import contextmanager
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from .entity import Entity, EntityKind


class Scene:
    """
    Ordered collection of entities.

    Iteration order is insertion order. While a tick is in progress
    (inside `frozen()`), additions and removals are queued and applied
    when the tick ends so the scan never sees the list change under it.
    """

    def __init__(self):
        self._entities: List[Entity] = []
        self._by_handle: Dict[int, Entity] = {}
        self._handles = itertools.count(1)
        self._pending: List[Callable[[], None]] = []
        self._frozen = False

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[Entity]:
        return iter(self.iterate())

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def add(self, entity: Entity) -> int:
        """
        Register an entity and return its handle.

        The handle is assigned immediately; when the scene is frozen the
        entity only becomes visible to iteration at the tick boundary.
        """
        if entity.handle is not None:
            raise ValueError(f"Entity already registered with handle {entity.handle}")
        entity.handle = next(self._handles)

        if self._frozen:
            self._pending.append(lambda: self._insert(entity))
        else:
            self._insert(entity)
        return entity.handle

    def _insert(self, entity: Entity):
        self._entities.append(entity)
        self._by_handle[entity.handle] = entity

    def remove_all(self, predicate: Callable[[Entity], bool]) -> int:
        """
        Remove every entity matching `predicate`.

        Returns the number removed, or 0 when the removal is deferred.
        """
        if self._frozen:
            self._pending.append(lambda: self._remove(predicate))
            return 0
        return self._remove(predicate)

    def _remove(self, predicate: Callable[[Entity], bool]) -> int:
        kept = []
        removed = 0
        for entity in self._entities:
            if predicate(entity):
                del self._by_handle[entity.handle]
                removed += 1
            else:
                kept.append(entity)
        self._entities = kept
        return removed

    def get(self, handle: int) -> Entity:
        return self._by_handle[handle]

    def find_nearest(self, point, radius: float) -> Optional[int]:
        """Handle of the entity closest to `point` strictly within `radius`."""
        best = None
        best_dist = radius
        for entity in self._entities:
            dist = entity.distance_to(point)
            if dist < best_dist:
                best = entity
                best_dist = dist
        return best.handle if best is not None else None

    def iterate(self) -> Tuple[Entity, ...]:
        """Entities in insertion order, stable for the duration of a tick."""
        return tuple(self._entities)

    def agents(self) -> List[Entity]:
        return [e for e in self._entities if e.kind is EntityKind.AGENT]

    def obstacles(self) -> List[Entity]:
        return [e for e in self._entities if e.kind is EntityKind.OBSTACLE]

    @contextmanager
    def frozen(self):
        """Mark a tick in progress; queued mutations apply on exit."""
        if self._frozen:
            raise RuntimeError("Scene is already frozen")
        self._frozen = True
        try:
            yield self.iterate()
        finally:
            self._frozen = False
            self._flush()

    def _flush(self):
        pending, self._pending = self._pending, []
        for apply in pending:
            apply()
