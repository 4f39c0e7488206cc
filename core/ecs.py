"""
core/ecs.py — Entity-Component-System

Entities are ints. Components are any object, stored by type.
World-level singletons (item registry, job table, clock, …) are
stored as *resources* under the reserved id ``-1``.

    w = World()
    e = w.spawn()
    w.add(e, Colonist(eid=e, name="Ada", pos=Pos(0, 0)))

    for eid, colonist in w.all_of(Colonist):
        ...

    w.set_res(JobTable())
    jobs = w.res(JobTable)

Colonists persist for the whole session, so entities are never
destroyed.  Iteration follows spawn order, which is the roster order
the scheduler uses to break ties.
"""

from __future__ import annotations
from typing import Any, Iterator

_RES_ID = -1


class World:
    def __init__(self):
        self._next_id = 0
        self._stores: dict[type, dict[int, Any]] = {}

    # -- Entities --

    def spawn(self) -> int:
        self._next_id += 1
        return self._next_id

    # -- Components --

    def add(self, eid: int, comp: Any):
        self._stores.setdefault(type(comp), {})[eid] = comp

    def get(self, eid: int, comp_type: type) -> Any | None:
        return self._stores.get(comp_type, {}).get(eid)

    # -- Queries --

    def all_of(self, comp_type: type) -> Iterator[tuple[int, Any]]:
        """Yield (eid, component) for every entity with this type."""
        for eid, comp in self._stores.get(comp_type, {}).items():
            if eid != _RES_ID:
                yield eid, comp

    # -- Resources (singletons, not tied to entities) --

    def set_res(self, resource: Any):
        self._stores.setdefault(type(resource), {})[_RES_ID] = resource

    def res(self, res_type: type) -> Any | None:
        return self._stores.get(res_type, {}).get(_RES_ID)
