"""simulation/colony_map.py — Walkable tiles, rooms and doors.

The map is what the layout step hands to the core: a bounded grid, the
set of tiles a colonist may stand on, the rooms (with their fixtures)
and the doors that connect them.  It is stored as a world resource.

The core only asks two things of it:

* ``is_walkable(pos)`` — the predicate given to the pathfinder
* ``rooms``            — what the scheduler scans every tick

``tile_at`` is for rendering only.

Walkable tiles are: every room floor (walls excluded), every door, and
an optional open strip of wilderness along the left edge.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Iterable

from components.spatial import Pos, Rect
from core.constants import TILE_PLAINS, TILE_RIVER, TILE_VOID
from simulation.fixtures import Room


@dataclass(eq=False)
class Door:
    """A walkable gap in a wall.  ``room2`` is ``None`` for the wilderness."""
    pos: Pos
    room1: Room
    room2: Room | None = None


class ColonyMap:
    """Static geometry of the colony.  Stored as a world resource."""

    def __init__(self, bounds: Rect, walkable: Iterable[Pos],
                 rooms: Iterable[Room] = (), doors: Iterable[Door] = (),
                 river_width: float = 0.0) -> None:
        self.bounds = bounds
        self.walkable: set[Pos] = {p for p in walkable if bounds.contains(p)}
        self.rooms: list[Room] = list(rooms)
        self.doors: list[Door] = list(doors)
        self.river_width = river_width

    # ── Construction ─────────────────────────────────────────────────

    @classmethod
    def from_rooms(cls, bounds: Rect, rooms: Iterable[Room],
                   doors: Iterable[Door] = (), open_columns: int = 0,
                   river_width: float = 0.0) -> "ColonyMap":
        """Room floors + doors + the leftmost *open_columns* are walkable."""
        rooms = list(rooms)
        doors = list(doors)
        walkable: set[Pos] = set()
        for room in rooms:
            walkable.update(room.rect.interior())
        walkable.update(door.pos for door in doors)
        if open_columns > 0:
            walkable.update(Rect(bounds.left, bounds.top,
                                 bounds.left + open_columns, bounds.bottom).tiles())
        return cls(bounds, walkable, rooms, doors, river_width)

    @classmethod
    def open(cls, bounds: Rect, rooms: Iterable[Room] = ()) -> "ColonyMap":
        """Every in-bounds tile walkable — an empty field with rooms drawn on it."""
        return cls(bounds, bounds.tiles(), rooms)

    # ── Queries ──────────────────────────────────────────────────────

    def is_walkable(self, pos: Pos) -> bool:
        return pos in self.walkable

    def tile_at(self, pos: Pos) -> str:
        if pos not in self.walkable:
            return TILE_VOID
        edge = self.bounds.left + self.river_width * (1.0 + 0.5 * math.cos(pos.y * 0.3))
        if self.river_width > 0 and pos.x < edge:
            return TILE_RIVER
        return TILE_PLAINS

    def room_at(self, pos: Pos) -> Room | None:
        for room in self.rooms:
            if room.rect.interior_contains(pos):
                return room
        return None

    def is_wall(self, pos: Pos) -> bool:
        """On a room's outline and not a door."""
        if pos in self.walkable:
            return False
        for room in self.rooms:
            r = room.rect
            on_x = pos.x in (r.left, r.right) and r.top <= pos.y <= r.bottom
            on_y = pos.y in (r.top, r.bottom) and r.left <= pos.x <= r.right
            if on_x or on_y:
                return True
        return False
