"""simulation/layout.py — The hand-authored demo colony.

Five rooms east of an open strip of wilderness (with a river along the
west edge).  Rooms share walls; doors connect each room to its
neighbours so the whole colony is one connected walkable area.

    x:  0 ......... 10        22        32        42
        wilderness  +--farm---+-kitchen-+-dining--+     y = 0
        (walkable)  |  crops  |  stoves |  tables |
                    +-bedroom-+-storage-+---------+     y = 8
                    |  beds   |         |
                    +---------+---------+               y = 16

Procedural generation is not part of the core; tests build their own
small maps with ``ColonyMap.open``.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from components.spatial import Pos, Rect
from core.constants import ITEM_RAW_FOOD
from simulation.colony_map import ColonyMap, Door
from simulation.fixtures import Room, RoomType

if TYPE_CHECKING:
    from core.ecs import World
    from simulation.world_sim import ColonySim


WILDERNESS_WIDTH = 10
BOUNDS = Rect(0, 0, 43, 17)

COLONISTS = [
    ("Ada", Pos(2, 2)),
    ("Bram", Pos(4, 6)),
    ("Cleo", Pos(6, 10)),
    ("Dov", Pos(8, 14)),
]

STARTING_FOOD = [Pos(5, 3), Pos(6, 3), Pos(7, 4)]


def build_demo_map() -> ColonyMap:
    farm = Room(RoomType.FARM, Rect(10, 0, 22, 8), name="farm")
    kitchen = Room(RoomType.KITCHEN, Rect(22, 0, 32, 8), name="kitchen")
    dining = Room(RoomType.DINING, Rect(32, 0, 42, 8), name="dining")
    bedroom = Room(RoomType.BEDROOM, Rect(10, 8, 22, 16), name="bedroom")
    storage = Room(RoomType.OPEN, Rect(22, 8, 32, 16), name="storage")
    rooms = [farm, kitchen, dining, bedroom, storage]

    for room in rooms:
        room.unlock()

    for x in (12, 15, 18):
        farm.place_fixture(Pos(x, 2))
    for x in (24, 28):
        kitchen.place_fixture(Pos(x, 2))
    for x in (34, 38):
        dining.place_fixture(Pos(x, 2))
    for y in (10, 13):
        bedroom.place_fixture(Pos(12, y))

    doors = [
        Door(Pos(10, 4), farm),
        Door(Pos(10, 12), bedroom),
        Door(Pos(22, 5), kitchen, farm),
        Door(Pos(32, 5), dining, kitchen),
        Door(Pos(16, 8), bedroom, farm),
        Door(Pos(27, 8), storage, kitchen),
        Door(Pos(22, 12), storage, bedroom),
    ]

    return ColonyMap.from_rooms(BOUNDS, rooms, doors,
                                open_columns=WILDERNESS_WIDTH, river_width=2.0)


def build_demo_colony(world: "World | None" = None) -> "ColonySim":
    """A ready-to-run ``ColonySim`` on the demo map."""
    from simulation.world_sim import ColonySim

    sim = ColonySim(world, build_demo_map())
    for name, pos in COLONISTS:
        sim.spawn_colonist(name, pos)
    for pos in STARTING_FOOD:
        sim.place_item(ITEM_RAW_FOOD, pos)
    print(f"[SIM] Demo colony: {len(sim.map.rooms)} rooms, "
          f"{sum(len(r.fixtures) for r in sim.map.rooms)} fixtures, "
          f"{len(sim.colonists)} colonists")
    return sim
