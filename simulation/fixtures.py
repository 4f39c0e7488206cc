"""simulation/fixtures.py — Fixture shapes, fixtures, and rooms.

A **fixture** (stove, bed, crop plot, …) is a stationary work spot
anchored at a world tile.  Everything that is the same for every
fixture of one kind lives in its ``FixtureShape``:

    stand      tile the worker stands on, relative to the anchor
    inputs     slots (offset + required item type) that must be filled
               before production can start
    output     item type produced, or ``None``
    ticks      production time once the worker is on the stand
    priority   higher runs first when idle colonists are scarce
    requires   only colonists with this Need may operate it
    clears     Need removed from the worker when production completes
    footprint  extra tiles the furniture covers (never used for drops)

Shapes are validated when constructed.  The built-in ones are a closed
set keyed by ``FixtureType``; each work ``RoomType`` gets one type.

Rooms are populated by the map layout and changed only by ``unlock``
and ``place_fixture``.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

from components.colonist import Need
from components.spatial import Pos, Rect
from core.constants import ITEM_COOKED_FOOD, ITEM_RAW_FOOD


@dataclass(frozen=True)
class InputSlot:
    offset: Pos
    item_type: str


@dataclass(frozen=True)
class FixtureShape:
    name: str
    stand: Pos
    inputs: tuple[InputSlot, ...] = ()
    output: str | None = None
    ticks: int = 0
    priority: int = 0
    requires: Need | None = None
    clears: Need | None = None
    footprint: tuple[Pos, ...] = ()

    def __post_init__(self):
        if self.ticks < 0:
            raise ValueError(f"{self.name}: ticks must be >= 0, got {self.ticks}")
        offsets = [slot.offset for slot in self.inputs]
        if len(set(offsets)) != len(offsets):
            raise ValueError(f"{self.name}: duplicate input slot offsets {offsets}")
        if self.stand in offsets:
            raise ValueError(f"{self.name}: stand {self.stand} overlaps an input slot")
        for slot in self.inputs:
            if not slot.item_type:
                raise ValueError(f"{self.name}: input slot {slot.offset} has no item type")


class FixtureType(Enum):
    CROPS = "crops"
    STOVE = "stove"
    TABLE = "table"
    BED = "bed"


SHAPES: dict[FixtureType, FixtureShape] = {
    FixtureType.CROPS: FixtureShape(
        name="crops",
        stand=Pos(0, 1),
        output=ITEM_RAW_FOOD,
        ticks=40,
        priority=10,
    ),
    FixtureType.STOVE: FixtureShape(
        name="stove",
        stand=Pos(0, 1),
        inputs=(InputSlot(Pos(1, 0), ITEM_RAW_FOOD),),
        output=ITEM_COOKED_FOOD,
        ticks=30,
        priority=20,
    ),
    FixtureType.TABLE: FixtureShape(
        name="table",
        stand=Pos(0, 1),
        inputs=(InputSlot(Pos(0, 0), ITEM_COOKED_FOOD),),
        ticks=20,
        priority=50,
        requires=Need.HUNGRY,
        clears=Need.HUNGRY,
        footprint=(Pos(1, 0),),
    ),
    FixtureType.BED: FixtureShape(
        name="bed",
        stand=Pos(0, 0),
        ticks=120,
        priority=40,
        requires=Need.SLEEPY,
        clears=Need.SLEEPY,
        footprint=(Pos(1, 0),),
    ),
}


class RoomType(Enum):
    OPEN = "open"
    WILDERNESS = "wilderness"
    DINING = "dining"
    BEDROOM = "bedroom"
    KITCHEN = "kitchen"
    FARM = "farm"


ROOM_FIXTURES: dict[RoomType, FixtureType] = {
    RoomType.FARM: FixtureType.CROPS,
    RoomType.KITCHEN: FixtureType.STOVE,
    RoomType.DINING: FixtureType.TABLE,
    RoomType.BEDROOM: FixtureType.BED,
}


@dataclass(eq=False)
class Fixture:
    """One placed fixture: a world anchor plus its shape."""
    pos: Pos
    shape: FixtureShape

    @property
    def stand(self) -> Pos:
        return self.pos + self.shape.stand

    @property
    def input_positions(self) -> list[Pos]:
        return [self.pos + slot.offset for slot in self.shape.inputs]

    def input_slots(self) -> list[tuple[Pos, InputSlot]]:
        return [(self.pos + slot.offset, slot) for slot in self.shape.inputs]

    @property
    def tiles(self) -> set[Pos]:
        """Every tile the fixture occupies: anchor, stand, slots, footprint."""
        tiles = {self.pos, self.stand, *self.input_positions}
        tiles.update(self.pos + off for off in self.shape.footprint)
        return tiles

    def label(self) -> str:
        return f"{self.shape.name}@{self.pos}"

    def __repr__(self) -> str:
        return f"Fixture({self.label()})"


@dataclass(eq=False)
class Room:
    type: RoomType
    rect: Rect
    unlocked: bool = False
    fixtures: list[Fixture] = field(default_factory=list)
    name: str = ""

    @property
    def priority(self) -> int:
        """Highest fixture priority in the room (0 when empty)."""
        return max((f.shape.priority for f in self.fixtures), default=0)

    @property
    def fixture_type(self) -> FixtureType | None:
        return ROOM_FIXTURES.get(self.type)

    def label(self) -> str:
        return self.name or self.type.value

    def unlock(self) -> None:
        self.unlocked = True

    def place_fixture(self, pos: Pos, shape: FixtureShape | None = None) -> Fixture:
        """Place a fixture anchored at *pos*.

        Without *shape* the room type's built-in shape is used.  Every
        tile of the fixture must be on the room's floor.
        """
        if shape is None:
            ftype = self.fixture_type
            if ftype is None:
                raise ValueError(f"{self.label()} rooms have no built-in fixture")
            shape = SHAPES[ftype]
        fixture = Fixture(pos, shape)
        outside = [t for t in fixture.tiles if not self.rect.interior_contains(t)]
        if outside:
            raise ValueError(f"{fixture.label()} extends outside {self.label()}: {outside}")
        taken = set().union(*(f.tiles for f in self.fixtures)) if self.fixtures else set()
        if fixture.tiles & taken:
            raise ValueError(f"{fixture.label()} overlaps another fixture in {self.label()}")
        self.fixtures.append(fixture)
        return fixture

    def __repr__(self) -> str:
        return f"Room({self.label()}, {len(self.fixtures)} fixtures)"
