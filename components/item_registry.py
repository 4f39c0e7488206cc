"""components.item_registry — Every item in the colony and where it is.

An item is either lying on one tile or held by exactly one colonist.
The location is one of two frozen variants, ``OnGround`` or
``CarriedBy``, so "both" and "neither" cannot be expressed.

The registry is the only code that moves items between the two
variants, and the only code that writes ``Colonist.held``.  Each
operation checks all of its preconditions before touching anything;
a failed check raises ``InvariantError`` and leaves the registry
unchanged.

    items = world.res(ItemRegistry)
    food = items.spawn("rawfood", Pos(4, 3))
    items.pick_up(colonist, food)
    items.drop(colonist, food)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, Union

from components.colonist import Colonist
from components.spatial import Pos
from core.errors import InvariantError


@dataclass(frozen=True)
class OnGround:
    pos: Pos


@dataclass(frozen=True)
class CarriedBy:
    eid: int


ItemLocation = Union[OnGround, CarriedBy]


@dataclass(eq=False)
class Item:
    id: int
    type: str
    location: ItemLocation

    @property
    def pos(self) -> Pos | None:
        """Ground tile, or ``None`` while carried."""
        return self.location.pos if isinstance(self.location, OnGround) else None

    @property
    def carrier(self) -> int | None:
        """Carrying colonist's eid, or ``None`` while on the ground."""
        return self.location.eid if isinstance(self.location, CarriedBy) else None

    def snapshot(self) -> dict:
        pos = self.pos
        return {
            "id": self.id,
            "type": self.type,
            "pos": (pos.x, pos.y) if pos is not None else None,
            "carrier": self.carrier,
        }

    def __repr__(self) -> str:
        return f"Item({self.type}#{self.id} @ {self.pos or f'eid {self.carrier}'})"


class ItemRegistry:
    """Owns every item by id, plus a tile → item index for the ground."""

    def __init__(self) -> None:
        self._items: dict[int, Item] = {}
        self._ground: dict[Pos, int] = {}
        self._next_id = 0

    # ── Creation / destruction ───────────────────────────────────────

    def _new(self, item_type: str, location: ItemLocation) -> Item:
        self._next_id += 1
        item = Item(id=self._next_id, type=item_type, location=location)
        self._items[item.id] = item
        return item

    def spawn(self, item_type: str, pos: Pos) -> Item:
        """Place a new item on an empty tile (world setup)."""
        if pos in self._ground:
            raise InvariantError(f"tile {pos} already holds {self._items[self._ground[pos]]}")
        item = self._new(item_type, OnGround(pos))
        self._ground[pos] = item.id
        return item

    def create(self, item_type: str, colonist: Colonist) -> Item:
        """Create a new item directly in *colonist*'s hands."""
        if colonist.held is not None:
            raise InvariantError(
                f"{colonist.name} already holds item {colonist.held}; "
                f"cannot create {item_type}")
        item = self._new(item_type, CarriedBy(colonist.eid))
        colonist.held = item.id
        return item

    def destroy(self, item: Item) -> None:
        """Remove a ground item for good (consumed as a fixture input)."""
        if self._items.get(item.id) is not item:
            raise InvariantError(f"{item!r} is not registered")
        if not isinstance(item.location, OnGround):
            raise InvariantError(f"cannot destroy {item!r}: it is being carried")
        del self._ground[item.location.pos]
        del self._items[item.id]

    # ── Lookup ───────────────────────────────────────────────────────

    def get(self, item_id: int) -> Item | None:
        return self._items.get(item_id)

    def find_on_tile(self, pos: Pos) -> Item | None:
        item_id = self._ground.get(pos)
        return self._items[item_id] if item_id is not None else None

    def find_all_of_type(self, item_type: str) -> list[Item]:
        """Every item of *item_type*, on the ground or carried, oldest first."""
        return [i for i in self._items.values() if i.type == item_type]

    def __iter__(self) -> Iterator[Item]:
        return iter(list(self._items.values()))

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item: Item) -> bool:
        return self._items.get(item.id) is item

    # ── Transfers ────────────────────────────────────────────────────

    def pick_up(self, colonist: Colonist, item: Item) -> None:
        if item not in self:
            raise InvariantError(f"{item!r} is not registered")
        if not isinstance(item.location, OnGround):
            raise InvariantError(f"{colonist.name} cannot pick up {item!r}: already carried")
        if item.location.pos != colonist.pos:
            raise InvariantError(
                f"{colonist.name} at {colonist.pos} cannot reach {item!r}")
        if colonist.held is not None:
            raise InvariantError(
                f"{colonist.name} already holds item {colonist.held}")
        del self._ground[item.location.pos]
        item.location = CarriedBy(colonist.eid)
        colonist.held = item.id

    def drop(self, colonist: Colonist, item: Item) -> None:
        if item.location != CarriedBy(colonist.eid) or colonist.held != item.id:
            raise InvariantError(f"{colonist.name} is not carrying {item!r}")
        if colonist.pos in self._ground:
            raise InvariantError(
                f"{colonist.name} cannot drop {item!r}: tile {colonist.pos} "
                f"already holds {self._items[self._ground[colonist.pos]]!r}")
        item.location = OnGround(colonist.pos)
        self._ground[colonist.pos] = item.id
        colonist.held = None

    # ── Snapshot ─────────────────────────────────────────────────────

    def snapshot(self) -> list[dict]:
        return [i.snapshot() for i in self._items.values()]
