"""components.spatial — Grid positions and rectangles.

All coordinates are integer tiles.  ``Pos`` is an immutable value
type: two positions with the same ``x``/``y`` compare and hash equal,
so they can key dicts and sets directly.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class Pos:
    x: int = 0
    y: int = 0

    @property
    def key(self) -> str:
        """Stable string key, e.g. ``"12:-3"``."""
        return f"{self.x}:{self.y}"

    def __add__(self, other: "Pos") -> "Pos":
        return Pos(self.x + other.x, self.y + other.y)

    def manhattan(self, other: "Pos") -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)

    def __str__(self) -> str:
        return self.key


@dataclass(frozen=True)
class Rect:
    """Axis-aligned integer rectangle.

    Used two ways:

    * **Map bounds** — half-open, tiles with ``left <= x < right`` and
      ``top <= y < bottom`` (see ``contains``).
    * **Room bounds** — the edges are the room's walls; the floor is the
      strict interior ``left < x < right``, ``top < y < bottom`` (see
      ``interior`` / ``interior_contains``).
    """
    left: int
    top: int
    right: int
    bottom: int

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    def contains(self, pos: Pos) -> bool:
        return self.left <= pos.x < self.right and self.top <= pos.y < self.bottom

    def interior_contains(self, pos: Pos) -> bool:
        return self.left < pos.x < self.right and self.top < pos.y < self.bottom

    def tiles(self) -> Iterator[Pos]:
        """Every tile of the half-open rectangle, row by row."""
        for y in range(self.top, self.bottom):
            for x in range(self.left, self.right):
                yield Pos(x, y)

    def interior(self) -> Iterator[Pos]:
        """Every floor tile inside the walls, row by row."""
        for y in range(self.top + 1, self.bottom):
            for x in range(self.left + 1, self.right):
                yield Pos(x, y)

    def interior_from_far_corner(self) -> Iterator[Pos]:
        """Floor tiles starting at the bottom-right corner, moving inward."""
        for y in range(self.bottom - 1, self.top, -1):
            for x in range(self.right - 1, self.left, -1):
                yield Pos(x, y)
