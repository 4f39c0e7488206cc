"""logic/pathfinding.py — Breadth-first pathfinding on the tile grid.

Every step costs the same, so breadth-first search already returns a
minimum-step path; no heuristic is needed.  Movement is 4-directional
and a tile may be entered only if the ``walkable`` predicate (supplied
by the colony map) accepts it.  The start tile itself is never tested.

Tie-breaking
------------
On an open grid many shortest paths exist.  Expanding neighbours in one
fixed order produces an "L" (all horizontal moves, then all vertical).
Instead the order flips with the parity of ``x + y`` of the tile being
expanded, which yields a staircase that reads as a diagonal walk.  This
only changes *which* shortest path is returned, never its length.

Search limit
------------
The predicate may describe an unbounded world, so the search gives up
after visiting ``[pathfinding] max_nodes`` tiles and reports failure.

Public API
----------
``find_path(walkable, start, goal)`` → ``list[Pos]`` or ``None``

The list runs from the first step to ``goal`` and excludes ``start``;
it is empty when ``start == goal``.
"""

from __future__ import annotations
from collections import deque
from typing import Callable

from components.spatial import Pos
from core.tuning import get as _tun


# ── 4-directional offsets ────────────────────────────────────────────

_DIRS_EVEN = ((1, 0), (-1, 0), (0, 1), (0, -1))     # E W S N
_DIRS_ODD = tuple(reversed(_DIRS_EVEN))             # N S W E


def neighbors(pos: Pos) -> list[Pos]:
    """4-neighbours of *pos* in tie-break order."""
    dirs = _DIRS_EVEN if (pos.x + pos.y) % 2 == 0 else _DIRS_ODD
    return [Pos(pos.x + dx, pos.y + dy) for dx, dy in dirs]


# ── Breadth-first search ─────────────────────────────────────────────

def find_path(
    walkable: Callable[[Pos], bool],
    start: Pos,
    goal: Pos,
    max_nodes: int | None = None,
) -> list[Pos] | None:
    """Shortest 4-directional path from *start* to *goal*.

    Parameters
    ----------
    walkable : callable
        ``walkable(pos) -> bool``; tiles it rejects are never entered.
    start, goal : Pos
        Endpoints in tile coordinates.
    max_nodes : int | None
        Visit budget; defaults to ``[pathfinding] max_nodes``.

    Returns
    -------
    list[Pos] | None
        Steps from the tile after *start* up to and including *goal*,
        or ``None`` if *goal* cannot be reached within the budget.
    """
    if start == goal:
        return []
    if max_nodes is None:
        max_nodes = int(_tun("pathfinding", "max_nodes", 100_000))

    came_from: dict[Pos, Pos | None] = {start: None}
    frontier = deque([start])

    while frontier:
        current = frontier.popleft()
        for nxt in neighbors(current):
            if nxt in came_from or not walkable(nxt):
                continue
            came_from[nxt] = current
            if nxt == goal:
                return _reconstruct(came_from, goal)
            frontier.append(nxt)
        if len(came_from) > max_nodes:
            return None

    return None  # no path found


def _reconstruct(came_from: dict[Pos, Pos | None], goal: Pos) -> list[Pos]:
    path: list[Pos] = []
    node: Pos | None = goal
    while came_from[node] is not None:
        path.append(node)
        node = came_from[node]
    path.reverse()
    return path
