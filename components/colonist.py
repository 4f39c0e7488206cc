"""components.colonist — The mobile worker agent and its task state."""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

from components.spatial import Pos


class Need(Enum):
    """Status flags set by the daily schedule and cleared by fixtures."""
    HUNGRY = "hungry"
    SLEEPY = "sleepy"


class AgentState(Enum):
    """What a colonist is doing with its current job.

    ``IDLE``                     — no job, or a fresh job not yet started
    ``MOVING_TO_ITEM``           — transport: walking to the item
    ``CARRYING_TO_DESTINATION``  — transport: holding the item
    ``MOVING_TO_STAND``          — production: walking to the stand
    ``PRODUCING``                — production: on the stand, deadline set
    ``CARRYING_OUTPUT``          — production: holding the product
    """
    IDLE = "idle"
    MOVING_TO_ITEM = "moving_to_item"
    CARRYING_TO_DESTINATION = "carrying_to_destination"
    MOVING_TO_STAND = "moving_to_stand"
    PRODUCING = "producing"
    CARRYING_OUTPUT = "carrying_output"


@dataclass(eq=False)
class Colonist:
    """A worker.

    ``path`` is a stack of tiles still to walk, nearest **last**, so the
    executor pops one step per tick.  ``held`` is the id of the single
    item in the colonist's hands (or ``None``).  Only the item registry
    writes ``held``.
    """
    eid: int
    name: str
    pos: Pos
    path: list[Pos] = field(default_factory=list)
    held: int | None = None
    status: set[Need] = field(default_factory=set)
    state: AgentState = AgentState.IDLE

    def snapshot(self) -> dict:
        return {
            "eid": self.eid,
            "name": self.name,
            "pos": (self.pos.x, self.pos.y),
            "path": [(p.x, p.y) for p in self.path],
            "held": self.held,
            "status": sorted(n.value for n in self.status),
            "state": self.state.value,
        }
