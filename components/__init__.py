"""components — ECS component dataclasses and world resources.

Submodules
----------
spatial        Pos, Rect
colonist       Colonist, AgentState, Need
item_registry  Item, OnGround, CarriedBy, ItemRegistry
resources      GameClock
dev_log        DevLog

All public names are re-exported here so code can do
``from components import Pos, Colonist``.
"""

# ── Spatial ──────────────────────────────────────────────────────────
from components.spatial import Pos, Rect

# ── Agents ───────────────────────────────────────────────────────────
from components.colonist import Colonist, AgentState, Need

# ── Items ────────────────────────────────────────────────────────────
from components.item_registry import Item, OnGround, CarriedBy, ItemRegistry

# ── World resources / singletons ─────────────────────────────────────
from components.resources import GameClock
from components.dev_log import DevLog

__all__ = [
    # spatial
    "Pos", "Rect",
    # agents
    "Colonist", "AgentState", "Need",
    # items
    "Item", "OnGround", "CarriedBy", "ItemRegistry",
    # resources
    "GameClock", "DevLog",
]
