"""core/constants.py — Shared constants used across the codebase.

Centralises magic numbers so there's exactly one place to change them.

Units
-----
Positions are integer **tiles**.  Time is counted in **ticks**; the
simulation advances one tick at a time and a colonist moves at most
one tile per tick.  Game hours and days are derived from the tick
counter by ``GameClock`` (see ``data/tuning.toml`` ``[clock]``).

The viewer rate lives in tuning (``[viewer] ticks_per_second``).  No
simulation code should reference pixels, only the renderer.
"""

# ── Item types ──────────────────────────────────────────────────────
ITEM_RAW_FOOD = "rawfood"
ITEM_COOKED_FOOD = "cookedfood"

# ── Tile kinds (rendering only, see ColonyMap.tile_at) ─────────────
TILE_VOID = "void"
TILE_RIVER = "river"
TILE_PLAINS = "plains"

# Render
TILE_SIZE = 20

TILE_COLORS = {
    TILE_VOID:   (40, 34, 40),
    TILE_RIVER:  (56, 84, 168),
    TILE_PLAINS: (150, 166, 112),
}

ITEM_COLORS = {
    ITEM_RAW_FOOD:    (210, 180, 90),
    ITEM_COOKED_FOOD: (200, 90, 60),
}

COLONIST_COLOR = (240, 240, 240)
PATH_COLOR = (0, 200, 255)
WALL_COLOR = (90, 90, 90)
STAND_COLOR = (60, 200, 90)
SLOT_COLOR = (230, 200, 60)
