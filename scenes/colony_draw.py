"""scenes/colony_draw.py — Rendering helpers for the colony scene.

All pure-draw functions live here so that ColonyScene.draw() stays thin.
Dynamic state comes only from ``ColonySim.snapshot()`` (plain dicts and
tuples); static geometry comes from the ``ColonyMap``.  Nothing here
mutates the simulation.
"""

from __future__ import annotations
import pygame
from core.app import App
from core.constants import (
    TILE_SIZE, TILE_COLORS, ITEM_COLORS, COLONIST_COLOR, PATH_COLOR,
    WALL_COLOR, STAND_COLOR, SLOT_COLOR,
)
from components.spatial import Pos
from simulation.colony_map import ColonyMap


def tile_rect(x: int, y: int, ox: int, oy: int, inset: int = 0) -> pygame.Rect:
    return pygame.Rect(ox + x * TILE_SIZE + inset, oy + y * TILE_SIZE + inset,
                       TILE_SIZE - inset * 2, TILE_SIZE - inset * 2)


def tile_center(x: int, y: int, ox: int, oy: int) -> tuple[int, int]:
    return ox + x * TILE_SIZE + TILE_SIZE // 2, oy + y * TILE_SIZE + TILE_SIZE // 2


# ── Map ─────────────────────────────────────────────────────────────

def draw_map(surface: pygame.Surface, colony_map: ColonyMap,
             ox: int, oy: int, show_grid: bool = False):
    for pos in colony_map.bounds.tiles():
        rect = tile_rect(pos.x, pos.y, ox, oy)
        if colony_map.is_wall(pos):
            color = WALL_COLOR
        else:
            color = TILE_COLORS.get(colony_map.tile_at(pos), (255, 0, 255))
        pygame.draw.rect(surface, color, rect)
        if show_grid:
            pygame.draw.rect(surface, (0, 0, 0), rect, 1)

    # Doors: a lighter notch in the wall line
    for door in colony_map.doors:
        pygame.draw.rect(surface, (170, 130, 80),
                         tile_rect(door.pos.x, door.pos.y, ox, oy, inset=3))


def draw_rooms(surface: pygame.Surface, app: App, colony_map: ColonyMap,
               ox: int, oy: int):
    for room in colony_map.rooms:
        x = ox + room.rect.left * TILE_SIZE + TILE_SIZE + 2
        y = oy + room.rect.bottom * TILE_SIZE - TILE_SIZE + 2
        color = (230, 230, 230) if room.unlocked else (120, 120, 120)
        app.draw_text(surface, room.label(), x, y, color, app.font_sm)


def draw_fixtures(surface: pygame.Surface, app: App, colony_map: ColonyMap,
                  ox: int, oy: int):
    for room in colony_map.rooms:
        for fixture in room.fixtures:
            for off in fixture.shape.footprint:
                p = fixture.pos + off
                pygame.draw.rect(surface, (110, 80, 60), tile_rect(p.x, p.y, ox, oy, inset=1))
            pygame.draw.rect(surface, (110, 80, 60),
                             tile_rect(fixture.pos.x, fixture.pos.y, ox, oy, inset=1))
            for slot_pos in fixture.input_positions:
                pygame.draw.rect(surface, SLOT_COLOR,
                                 tile_rect(slot_pos.x, slot_pos.y, ox, oy, inset=1), 2)
            stand = fixture.stand
            pygame.draw.rect(surface, STAND_COLOR,
                             tile_rect(stand.x, stand.y, ox, oy, inset=4), 1)
            app.draw_text(surface, fixture.shape.name[0].upper(),
                          ox + fixture.pos.x * TILE_SIZE + 6,
                          oy + fixture.pos.y * TILE_SIZE + 3,
                          (240, 220, 200), app.font_sm)


# ── Snapshot layers ────────────────────────────────────────────────

def draw_jobs(surface: pygame.Surface, snap: dict, ox: int, oy: int):
    """Outline every job destination; production stands get a second ring."""
    for job in snap["jobs"]:
        dx, dy = job["dest"]
        color = (255, 140, 0) if job["kind"] == "transport" else (160, 100, 255)
        pygame.draw.rect(surface, color, tile_rect(dx, dy, ox, oy), 2)
        stand = job.get("stand")
        if stand is not None:
            pygame.draw.circle(surface, color, tile_center(*stand, ox, oy),
                               TILE_SIZE // 2 - 1, 1)


def draw_items(surface: pygame.Surface, snap: dict, ox: int, oy: int):
    for item in snap["items"]:
        if item["pos"] is None:
            continue
        color = ITEM_COLORS.get(item["type"], (255, 0, 255))
        pygame.draw.circle(surface, color, tile_center(*item["pos"], ox, oy),
                           TILE_SIZE // 4)


def draw_colonists(surface: pygame.Surface, app: App, snap: dict,
                   ox: int, oy: int, show_paths: bool = True):
    carried = {i["carrier"]: i for i in snap["items"] if i["carrier"] is not None}

    for col in snap["colonists"]:
        cx, cy = tile_center(*col["pos"], ox, oy)

        if show_paths and col["path"]:
            # Stored nearest-last; draw from the colonist outward.
            points = [(cx, cy)] + [tile_center(x, y, ox, oy) for x, y in reversed(col["path"])]
            pygame.draw.lines(surface, PATH_COLOR, False, points, 1)

        pygame.draw.circle(surface, COLONIST_COLOR, (cx, cy), TILE_SIZE // 2 - 2)
        app.draw_text(surface, col["name"][0], cx - 4, cy - 7, (20, 20, 20), app.font)

        held = carried.get(col["eid"])
        if held is not None:
            color = ITEM_COLORS.get(held["type"], (255, 0, 255))
            pygame.draw.circle(surface, color, (cx + 6, cy - 6), 4)

        if col["status"]:
            badge = "".join(s[0].upper() for s in col["status"])
            app.draw_text_bg(surface, badge, cx + 6, cy + 2, (255, 220, 120),
                             font=app.font_sm)


# ── HUD ─────────────────────────────────────────────────────────────

def draw_hud(surface: pygame.Surface, app: App, snap: dict, scene,
             x: int, y: int, max_lines: int = 8):
    """Clock, speed and the latest scheduling diagnostics below the map."""
    status = "PAUSED" if scene.paused else f"{scene.speed:g}x"
    app.draw_text(surface, f"{snap['clock']}   tick {snap['tick']}   [{status}]",
                  x, y, (200, 200, 255))
    y += 18

    n_items = sum(1 for i in snap["items"] if i["pos"] is not None)
    app.draw_text(surface,
                  f"Jobs: {len(snap['jobs'])}   Items on ground: {n_items}   "
                  f"Colonists: {len(snap['colonists'])}",
                  x, y, (180, 220, 180))
    y += 18

    for col in snap["colonists"]:
        status = ",".join(col["status"]) or "-"
        app.draw_text(surface,
                      f"{col['name']:<6} {col['state']:<24} needs: {status}",
                      x, y, (220, 220, 220), app.font_sm)
        y += 13
    y += 4

    unassigned = snap["unassigned"]
    if unassigned:
        app.draw_text(surface, f"Unassigned ({len(unassigned)}):", x, y,
                      (255, 180, 120), app.font_sm)
        y += 13
        for u in unassigned[:max_lines]:
            slot = f" slot {u['slot']}" if u["slot"] is not None else ""
            app.draw_text(surface, f"  {u['fixture']}{slot}: {u['reason']}",
                          x, y, (200, 160, 120), app.font_sm)
            y += 13


def draw_controls(surface: pygame.Surface, app: App, y: int):
    app.draw_text(surface,
                  "[Space] pause  [.] step  [Up/Down] speed  [G] grid  "
                  "[P] paths  [F4] reload tuning  [Esc] quit",
                  8, y, (100, 100, 100), app.font_sm)


def draw_tooltip(surface: pygame.Surface, app: App, colony_map: ColonyMap,
                 snap: dict, tile: Pos, mx: int, my: int):
    """What is on the hovered tile."""
    if not colony_map.bounds.contains(tile):
        return
    lines = [f"{tile}  {colony_map.tile_at(tile)}"]
    room = colony_map.room_at(tile)
    if room is not None:
        lines.append(f"room: {room.label()}")
    for item in snap["items"]:
        if item["pos"] == (tile.x, tile.y):
            lines.append(f"item: {item['type']}#{item['id']}")
    for job in snap["jobs"]:
        if job["dest"] == (tile.x, tile.y):
            lines.append(f"dest of job #{job['id']} ({job['kind']})")
    for col in snap["colonists"]:
        if col["pos"] == (tile.x, tile.y):
            lines.append(f"{col['name']}: {col['state']}")

    y = my + 14
    for line in lines:
        app.draw_text_bg(surface, line, mx + 12, y, font=app.font_sm)
        y += 14
