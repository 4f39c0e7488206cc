"""
scenes/colony_scene.py — Live view of the colony simulation

Steps the ColonySim at a fixed tick rate and draws its snapshot.  The
scene never changes simulation state except by calling ``sim.step()``.

Controls:
    Space      — pause / resume
    .          — single step (while paused)
    Up / Down  — double / halve speed
    G          — grid overlay
    P          — toggle colonist paths
    F4         — reload tuning
    Escape     — quit
"""

from __future__ import annotations
import pygame
from core.scene import Scene
from core.app import App, MAP_MARGIN
from core.constants import TILE_SIZE
from core import tuning as tuning_mod
from core.tuning import get as _tun
from components.spatial import Pos
from simulation.world_sim import ColonySim
from scenes.colony_draw import (
    draw_map, draw_rooms, draw_fixtures, draw_jobs, draw_items,
    draw_colonists, draw_hud, draw_controls, draw_tooltip,
)


class ColonyScene(Scene):
    def __init__(self, sim: ColonySim):
        self.sim = sim
        self.paused = False
        self.speed = 1.0
        self.show_grid = False
        self.show_paths = True
        self._snap = sim.snapshot()

    # ── Lifecycle ────────────────────────────────────────────────────

    def on_enter(self, app: App):
        self._snap = self.sim.snapshot()

    # ── Input ────────────────────────────────────────────────────────

    def handle_event(self, event: pygame.event.Event, app: App):
        if event.type != pygame.KEYDOWN:
            return
        if event.key == pygame.K_ESCAPE:
            app.pop_scene()
        elif event.key == pygame.K_SPACE:
            self.paused = not self.paused
            app.pacer.reset()
        elif event.key == pygame.K_PERIOD:
            if self.paused:
                self._step(1)
        elif event.key == pygame.K_UP:
            self.speed = min(self.speed * 2.0, float(_tun("viewer", "max_speed", 16.0)))
        elif event.key == pygame.K_DOWN:
            self.speed = max(self.speed / 2.0, 0.25)
        elif event.key == pygame.K_g:
            self.show_grid = not self.show_grid
        elif event.key == pygame.K_p:
            self.show_paths = not self.show_paths
        elif event.key == pygame.K_F4:
            tuning_mod.reload()

    # ── Update ───────────────────────────────────────────────────────

    def update(self, dt: float, app: App):
        if self.paused:
            return
        n = app.pacer.advance(dt, self.speed)
        if n:
            self._step(n)

    def _step(self, n: int):
        self.sim.step(n)
        self._snap = self.sim.snapshot()

    # ── Draw ─────────────────────────────────────────────────────────

    def draw(self, surface: pygame.Surface, app: App):
        surface.fill((20, 18, 22))
        colony_map = self.sim.map
        snap = self._snap
        ox = oy = MAP_MARGIN

        draw_map(surface, colony_map, ox, oy, self.show_grid)
        draw_rooms(surface, app, colony_map, ox, oy)
        draw_fixtures(surface, app, colony_map, ox, oy)
        draw_jobs(surface, snap, ox, oy)
        draw_items(surface, snap, ox, oy)
        draw_colonists(surface, app, snap, ox, oy, self.show_paths)

        hud_y = oy + colony_map.bounds.bottom * TILE_SIZE + 8
        draw_hud(surface, app, snap, self, MAP_MARGIN, hud_y,
                 int(_tun("viewer", "diagnostic_lines", 8)))
        draw_controls(surface, app, surface.get_height() - 16)

        mx, my = app.mouse_pos()
        tile = Pos((mx - ox) // TILE_SIZE, (my - oy) // TILE_SIZE)
        draw_tooltip(surface, app, colony_map, snap, tile, mx, my)
