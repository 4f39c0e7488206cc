"""
core/app.py — Pygame shell for the colony viewer

Owns the window, the frame loop, the scene stack and the tick pacer
that turns real frame time into whole simulation ticks.  The window is
sized from the colony map so one tile is always ``TILE_SIZE`` pixels.

    app = App.for_map(colony_map.bounds)
    app.push_scene(ColonyScene(sim))
    app.run()
"""

from __future__ import annotations
import pygame
from core.constants import TILE_SIZE
from core.ecs import World
from core.scene import Scene
from core.tuning import get as _tun

MAP_MARGIN = 8
HUD_HEIGHT = 244


class TickPacer:
    """Accumulates fractional ticks between frames.

    ``advance`` returns how many ticks are due this frame.  Anything
    above ``max_per_frame`` is dropped so a stalled frame never turns
    into a long replay.
    """

    def __init__(self, max_per_frame: int = 64):
        self.max_per_frame = max_per_frame
        self.owed = 0.0

    def advance(self, dt: float, speed: float = 1.0) -> int:
        tps = float(_tun("viewer", "ticks_per_second", 10))
        self.owed += dt * tps * speed
        n = int(self.owed)
        if n <= 0:
            return 0
        self.owed -= n
        return min(n, self.max_per_frame)

    def reset(self):
        self.owed = 0.0


class App:
    def __init__(self, title: str = "Colony", width: int = 1000, height: int = 520):
        pygame.init()
        self.size = (width, height)
        self.screen = pygame.display.set_mode(self.size)
        pygame.display.set_caption(title)
        self.clock = pygame.time.Clock()
        self.running = True
        self.fps = int(_tun("viewer", "fps", 60))

        self._scenes: list[Scene] = []
        self.pacer = TickPacer()

        # The colony registers its resources here.
        self.world = World()

        self.font = pygame.font.SysFont("monospace", 14)
        self.font_sm = pygame.font.SysFont("monospace", 11)

    @classmethod
    def for_map(cls, bounds, title: str = "Colony") -> "App":
        """Window that fits the whole map plus the HUD strip below it."""
        width = bounds.right * TILE_SIZE + MAP_MARGIN * 2
        height = bounds.bottom * TILE_SIZE + MAP_MARGIN + HUD_HEIGHT
        return cls(title=title, width=width, height=height)

    # -- Scene stack --

    @property
    def scene(self) -> Scene | None:
        return self._scenes[-1] if self._scenes else None

    def push_scene(self, scene: Scene):
        self._scenes.append(scene)
        self.pacer.reset()
        scene.on_enter(self)

    def pop_scene(self):
        if self._scenes:
            self._scenes.pop()
        if self._scenes:
            self.pacer.reset()
            self._scenes[-1].on_enter(self)
        else:
            self.running = False

    def mouse_pos(self) -> tuple[int, int]:
        return pygame.mouse.get_pos()

    # -- Main loop --

    def run(self):
        while self.running:
            dt = self.clock.tick(self.fps) / 1000.0

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                elif self.scene:
                    self.scene.handle_event(event, self)

            if self.scene:
                self.scene.update(dt, self)
            if self.scene:
                self.scene.draw(self.screen, self)
            pygame.display.flip()

        pygame.quit()

    # -- Text --

    def draw_text(self, surface: pygame.Surface, text: str, x: int, y: int,
                  color=(255, 255, 255), font=None) -> pygame.Rect:
        img = (font or self.font).render(text, True, color)
        return surface.blit(img, (x, y))

    def draw_text_bg(self, surface: pygame.Surface, text: str, x: int, y: int,
                     color=(255, 255, 255), bg=(0, 0, 0, 160), font=None,
                     pad: int = 2) -> pygame.Rect:
        """Text over a translucent box, for labels drawn on the map."""
        img = (font or self.font).render(text, True, color)
        w, h = img.get_size()
        box = pygame.Surface((w + pad * 2, h + pad * 2), pygame.SRCALPHA)
        box.fill(bg)
        surface.blit(box, (x - pad, y - pad))
        return surface.blit(img, (x, y))
