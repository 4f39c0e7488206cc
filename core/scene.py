"""
core/scene.py — Base class for viewer screens

Only the scene on top of ``App``'s stack gets input, updates and draws.
``on_enter`` runs on push and again when the scene above it is popped.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import pygame
    from core.app import App


class Scene:
    def on_enter(self, app: App):
        pass

    def handle_event(self, event: pygame.event.Event, app: App):
        pass

    def update(self, dt: float, app: App):
        """dt is real seconds since the last frame."""

    def draw(self, surface: pygame.Surface, app: App):
        pass
