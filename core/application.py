"""Main application class that ties the engine, renderer and HUD together."""

import pygame
from pygame.locals import *

from attractors import AttractorEngine, System
from rendering.text import HudRenderer
from rendering.trail_renderer import TrailRenderer
from .input_handler import HELP_LINES, InputHandler


class AttractorApplication:
    """
    Window, main loop and HUD around one AttractorEngine.

    Args:
        system: System variant to run
        count: Trajectories seeded at startup (config default if None)
        trail_length: Ring length override
        steps_per_frame: Sub-step override
        distance_colors: Start in distance coloring mode
        oscillation: Force parameter oscillation on/off
    """

    def __init__(self, system: System, count: int = None, trail_length: int = None,
                 steps_per_frame: int = None, distance_colors: bool = False,
                 oscillation: bool = None):
        settings = system.settings
        self.window = settings.WINDOW

        pygame.init()
        self.surface = pygame.display.set_mode(
            (self.window["width"], self.window["height"]),
            DOUBLEBUF | OPENGL
        )
        pygame.display.set_caption(self.window["title"])

        # Simulation
        self.engine = AttractorEngine(
            system,
            trail_length=trail_length,
            steps_per_frame=steps_per_frame,
            oscillation=oscillation,
        )
        if distance_colors:
            self.engine.enable_distance_coloring()
        self.engine.populate(settings.TRAILS["count"] if count is None else count)

        # Rendering
        self.renderer = TrailRenderer(self.surface, background=settings.COLORS["background"])
        self.hud = HudRenderer(color=settings.COLORS["text"])
        self.input_handler = InputHandler(self.engine)

        # State
        self.clock = pygame.time.Clock()
        self.running = True
        self.fps = 0

    @property
    def screen_size(self) -> tuple:
        return self.window["width"], self.window["height"]

    def _handle_events(self):
        """Process all pending pygame events."""
        for event in pygame.event.get():
            if not self.input_handler.handle_event(event):
                self.running = False

    def _update(self):
        """Step (or just flush while paused) and sync GPU buffers."""
        if self.input_handler.paused:
            update = self.engine.flush()
        else:
            update = self.engine.step()
        self.renderer.upload(self.engine, update)

    def _hud_lines(self):
        engine = self.engine
        state = "  [paused]" if self.input_handler.paused else ""
        lines = [
            f"{engine.system.name}: {engine.trajectory_count} trajectories "
            f"({engine.slot_count} trails)  |  FPS: {self.fps:.0f}{state}",
            f"Steps/s: {engine.steps_per_second}  |  Trail: {engine.trail_length}  "
            f"|  Colors: {engine.colors.mode}",
        ]
        if self.input_handler.show_help:
            lines.extend(HELP_LINES)
        return lines

    def _render(self):
        """Render the scene."""
        width, height = self.screen_size
        self.renderer.draw(self.engine, width / height)
        self.hud.draw_lines(self._hud_lines(), 10, 10, self.screen_size)
        pygame.display.flip()

    def run(self):
        """Main application loop."""
        print(f"[App] Running {self.engine.system.name} (H for help)")
        while self.running:
            self.clock.tick(60)
            self.fps = self.clock.get_fps()

            self._handle_events()
            self._update()
            self._render()

        self.renderer.release()
        pygame.quit()
